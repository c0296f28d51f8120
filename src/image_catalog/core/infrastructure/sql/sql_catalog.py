"""SQL-backed implementation of ImageCatalogRepository."""

from aws_lambda_powertools import Logger
from sqlalchemy.exc import SQLAlchemyError

from image_catalog.core.filters.description_contains_filter import DescriptionContainsFilter
from image_catalog.core.infrastructure.adapters.sql_adapter import SQLAdapter
from image_catalog.core.infrastructure.sql.schema import ImageRow
from image_catalog.core.models.errors import CatalogReadError, CatalogWriteError
from image_catalog.core.models.image import ImageRecord, NewImageRecord
from image_catalog.core.repositories.catalog_repository import ImageCatalogRepository
from image_catalog.core.utils.constants import (
    ERROR_CODE_CATALOG_COUNT_FAILED,
    ERROR_CODE_CATALOG_CREATE_FAILED,
    ERROR_CODE_CATALOG_DELETE_FAILED,
    ERROR_CODE_CATALOG_FETCH_FAILED,
    ERROR_CODE_CATALOG_LIST_FAILED,
    ERROR_CODE_CATALOG_UPDATE_FAILED,
)
from image_catalog.core.utils.time import ensure_utc

logger = Logger(UTC=True)


def to_record(row: ImageRow) -> ImageRecord:
    return ImageRecord(
        id=row.id,
        object_key=row.object_key,
        url=row.url,
        description=row.description or "",
        created_at=ensure_utc(row.created_at),
        size_bytes=row.size_bytes,
        mime_type=row.mime_type,
        original_name=row.original_name,
        width=row.width,
        height=row.height,
    )


class SQLImageCatalog(ImageCatalogRepository):
    """Relational catalog store with error handling.

    All SQLAlchemy errors are caught and translated into
    domain-specific errors with stable semantics.
    """

    def __init__(self, adapter: SQLAdapter | None = None) -> None:
        """Initialize with SQL adapter."""
        self._db = adapter or SQLAdapter()
        self._search = DescriptionContainsFilter()

    def create(self, *, record: NewImageRecord) -> ImageRecord:
        logger.debug("Creating image record", extra={"object_key": record.object_key})

        try:
            row = self._db.insert(values=record.model_dump())
        except SQLAlchemyError as exc:
            logger.error(
                "Image record insert failed",
                extra={"object_key": record.object_key, "error": str(exc)},
            )
            raise CatalogWriteError(
                message="Unable to save image metadata at this time",
                error_code=ERROR_CODE_CATALOG_CREATE_FAILED,
                details={"object_key": record.object_key},
            ) from exc

        logger.info(
            "Image record created",
            extra={"image_id": row.id, "object_key": row.object_key},
        )
        return to_record(row)

    def find(self, *, image_id: int) -> ImageRecord | None:
        logger.debug("Fetching image record", extra={"image_id": image_id})

        try:
            row = self._db.get(image_id=image_id)
        except SQLAlchemyError as exc:
            logger.error("Image record lookup failed", extra={"image_id": image_id})
            raise CatalogReadError(
                message="Unable to retrieve image metadata",
                error_code=ERROR_CODE_CATALOG_FETCH_FAILED,
                details={"image_id": image_id},
            ) from exc

        return to_record(row) if row is not None else None

    def update_description(self, *, image_id: int, description: str) -> ImageRecord | None:
        logger.debug("Updating image description", extra={"image_id": image_id})

        try:
            row = self._db.update(image_id=image_id, values={"description": description})
        except SQLAlchemyError as exc:
            logger.error("Image record update failed", extra={"image_id": image_id})
            raise CatalogWriteError(
                message="Unable to update image metadata",
                error_code=ERROR_CODE_CATALOG_UPDATE_FAILED,
                details={"image_id": image_id},
            ) from exc

        return to_record(row) if row is not None else None

    def delete(self, *, image_id: int) -> bool:
        logger.debug("Removing image record", extra={"image_id": image_id})

        try:
            removed = self._db.delete(image_id=image_id)
        except SQLAlchemyError as exc:
            logger.error("Image record delete failed", extra={"image_id": image_id})
            raise CatalogWriteError(
                message="Unable to delete image metadata",
                error_code=ERROR_CODE_CATALOG_DELETE_FAILED,
                details={"image_id": image_id},
            ) from exc

        logger.info("Image record removed", extra={"image_id": image_id, "rows": removed})
        return removed > 0

    def count(self, *, search: str | None = None) -> int:
        try:
            return self._db.count(where=self._search.clauses(ImageRow.description, search))
        except SQLAlchemyError as exc:
            logger.error("Image count failed", extra={"search": search})
            raise CatalogReadError(
                message="Unable to count images",
                error_code=ERROR_CODE_CATALOG_COUNT_FAILED,
                details={"search": search},
            ) from exc

    def find_page(
        self,
        *,
        search: str | None,
        offset: int,
        limit: int,
    ) -> list[ImageRecord]:
        """Fetch one page, newest first.

        NOTE:
        - Filtering happens in SQL with the same clauses used by ``count``.
        - Ties on ``created_at`` are broken by ``id`` descending.
        """
        logger.debug(
            "Listing image records",
            extra={"search": search, "offset": offset, "limit": limit},
        )

        try:
            rows = self._db.select_page(
                where=self._search.clauses(ImageRow.description, search),
                offset=offset,
                limit=limit,
            )
        except SQLAlchemyError as exc:
            logger.error("Image listing failed", extra={"search": search})
            raise CatalogReadError(
                message="Unable to list images",
                error_code=ERROR_CODE_CATALOG_LIST_FAILED,
                details={"search": search},
            ) from exc

        return [to_record(row) for row in rows]

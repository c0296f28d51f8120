"""Business logic keeping the object store and the catalog in step.

The object store and the relational catalog share no transaction. Every
operation that touches both runs as an ordered two-step sequence:

- upload: object first, then record. A failed object write leaves nothing
  behind; a failed record write leaves an orphaned object, reported with
  its key.
- delete: object first, then record. A failed object delete keeps the
  record (safe to retry); a failed record delete leaves a dangling record
  whose retry completes because object deletion is idempotent.
"""

from functools import lru_cache
from typing import Any
import warnings

from aws_lambda_powertools import Logger

from image_catalog.core.filters.description_contains_filter import DescriptionContainsFilter
from image_catalog.core.filters.offset_pagination import OffsetPagination
from image_catalog.core.infrastructure.aws.s3_object_store import S3ObjectStore
from image_catalog.core.infrastructure.sql.sql_catalog import SQLImageCatalog
from image_catalog.core.models.errors import (
    CatalogWriteError,
    InconsistencyWarning,
    NotFoundError,
    StoreDeleteError,
    StoreWriteError,
    ValidationError,
)
from image_catalog.core.models.image import ImagePage, ImageRecord, NewImageRecord
from image_catalog.core.repositories.catalog_repository import ImageCatalogRepository
from image_catalog.core.repositories.object_store import ObjectStoreRepository
from image_catalog.core.utils.constants import (
    ERROR_CODE_CATALOG_CREATE_FAILED,
    ERROR_CODE_CATALOG_DELETE_FAILED,
    ERROR_CODE_EMPTY_FILE,
    ERROR_CODE_FILE_SIZE_EXCEEDED,
    ERROR_CODE_IMAGE_NOT_FOUND,
    MAX_DESCRIPTION_LENGTH,
    MAX_FILE_SIZE,
    get_max_file_size_mb,
)
from image_catalog.core.utils.mime import read_dimensions, resolve_mime_type

logger = Logger(UTC=True)


class CatalogService:
    """Application service for the image catalog.

    This service orchestrates:
    - Upload: validation, object write, record creation
    - Delete: record lookup, object delete, record delete
    - Description updates (catalog only)
    - Paginated, searchable listing (catalog only)

    It is the only component that talks to both stores. It never retries;
    retry policy belongs to callers.
    """

    def __init__(
        self,
        storage: ObjectStoreRepository | None = None,
        catalog: ImageCatalogRepository | None = None,
    ) -> None:
        """Initialize the service with its two backing stores."""
        self.storage = storage or S3ObjectStore()
        self.catalog = catalog or SQLImageCatalog()

    @staticmethod
    def normalize_description(description: str | None) -> str:
        """Trim a description and enforce the length limit.

        Raises:
            ValidationError: If the description is too long
        """
        value = (description or "").strip()

        if len(value) > MAX_DESCRIPTION_LENGTH:
            raise ValidationError(
                message=f"Description must be at most {MAX_DESCRIPTION_LENGTH} characters",
                details={"length": len(value)},
            )

        return value

    @staticmethod
    def _report_inconsistency(message: str, **context: Any) -> None:
        logger.warning(message, extra=context)
        warnings.warn(f"{message}: {context}", InconsistencyWarning, stacklevel=3)

    def upload_image(
        self,
        *,
        file_data: bytes | None,
        content_type: str | None = None,
        original_name: str | None = None,
        description: str | None = None,
    ) -> ImageRecord:
        """Store an image and create its catalog record.

        The upload flow is:
        1. Validate payload and description
        2. Write the object (abort on failure, nothing to clean up)
        3. Create the record (on failure the object is orphaned and reported)

        Args:
            file_data: Raw image bytes
            content_type: Declared MIME type, sniffed when missing or generic
            original_name: Client-side file name, used for the key extension
            description: Optional free-text description

        Returns:
            The created record

        Raises:
            ValidationError: If the payload is missing, empty or too large
            StoreWriteError: If the object write fails
            CatalogWriteError: If the record write fails; ``details`` carries
                the ``orphaned_key`` for external cleanup
        """
        if not file_data:
            raise ValidationError(
                message="No file provided",
                error_code=ERROR_CODE_EMPTY_FILE,
            )

        if len(file_data) > MAX_FILE_SIZE:
            raise ValidationError(
                message=f"File size exceeds {get_max_file_size_mb()}MB limit",
                error_code=ERROR_CODE_FILE_SIZE_EXCEEDED,
                details={"size": len(file_data)},
            )

        clean_description = self.normalize_description(description)
        mime_type = resolve_mime_type(content_type, file_data)
        dimensions = read_dimensions(file_data)

        logger.debug(
            "Starting image upload",
            extra={"size": len(file_data), "mime_type": mime_type},
        )

        # Step 1: object first, so a failure here never leaves a record behind
        try:
            stored = self.storage.put(
                data=file_data,
                content_type=mime_type,
                original_name=original_name,
            )
        except StoreWriteError:
            logger.exception("Object write failed; no record created")
            raise

        # Step 2: record second; a failure here orphans the object
        new_record = NewImageRecord(
            object_key=stored.key,
            url=stored.url,
            description=clean_description,
            size_bytes=len(file_data),
            mime_type=mime_type,
            original_name=original_name,
            width=dimensions[0] if dimensions else None,
            height=dimensions[1] if dimensions else None,
        )

        try:
            record = self.catalog.create(record=new_record)
        except Exception as exc:
            self._report_inconsistency(
                "Orphaned object: catalog write failed after upload",
                orphaned_key=stored.key,
                url=stored.url,
            )
            raise CatalogWriteError(
                message="Unable to save image metadata",
                error_code=getattr(exc, "error_code", ERROR_CODE_CATALOG_CREATE_FAILED),
                details={"orphaned_key": stored.key, "url": stored.url},
            ) from exc

        logger.info(
            "Image uploaded successfully",
            extra={"image_id": record.id, "object_key": record.object_key},
        )
        return record

    def get_image(self, image_id: int) -> ImageRecord:
        """Return one record.

        Raises:
            NotFoundError: If the record does not exist
            CatalogReadError: If the lookup fails
        """
        record = self.catalog.find(image_id=image_id)

        if record is None:
            raise NotFoundError(
                message="Image not found",
                error_code=ERROR_CODE_IMAGE_NOT_FOUND,
                details={"image_id": image_id},
            )

        return record

    def delete_image(self, image_id: int) -> ImageRecord:
        """Delete an image object and then its record.

        The deletion flow is:
        1. Look up the record (NotFoundError if absent)
        2. Delete the object; failure aborts and keeps the record
        3. Delete the record; failure leaves a dangling record, reported

        Returns:
            The record that was removed

        Raises:
            NotFoundError: If the record does not exist
            StoreDeleteError: If the object delete fails (record retained)
            CatalogWriteError: If the record delete fails after the object
                was removed; ``details`` carries the ``dangling_key``
        """
        logger.debug("Starting image deletion", extra={"image_id": image_id})

        record = self.get_image(image_id)

        try:
            self.storage.delete(url_or_key=record.object_key)
        except StoreDeleteError:
            logger.exception(
                "Object delete failed; record retained",
                extra={"image_id": image_id, "object_key": record.object_key},
            )
            raise

        try:
            removed = self.catalog.delete(image_id=image_id)
        except Exception as exc:
            self._report_inconsistency(
                "Dangling record: object deleted but record delete failed",
                image_id=image_id,
                dangling_key=record.object_key,
            )
            raise CatalogWriteError(
                message="Unable to delete image metadata",
                error_code=getattr(exc, "error_code", ERROR_CODE_CATALOG_DELETE_FAILED),
                details={"image_id": image_id, "dangling_key": record.object_key},
            ) from exc

        if not removed:
            logger.info("Record already removed by a concurrent delete", extra={"image_id": image_id})

        logger.info("Image deleted successfully", extra={"image_id": image_id})
        return record

    def update_description(self, image_id: int, description: str | None) -> ImageRecord:
        """Replace a record's description; the object store is not touched.

        Raises:
            ValidationError: If the description is too long
            NotFoundError: If the record does not exist
            CatalogWriteError: If the update fails
        """
        clean_description = self.normalize_description(description)

        record = self.catalog.update_description(
            image_id=image_id,
            description=clean_description,
        )

        if record is None:
            raise NotFoundError(
                message="Image not found",
                error_code=ERROR_CODE_IMAGE_NOT_FOUND,
                details={"image_id": image_id},
            )

        logger.info("Image description updated", extra={"image_id": image_id})
        return record

    def list_images(
        self,
        *,
        page: int | None = None,
        limit: int | None = None,
        search: str | None = None,
    ) -> ImagePage:
        """List records newest first with page/limit pagination and search.

        ``total_count`` is computed with the same filter as the page query.
        A page past the end is empty and skips the page query.

        Raises:
            CatalogReadError: If either query fails
        """
        request = OffsetPagination.page_request(
            page=page,
            limit=limit,
            search=DescriptionContainsFilter.normalize(search),
        )

        total_count = self.catalog.count(search=request.search)
        images: list[ImageRecord] = []
        if request.offset < total_count:
            images = self.catalog.find_page(
                search=request.search,
                offset=request.offset,
                limit=request.limit,
            )

        page_info = OffsetPagination.get_page_info(
            page=request.page,
            limit=request.limit,
            total_count=total_count,
        )

        logger.info(
            "Images listed successfully",
            extra={
                "page": request.page,
                "limit": request.limit,
                "search": request.search,
                "count": len(images),
                "total_count": total_count,
            },
        )

        return ImagePage(
            images=images,
            total_count=total_count,
            **page_info,
        )


@lru_cache(maxsize=1)
def get_catalog_service() -> CatalogService:
    """Return the process-wide service so warm containers reuse clients and pools."""
    return CatalogService()

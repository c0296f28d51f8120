"""Abstract contract for image record persistence."""

from abc import ABC, abstractmethod

from image_catalog.core.models.image import ImageRecord, NewImageRecord


class ImageCatalogRepository(ABC):
    """Contract for storing and querying image records.

    Implementations could be PostgreSQL, SQLite, MySQL, etc.
    The catalog service depends on this interface, not the implementation.
    """

    @abstractmethod
    def create(self, *, record: NewImageRecord) -> ImageRecord:
        """Insert a record; the store assigns ``id`` and ``created_at``.

        Raises:
            CatalogWriteError: If the insert fails
        """

    @abstractmethod
    def find(self, *, image_id: int) -> ImageRecord | None:
        """Fetch one record, or None if it does not exist.

        Raises:
            CatalogReadError: If the lookup fails
        """

    @abstractmethod
    def update_description(self, *, image_id: int, description: str) -> ImageRecord | None:
        """Replace a record's description.

        Returns:
            The updated record, or None if it does not exist

        Raises:
            CatalogWriteError: If the update fails
        """

    @abstractmethod
    def delete(self, *, image_id: int) -> bool:
        """Delete a record.

        Returns:
            True if a row was removed, False if it was already gone

        Raises:
            CatalogWriteError: If the delete fails
        """

    @abstractmethod
    def count(self, *, search: str | None = None) -> int:
        """Count records matching the description filter.

        Raises:
            CatalogReadError: If the count fails
        """

    @abstractmethod
    def find_page(
        self,
        *,
        search: str | None,
        offset: int,
        limit: int,
    ) -> list[ImageRecord]:
        """Fetch records matching the filter, newest first.

        Ordering is ``created_at`` descending with ``id`` descending as the
        tie-break, so consecutive pages partition the result set.

        Raises:
            CatalogReadError: If the query fails
        """

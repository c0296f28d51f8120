"""Abstract contract for binary object storage."""

from abc import ABC, abstractmethod

from image_catalog.core.models.image import StoredObject


class ObjectStoreRepository(ABC):
    """Contract for storing and deleting image binaries.

    Implementations could be S3, GCS, local disk, etc.
    The catalog service depends on this interface, not the implementation.
    """

    @abstractmethod
    def put(
        self,
        *,
        data: bytes,
        content_type: str,
        original_name: str | None = None,
    ) -> StoredObject:
        """Store a binary under a freshly generated key.

        The key is derived from a random identifier plus the extension of
        ``original_name``. The extension is advisory only; ``content_type``
        is stored as given.

        Args:
            data: Binary content
            content_type: MIME type recorded with the object
            original_name: Client-side file name, used for the extension only

        Returns:
            The generated key and its resolvable URL

        Raises:
            StoreWriteError: If the write fails; no partial object is visible
        """

    @abstractmethod
    def delete(self, *, url_or_key: str) -> None:
        """Delete an object by URL or key.

        Deleting a missing object is not an error.

        Raises:
            ValidationError: If a URL cannot be mapped to a key
            StoreDeleteError: On transient failure (safe to retry)
        """

    @abstractmethod
    def fetch(self, *, key: str) -> tuple[bytes, str]:
        """Read an object back.

        Returns:
            Tuple of (content_bytes, content_type)

        Raises:
            NotFoundError: If the object does not exist
            StoreReadError: If the read fails
        """

    @abstractmethod
    def resolve_key_from_url(self, url: str) -> str:
        """Derive the object key from its URL without any I/O.

        Raises:
            ValidationError: If the URL does not belong to this store
        """

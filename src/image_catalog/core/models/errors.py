"""Custom exception classes for the image catalog."""

from typing import Any

from image_catalog.core.utils.constants import (
    ERROR_CODE_CATALOG_READ_FAILED,
    ERROR_CODE_CATALOG_WRITE_FAILED,
    ERROR_CODE_RESOURCE_NOT_FOUND,
    ERROR_CODE_STORE_DELETE_FAILED,
    ERROR_CODE_STORE_READ_FAILED,
    ERROR_CODE_STORE_WRITE_FAILED,
    ERROR_CODE_VALIDATION_FAILED,
)


class ImageCatalogError(Exception):
    """
    Base exception for all image catalog errors.

    All custom errors must inherit from this class.
    Callers must explicitly provide a message and error code.
    Optional contextual information can be supplied via `details`.
    """

    message: str
    error_code: str
    details: dict[str, Any]

    def __init__(
        self,
        *,
        message: str,
        error_code: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.details = details or {}

        super().__init__(self.message)


class ValidationError(ImageCatalogError):
    """Raised when input is missing or malformed."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_VALIDATION_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class NotFoundError(ImageCatalogError):
    """Raised when a referenced record or object is absent."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_RESOURCE_NOT_FOUND,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class StoreWriteError(ImageCatalogError):
    """Raised when writing an object to the object store fails."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_STORE_WRITE_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class StoreDeleteError(ImageCatalogError):
    """Raised when deleting an object from the object store fails.

    The failure is transient; deletion is idempotent and may be retried.
    """

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_STORE_DELETE_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class StoreReadError(ImageCatalogError):
    """Raised when reading an object from the object store fails."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_STORE_READ_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class CatalogWriteError(ImageCatalogError):
    """Raised when a catalog (metadata) write fails."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_CATALOG_WRITE_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class CatalogReadError(ImageCatalogError):
    """Raised when a catalog (metadata) read fails."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_CATALOG_READ_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class InconsistencyWarning(UserWarning):
    """Issued when the object store and the catalog are known to disagree.

    Covers an orphaned object (stored binary without a record) and a
    dangling record (record whose object is gone). Reported through
    ``warnings.warn`` and the logs, never raised.
    """

"""Global constants used throughout the application.

This module centralizes all magic numbers, string literals, and configuration
values that are used across multiple modules. Using constants prevents hardcoding
values and makes it easy to change them globally.
"""

from typing import Final

# ============================================================================
# Error Codes
# ============================================================================

# Validation Errors
ERROR_CODE_VALIDATION_FAILED = "VALIDATION_FAILED"
ERROR_CODE_EMPTY_FILE = "EMPTY_FILE"
ERROR_CODE_NO_FILE = "NO_FILE_PROVIDED"
ERROR_CODE_FILE_SIZE_EXCEEDED = "FILE_SIZE_EXCEEDED"
ERROR_CODE_INVALID_OBJECT_URL = "INVALID_OBJECT_URL"

# Not Found Errors
ERROR_CODE_RESOURCE_NOT_FOUND = "NOT_FOUND"
ERROR_CODE_IMAGE_NOT_FOUND = "IMAGE_NOT_FOUND"
ERROR_CODE_OBJECT_NOT_FOUND = "OBJECT_NOT_FOUND"

# Object Store Errors
ERROR_CODE_STORE_WRITE_FAILED = "STORE_WRITE_FAILED"
ERROR_CODE_STORE_DELETE_FAILED = "STORE_DELETE_FAILED"
ERROR_CODE_STORE_READ_FAILED = "STORE_READ_FAILED"

# Catalog Store Errors
ERROR_CODE_CATALOG_WRITE_FAILED = "CATALOG_WRITE_FAILED"
ERROR_CODE_CATALOG_READ_FAILED = "CATALOG_READ_FAILED"
ERROR_CODE_CATALOG_CREATE_FAILED = "CATALOG_CREATE_FAILED"
ERROR_CODE_CATALOG_UPDATE_FAILED = "CATALOG_UPDATE_FAILED"
ERROR_CODE_CATALOG_DELETE_FAILED = "CATALOG_DELETE_FAILED"
ERROR_CODE_CATALOG_FETCH_FAILED = "CATALOG_FETCH_FAILED"
ERROR_CODE_CATALOG_LIST_FAILED = "CATALOG_LIST_FAILED"
ERROR_CODE_CATALOG_COUNT_FAILED = "CATALOG_COUNT_FAILED"

# Internal / Unexpected
ERROR_CODE_INTERNAL_ERROR = "INTERNAL_ERROR"


# ============================================================================
# File Upload Constraints
# ============================================================================

MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB in bytes
MAX_DESCRIPTION_LENGTH = 1000

DEFAULT_MIME_TYPE = "application/octet-stream"

UPLOAD_FILE_FIELDS: Final[tuple[str, ...]] = ("image", "file")
UPLOAD_DESCRIPTION_FIELD = "description"

# Extension of the original name kept on the object key (".jpg", ".webp", ...)
OBJECT_KEY_EXTENSION_PATTERN = r"^\.[a-z0-9]{1,10}$"


# ============================================================================
# Object Store Layout
# ============================================================================

DEFAULT_OBJECT_KEY_PREFIX = "images"
DEFAULT_S3_TIMEOUT_SECONDS = 5
DEFAULT_S3_MAX_ATTEMPTS = 3
OBJECT_METADATA_ORIGINAL_NAME = "original-name"


# ============================================================================
# Catalog Store
# ============================================================================

IMAGES_TABLE_NAME = "images"
DEFAULT_POOL_TIMEOUT_SECONDS = 5


# ============================================================================
# Pagination Constraints
# ============================================================================

DEFAULT_PAGE = 1
MAX_PAGE = 1_000_000
DEFAULT_LIMIT = 12
MIN_LIMIT = 1
MAX_LIMIT = 100


# ============================================================================
# API Gateway Configuration
# ============================================================================

CORS_ORIGIN = "*"
CORS_METHODS = "GET,POST,PUT,DELETE,OPTIONS"
CORS_HEADERS = "Content-Type,Authorization,X-Api-Key"
EXPOSE_HEADERS = "Content-Type,Content-Length"
DEFAULT_CONTENT_TYPE = "application/json"

HEALTH_STATUS_OK = "okay"

METRICS_NAMESPACE = "ImageCatalog"


# ============================================================================
# Environment Variable Names
# ============================================================================

ENV_AWS_ENDPOINT_URL = "AWS_ENDPOINT_URL"
ENV_AWS_REGION = "AWS_REGION"
ENV_IMAGE_S3_BUCKET_NAME = "IMAGE_S3_BUCKET_NAME"
ENV_IMAGE_S3_KEY_PREFIX = "IMAGE_S3_KEY_PREFIX"
ENV_IMAGE_S3_PUBLIC_BASE_URL = "IMAGE_S3_PUBLIC_BASE_URL"
ENV_IMAGE_S3_TIMEOUT_SECONDS = "IMAGE_S3_TIMEOUT_SECONDS"
ENV_IMAGE_S3_MAX_ATTEMPTS = "IMAGE_S3_MAX_ATTEMPTS"
ENV_IMAGE_CATALOG_DATABASE_URL = "IMAGE_CATALOG_DATABASE_URL"
ENV_IMAGE_CATALOG_POOL_TIMEOUT = "IMAGE_CATALOG_POOL_TIMEOUT"
ENV_CORS_ALLOWED_ORIGIN = "CORS_ALLOWED_ORIGIN"

DEFAULT_AWS_REGION = "us-east-1"


# ============================================================================
# Helper Functions
# ============================================================================


def get_max_file_size_mb() -> int:
    """Get maximum file size in megabytes."""
    return MAX_FILE_SIZE // (1024 * 1024)

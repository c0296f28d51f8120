"""S3-backed implementation of ObjectStoreRepository."""

import os
from pathlib import PurePath
import re
import uuid
from urllib.parse import quote, unquote, urlsplit

from aws_lambda_powertools import Logger
from botocore.exceptions import BotoCoreError, ClientError

from image_catalog.core.infrastructure.adapters.s3_adapter import S3Adapter, S3AdapterProtocol
from image_catalog.core.models.errors import (
    NotFoundError,
    StoreDeleteError,
    StoreReadError,
    StoreWriteError,
    ValidationError,
)
from image_catalog.core.models.image import StoredObject
from image_catalog.core.repositories.object_store import ObjectStoreRepository
from image_catalog.core.utils.constants import (
    DEFAULT_MIME_TYPE,
    DEFAULT_OBJECT_KEY_PREFIX,
    ENV_IMAGE_S3_KEY_PREFIX,
    ENV_IMAGE_S3_PUBLIC_BASE_URL,
    ERROR_CODE_INVALID_OBJECT_URL,
    ERROR_CODE_OBJECT_NOT_FOUND,
    OBJECT_KEY_EXTENSION_PATTERN,
    OBJECT_METADATA_ORIGINAL_NAME,
)

logger = Logger(UTC=True)

_MISSING_KEY_CODES = frozenset({"NoSuchKey", "404", "NotFound"})


def _error_code(exc: ClientError) -> str:
    return str(exc.response.get("Error", {}).get("Code", ""))


class S3ObjectStore(ObjectStoreRepository):
    """Object store backed by a flat key namespace under a fixed S3 prefix.

    Objects live at ``<prefix>/<key>`` in the bucket and are addressed by
    ``<base>/<prefix>/<key>`` URLs.
    """

    def __init__(
        self,
        adapter: S3AdapterProtocol | None = None,
        *,
        prefix: str | None = None,
        public_base_url: str | None = None,
    ) -> None:
        """Create storage using the provided S3 adapter."""
        self._s3: S3AdapterProtocol = adapter or S3Adapter()
        self._prefix = (
            prefix or os.getenv(ENV_IMAGE_S3_KEY_PREFIX) or DEFAULT_OBJECT_KEY_PREFIX
        ).strip("/")
        self._base_url = (
            public_base_url
            or os.getenv(ENV_IMAGE_S3_PUBLIC_BASE_URL)
            or self._default_base_url()
        ).rstrip("/")

    @property
    def prefix(self) -> str:
        return self._prefix

    def _default_base_url(self) -> str:
        if self._s3.endpoint_url:
            return f"{self._s3.endpoint_url.rstrip('/')}/{self._s3.bucket}"
        return f"https://{self._s3.bucket}.s3.{self._s3.region}.amazonaws.com"

    @staticmethod
    def generate_key(original_name: str | None) -> str:
        """Random identifier plus the original extension, when it looks sane."""
        extension = PurePath(original_name or "").suffix.lower()
        if not re.fullmatch(OBJECT_KEY_EXTENSION_PATTERN, extension):
            extension = ""
        return f"{uuid.uuid4().hex}{extension}"

    def storage_key(self, key: str) -> str:
        return f"{self._prefix}/{key}"

    def url_for(self, key: str) -> str:
        return f"{self._base_url}/{self._prefix}/{quote(key)}"

    def put(
        self,
        *,
        data: bytes,
        content_type: str,
        original_name: str | None = None,
    ) -> StoredObject:
        """Upload bytes under a new key and return the key and URL."""
        key = self.generate_key(original_name)
        storage_key = self.storage_key(key)

        logger.debug(
            "Uploading object",
            extra={"key": storage_key, "size": len(data), "content_type": content_type},
        )

        try:
            self._s3.put_object(
                key=storage_key,
                body=data,
                content_type=content_type or DEFAULT_MIME_TYPE,
                metadata={OBJECT_METADATA_ORIGINAL_NAME: quote(original_name or "")},
            )
        except (ClientError, BotoCoreError) as exc:
            logger.error("S3 upload failed", extra={"key": storage_key, "error": str(exc)})
            raise StoreWriteError(
                message="Unable to store image at this time",
                details={"key": key},
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error uploading object")
            raise StoreWriteError(
                message="Unable to store image at this time",
                details={"key": key},
            ) from exc

        logger.info("Object uploaded", extra={"key": storage_key})
        return StoredObject(key=key, url=self.url_for(key))

    def resolve_key_from_url(self, url: str) -> str:
        """Return the URL-decoded path suffix after the prefix segment."""
        parts = urlsplit(url)
        marker = f"/{self._prefix}/"
        index = parts.path.rfind(marker)

        if not parts.scheme or index < 0:
            raise ValidationError(
                message="URL does not reference this object store",
                error_code=ERROR_CODE_INVALID_OBJECT_URL,
                details={"url": url},
            )

        key = unquote(parts.path[index + len(marker) :])
        if not key:
            raise ValidationError(
                message="URL does not contain an object key",
                error_code=ERROR_CODE_INVALID_OBJECT_URL,
                details={"url": url},
            )
        return key

    def _key_from(self, url_or_key: str) -> str:
        if "://" in url_or_key:
            return self.resolve_key_from_url(url_or_key)

        key = url_or_key.strip("/")
        if key.startswith(f"{self._prefix}/"):
            key = key[len(self._prefix) + 1 :]
        if not key:
            raise ValidationError(
                message="Object key must not be empty",
                error_code=ERROR_CODE_INVALID_OBJECT_URL,
            )
        return key

    def delete(self, *, url_or_key: str) -> None:
        """Delete an object; a missing object counts as deleted."""
        key = self._key_from(url_or_key)
        storage_key = self.storage_key(key)

        logger.debug("Deleting object", extra={"key": storage_key})

        try:
            self._s3.delete_object(key=storage_key)
        except ClientError as exc:
            if _error_code(exc) in _MISSING_KEY_CODES:
                logger.info("Object already absent", extra={"key": storage_key})
                return

            logger.error("S3 deletion failed", extra={"key": storage_key, "error": str(exc)})
            raise StoreDeleteError(
                message="Unable to delete image at this time",
                details={"key": key},
            ) from exc

        except BotoCoreError as exc:
            logger.error("S3 deletion failed", extra={"key": storage_key, "error": str(exc)})
            raise StoreDeleteError(
                message="Unable to delete image at this time",
                details={"key": key},
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error deleting object")
            raise StoreDeleteError(
                message="Unable to delete image at this time",
                details={"key": key},
            ) from exc

        logger.info("Object deleted", extra={"key": storage_key})

    def fetch(self, *, key: str) -> tuple[bytes, str]:
        """Download object bytes and content type."""
        key = self._key_from(key)
        storage_key = self.storage_key(key)

        logger.debug("Downloading object", extra={"key": storage_key})

        try:
            response = self._s3.get_object(key=storage_key)
            body = response["Body"].read()
            content_type = response.get("ContentType", DEFAULT_MIME_TYPE)

        except ClientError as exc:
            if _error_code(exc) in _MISSING_KEY_CODES:
                raise NotFoundError(
                    message="Image object not found",
                    error_code=ERROR_CODE_OBJECT_NOT_FOUND,
                    details={"key": key},
                ) from exc

            logger.error("S3 download failed", extra={"key": storage_key, "error": str(exc)})
            raise StoreReadError(
                message="Unable to read image at this time",
                details={"key": key},
            ) from exc

        except BotoCoreError as exc:
            logger.error("S3 download failed", extra={"key": storage_key, "error": str(exc)})
            raise StoreReadError(
                message="Unable to read image at this time",
                details={"key": key},
            ) from exc

        return body, content_type

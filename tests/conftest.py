"""
Pytest configuration and fixtures for image-catalog tests.
Provides AWS mocking, an S3 bucket, a throwaway SQLite catalog and
API Gateway event builders.
"""

import base64
import io
import os
from collections.abc import Callable, Iterator
from types import SimpleNamespace
from typing import Any

import boto3
import pytest
from botocore.exceptions import ClientError
from moto import mock_aws
from PIL import Image
from requests_toolbelt.multipart.encoder import MultipartEncoder

os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")
os.environ.setdefault("AWS_SECURITY_TOKEN", "testing")
os.environ.setdefault("AWS_SESSION_TOKEN", "testing")
os.environ.setdefault("AWS_REGION", "us-east-1")
os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")
os.environ.setdefault("IMAGE_S3_BUCKET_NAME", "image-catalog-test")
os.environ.setdefault("POWERTOOLS_TRACE_DISABLED", "1")
os.environ.setdefault("POWERTOOLS_SERVICE_NAME", "image-catalog")
os.environ.setdefault("POWERTOOLS_METRICS_NAMESPACE", "ImageCatalog")

from image_catalog.core.infrastructure.adapters.sql_adapter import SQLAdapter, build_engine  # noqa: E402
from image_catalog.core.infrastructure.aws.s3_object_store import S3ObjectStore  # noqa: E402
from image_catalog.core.infrastructure.sql.sql_catalog import SQLImageCatalog  # noqa: E402
from image_catalog.core.services.catalog_service import (  # noqa: E402
    CatalogService,
    get_catalog_service,
)

BUCKET_NAME = os.environ["IMAGE_S3_BUCKET_NAME"]


@pytest.fixture(autouse=True)
def catalog_environment(monkeypatch) -> Iterator[None]:
    """
    Every test gets a fresh in-memory catalog and a fresh service singleton.

    Endpoint overrides from the developer shell would change generated URLs,
    so they are cleared.
    """
    monkeypatch.setenv("IMAGE_CATALOG_DATABASE_URL", "sqlite://")
    monkeypatch.delenv("AWS_ENDPOINT_URL", raising=False)
    monkeypatch.delenv("IMAGE_S3_PUBLIC_BASE_URL", raising=False)
    monkeypatch.delenv("IMAGE_S3_KEY_PREFIX", raising=False)
    monkeypatch.delenv("CORS_ALLOWED_ORIGIN", raising=False)

    get_catalog_service.cache_clear()
    yield
    get_catalog_service.cache_clear()


# ============================================================================
# AWS
# ============================================================================


@pytest.fixture(scope="function")
def aws_mock():
    with mock_aws():
        yield


@pytest.fixture(scope="function")
def s3_client(aws_mock):
    """S3 client for bucket operations."""
    return boto3.client("s3", region_name=os.getenv("AWS_REGION"))


@pytest.fixture(scope="function")
def s3_bucket(s3_client):
    """
    Create the S3 bucket for the test.

    moto drops the bucket when the mock context exits.
    """
    try:
        s3_client.create_bucket(Bucket=BUCKET_NAME)
    except ClientError as e:
        if e.response["Error"]["Code"] != "BucketAlreadyOwnedByYou":
            raise

    return s3_client


@pytest.fixture
def s3_put_object(s3_bucket) -> Callable[..., dict[str, Any]]:
    """
    Helper to upload an object to S3.

    Usage:
        s3_put_object("images/abc.jpg", image_bytes, "image/jpeg")
    """

    def _put(key: str, body: bytes, content_type: str = "application/octet-stream"):
        return s3_bucket.put_object(
            Bucket=BUCKET_NAME, Key=key, Body=body, ContentType=content_type
        )

    return _put


@pytest.fixture
def s3_get_object(s3_bucket) -> Callable[[str], bytes]:
    """
    Helper to get an object from S3.

    Usage:
        content = s3_get_object("images/abc.jpg")
    """

    def _get(key: str) -> bytes:
        response: dict[str, Any] = s3_bucket.get_object(Bucket=BUCKET_NAME, Key=key)
        data: bytes = response["Body"].read()
        return data

    return _get


@pytest.fixture
def s3_keys(s3_bucket) -> Callable[[], list[str]]:
    """Helper listing every key currently in the bucket."""

    def _keys() -> list[str]:
        response = s3_bucket.list_objects_v2(Bucket=BUCKET_NAME)
        return sorted(obj["Key"] for obj in response.get("Contents", []))

    return _keys


# ============================================================================
# Catalog / service
# ============================================================================


@pytest.fixture
def sql_adapter() -> SQLAdapter:
    return SQLAdapter(engine=build_engine("sqlite://"))


@pytest.fixture
def sql_catalog(sql_adapter) -> SQLImageCatalog:
    return SQLImageCatalog(sql_adapter)


@pytest.fixture
def object_store(s3_bucket) -> S3ObjectStore:
    return S3ObjectStore()


@pytest.fixture
def catalog_service(object_store, sql_catalog) -> CatalogService:
    return CatalogService(storage=object_store, catalog=sql_catalog)


# ============================================================================
# Sample images
# ============================================================================


def _encode_image(fmt: str, size: tuple[int, int], color: str) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", size, color).save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture
def png_bytes() -> bytes:
    """Decodable 4x3 PNG."""
    return _encode_image("PNG", (4, 3), "red")


@pytest.fixture
def jpeg_bytes() -> bytes:
    """Decodable 8x6 JPEG."""
    return _encode_image("JPEG", (8, 6), "blue")


# ============================================================================
# Lambda / API Gateway
# ============================================================================


@pytest.fixture
def lambda_context() -> SimpleNamespace:
    return SimpleNamespace(
        aws_request_id="test-request-id",
        function_name="test-function",
        memory_limit_in_mb=256,
        invoked_function_arn="arn:aws:lambda:us-east-1:000000000000:function:test",
        log_group_name="/aws/lambda/test-function",
        log_stream_name="2024/01/01/[$LATEST]test",
    )


@pytest.fixture
def multipart_event() -> Callable[..., dict[str, Any]]:
    """
    Build a base64-encoded multipart/form-data proxy event.

    Usage:
        event = multipart_event({"image": ("cat.png", data, "image/png"), "description": "cat"})
    """

    def _build(fields: dict[str, Any], *, path: str = "/api/upload") -> dict[str, Any]:
        encoder = MultipartEncoder(fields=fields)
        return {
            "httpMethod": "POST",
            "path": path,
            "headers": {"Content-Type": encoder.content_type},
            "body": base64.b64encode(encoder.to_string()).decode("ascii"),
            "isBase64Encoded": True,
        }

    return _build


@pytest.fixture
def path_event() -> Callable[..., dict[str, Any]]:
    """Build a proxy event addressing ``/api/images/{id}``."""

    def _build(
        image_id: Any,
        *,
        method: str = "GET",
        body: str | None = None,
    ) -> dict[str, Any]:
        return {
            "httpMethod": method,
            "path": f"/api/images/{image_id}" + ("/description" if method == "PUT" else ""),
            "pathParameters": {"id": None if image_id is None else str(image_id)},
            "headers": {"Content-Type": "application/json"},
            "body": body,
            "isBase64Encoded": False,
        }

    return _build

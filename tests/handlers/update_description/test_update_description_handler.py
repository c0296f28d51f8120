import json
from unittest.mock import patch

import pytest

from image_catalog.core.models.errors import CatalogWriteError
from image_catalog.core.services.catalog_service import get_catalog_service
from image_catalog.handlers.update_description.handler import handler


@pytest.fixture
def record(s3_bucket, png_bytes):
    return get_catalog_service().upload_image(file_data=png_bytes, description="old")


def put(path_event, image_id, payload) -> dict:
    body = payload if isinstance(payload, str) or payload is None else json.dumps(payload)
    return path_event(image_id, method="PUT", body=body)


class TestUpdateDescriptionHandler:
    def test_update_success(self, record, lambda_context, path_event, s3_get_object, png_bytes) -> None:
        response = handler(put(path_event, record.id, {"description": " new text "}), lambda_context)

        assert response["statusCode"] == 200
        body = json.loads(response["body"])
        assert body["success"] is True
        assert body["image"]["id"] == record.id
        assert body["image"]["description"] == "new text"
        assert body["image"]["objectKey"] == record.object_key
        assert s3_get_object(f"images/{record.object_key}") == png_bytes

    @pytest.mark.parametrize("value", [None, ""])
    def test_clear_description(self, record, lambda_context, path_event, value) -> None:
        response = handler(put(path_event, record.id, {"description": value}), lambda_context)

        assert response["statusCode"] == 200
        assert json.loads(response["body"])["image"]["description"] == ""

    def test_unknown_id(self, s3_bucket, lambda_context, path_event) -> None:
        response = handler(put(path_event, 999, {"description": "x"}), lambda_context)

        assert response["statusCode"] == 404

    def test_non_numeric_id(self, lambda_context, path_event) -> None:
        response = handler(put(path_event, "abc", {"description": "x"}), lambda_context)

        assert response["statusCode"] == 404

    @pytest.mark.parametrize("body", ["{not json", None, "[1, 2]", "{}", '{"description": 5}'])
    def test_bad_body(self, record, lambda_context, path_event, body) -> None:
        response = handler(put(path_event, record.id, body), lambda_context)

        assert response["statusCode"] == 400
        assert get_catalog_service().get_image(record.id).description == "old"

    def test_too_long(self, record, lambda_context, path_event) -> None:
        response = handler(put(path_event, record.id, {"description": "x" * 1001}), lambda_context)

        assert response["statusCode"] == 400

    def test_catalog_failure(self, record, lambda_context, path_event) -> None:
        service = get_catalog_service()
        failure = CatalogWriteError(message="down", error_code="CATALOG_UPDATE_FAILED")

        with patch.object(service.catalog, "update_description", side_effect=failure):
            response = handler(put(path_event, record.id, {"description": "x"}), lambda_context)

        assert response["statusCode"] == 500
        assert json.loads(response["body"])["error"] == "CATALOG_UPDATE_FAILED"

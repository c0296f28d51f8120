import json
from unittest.mock import patch

import pytest

from image_catalog.core.models.errors import CatalogReadError
from image_catalog.core.services.catalog_service import get_catalog_service
from image_catalog.handlers.get_image.handler import handler


class TestGetHandler:
    def test_get_existing(self, s3_bucket, lambda_context, path_event, png_bytes) -> None:
        record = get_catalog_service().upload_image(
            file_data=png_bytes, original_name="cat.png", description="cat"
        )

        response = handler(path_event(record.id), lambda_context)

        assert response["statusCode"] == 200
        body = json.loads(response["body"])
        assert body["id"] == record.id
        assert body["objectKey"] == record.object_key
        assert body["description"] == "cat"

    def test_get_unknown(self, s3_bucket, lambda_context, path_event) -> None:
        response = handler(path_event(999), lambda_context)

        assert response["statusCode"] == 404
        assert json.loads(response["body"])["error"] == "IMAGE_NOT_FOUND"

    @pytest.mark.parametrize("image_id", ["abc", "0", "-1", "1.5", None])
    def test_non_numeric_id_is_not_found(self, lambda_context, path_event, image_id) -> None:
        response = handler(path_event(image_id), lambda_context)

        assert response["statusCode"] == 404

    def test_catalog_failure(self, s3_bucket, lambda_context, path_event) -> None:
        service = get_catalog_service()

        with patch.object(service.catalog, "find", side_effect=CatalogReadError(message="down")):
            response = handler(path_event(1), lambda_context)

        assert response["statusCode"] == 500

import json
from unittest.mock import patch

import pytest

from image_catalog.core.models.errors import CatalogReadError
from image_catalog.core.services.catalog_service import get_catalog_service
from image_catalog.core.utils.constants import MAX_PAGE
from image_catalog.handlers.list_images.handler import handler


def list_event(params=None) -> dict:
    return {"httpMethod": "GET", "path": "/api/images", "queryStringParameters": params}


@pytest.fixture
def uploaded(s3_bucket):
    service = get_catalog_service()
    descriptions = ["Sunset at the beach", "dog", "SUNSET city", "cat", "sunset again"]
    return [service.upload_image(file_data=b"x", description=text) for text in descriptions]


class TestListHandler:
    def test_defaults(self, lambda_context, uploaded) -> None:
        response = handler(list_event(), lambda_context)

        assert response["statusCode"] == 200
        body = json.loads(response["body"])

        assert body["totalCount"] == 5
        assert body["totalPages"] == 1
        assert body["currentPage"] == 1
        assert body["hasMore"] is False
        assert [img["id"] for img in body["images"]] == [r.id for r in reversed(uploaded)]
        assert set(body["images"][0]) >= {"id", "objectKey", "url", "description", "createdAt"}

    def test_paging(self, lambda_context, uploaded) -> None:
        response = handler(list_event({"page": "2", "limit": "2"}), lambda_context)

        body = json.loads(response["body"])
        assert body["currentPage"] == 2
        assert body["totalPages"] == 3
        assert body["hasMore"] is True
        assert [img["id"] for img in body["images"]] == [uploaded[2].id, uploaded[1].id]

    def test_search(self, lambda_context, uploaded) -> None:
        response = handler(list_event({"search": "sunset"}), lambda_context)

        body = json.loads(response["body"])
        assert body["totalCount"] == 3
        assert all("sunset" in img["description"].lower() for img in body["images"])

    @pytest.mark.parametrize(
        ("params", "page", "count"),
        [
            ({"page": "abc", "limit": "xyz"}, 1, 5),
            ({"page": "0", "limit": "0"}, 1, 1),
            ({"page": "-4", "limit": "1000"}, 1, 5),
        ],
    )
    def test_bad_numbers_fall_back_or_clamp(self, lambda_context, uploaded, params, page, count) -> None:
        response = handler(list_event(params), lambda_context)

        assert response["statusCode"] == 200
        body = json.loads(response["body"])
        assert body["currentPage"] == page
        assert len(body["images"]) == count

    def test_huge_page_returns_empty_page(self, lambda_context, uploaded) -> None:
        response = handler(list_event({"page": "99999999999999999999"}), lambda_context)

        assert response["statusCode"] == 200
        body = json.loads(response["body"])
        assert body["images"] == []
        assert body["totalCount"] == 5
        assert body["currentPage"] == MAX_PAGE
        assert body["hasMore"] is False

    def test_empty_catalog(self, lambda_context, s3_bucket) -> None:
        response = handler(list_event({"search": "anything"}), lambda_context)

        body = json.loads(response["body"])
        assert body == {
            "images": [],
            "totalCount": 0,
            "totalPages": 0,
            "currentPage": 1,
            "hasMore": False,
        }

    def test_catalog_failure(self, lambda_context, s3_bucket) -> None:
        service = get_catalog_service()

        with patch.object(service.catalog, "count", side_effect=CatalogReadError(message="down")):
            response = handler(list_event(), lambda_context)

        assert response["statusCode"] == 500
        assert json.loads(response["body"])["error"] == "CATALOG_READ_FAILED"

"""
End-to-end lifecycle through the Lambda handlers:
Upload → List → Search → Get → Update → Delete → Verify
"""

import json

from image_catalog.core.services.catalog_service import get_catalog_service
from image_catalog.handlers.delete_image.handler import handler as delete_handler
from image_catalog.handlers.get_image.handler import handler as get_handler
from image_catalog.handlers.list_images.handler import handler as list_handler
from image_catalog.handlers.update_description.handler import handler as update_handler
from image_catalog.handlers.upload_image.handler import handler as upload_handler


def body_of(response: dict) -> dict:
    return json.loads(response["body"])


class TestCompleteLifecycle:
    """E2E: complete image lifecycle workflow"""

    def test_upload_list_update_delete_workflow(
        self,
        s3_bucket,
        s3_keys,
        s3_get_object,
        lambda_context,
        multipart_event,
        path_event,
        png_bytes,
        jpeg_bytes,
    ) -> None:
        # Step 1: upload two images
        first = upload_handler(
            multipart_event({"image": ("cat.png", png_bytes, "image/png"), "description": "Cat"}),
            lambda_context,
        )
        second = upload_handler(
            multipart_event({"image": ("dog.jpg", jpeg_bytes, "image/jpeg"), "description": "Dog"}),
            lambda_context,
        )
        assert first["statusCode"] == 201
        assert second["statusCode"] == 201
        cat = body_of(first)
        dog = body_of(second)

        # Step 2: list, newest first
        listing = body_of(list_handler({"httpMethod": "GET", "queryStringParameters": None}, lambda_context))
        assert listing["totalCount"] == 2
        assert [img["id"] for img in listing["images"]] == [dog["id"], cat["id"]]

        # Step 3: search
        search = body_of(
            list_handler({"httpMethod": "GET", "queryStringParameters": {"search": "cAt"}}, lambda_context)
        )
        assert search["totalCount"] == 1
        assert search["images"][0]["id"] == cat["id"]

        # Step 4: get one record
        fetched = body_of(get_handler(path_event(cat["id"]), lambda_context))
        assert fetched["url"] == cat["url"]

        # Step 5: update description; object untouched
        updated = update_handler(
            path_event(cat["id"], method="PUT", body=json.dumps({"description": "Kitten"})),
            lambda_context,
        )
        assert updated["statusCode"] == 200
        assert body_of(updated)["image"]["description"] == "Kitten"
        assert s3_get_object(f"images/{cat['objectKey']}") == png_bytes

        # Step 6: delete
        deleted = delete_handler(path_event(cat["id"], method="DELETE"), lambda_context)
        assert deleted["statusCode"] == 200
        assert body_of(deleted) == {"success": True}

        # Step 7: verify record and object are both gone
        assert get_handler(path_event(cat["id"]), lambda_context)["statusCode"] == 404
        remaining = body_of(list_handler({"httpMethod": "GET"}, lambda_context))
        assert [img["id"] for img in remaining["images"]] == [dog["id"]]
        assert s3_keys() == [f"images/{dog['objectKey']}"]

    def test_upload_fetch_list_delete_scenario(
        self,
        s3_bucket,
        lambda_context,
        multipart_event,
        path_event,
    ) -> None:
        payload = b"\xff\xd8\xff\xe0" + b"\x00" * 6

        created = upload_handler(
            multipart_event({"image": ("tiny.jpg", payload, "image/jpeg"), "description": "test"}),
            lambda_context,
        )

        assert created["statusCode"] == 201
        record = body_of(created)
        assert record["description"] == "test"

        storage = get_catalog_service().storage
        data, content_type = storage.fetch(key=storage.resolve_key_from_url(record["url"]))
        assert data == payload
        assert content_type == "image/jpeg"

        listing = body_of(
            list_handler(
                {"httpMethod": "GET", "queryStringParameters": {"page": "1", "limit": "12"}},
                lambda_context,
            )
        )
        assert listing["images"][0]["id"] == record["id"]

        deleted = delete_handler(path_event(record["id"], method="DELETE"), lambda_context)
        assert body_of(deleted) == {"success": True}

        assert get_handler(path_event(record["id"]), lambda_context)["statusCode"] == 404

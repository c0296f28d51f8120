import base64

import pytest
from requests_toolbelt.multipart.encoder import MultipartEncoder

from image_catalog.core.models.errors import ValidationError
from image_catalog.core.utils.multipart import event_body_bytes, get_header, parse_form_data


def encoded_event(fields, *, header: str = "Content-Type") -> dict:
    encoder = MultipartEncoder(fields=fields)
    return {
        "headers": {header: encoder.content_type},
        "body": base64.b64encode(encoder.to_string()).decode(),
        "isBase64Encoded": True,
    }


class TestGetHeader:
    def test_case_insensitive(self) -> None:
        assert get_header({"content-type": "a/b"}, "Content-Type") == "a/b"

    def test_missing(self) -> None:
        assert get_header(None, "Content-Type") is None
        assert get_header({"x": "y"}, "Content-Type") is None


class TestEventBodyBytes:
    def test_plain_body(self) -> None:
        assert event_body_bytes({"body": '{"a": 1}'}) == b'{"a": 1}'

    def test_base64_body(self) -> None:
        event = {"body": base64.b64encode(b"\x00\x01").decode(), "isBase64Encoded": True}

        assert event_body_bytes(event) == b"\x00\x01"

    def test_missing_body(self) -> None:
        assert event_body_bytes({}) == b""

    def test_invalid_base64(self) -> None:
        with pytest.raises(ValidationError):
            event_body_bytes({"body": "!!!not-base64!!!", "isBase64Encoded": True})


class TestParseFormData:
    def test_splits_files_and_fields(self, png_bytes) -> None:
        event = encoded_event(
            {
                "image": ("cat.png", png_bytes, "image/png"),
                "description": "A sleepy cat",
            }
        )

        form = parse_form_data(event)

        upload = form.files["image"]
        assert upload.filename == "cat.png"
        assert upload.content_type == "image/png"
        assert upload.content == png_bytes
        assert form.fields == {"description": "A sleepy cat"}

    def test_lowercase_content_type_header(self, png_bytes) -> None:
        event = encoded_event({"file": ("a.png", png_bytes, "image/png")}, header="content-type")

        assert "file" in parse_form_data(event).files

    def test_file_part_without_content_type(self) -> None:
        event = encoded_event({"image": ("raw.bin", b"abc")})

        upload = parse_form_data(event).files["image"]
        assert upload.content == b"abc"

    def test_unicode_description(self, png_bytes) -> None:
        event = encoded_event(
            {"image": ("a.png", png_bytes, "image/png"), "description": "café au lait"}
        )

        assert parse_form_data(event).fields["description"] == "café au lait"

    def test_not_multipart(self) -> None:
        with pytest.raises(ValidationError):
            parse_form_data({"headers": {"Content-Type": "application/json"}, "body": "{}"})

    def test_missing_content_type(self) -> None:
        with pytest.raises(ValidationError):
            parse_form_data({"headers": {}, "body": ""})

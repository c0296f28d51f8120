"""multipart/form-data parsing for API Gateway proxy events."""

import base64
import binascii
from dataclasses import dataclass, field
from email.message import Message
from email.utils import collapse_rfc2231_value
from typing import Any

from requests_toolbelt.multipart.decoder import (
    ImproperBodyPartContentException,
    MultipartDecoder,
    NonMultipartContentTypeException,
)

from image_catalog.core.models.errors import ValidationError

DISPOSITION = "content-disposition"


@dataclass(frozen=True)
class FormFile:
    """A file part of a multipart body."""

    field_name: str
    filename: str | None
    content_type: str | None
    content: bytes


@dataclass(frozen=True)
class FormData:
    fields: dict[str, str] = field(default_factory=dict)
    files: dict[str, FormFile] = field(default_factory=dict)


def get_header(headers: dict[str, Any] | None, name: str) -> str | None:
    """Case-insensitive header lookup (API Gateway keeps client casing)."""
    wanted = name.lower()
    for key, value in (headers or {}).items():
        if key.lower() == wanted:
            return str(value)
    return None


def event_body_bytes(event: dict[str, Any]) -> bytes:
    body = event.get("body") or ""

    if event.get("isBase64Encoded"):
        try:
            return base64.b64decode(body, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise ValidationError(message="Invalid base64 request body") from exc

    if isinstance(body, bytes):
        return body
    return str(body).encode("utf-8")


def _disposition_params(value: str) -> tuple[str | None, str | None]:
    message = Message()
    message[DISPOSITION] = value

    name = message.get_param("name", header=DISPOSITION)
    filename = message.get_filename()

    return (
        collapse_rfc2231_value(name) if name is not None else None,
        filename,
    )


def parse_form_data(event: dict[str, Any]) -> FormData:
    """Split a multipart/form-data event body into text fields and files.

    A part counts as a file when its Content-Disposition carries a
    ``filename`` parameter; everything else is a text field.

    Raises:
        ValidationError: If the request is not a well-formed multipart body
    """
    content_type = get_header(event.get("headers"), "Content-Type")
    if not content_type or "boundary=" not in content_type.lower():
        raise ValidationError(
            message="Expected a multipart/form-data request",
            details={"content_type": content_type},
        )

    try:
        decoder = MultipartDecoder(event_body_bytes(event), content_type)
    except (NonMultipartContentTypeException, ImproperBodyPartContentException) as exc:
        raise ValidationError(
            message="Malformed multipart body",
            details={"content_type": content_type},
        ) from exc

    form = FormData()

    for part in decoder.parts:
        raw_disposition = part.headers.get(b"Content-Disposition", b"")
        name, filename = _disposition_params(raw_disposition.decode("utf-8", "replace"))
        if not name:
            continue

        if filename is not None:
            raw_type = part.headers.get(b"Content-Type")
            form.files[name] = FormFile(
                field_name=name,
                filename=filename,
                content_type=raw_type.decode("latin-1") if raw_type else None,
                content=part.content,
            )
        else:
            form.fields[name] = part.content.decode("utf-8", "replace")

    return form

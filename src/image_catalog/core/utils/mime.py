import io
from collections.abc import Mapping

from PIL import Image, UnidentifiedImageError

from image_catalog.core.utils.constants import DEFAULT_MIME_TYPE

MAGIC_BYTES: Mapping[bytes, str] = {
    b"\xff\xd8\xff": "image/jpeg",
    b"\x89PNG\r\n\x1a\n": "image/png",
    b"GIF87a": "image/gif",
    b"GIF89a": "image/gif",
}


def detect_mime_type(file_data: bytes) -> str | None:
    for signature, mime in MAGIC_BYTES.items():
        if file_data.startswith(signature):
            return mime

    if file_data[:4] == b"RIFF" and file_data[8:12] == b"WEBP":
        return "image/webp"

    return None


def resolve_mime_type(declared: str | None, file_data: bytes) -> str:
    """Prefer the declared content type; sniff only when it is missing or generic."""
    if declared:
        declared = declared.split(";", 1)[0].strip().lower()
    if declared and declared != DEFAULT_MIME_TYPE:
        return declared

    return detect_mime_type(file_data) or DEFAULT_MIME_TYPE


def read_dimensions(file_data: bytes) -> tuple[int, int] | None:
    """Return (width, height) when Pillow can read the image header."""
    try:
        with Image.open(io.BytesIO(file_data)) as image:
            width, height = image.size
    except (
        UnidentifiedImageError,
        Image.DecompressionBombError,
        OSError,
        SyntaxError,
        EOFError,
        ValueError,
    ):
        return None

    return int(width), int(height)

"""Pydantic models for image upload request."""

from typing import Any

from pydantic import BaseModel, Field, field_validator

from image_catalog.core.utils.constants import MAX_DESCRIPTION_LENGTH


class ImageUploadRequest(BaseModel):
    """Validation model for a parsed multipart upload."""

    file_data: bytes = Field(..., description="Raw file content")
    original_name: str | None = Field(
        None, max_length=1024, description="Client-side file name"
    )
    content_type: str | None = Field(
        None, max_length=255, description="Declared MIME type of the file part"
    )
    description: str = Field(
        "", max_length=MAX_DESCRIPTION_LENGTH, description="Image description"
    )

    @field_validator("original_name", "content_type", "description", mode="before")
    @classmethod
    def strip_text(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip()
        return value

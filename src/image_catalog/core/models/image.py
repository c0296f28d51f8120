"""Shared image catalog models."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, StrictStr
from pydantic.alias_generators import to_camel


class CatalogModel(BaseModel):
    """Base model serialized with camelCase keys for API consumers."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    def to_api(self) -> dict[str, Any]:
        """Return a JSON-safe, camelCase representation."""
        return self.model_dump(mode="json", by_alias=True)


class StoredObject(CatalogModel):
    """Location of a binary written to the object store."""

    key: StrictStr = Field(..., description="Generated object key (without prefix)")
    url: StrictStr = Field(..., description="Resolvable location of the object")


class NewImageRecord(CatalogModel):
    """Values captured at upload time, before the catalog assigns an id."""

    object_key: StrictStr
    url: StrictStr
    description: StrictStr = ""
    size_bytes: StrictInt
    mime_type: StrictStr
    original_name: StrictStr | None = None
    width: StrictInt | None = None
    height: StrictInt | None = None


class ImageRecord(CatalogModel):
    """Image metadata owned by the catalog store."""

    id: StrictInt = Field(..., description="Store-assigned identifier")
    object_key: StrictStr = Field(..., description="Key of the binary in the object store")
    url: StrictStr = Field(..., description="Resolvable URL derived from the object key")
    description: StrictStr = Field("", description="Free-text description")
    created_at: datetime = Field(..., description="Creation timestamp (UTC)")

    size_bytes: StrictInt | None = Field(None, description="Payload size in bytes")
    mime_type: StrictStr | None = Field(None, description="MIME type captured at upload")
    original_name: StrictStr | None = Field(None, description="Client-side file name")
    width: StrictInt | None = Field(None, description="Pixel width, when decodable")
    height: StrictInt | None = Field(None, description="Pixel height, when decodable")


class ImagePage(CatalogModel):
    """One page of catalog records plus pagination metadata."""

    images: list[ImageRecord] = Field(..., description="Records on this page")
    total_count: StrictInt = Field(..., description="Records matching the filter")
    total_pages: StrictInt = Field(..., description="ceil(total_count / limit)")
    current_page: StrictInt = Field(..., description="1-based page number")
    has_more: StrictBool = Field(..., description="Whether pages exist after this one")

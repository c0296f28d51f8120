from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ListImagesRequest(BaseModel):
    """Validation model for list images query parameters.

    ``page`` and ``limit`` are lenient: anything that is not an integer is
    treated as absent and falls back to the defaults. Out-of-range values are
    clamped by the service, not rejected here.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    page: int | None = Field(None, description="1-based page number")
    limit: int | None = Field(None, description="Page size")
    search: str | None = Field(None, description="Case-insensitive description substring")

    @field_validator("page", "limit", mode="before")
    @classmethod
    def coerce_int(cls, value: Any) -> int | None:
        if value is None or isinstance(value, bool):
            return None
        if isinstance(value, int):
            return value
        try:
            return int(str(value).strip())
        except ValueError:
            return None

"""Pagination model."""

from pydantic import BaseModel, Field, StrictInt, StrictStr

from image_catalog.core.utils.constants import DEFAULT_LIMIT, DEFAULT_PAGE


class PageRequest(BaseModel):
    """Normalized list request: clamped page/limit and an optional search term."""

    page: StrictInt = Field(DEFAULT_PAGE, ge=1, description="1-based page number")
    limit: StrictInt = Field(DEFAULT_LIMIT, ge=1, description="Page size")
    search: StrictStr | None = Field(
        None,
        description="Case-insensitive substring matched against descriptions",
    )

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

"""
Page-based pagination utilities.
"""

from typing import Any

from image_catalog.core.models.pagination import PageRequest
from image_catalog.core.utils.constants import (
    DEFAULT_LIMIT,
    DEFAULT_PAGE,
    MAX_PAGE,
    MAX_LIMIT,
    MIN_LIMIT,
)


class OffsetPagination:
    """
    Page/limit pagination helper.

    Pages are 1-based. Out-of-range inputs are clamped rather than rejected:
    page to [1, MAX_PAGE], limit to [MIN_LIMIT, MAX_LIMIT].
    """

    @staticmethod
    def clamp_page(page: int | None) -> int:
        if page is None:
            return DEFAULT_PAGE
        return min(MAX_PAGE, max(DEFAULT_PAGE, page))

    @staticmethod
    def clamp_limit(limit: int | None) -> int:
        if limit is None:
            return DEFAULT_LIMIT
        return min(MAX_LIMIT, max(MIN_LIMIT, limit))

    @classmethod
    def page_request(
        cls,
        *,
        page: int | None,
        limit: int | None,
        search: str | None,
    ) -> PageRequest:
        return PageRequest(
            page=cls.clamp_page(page),
            limit=cls.clamp_limit(limit),
            search=search,
        )

    @staticmethod
    def get_page_info(
        *,
        page: int,
        limit: int,
        total_count: int,
    ) -> dict[str, Any]:
        """
        Generate pagination metadata for API responses.

        Example:
            get_page_info(page=2, limit=12, total_count=30)
            → {"total_pages": 3, "current_page": 2, "has_more": True}

        Notes:
            - total_pages is rounded up and 0 for an empty result
            - has_more is False when total_count is 0
        """
        total_pages = (total_count + limit - 1) // limit if total_count > 0 else 0

        return {
            "total_pages": total_pages,
            "current_page": page,
            "has_more": page * limit < total_count,
        }

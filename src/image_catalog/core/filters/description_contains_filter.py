"""Description-based filtering for image records."""

from sqlalchemy import ColumnElement, String, func


class DescriptionContainsFilter:
    """Filter records by description using case-insensitive substring search.

    The predicate is pushed down to the catalog store so that the page query
    and the total count share exactly the same filter.
    """

    @staticmethod
    def normalize(search_term: str | None) -> str | None:
        """Return the effective term, or None when the search is blank."""
        if not search_term or not search_term.strip():
            return None
        return search_term.strip()

    @classmethod
    def clauses(
        cls,
        column: ColumnElement[str],
        search_term: str | None,
    ) -> list[ColumnElement[bool]]:
        """Build WHERE clauses; empty when no filtering applies.

        LIKE wildcards in the term are escaped, so ``%`` and ``_`` match
        literally.
        """
        term = cls.normalize(search_term)
        if term is None:
            return []

        return [func.lower(column, type_=String).contains(term.lower(), autoescape=True)]

"""
Query state for the notification list.

A QueryState is an immutable value describing which page of which
filtered/searched view is requested. Transitions return new values; any
change of filter or search resets the page to 1.
"""

from dataclasses import dataclass, replace
from typing import Any, Dict, Optional, Union

from hostel_notify.models import ReadFilter


SORT_BY = "createdAt"
SORT_ORDER = "desc"


@dataclass(frozen=True)
class QueryState:
    """
    Canonical request descriptor for the list endpoint.

    Attributes:
        filter: Read-state filter
        search_term: Raw search text as typed (trimmed only on transmission)
        page: Requested 1-based page
        items_per_page: Requested page size
    """
    filter: ReadFilter = ReadFilter.ALL
    search_term: str = ""
    page: int = 1
    items_per_page: int = 12

    @property
    def search(self) -> Optional[str]:
        """Trimmed search text, or None when blank."""
        trimmed = self.search_term.strip()
        return trimmed or None

    def with_filter(self, value: Union[ReadFilter, str]) -> "QueryState":
        return replace(self, filter=ReadFilter(value), page=1)

    def with_search(self, text: str) -> "QueryState":
        return replace(self, search_term=text, page=1)

    def with_page(self, page: int) -> "QueryState":
        if page < 1:
            raise ValueError(f"page must be >= 1, got {page}")
        return replace(self, page=page)

    def with_items_per_page(self, items_per_page: int) -> "QueryState":
        return replace(self, items_per_page=items_per_page)

    def cleared(self) -> "QueryState":
        """Reset filter and search, back to page 1, keeping the page size."""
        return QueryState(items_per_page=self.items_per_page)

    def to_params(self) -> Dict[str, Any]:
        """
        Build list endpoint query parameters.

        The search and isRead predicates are only included when set.
        """
        params: Dict[str, Any] = {
            "page": self.page,
            "limit": self.items_per_page,
            "sortBy": SORT_BY,
            "sortOrder": SORT_ORDER,
        }
        if self.search:
            params["search"] = self.search

        is_read = self.filter.to_is_read()
        if is_read is not None:
            params["isRead"] = is_read
        return params

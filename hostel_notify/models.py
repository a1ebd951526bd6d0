"""
Notification and pagination records.

Notifications are server-owned; the client keeps immutable copies and
replaces them (rather than mutating) when a local projection changes.
"""

import math
from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional


# ============================================================================
# Enumerations
# ============================================================================


class ReadFilter(str, Enum):
    """Read-state filter applied to the list endpoint."""

    ALL = "all"
    UNREAD = "unread"
    READ = "read"

    def to_is_read(self) -> Optional[bool]:
        """Map to the isRead predicate; None means the predicate is omitted."""
        if self is ReadFilter.ALL:
            return None
        return self is ReadFilter.READ


PRIORITIES = ("urgent", "high", "medium", "low")

KNOWN_TYPES = (
    "complaint_new",
    "complaint_updated",
    "complaint_resolved",
    "room_allocated",
    "room_updated",
    "leave_approved",
    "leave_rejected",
    "fee_payment",
    "fee_overdue",
)


def _parse_read_flag(value: Any) -> bool:
    """Read flag from the wire; only true or "true" count as read."""
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return value is True


# ============================================================================
# Data Classes
# ============================================================================


@dataclass(frozen=True)
class Notification:
    """
    Cached copy of a server-issued notification.

    Attributes:
        id: Opaque identifier (wire field "_id")
        title: Display title
        message: Display body
        type: Category string; unknown values are kept verbatim
        priority: urgent/high/medium/low, or whatever the server sent
        is_read: Read flag (wire field "isRead")
        created_at: Creation timestamp string (wire field "createdAt")
    """
    id: str
    title: str = ""
    message: str = ""
    type: str = "other"
    priority: str = "medium"
    is_read: bool = False
    created_at: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Notification":
        """
        Build a Notification from a wire record.

        Accepts "_id" or "id" for the identifier and tolerates missing
        display fields.

        Raises:
            ValueError: If the record has no identifier
        """
        identifier = data.get("_id", data.get("id"))
        if identifier is None:
            raise ValueError("Notification record has no identifier")

        return cls(
            id=str(identifier),
            title=data.get("title") or "",
            message=data.get("message") or "",
            type=data.get("type") or "other",
            priority=data.get("priority") or "medium",
            is_read=_parse_read_flag(data.get("isRead")),
            created_at=data.get("createdAt"),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert back to the wire representation."""
        return {
            "_id": self.id,
            "title": self.title,
            "message": self.message,
            "type": self.type,
            "priority": self.priority,
            "isRead": self.is_read,
            "createdAt": self.created_at,
        }

    def mark_read(self) -> "Notification":
        """Return a read copy of this notification."""
        if self.is_read:
            return self
        return replace(self, is_read=True)

    @property
    def created_datetime(self) -> Optional[datetime]:
        """Parse created_at as an aware datetime, or None if unparseable."""
        if not self.created_at:
            return None
        try:
            return datetime.fromisoformat(self.created_at.replace("Z", "+00:00"))
        except (ValueError, AttributeError):
            return None


@dataclass(frozen=True)
class Pagination:
    """
    Pagination record for the loaded page.

    Attributes:
        current_page: 1-based page number
        total_pages: Number of pages, at least 1
        total_items: Number of matching notifications on the server
        items_per_page: Page size
    """
    current_page: int = 1
    total_pages: int = 1
    total_items: int = 0
    items_per_page: int = 12

    @classmethod
    def empty(cls, items_per_page: int) -> "Pagination":
        """Pagination for an empty result, keeping the page size."""
        return cls(
            current_page=1,
            total_pages=1,
            total_items=0,
            items_per_page=items_per_page,
        )

    @staticmethod
    def pages_for(total_items: int, items_per_page: int) -> int:
        """Number of pages needed for total_items, never less than 1."""
        if items_per_page <= 0:
            return 1
        return max(1, math.ceil(total_items / items_per_page))

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages

    def contains(self, page: int) -> bool:
        """Check whether a page number is within [1, total_pages]."""
        return 1 <= page <= self.total_pages

    @property
    def should_display(self) -> bool:
        """Pagination controls are shown for large or multi-page results."""
        return (
            self.total_items > 100
            or self.total_pages > 1
            or self.current_page > 1
        )

    def page_window(self, size: int = 5) -> List[int]:
        """
        Page numbers for the numbered page buttons.

        Shows the first pages near the start, the last pages near the end,
        and otherwise centres the window on the current page.
        """
        count = min(size, self.total_pages)
        if self.total_pages <= size:
            start = 1
        elif self.current_page <= size // 2 + 1:
            start = 1
        elif self.current_page >= self.total_pages - size // 2:
            start = self.total_pages - size + 1
        else:
            start = self.current_page - size // 2
        return list(range(start, start + count))

    def showing_range(self) -> tuple:
        """First and last item numbers shown on the current page (1-based)."""
        if self.total_items == 0:
            return (0, 0)
        first = (self.current_page - 1) * self.items_per_page + 1
        last = min(self.current_page * self.items_per_page, self.total_items)
        return (first, last)

    def to_dict(self) -> Dict[str, int]:
        return {
            "currentPage": self.current_page,
            "totalPages": self.total_pages,
            "totalItems": self.total_items,
            "itemsPerPage": self.items_per_page,
        }

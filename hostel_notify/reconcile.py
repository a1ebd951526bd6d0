"""
Tolerant decoding of notification list responses.

The backend may return the list under "notifications" or "data", may omit
the pagination object, and may omit individual pagination fields. All of
that is normalized here into one ListResult; nothing downstream looks at
the raw payload shape.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from hostel_notify.models import Notification, Pagination


logger = logging.getLogger("hostel_notify.reconcile")

LIST_KEYS = ("notifications", "data")


@dataclass(frozen=True)
class ListResult:
    """
    Canonical result of one list fetch.

    Attributes:
        notifications: Loaded page, in server order
        pagination: Reconciled pagination record
        unread_total: Server-wide unread count when the response includes it
    """
    notifications: List[Notification]
    pagination: Pagination
    unread_total: Optional[int] = None


def _extract_records(payload: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Find the notification list under any accepted key."""
    for key in LIST_KEYS:
        value = payload.get(key)
        if isinstance(value, list):
            return value
    return []


def _decode_notifications(records: List[Any]) -> List[Notification]:
    notifications = []
    for record in records:
        if not isinstance(record, dict):
            logger.warning(f"Skipping non-object notification record: {record!r}")
            continue
        try:
            notifications.append(Notification.from_dict(record))
        except ValueError as e:
            logger.warning(f"Skipping notification record: {e}")
    return notifications


def _positive_int(value: Any) -> Optional[int]:
    """Coerce to a positive int; None for missing, zero or invalid values."""
    try:
        number = int(value)
    except (TypeError, ValueError):
        return None
    return number if number > 0 else None


def reconcile_pagination(
    raw: Optional[Dict[str, Any]],
    requested_page: int,
    loaded_count: int,
    previous_items_per_page: int,
) -> Pagination:
    """
    Build a complete Pagination from an optional server pagination object.

    Args:
        raw: Server pagination object, or None when absent
        requested_page: Page number that was requested
        loaded_count: Number of notifications returned
        previous_items_per_page: Page size in effect before the request

    Returns:
        Pagination with every field populated
    """
    if not isinstance(raw, dict):
        total_pages = Pagination.pages_for(loaded_count, previous_items_per_page)
        return Pagination(
            current_page=min(max(requested_page, 1), total_pages),
            total_pages=total_pages,
            total_items=loaded_count,
            items_per_page=previous_items_per_page,
        )

    items_per_page = _positive_int(raw.get("itemsPerPage")) or previous_items_per_page
    total_pages = _positive_int(raw.get("totalPages")) or 1
    total_items = _positive_int(raw.get("totalItems")) or loaded_count
    current_page = requested_page or _positive_int(raw.get("currentPage")) or 1

    return Pagination(
        current_page=min(current_page, total_pages),
        total_pages=total_pages,
        total_items=total_items,
        items_per_page=items_per_page,
    )


def decode_list_response(
    payload: Optional[Dict[str, Any]],
    requested_page: int,
    previous_items_per_page: int,
) -> ListResult:
    """
    Normalize a list endpoint response.

    Args:
        payload: Raw response body
        requested_page: Page number that was requested
        previous_items_per_page: Page size in effect before the request

    Returns:
        ListResult with decoded notifications and reconciled pagination
    """
    payload = payload or {}
    notifications = _decode_notifications(_extract_records(payload))
    pagination = reconcile_pagination(
        payload.get("pagination"),
        requested_page=requested_page,
        loaded_count=len(notifications),
        previous_items_per_page=previous_items_per_page,
    )

    if len(notifications) > pagination.items_per_page:
        logger.warning(
            f"Server returned {len(notifications)} notifications for a page of "
            f"{pagination.items_per_page}; keeping the first page only"
        )
        notifications = notifications[:pagination.items_per_page]

    unread_total = payload.get("unreadCount")
    if unread_total is not None:
        try:
            unread_total = int(unread_total)
        except (TypeError, ValueError):
            unread_total = None

    return ListResult(
        notifications=notifications,
        pagination=pagination,
        unread_total=unread_total,
    )

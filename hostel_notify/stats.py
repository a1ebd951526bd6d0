"""
Derived statistics over the loaded notification page.

Statistics are computed from scratch from whatever page is currently
loaded. They describe that page only, not the user's whole collection.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from hostel_notify.models import PRIORITIES, Notification


@dataclass(frozen=True)
class OverviewStats:
    total: int = 0
    read: int = 0
    unread: int = 0


@dataclass(frozen=True)
class PriorityStats:
    urgent: int = 0
    high: int = 0
    medium: int = 0
    low: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {name: getattr(self, name) for name in PRIORITIES}


@dataclass(frozen=True)
class NotificationStats:
    """
    Aggregate counts for a loaded page.

    Attributes:
        overview: Total/read/unread counts
        priority: Counts per known priority; unknown priorities are excluded
        by_type: Type -> count, in order of first occurrence
    """
    overview: OverviewStats = field(default_factory=OverviewStats)
    priority: PriorityStats = field(default_factory=PriorityStats)
    by_type: Dict[str, int] = field(default_factory=dict)

    @property
    def type_distribution(self) -> List[Dict[str, object]]:
        """Type counts as a list of {"type", "count"} entries."""
        return [{"type": t, "count": c} for t, c in self.by_type.items()]

    def to_dict(self) -> Dict[str, object]:
        return {
            "overview": {
                "total": self.overview.total,
                "read": self.overview.read,
                "unread": self.overview.unread,
            },
            "priority": self.priority.to_dict(),
            "distribution": {"byType": self.type_distribution},
        }


def compute_stats(notifications: Iterable[Notification]) -> NotificationStats:
    """
    Compute statistics for a sequence of notifications.

    Args:
        notifications: Loaded notifications

    Returns:
        NotificationStats for exactly these notifications
    """
    total = 0
    read = 0
    priority_counts = dict.fromkeys(PRIORITIES, 0)
    by_type: Dict[str, int] = {}

    for notification in notifications:
        total += 1
        if notification.is_read:
            read += 1
        if notification.priority in priority_counts:
            priority_counts[notification.priority] += 1
        by_type[notification.type] = by_type.get(notification.type, 0) + 1

    return NotificationStats(
        overview=OverviewStats(total=total, read=read, unread=total - read),
        priority=PriorityStats(**priority_counts),
        by_type=by_type,
    )

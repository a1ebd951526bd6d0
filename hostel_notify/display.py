"""
Display helpers for notifications: relative dates, type labels and tones.
"""

from datetime import datetime, timezone
from typing import Optional

from hostel_notify.models import Notification


MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
          "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

# Tone per notification type; anything else is neutral
TYPE_TONES = {
    "complaint_new": "alert",
    "complaint_updated": "alert",
    "complaint_resolved": "success",
    "room_allocated": "info",
    "room_updated": "info",
    "leave_approved": "success",
    "leave_rejected": "error",
    "fee_payment": "success",
    "fee_overdue": "alert",
}

TONE_COLORS = {
    "alert": "red",
    "error": "red",
    "success": "green",
    "info": "blue",
    "neutral": "white",
}

PRIORITY_COLORS = {
    "urgent": "red",
    "high": "yellow",
    "medium": "bright_yellow",
    "low": "white",
}


def format_relative_time(created_at: Optional[datetime], now: Optional[datetime] = None) -> str:
    """
    Format a timestamp relative to now.

    Returns "Just now" under an hour, "Nh ago" under a day, "Yesterday"
    under two days, and otherwise a short date ("13 Oct"), with the year
    when it differs from the current one.
    """
    if created_at is None:
        return ""
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    hours = (now - created_at).total_seconds() / 3600
    if hours < 1:
        return "Just now"
    if hours < 24:
        return f"{int(hours)}h ago"
    if hours < 48:
        return "Yesterday"

    label = f"{created_at.day} {MONTHS[created_at.month - 1]}"
    if created_at.year != now.year:
        label += f" {created_at.year}"
    return label


def type_label(notification_type: str) -> str:
    """Human-readable label: "room_allocated" -> "Room allocated"."""
    text = notification_type.replace("_", " ").strip()
    return text[:1].upper() + text[1:]


def type_tone(notification_type: str) -> str:
    return TYPE_TONES.get(notification_type, "neutral")


def type_color(notification_type: str) -> str:
    return TONE_COLORS[type_tone(notification_type)]


def priority_color(priority: str) -> str:
    return PRIORITY_COLORS.get(priority, "white")


def notification_age(notification: Notification, now: Optional[datetime] = None) -> str:
    return format_relative_time(notification.created_datetime, now=now)

from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..schemas import Notification


def badge_text(unread_count: int) -> str:
    """Header bell badge: nothing at zero, capped at 9+."""
    if unread_count <= 0:
        return ""
    return "9+" if unread_count > 9 else str(unread_count)


def unread_summary(unread_count: int) -> str:
    if unread_count <= 0:
        return "All caught up!"
    return f"You have {unread_count} unread notification{'s' if unread_count > 1 else ''}"


def format_timestamp(raw: Optional[str]) -> str:
    # "October 18, 2026 at 07:05 PM"; unparseable values are shown as-is
    if not raw:
        return ""
    try:
        dt = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        return raw
    return f"{dt.strftime('%B')} {dt.day}, {dt.year} at {dt.strftime('%I:%M %p')}"


def present_notification(n: Notification) -> dict:
    return {
        "id": n.id,
        "message": n.message,
        "new": not n.is_read,
        "when": format_timestamp(n.created_at),
    }

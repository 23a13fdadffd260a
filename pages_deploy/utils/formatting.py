"""Formatting utilities for display"""

from datetime import datetime, timezone
from typing import Optional


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO 8601 timestamp as returned by the GitHub API

    Args:
        value: Timestamp string (``Z`` suffix allowed) or None

    Returns:
        Timezone-aware datetime, or None when the value is empty

    Examples:
        >>> parse_timestamp("2024-05-01T10:00:00Z").isoformat()
        '2024-05-01T10:00:00+00:00'
    """
    if not value:
        return None

    parsed = datetime.fromisoformat(value.replace('Z', '+00:00'))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def short_revision(revision: str, length: int = 7) -> str:
    """Abbreviate a revision the way git displays it"""
    return revision[:length]


def truncate(text: str, width: int = 30) -> str:
    """Truncate text to ``width`` characters, marking the cut with an ellipsis

    Examples:
        >>> truncate("Update buykit-fixed via SiteHub Editor", 10)
        'Update buy...'
    """
    if len(text) > width:
        return text[:width] + "..."
    return text


def format_duration(seconds: float) -> str:
    """Format duration in seconds to human readable format

    Args:
        seconds: Duration in seconds

    Returns:
        Human readable duration string

    Examples:
        >>> format_duration(1.5)
        '1.5s'
        >>> format_duration(65)
        '1m 5s'
    """
    if seconds < 0:
        return "Invalid duration"

    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"

    minutes, secs = divmod(int(seconds), 60)
    return f"{minutes}m {secs}s"


def format_timestamp(value: Optional[datetime]) -> str:
    """Format a timestamp for tables"""
    if value is None:
        return "N/A"
    return value.astimezone(timezone.utc).strftime("%Y-%m-%d %H:%M")

"""
Display helpers shared by the listing commands.
"""

from datetime import datetime, timezone
from typing import Optional

_SIZE_UNITS = ["B", "KB", "MB", "GB"]


def format_file_size(size_bytes: Optional[int]) -> str:
    """
    Format a byte count for display.

    Args:
        size_bytes: Size in bytes

    Returns:
        str: e.g. "0 B", "512.00 B", "1.50 KB"
    """
    if not size_bytes:
        return "0 B"
    size = float(size_bytes)
    unit = 0
    while size >= 1024 and unit < len(_SIZE_UNITS) - 1:
        size /= 1024
        unit += 1
    return f"{size:.2f} {_SIZE_UNITS[unit]}"


def plural(count: int, word: str) -> str:
    """'1 file', '2 files'"""
    return f"{count} {word}{'' if count == 1 else 's'}"


def truncate(text: Optional[str], max_length: int) -> str:
    text = text or ""
    if len(text) <= max_length:
        return text
    return text[: max_length - 3] + "..."


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp from the API; None when missing or invalid"""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_datetime(value: Optional[str]) -> str:
    parsed = parse_timestamp(value)
    if parsed is None:
        return value or "-"
    return parsed.astimezone().strftime("%Y-%m-%d %H:%M:%S")


def format_date(value: Optional[str]) -> str:
    parsed = parse_timestamp(value)
    if parsed is None:
        return value or "-"
    return parsed.astimezone().strftime("%Y-%m-%d")


def format_relative(value: Optional[str], now: Optional[datetime] = None) -> str:
    """
    Describe a timestamp relative to now: 'just now', '5m ago', '3h ago',
    '2d ago', falling back to the date after a week.
    """
    parsed = parse_timestamp(value)
    if parsed is None:
        return value or "-"

    now = now or datetime.now(timezone.utc)
    seconds = (now - parsed).total_seconds()
    minutes = int(seconds // 60)
    hours = int(seconds // 3600)
    days = int(seconds // 86400)

    if minutes < 1:
        return "just now"
    if minutes < 60:
        return f"{minutes}m ago"
    if hours < 24:
        return f"{hours}h ago"
    if days < 7:
        return f"{days}d ago"
    return parsed.astimezone().strftime("%Y-%m-%d")


def mask_secret(value: Optional[str]) -> str:
    """Mask a secret for display, keeping its length hint bounded"""
    if not value:
        return "-"
    return "*" * min(len(value), 20) + "..."

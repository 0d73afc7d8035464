"""Timestamp parsing and year-month key helpers."""

from __future__ import annotations

from datetime import datetime, timezone


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse an RFC 3339 timestamp as returned by the API (e.g. 2024-03-05T10:00:00Z)."""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def month_key(moment: datetime) -> str:
    """Format a datetime as a sortable YYYY-MM key."""
    return f"{moment.year:04d}-{moment.month:02d}"


def shift_months(year: int, month: int, delta: int) -> tuple[int, int]:
    """Move (year, month) by delta months; month is 1-based."""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def months_back_key(now: datetime, months: int) -> str:
    """Key of the month `months` before the month containing `now`."""
    year, month = shift_months(now.year, now.month, -months)
    return f"{year:04d}-{month:02d}"

"""Lenient conversions for API payload values."""

from __future__ import annotations


def to_count(value: object) -> int:
    """Parse a count the API sends as a string; malformed or missing -> 0."""
    if value is None or isinstance(value, bool):
        return 0
    try:
        number = int(value)
    except (TypeError, ValueError):
        try:
            number = int(float(value))
        except (TypeError, ValueError, OverflowError):
            return 0
    return max(0, number)


def best_thumbnail(thumbnails: dict | None) -> str:
    """Pick the largest available thumbnail URL."""
    if not thumbnails:
        return ""
    for size in ("maxres", "high", "medium", "default"):
        url = (thumbnails.get(size) or {}).get("url")
        if url:
            return url
    return ""

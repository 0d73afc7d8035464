"""Channel identifier cleaning and resolution."""

from __future__ import annotations

import csv
import json
import logging
import re
from pathlib import Path
from urllib.parse import urlparse

from yt_dashboard.core.errors import ChannelNotFoundError
from yt_dashboard.services.api_client import YouTubeApiClient

logger = logging.getLogger("yt_dashboard")

_CHANNEL_ID_RE = re.compile(r"^UC[A-Za-z0-9_-]{22,}$")
_YOUTUBE_URL_RE = re.compile(r"^(?:https?://)?(?:www\.|m\.)?youtube\.com(?:/|$)", re.IGNORECASE)
_PATH_MARKERS = {"c", "channel", "user"}


def is_channel_id(candidate: str) -> bool:
    """Check if a string already has the canonical channel ID shape."""
    return bool(_CHANNEL_ID_RE.match(candidate.strip()))


def clean_channel_name(raw: str) -> str:
    """Reduce a handle, URL, or display name to a searchable name.

    Strips youtube.com URL prefixes (and the c/, channel/, user/ markers),
    drops anything after the first name segment, removes @ markers and trims
    whitespace. Cleaning an already-cleaned name returns it unchanged.
    """
    previous = None
    text = raw
    while text != previous:
        previous = text
        text = _clean_once(text)
    return text


def _clean_once(text: str) -> str:
    text = text.strip()
    if _YOUTUBE_URL_RE.match(text):
        if "://" not in text:
            text = "https://" + text
        segments = [s for s in urlparse(text).path.split("/") if s]
        if segments and segments[0].lower() in _PATH_MARKERS:
            segments = segments[1:]
        text = segments[0] if segments else ""
    return text.replace("@", "").strip()


async def resolve_channel_id(client: YouTubeApiClient, raw: str) -> str:
    """Resolve a raw identifier to a canonical channel ID.

    Canonical IDs (raw, or recovered from a /channel/ URL) are returned
    without a network call. Anything else goes through a channel-scoped
    search and the first hit wins.

    Raises:
        ChannelNotFoundError: Nothing usable to search for, or no results.
        ApiUnavailableError: The API rejected the search as disabled/misconfigured.
        TransientFetchError: The search request failed.
    """
    if is_channel_id(raw):
        return raw.strip()

    name = clean_channel_name(raw)
    if is_channel_id(name):
        return name
    if not name:
        raise ChannelNotFoundError(f"Nothing to search for in {raw!r}")

    response = await client.get(
        "search",
        {"part": "snippet", "type": "channel", "maxResults": 1, "q": name},
    )
    for item in response.get("items") or []:
        if not isinstance(item, dict):
            continue
        channel_id = (item.get("id") or {}).get("channelId") or (item.get("snippet") or {}).get("channelId")
        if channel_id:
            logger.debug("Resolved %r to %s", raw, channel_id)
            return channel_id

    raise ChannelNotFoundError(f"No channel found for {raw!r}")


def load_identifiers_from_file(path: Path, *, field: str = "channel") -> list[str]:
    """Load channel identifiers from a text file (one per line), CSV, or JSONL.

    For CSV files, looks for a column matching `field`.
    For JSONL files, looks for a key matching `field` in each JSON object.
    For plain text files, treats each non-empty, non-comment line as an identifier.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    identifiers: list[str] = []

    if suffix == ".jsonl":
        with open(path, encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if not line:
                    continue
                try:
                    obj = json.loads(line)
                except json.JSONDecodeError:
                    logger.warning("Skipping malformed JSONL line in %s", path)
                    continue
                if isinstance(obj, dict) and obj.get(field):
                    identifiers.append(str(obj[field]).strip())

    elif suffix == ".csv":
        with open(path, encoding="utf-8", newline="") as f:
            reader = csv.DictReader(f)
            for row in reader:
                if row.get(field):
                    identifiers.append(row[field].strip())

    else:
        with open(path, encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if line and not line.startswith("#"):
                    identifiers.append(line)

    return identifiers

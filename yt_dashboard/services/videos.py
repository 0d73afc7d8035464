"""Recent uploads listing joined with per-video statistics."""

from __future__ import annotations

import logging

from yt_dashboard.core.errors import ApiUnavailableError, TransientFetchError
from yt_dashboard.core.models import VideoRecord
from yt_dashboard.services.api_client import YouTubeApiClient
from yt_dashboard.utils.coerce import best_thumbnail, to_count
from yt_dashboard.utils.time_fmt import parse_timestamp

logger = logging.getLogger("yt_dashboard")

# playlistItems and videos both cap maxResults at 50 per page.
MAX_PAGE_SIZE = 50


async def get_uploads_playlist_id(client: YouTubeApiClient, channel_id: str) -> str:
    """Look up the playlist that holds every upload of a channel."""
    response = await client.get("channels", {"part": "contentDetails", "id": channel_id})
    for item in response.get("items") or []:
        uploads = ((item.get("contentDetails") or {}).get("relatedPlaylists") or {}).get("uploads")
        if uploads:
            return uploads
    raise TransientFetchError(f"No uploads playlist for channel {channel_id}")


async def fetch_uploads(client: YouTubeApiClient, channel_id: str, count: int) -> list[VideoRecord]:
    """Fetch up to `count` most recent uploads with statistics.

    Three requests: uploads playlist lookup, one playlistItems page, and one
    batched videos call for the exact IDs on that page. Errors propagate.
    """
    count = max(1, min(count, MAX_PAGE_SIZE))
    playlist_id = await get_uploads_playlist_id(client, channel_id)

    page = await client.get(
        "playlist_items",
        {"part": "snippet,contentDetails", "playlistId": playlist_id, "maxResults": count},
    )
    entries = [e for e in (page.get("items") or []) if _entry_video_id(e)][:count]
    if not entries:
        return []

    video_ids = [_entry_video_id(e) for e in entries]
    details = await client.get(
        "videos",
        {"part": "snippet,statistics", "id": ",".join(video_ids), "maxResults": len(video_ids)},
    )
    by_id = {item.get("id"): item for item in details.get("items") or [] if item.get("id")}

    return [_join(entry, by_id.get(_entry_video_id(entry))) for entry in entries]


async def list_recent_videos(client: YouTubeApiClient, channel_id: str, count: int = 10) -> list[VideoRecord]:
    """Most recent uploads, newest first, at most `count` of them.

    Video data is best-effort: any failure other than ApiUnavailableError,
    including a malformed payload, yields an empty list.
    """
    try:
        return await fetch_uploads(client, channel_id, count)
    except ApiUnavailableError:
        raise
    except Exception as exc:
        logger.warning("Recent videos unavailable for %s: %r", channel_id, exc)
        return []


def _entry_video_id(entry: dict) -> str | None:
    details = entry.get("contentDetails") or {}
    resource = (entry.get("snippet") or {}).get("resourceId") or {}
    return details.get("videoId") or resource.get("videoId")


def _join(entry: dict, video: dict | None) -> VideoRecord:
    """Merge a playlist entry with its videos#list item (which may be missing)."""
    entry_snippet = entry.get("snippet") or {}
    entry_details = entry.get("contentDetails") or {}
    video = video or {}
    video_snippet = video.get("snippet") or {}
    statistics = video.get("statistics") or {}

    published = (
        video_snippet.get("publishedAt")
        or entry_details.get("videoPublishedAt")
        or entry_snippet.get("publishedAt")
    )

    return VideoRecord(
        video_id=_entry_video_id(entry),
        title=video_snippet.get("title") or entry_snippet.get("title") or "",
        published_at=parse_timestamp(published),
        thumbnail_url=best_thumbnail(video_snippet.get("thumbnails") or entry_snippet.get("thumbnails")),
        view_count=to_count(statistics.get("viewCount")),
        like_count=to_count(statistics.get("likeCount")),
        comment_count=to_count(statistics.get("commentCount")),
    )

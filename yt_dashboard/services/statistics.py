"""Channel snippet/statistics/branding retrieval."""

from __future__ import annotations

import logging

from yt_dashboard.core.errors import ChannelNotFoundError
from yt_dashboard.core.models import ChannelRecord, is_verified
from yt_dashboard.services.api_client import YouTubeApiClient
from yt_dashboard.utils.coerce import best_thumbnail, to_count
from yt_dashboard.utils.time_fmt import parse_timestamp

logger = logging.getLogger("yt_dashboard")


async def fetch_channel_statistics(client: YouTubeApiClient, channel_id: str) -> ChannelRecord:
    """Fetch channel-level data in one combined request.

    The returned record has no videos or monthly buckets yet.

    Raises:
        ChannelNotFoundError: The API returned no item for the ID.
        ApiUnavailableError: The API is disabled/misconfigured.
        TransientFetchError: Network, HTTP, or decode failure.
    """
    response = await client.get(
        "channels",
        {"part": "snippet,statistics,brandingSettings", "id": channel_id},
    )
    items = response.get("items") or []
    if not items:
        raise ChannelNotFoundError(f"Channel not found: {channel_id}")
    return map_channel_item(channel_id, items[0])


def map_channel_item(channel_id: str, item: dict) -> ChannelRecord:
    """Map a channels#list item to a ChannelRecord.

    Channels with hidden statistics omit fields; everything defaults to
    empty or zero rather than failing.
    """
    snippet = item.get("snippet") or {}
    statistics = item.get("statistics") or {}
    branding = item.get("brandingSettings") or {}
    branding_channel = branding.get("channel") or {}

    subscriber_count = 0 if statistics.get("hiddenSubscriberCount") else to_count(statistics.get("subscriberCount"))

    return ChannelRecord(
        channel_id=item.get("id") or channel_id,
        title=snippet.get("title") or branding_channel.get("title") or "",
        description=snippet.get("description") or branding_channel.get("description") or "",
        custom_url=snippet.get("customUrl") or "",
        thumbnail_url=best_thumbnail(snippet.get("thumbnails")),
        banner_url=(branding.get("image") or {}).get("bannerExternalUrl"),
        subscriber_count=subscriber_count,
        view_count=to_count(statistics.get("viewCount")),
        video_count=to_count(statistics.get("videoCount")),
        country=snippet.get("country") or branding_channel.get("country") or "",
        verified=is_verified(subscriber_count),
        created_at=parse_timestamp(snippet.get("publishedAt")),
        source="api",
    )

"""Monthly upload/view rollups from the most recent page of uploads."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Iterable

from yt_dashboard.core.errors import ApiUnavailableError
from yt_dashboard.core.models import MonthlyBucket, VideoRecord
from yt_dashboard.services.api_client import YouTubeApiClient
from yt_dashboard.services.videos import MAX_PAGE_SIZE, fetch_uploads
from yt_dashboard.utils.time_fmt import month_key, months_back_key

logger = logging.getLogger("yt_dashboard")


def aggregate_monthly(videos: Iterable[VideoRecord], since: str | None = None) -> list[MonthlyBucket]:
    """Group videos by publish month (YYYY-MM) and sum counts and views.

    Each video ID counts once. Videos without a publish timestamp, or
    published before the `since` month key, are ignored. Only months with at
    least one video appear; the result is sorted ascending by month.
    """
    seen: set[str] = set()
    buckets: dict[str, MonthlyBucket] = {}

    for video in videos:
        if video.video_id in seen or video.published_at is None:
            continue
        seen.add(video.video_id)

        published = video.published_at
        if published.tzinfo is not None:
            published = published.astimezone(timezone.utc)
        key = month_key(published)
        if since is not None and key < since:
            continue

        bucket = buckets.setdefault(key, MonthlyBucket(month=key))
        bucket.video_count += 1
        bucket.views += video.view_count

    return [buckets[key] for key in sorted(buckets)]


def lookback_start(lookback_months: int | None, now: datetime | None = None) -> str | None:
    """Oldest month key kept by a `lookback_months` window ending at `now`.

    None means no window: every fetched upload is bucketed.
    """
    if lookback_months is None:
        return None
    now = now or datetime.now(timezone.utc)
    return months_back_key(now, lookback_months - 1)


async def fetch_monthly_performance(
    client: YouTubeApiClient,
    channel_id: str,
    *,
    page_size: int = MAX_PAGE_SIZE,
    lookback_months: int | None = None,
    now: datetime | None = None,
) -> list[MonthlyBucket]:
    """Roll up one page of recent uploads into monthly buckets.

    Bounded to a single page for quota reasons, so busy channels get an
    incomplete tail in their oldest buckets. Every upload on the page is
    bucketed unless `lookback_months` narrows the window. Failures other
    than ApiUnavailableError yield an empty list.
    """
    try:
        videos = await fetch_uploads(client, channel_id, page_size)
    except ApiUnavailableError:
        raise
    except Exception as exc:
        logger.warning("Monthly performance unavailable for %s: %r", channel_id, exc)
        return []

    return aggregate_monthly(videos, since=lookback_start(lookback_months, now))

# Copyright (c) 2026 Pointmatic
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Synthetic channel profiles for demo mode.

The popularity tier always comes from a seed derived from the input string,
so the same name lands in the same tier on every call. Magnitudes within the
tier depend on the mode:

- ``seeded``: every number is derived from the seed; output is reproducible
  for a fixed ``now``.
- ``random``: numbers are drawn from true randomness inside the tier's ranges,
  so the dashboard looks different on every run.
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Literal

from yt_dashboard.core.models import ChannelRecord, MonthlyBucket, VideoRecord, is_verified
from yt_dashboard.services.resolver import clean_channel_name
from yt_dashboard.utils.time_fmt import shift_months

SyntheticMode = Literal["seeded", "random"]

SERIES_MONTHS = 24
RECENT_VIDEO_COUNT = 10
COUNTRIES = ["US", "UK", "CA", "AU", "IN", "JP", "BR", "DE", "FR", "ES"]


@dataclass(frozen=True)
class PopularityTier:
    name: str
    threshold: int  # tier applies when seed % 100 > threshold
    subscribers: tuple[int, int]
    views_per_subscriber: tuple[int, int]
    videos: tuple[int, int]
    monthly_videos: tuple[int, int]
    monthly_views: tuple[int, int]


TIERS = (
    PopularityTier("very popular", 90, (10_000_000, 50_000_000), (40, 100), (500, 5000), (10, 30), (1_000_000, 5_000_000)),
    PopularityTier("popular", 70, (1_000_000, 10_000_000), (30, 80), (300, 2000), (5, 20), (200_000, 1_000_000)),
    PopularityTier("medium", 40, (100_000, 1_000_000), (20, 50), (100, 1000), (3, 15), (50_000, 200_000)),
    PopularityTier("small", -1, (1_000, 100_000), (10, 30), (50, 500), (1, 8), (5_000, 50_000)),
)


def channel_seed(text: str) -> int:
    """Sum of the character codes of `text`."""
    return sum(ord(c) for c in text)


def popularity_tier(seed: int) -> PopularityTier:
    """Pick the tier for a seed (top decile very popular, then 20/30/40%)."""
    bucket = seed % 100
    for tier in TIERS:
        if bucket > tier.threshold:
            return tier
    return TIERS[-1]  # pragma: no cover


def _scale(fraction: float, low: int, high: int) -> int:
    return int(fraction * (high - low) + low)


def _drawer(seed: int, mode: SyntheticMode, rng: random.Random) -> Callable[[int, int], int]:
    """Return draw(low, high) -> int in [low, high) for the given mode."""
    if mode == "random":
        return lambda low, high: _scale(rng.random(), low, high)
    fraction = (seed % 100) / 100
    return lambda low, high: _scale(fraction, low, high)


def generate_channel(
    name: str,
    mode: SyntheticMode = "seeded",
    *,
    now: datetime | None = None,
    rng: random.Random | None = None,
) -> ChannelRecord:
    """Build a complete synthetic ChannelRecord for any input string."""
    now = now or datetime.now(timezone.utc)
    rng = rng or random.Random()
    clean_name = clean_channel_name(name) or name.strip() or "Unknown channel"
    seed = channel_seed(name)
    tier = popularity_tier(seed)
    draw = _drawer(seed, mode, rng)

    channel_id = f"UC{channel_seed(clean_name)}"
    subscriber_count = draw(*tier.subscribers)
    view_count = subscriber_count * draw(*tier.views_per_subscriber)
    video_count = draw(*tier.videos)

    return ChannelRecord(
        channel_id=channel_id,
        title=clean_name,
        description=(
            f"This is {clean_name}'s YouTube channel, featuring videos about "
            f"{'entertainment' if seed % 2 == 0 else 'education'} and "
            f"{'lifestyle' if seed % 3 == 0 else 'technology'}."
        ),
        custom_url="@" + "".join(clean_name.lower().split()),
        thumbnail_url=f"https://picsum.photos/seed/{channel_id}/400/400",
        subscriber_count=subscriber_count,
        view_count=view_count,
        video_count=video_count,
        country=COUNTRIES[seed % len(COUNTRIES)],
        verified=is_verified(subscriber_count),
        created_at=now - timedelta(days=365 * draw(1, 10)),
        recent_videos=_recent_videos(clean_name, channel_id, seed, subscriber_count, draw, now),
        monthly_performance=monthly_series(seed, mode, now=now, rng=rng),
        source="synthetic",
    )


def generate_channels(
    names: list[str],
    mode: SyntheticMode = "seeded",
    *,
    now: datetime | None = None,
) -> list[ChannelRecord]:
    """One synthetic record per input, in input order."""
    now = now or datetime.now(timezone.utc)
    return [generate_channel(name, mode, now=now) for name in names]


def video_titles(clean_name: str, seed: int, millions: int) -> list[str]:
    return [
        f"{clean_name}'s Amazing Adventure",
        f"How to Master {'Programming' if seed % 10 == 0 else 'Cooking'} in 10 Days",
        f"My {'Morning' if seed % 2 == 0 else 'Evening'} Routine Revealed",
        f"{'Unboxing' if seed % 3 == 0 else 'Review'}: New {'iPhone' if seed % 2 == 0 else 'Samsung'} Model",
        f"{clean_name} Reacts to {'Viral Videos' if seed % 2 == 0 else 'Fan Comments'}",
        f"{clean_name}'s {'Q&A' if seed % 2 == 0 else 'Behind the Scenes'} Session",
        f"Top 10 {'Tips' if seed % 2 == 0 else 'Tricks'} for {'Success' if seed % 3 == 0 else 'Happiness'}",
        f"Why I {'Left' if seed % 2 == 0 else 'Joined'} {'YouTube' if seed % 3 == 0 else 'Social Media'}",
        f"The Truth About {'Fame' if seed % 2 == 0 else 'Money'} on YouTube",
        f"My {'First' if seed % 2 == 0 else 'Last'} Video Got {millions}M Views",
    ]


def _recent_videos(
    clean_name: str,
    channel_id: str,
    seed: int,
    subscriber_count: int,
    draw: Callable[[int, int], int],
    now: datetime,
) -> list[VideoRecord]:
    titles = video_titles(clean_name, seed, draw(1, 10))
    videos = []
    for i in range(RECENT_VIDEO_COUNT):
        views = subscriber_count * draw(5, 30) // 100
        videos.append(
            VideoRecord(
                video_id=f"video_{i}_{seed % 1000}",
                title=titles[i],
                published_at=now - timedelta(days=i * draw(1, 30)),
                thumbnail_url=f"https://picsum.photos/seed/{channel_id}_{i}/640/360",
                view_count=views,
                like_count=views * draw(5, 20) // 100,
                comment_count=views * draw(1, 5) // 100,
            )
        )
    return videos


def monthly_series(
    seed: int,
    mode: SyntheticMode = "seeded",
    *,
    now: datetime | None = None,
    rng: random.Random | None = None,
) -> list[MonthlyBucket]:
    """24 months of uploads/views ending at the current month, most recent first.

    Each month gets a sub-seed from the base seed and its calendar month and
    year. Older months decay toward half the base level; a slow oscillation
    and occasional spikes keep the chart from looking flat.
    """
    now = now or datetime.now(timezone.utc)
    rng = rng or random.Random()
    tier = popularity_tier(seed)
    phase = seed % 7

    series = []
    for i in range(SERIES_MONTHS):
        year, month = shift_months(now.year, now.month, -i)
        month_seed = seed + month * year

        if mode == "random":
            fraction = rng.random()
            spike = 1.5 + rng.random() * 0.5 if rng.random() < 0.1 else 1.0
        else:
            fraction = (month_seed % 100) / 100
            spike = 1.6 if month_seed % 11 == 0 else 1.0

        age = max(0.5, 1 - i * 0.02)
        jitter = 0.8 + fraction * 0.4
        oscillation = 1 + 0.15 * math.sin(i * 0.9 + phase)
        factor = age * jitter * oscillation * spike

        series.append(
            MonthlyBucket(
                month=f"{year:04d}-{month:02d}",
                video_count=max(1, int(_scale(fraction, *tier.monthly_videos) * factor)),
                views=max(100, int(_scale(fraction, *tier.monthly_views) * factor)),
            )
        )
    return series

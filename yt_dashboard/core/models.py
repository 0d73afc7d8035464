# Copyright (c) 2026 Pointmatic
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Pydantic data models for yt-dashboard."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

VERIFIED_SUBSCRIBER_THRESHOLD = 100_000


def is_verified(subscriber_count: int) -> bool:
    """Channels above the subscriber threshold are shown as verified."""
    return subscriber_count > VERIFIED_SUBSCRIBER_THRESHOLD


class VideoRecord(BaseModel):
    video_id: str
    title: str = ""
    published_at: datetime | None = None
    thumbnail_url: str = ""
    view_count: int = Field(default=0, ge=0)
    like_count: int = Field(default=0, ge=0)
    comment_count: int = Field(default=0, ge=0)


class MonthlyBucket(BaseModel):
    month: str  # YYYY-MM
    video_count: int = Field(default=0, ge=0)
    views: int = Field(default=0, ge=0)


class ChannelRecord(BaseModel):
    channel_id: str
    title: str = ""
    description: str = ""
    custom_url: str = ""
    thumbnail_url: str = ""
    banner_url: str | None = None
    subscriber_count: int = Field(default=0, ge=0)
    view_count: int = Field(default=0, ge=0)
    video_count: int = Field(default=0, ge=0)
    country: str = ""
    verified: bool = False
    created_at: datetime | None = None
    recent_videos: list[VideoRecord] = []
    monthly_performance: list[MonthlyBucket] = []
    source: Literal["api", "synthetic"] = "api"


class BatchOutcome(BaseModel):
    """Tagged result of one orchestrated batch.

    ``ok``: every identifier produced a record.
    ``partial``: some identifiers were skipped (not found or failed).
    ``api_unavailable``: the API is unusable; ``records`` is always empty and
    ``error`` holds the remediation message.
    """

    status: Literal["ok", "partial", "api_unavailable"]
    records: list[ChannelRecord] = []
    skipped: list[str] = []
    error: str | None = None

    @property
    def api_unavailable(self) -> bool:
        return self.status == "api_unavailable"


class DashboardSnapshot(BaseModel):
    records: list[ChannelRecord]
    source: Literal["api", "synthetic"]
    notice: str | None = None
    skipped: list[str] = []
    generated_at: datetime

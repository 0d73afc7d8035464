# Copyright (c) 2026 Pointmatic
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Integration tests that hit the real YouTube Data API.

All tests in this module require network access and a key in
YT_DASHBOARD_API_KEY, and are guarded behind RUN_INTEGRATION=1.

Uses the Google Developers channel as the known public channel.
"""

from __future__ import annotations

import asyncio
import os

import pytest

pytestmark = [
    pytest.mark.skipif(
        os.environ.get("RUN_INTEGRATION", "0") != "1",
        reason="Integration tests disabled. Set RUN_INTEGRATION=1 to run.",
    ),
    pytest.mark.skipif(
        not os.environ.get("YT_DASHBOARD_API_KEY"),
        reason="YT_DASHBOARD_API_KEY not set.",
    ),
]

KNOWN_CHANNEL_ID = "UC_x5XG1OV2P6uZZ5FSM9Ttw"
KNOWN_HANDLE = "@GoogleDevelopers"
MISSING_HANDLE = "@zz-no-such-channel-zz-0000000000"


class TestFetchLive:
    def test_fetch_known_channel(self):
        from yt_dashboard import fetch_channels

        outcome = asyncio.run(fetch_channels([KNOWN_CHANNEL_ID]))
        assert outcome.status == "ok"
        record = outcome.records[0]
        assert record.channel_id == KNOWN_CHANNEL_ID
        assert record.title
        assert record.source == "api"
        assert record.recent_videos
        keys = [b.month for b in record.monthly_performance]
        assert keys == sorted(keys)

    def test_handle_resolves(self):
        from yt_dashboard import fetch_channels

        outcome = asyncio.run(fetch_channels([KNOWN_HANDLE]))
        assert outcome.records[0].channel_id == KNOWN_CHANNEL_ID

    def test_unknown_handle_skipped(self):
        from yt_dashboard import fetch_channels

        outcome = asyncio.run(fetch_channels([KNOWN_CHANNEL_ID, MISSING_HANDLE]))
        assert [r.channel_id for r in outcome.records] == [KNOWN_CHANNEL_ID]


class TestLoadDashboardLive:
    def test_snapshot_from_api(self, tmp_path):
        from yt_dashboard import load_dashboard
        from yt_dashboard.core.writer import write_snapshot

        snapshot = load_dashboard([KNOWN_CHANNEL_ID], fallback=False)
        assert snapshot.source == "api"
        path = write_snapshot(snapshot, tmp_path / "live.json")
        assert path.stat().st_size > 0

"""Shared fixtures: an in-memory fake of the YouTube Data API."""

from __future__ import annotations

from typing import Callable

import httpx
import pytest

from yt_dashboard.core.options import DashboardOptions
from yt_dashboard.services.api_client import YouTubeApiClient


def error_payload(code: int, reason: str, message: str = "Request failed") -> dict:
    return {
        "error": {
            "code": code,
            "message": message,
            "errors": [{"message": message, "domain": "usageLimits", "reason": reason}],
        }
    }


def playlist_entry(video_id: str, title: str, published: str) -> dict:
    return {
        "snippet": {
            "title": title,
            "publishedAt": published,
            "resourceId": {"kind": "youtube#video", "videoId": video_id},
            "thumbnails": {"high": {"url": f"https://i.ytimg.com/vi/{video_id}/hqdefault.jpg"}},
        },
        "contentDetails": {"videoId": video_id, "videoPublishedAt": published},
    }


def video_item(video_id: str, published: str, views: str | None = "100", likes: str | None = "10", comments: str | None = "1") -> dict:
    statistics = {}
    if views is not None:
        statistics["viewCount"] = views
    if likes is not None:
        statistics["likeCount"] = likes
    if comments is not None:
        statistics["commentCount"] = comments
    return {
        "id": video_id,
        "snippet": {"title": f"Video {video_id}", "publishedAt": published},
        "statistics": statistics,
    }


class FakeYouTube:
    """Answers search, channels, playlistItems and videos requests from dicts."""

    def __init__(self) -> None:
        self.channels: dict[str, dict] = {}
        self.uploads: dict[str, str] = {}
        self.search_results: dict[str, str] = {}
        self.playlists: dict[str, list[dict]] = {}
        self.videos: dict[str, dict] = {}
        self.errors: dict[str | None, tuple[int, dict]] = {}
        self.overrides: dict[str, Callable[[], httpx.Response]] = {}
        self.calls: list[tuple[str, dict]] = []

    def add_channel(self, channel_id: str, title: str = "Test Channel", subscribers: str = "250000", entries: list[dict] | None = None) -> None:
        self.channels[channel_id] = {
            "id": channel_id,
            "snippet": {
                "title": title,
                "description": f"About {title}",
                "customUrl": "@" + title.lower().replace(" ", ""),
                "publishedAt": "2015-04-01T12:00:00Z",
                "country": "US",
                "thumbnails": {"default": {"url": f"https://yt3.ggpht.com/{channel_id}"}},
            },
            "statistics": {"subscriberCount": subscribers, "viewCount": "9000000", "videoCount": "321"},
            "brandingSettings": {"image": {"bannerExternalUrl": f"https://yt3.ggpht.com/banner/{channel_id}"}},
        }
        playlist_id = "UU" + channel_id[2:]
        self.uploads[channel_id] = playlist_id
        self.playlists[playlist_id] = entries or []

    def fail(self, status: int, reason: str, endpoint: str | None = None) -> None:
        """Make `endpoint` (or every endpoint, if None) return an error payload."""
        self.errors[endpoint] = (status, error_payload(status, reason))

    def respond(self, endpoint: str, make_response: Callable[[], httpx.Response]) -> None:
        """Serve `endpoint` from `make_response`, called once per request."""
        self.overrides[endpoint] = make_response

    def corrupt(self, endpoint: str) -> None:
        """Answer `endpoint` with a body that fails Content-Encoding decoding."""
        self.respond(endpoint, lambda: httpx.Response(200, headers={"Content-Encoding": "gzip"}, content=b"not gzip"))

    def calls_to(self, endpoint: str) -> list[dict]:
        return [params for path, params in self.calls if path == endpoint]

    def handler(self, request: httpx.Request) -> httpx.Response:
        endpoint = request.url.path.rsplit("/", 1)[-1]
        params = dict(request.url.params)
        self.calls.append((endpoint, params))

        if endpoint in self.overrides:
            return self.overrides[endpoint]()

        failure = self.errors.get(endpoint) or self.errors.get(None)
        if failure is not None:
            status, payload = failure
            return httpx.Response(status, json=payload)

        if endpoint == "search":
            channel_id = self.search_results.get(params.get("q", ""))
            items = []
            if channel_id:
                items.append({"id": {"kind": "youtube#channel", "channelId": channel_id}, "snippet": {"channelId": channel_id}})
            return httpx.Response(200, json={"items": items})

        if endpoint == "channels":
            channel_id = params.get("id", "")
            part = params.get("part", "")
            if channel_id not in self.channels:
                return httpx.Response(200, json={"items": []})
            if part == "id":
                return httpx.Response(200, json={"items": [{"id": channel_id}]})
            if part == "contentDetails":
                item = {"id": channel_id, "contentDetails": {"relatedPlaylists": {"uploads": self.uploads[channel_id]}}}
                return httpx.Response(200, json={"items": [item]})
            return httpx.Response(200, json={"items": [self.channels[channel_id]]})

        if endpoint == "playlistItems":
            entries = self.playlists.get(params.get("playlistId", ""), [])
            limit = int(params.get("maxResults", 5))
            return httpx.Response(200, json={"items": entries[:limit]})

        if endpoint == "videos":
            ids = params.get("id", "").split(",")
            return httpx.Response(200, json={"items": [self.videos[i] for i in ids if i in self.videos]})

        return httpx.Response(404, json=error_payload(404, "notFound"))


@pytest.fixture
def fake_api() -> FakeYouTube:
    return FakeYouTube()


@pytest.fixture
def options() -> DashboardOptions:
    return DashboardOptions(api_key="test-key", rate_limit=1000.0, retries=0)


@pytest.fixture
def make_client(fake_api, options):
    """Build a YouTubeApiClient wired to the fake API."""

    def _make(opts: DashboardOptions | None = None) -> YouTubeApiClient:
        return YouTubeApiClient(opts or options, transport=httpx.MockTransport(fake_api.handler))

    return _make

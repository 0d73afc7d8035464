# Copyright (c) 2026 Pointmatic
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Async YouTube Data API v3 client (plain HTTP GET + JSON)."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from yt_dashboard.core.errors import ApiUnavailableError, TransientFetchError
from yt_dashboard.core.options import DashboardOptions
from yt_dashboard.utils.rate_limit import TokenBucket
from yt_dashboard.utils.retry import RetryableStatusError, async_retry, is_retryable_http_status

logger = logging.getLogger("yt_dashboard")

ENABLE_API_REMEDIATION = (
    "Enable the YouTube Data API v3 for the configured API key in the "
    "Google Cloud console (APIs & Services > Library), then retry."
)
MISSING_KEY_REMEDIATION = (
    "Set YT_DASHBOARD_API_KEY (or api_key in yt_dashboard.yaml) to a key "
    "with the YouTube Data API v3 enabled."
)


def extract_error_reasons(payload: Any) -> list[str]:
    """Collect reason codes from a Google API error payload.

    Reasons live in ``error.errors[].reason`` (legacy format) and
    ``error.details[].reason`` (google.rpc.ErrorInfo).
    """
    if not isinstance(payload, dict):
        return []
    error = payload.get("error")
    if not isinstance(error, dict):
        return []
    reasons: list[str] = []
    for key in ("errors", "details"):
        for entry in error.get(key) or []:
            if isinstance(entry, dict) and entry.get("reason"):
                reasons.append(str(entry["reason"]))
    return reasons


def _error_message(payload: Any, fallback: str) -> str:
    if isinstance(payload, dict) and isinstance(payload.get("error"), dict):
        return str(payload["error"].get("message") or fallback)
    return fallback


class YouTubeApiClient:
    """Thin async client over the configurable YouTube endpoints.

    Every request carries the API key, is rate limited, retried on transport
    errors and 429/5xx, and bounded by ``options.timeout``. Error payloads are
    classified by reason code: reasons listed in ``options.unavailable_reasons``
    raise ApiUnavailableError, everything else raises TransientFetchError.

    Use as an async context manager, or call ``aclose()``.
    """

    def __init__(
        self,
        options: DashboardOptions,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        rate_limiter: TokenBucket | None = None,
    ) -> None:
        self._options = options
        self._paths = {
            "search": options.search_path,
            "channels": options.channels_path,
            "playlist_items": options.playlist_items_path,
            "videos": options.videos_path,
        }
        self._unavailable = set(options.unavailable_reasons)
        self._rate_limiter = rate_limiter or TokenBucket(rate=options.rate_limit)
        self._http = httpx.AsyncClient(
            base_url=options.api_base_url.rstrip("/") + "/",
            timeout=httpx.Timeout(options.timeout),
            transport=transport,
        )
        self.request_count = 0

    async def __aenter__(self) -> "YouTubeApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def get(self, endpoint: str, params: dict[str, Any]) -> dict:
        """GET one of the configured endpoints and return the decoded JSON body.

        Args:
            endpoint: One of ``search``, ``channels``, ``playlist_items``, ``videos``.
            params: Query parameters (the API key is added here).

        Raises:
            ApiUnavailableError: The error payload names an unavailable reason.
            TransientFetchError: Transport, HTTP, or decode failure.
        """
        if not self._options.api_key:
            raise ApiUnavailableError(
                "No YouTube API key configured.",
                reason="missingKey",
                remediation=MISSING_KEY_REMEDIATION,
            )
        try:
            path = self._paths[endpoint]
        except KeyError:
            raise ValueError(f"Unknown endpoint: {endpoint}") from None

        query = {k: v for k, v in params.items() if v is not None}
        query["key"] = self._options.api_key

        send = async_retry(max_retries=self._options.retries)(self._send)
        try:
            response = await send(path, query)
        except RetryableStatusError as exc:
            response = exc.response
        except httpx.RequestError as exc:
            # TransportError after retries, or DecodingError for a corrupt body.
            raise TransientFetchError(f"Request to {path} failed: {exc!r}") from exc

        return self._decode(path, response)

    async def _send(self, path: str, query: dict[str, Any]) -> httpx.Response:
        await self._rate_limiter.acquire()
        self.request_count += 1
        logger.debug("GET %s %s", path, {k: v for k, v in query.items() if k != "key"})
        response = await self._http.get(path, params=query)
        if is_retryable_http_status(response.status_code):
            # Quota/disabled errors are 403 and never retried; a 429 or 5xx
            # that carries an unavailable reason is still classified below.
            if not self._unavailable.intersection(extract_error_reasons(_safe_json(response))):
                raise RetryableStatusError(response)
        return response

    def _decode(self, path: str, response: httpx.Response) -> dict:
        payload = _safe_json(response)
        reasons = extract_error_reasons(payload)

        matched = [r for r in reasons if r in self._unavailable]
        if matched:
            message = _error_message(payload, f"YouTube API rejected the request ({matched[0]}).")
            raise ApiUnavailableError(message, reason=matched[0], remediation=ENABLE_API_REMEDIATION)

        if response.is_error:
            raise TransientFetchError(
                _error_message(payload, f"HTTP {response.status_code} from {path}"),
                status_code=response.status_code,
                reason=reasons[0] if reasons else None,
            )
        if not isinstance(payload, dict):
            raise TransientFetchError(
                f"Malformed JSON response from {path}",
                status_code=response.status_code,
            )
        return payload


def _safe_json(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None

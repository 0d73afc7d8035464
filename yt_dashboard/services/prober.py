"""Availability probe run once before a batch."""

from __future__ import annotations

import logging

from yt_dashboard.core.errors import ApiUnavailableError, TransientFetchError
from yt_dashboard.services.api_client import YouTubeApiClient

logger = logging.getLogger("yt_dashboard")


async def probe_api(client: YouTubeApiClient, probe_channel_id: str) -> None:
    """Issue one cheap request (channels, part=id) to check the API is usable.

    Raises:
        ApiUnavailableError: The API is disabled/misconfigured for the key,
            or cannot be reached at all.
    """
    try:
        await client.get("channels", {"part": "id", "id": probe_channel_id})
    except ApiUnavailableError:
        raise
    except TransientFetchError as exc:
        if exc.status_code is None:
            raise ApiUnavailableError(
                f"YouTube API is unreachable: {exc}",
                reason="unreachable",
                remediation="Check network connectivity and the configured api_base_url.",
            ) from exc
        # An ordinary HTTP error for the probe channel does not mean the key is unusable.
        logger.warning("Availability probe returned HTTP %s: %s", exc.status_code, exc)
        return
    logger.debug("Availability probe succeeded")

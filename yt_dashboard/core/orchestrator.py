"""Per-batch orchestration: probe, then resolve and fetch each channel in turn."""

from __future__ import annotations

import asyncio
import enum
import logging
from datetime import datetime

from yt_dashboard.core.errors import ApiUnavailableError, InputValidationError
from yt_dashboard.core.logging import log_event
from yt_dashboard.core.models import BatchOutcome, ChannelRecord
from yt_dashboard.core.options import DashboardOptions
from yt_dashboard.services.api_client import YouTubeApiClient
from yt_dashboard.services.monthly import aggregate_monthly, lookback_start
from yt_dashboard.services.prober import probe_api
from yt_dashboard.services.resolver import resolve_channel_id
from yt_dashboard.services.statistics import fetch_channel_statistics
from yt_dashboard.services.videos import list_recent_videos


class BatchState(enum.Enum):
    IDLE = "idle"
    PROBING = "probing"
    FETCHING = "fetching"
    DONE = "done"
    ABORTED = "aborted"


def validate_identifiers(identifiers: list[str], max_channels: int) -> list[str]:
    """Drop blank entries and enforce the 1..max_channels bound.

    Raises:
        InputValidationError: No identifiers left, or too many.
    """
    cleaned = [raw.strip() for raw in identifiers if raw and raw.strip()]
    if not cleaned:
        raise InputValidationError("At least one channel identifier is required.")
    if len(cleaned) > max_channels:
        raise InputValidationError(
            f"Too many channels: {len(cleaned)} given, at most {max_channels} allowed."
        )
    return cleaned


class ChannelOrchestrator:
    """Run one batch of channel lookups against the API.

    Channels are processed strictly one after another. Within a channel the
    statistics request and a single page of uploads run concurrently; the
    recent-videos list and the monthly rollup are both cut from that page.
    A channel whose resolution or statistics fail for any reason is skipped,
    and a failed uploads page leaves both lists empty. ApiUnavailableError
    anywhere aborts the whole batch with no partial records.

    Args:
        options: Configuration, including the API key.
        client: Optional pre-built client (not closed by the orchestrator).
        now: Reference time for the monthly lookback window.
    """

    def __init__(
        self,
        options: DashboardOptions,
        client: YouTubeApiClient | None = None,
        now: datetime | None = None,
    ) -> None:
        self.options = options
        self.state = BatchState.IDLE
        self._client = client
        self._now = now

    async def run(self, identifiers: list[str]) -> BatchOutcome:
        """Process `identifiers` and return a tagged BatchOutcome.

        Raises:
            InputValidationError: Before any network call, for an empty or
                oversized identifier list.
        """
        identifiers = validate_identifiers(identifiers, self.options.max_channels)

        if self._client is not None:
            return await self._run(self._client, identifiers)
        async with YouTubeApiClient(self.options) as client:
            return await self._run(client, identifiers)

    async def _run(self, client: YouTubeApiClient, identifiers: list[str]) -> BatchOutcome:
        records: list[ChannelRecord] = []
        skipped: list[str] = []

        try:
            self.state = BatchState.PROBING
            await probe_api(client, self.options.probe_channel_id)

            self.state = BatchState.FETCHING
            for identifier in identifiers:
                record = await self._fetch_one(client, identifier)
                if record is None:
                    skipped.append(identifier)
                else:
                    records.append(record)
        except ApiUnavailableError as exc:
            self.state = BatchState.ABORTED
            log_event(
                logging.ERROR,
                f"YouTube API unavailable, aborting batch: {exc}",
                event="batch_aborted",
                error=exc.reason,
            )
            return BatchOutcome(status="api_unavailable", error=str(exc))

        self.state = BatchState.DONE
        status = "partial" if skipped else "ok"
        log_event(
            logging.INFO,
            f"Batch done: {len(records)} channel(s) fetched, {len(skipped)} skipped, "
            f"{client.request_count} API request(s)",
            event="batch_done",
            details={"fetched": len(records), "skipped": skipped, "requests": client.request_count},
        )
        return BatchOutcome(status=status, records=records, skipped=skipped)

    async def _fetch_one(self, client: YouTubeApiClient, identifier: str) -> ChannelRecord | None:
        """Fetch one channel; None means skip. ApiUnavailableError propagates."""
        try:
            channel_id = await resolve_channel_id(client, identifier)
        except ApiUnavailableError:
            raise
        except Exception as exc:
            log_event(
                logging.WARNING,
                f"Skipping {identifier!r}: {exc!r}",
                identifier=identifier,
                event="resolve_failed",
                error=str(exc),
            )
            return None

        # One uploads page feeds both the recent-videos list and the monthly rollup.
        options = self.options
        statistics, uploads = await asyncio.gather(
            fetch_channel_statistics(client, channel_id),
            list_recent_videos(client, channel_id, max(options.recent_video_count, options.monthly_page_size)),
            return_exceptions=True,
        )

        for result in (statistics, uploads):
            if isinstance(result, ApiUnavailableError):
                raise result
        for result in (statistics, uploads):
            if isinstance(result, BaseException) and not isinstance(result, Exception):
                raise result

        if isinstance(statistics, Exception):
            log_event(
                logging.WARNING,
                f"Skipping {identifier!r}: {statistics!r}",
                channel_id=channel_id,
                identifier=identifier,
                event="statistics_failed",
                error=str(statistics),
            )
            return None

        monthly = aggregate_monthly(
            uploads[: options.monthly_page_size],
            since=lookback_start(options.lookback_months, self._now),
        )
        log_event(
            logging.INFO,
            f"Fetched {statistics.title or channel_id}",
            channel_id=channel_id,
            identifier=identifier,
            event="channel_ok",
            details={"videos": len(uploads), "months": len(monthly)},
        )
        return statistics.model_copy(
            update={"recent_videos": uploads[: options.recent_video_count], "monthly_performance": monthly}
        )

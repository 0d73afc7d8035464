"""yt-dashboard: YouTube channel statistics and monthly performance for dashboards."""

__version__ = "0.1.0"

import asyncio
from datetime import datetime, timezone

from yt_dashboard.core.models import (
    BatchOutcome,
    ChannelRecord,
    DashboardSnapshot,
    MonthlyBucket,
    VideoRecord,
)
from yt_dashboard.core.options import DashboardOptions


async def fetch_channels(identifiers: list[str], options: DashboardOptions | None = None) -> BatchOutcome:
    """Fetch real channel data for up to `max_channels` identifiers.

    This is the primary async library entry point. It never falls back to
    synthetic data on its own; inspect ``BatchOutcome.status`` and call
    :func:`generate_mock_channels` when it is ``api_unavailable``.

    Args:
        identifiers: Channel IDs, handles, names, or youtube.com URLs.
        options: Configuration options. Uses defaults if not provided.

    Returns:
        BatchOutcome with records for every identifier that resolved.

    Raises:
        InputValidationError: Empty or oversized identifier list.
    """
    from yt_dashboard.core.orchestrator import ChannelOrchestrator

    if options is None:
        options = DashboardOptions()

    return await ChannelOrchestrator(options).run(identifiers)


def generate_mock_channels(identifiers: list[str], options: DashboardOptions | None = None) -> list[ChannelRecord]:
    """Synthetic records, one per identifier, in input order. Never fails."""
    from yt_dashboard.services.synthetic import generate_channels

    mode = options.synthetic_mode if options is not None else "seeded"
    return generate_channels(list(identifiers), mode)


def load_dashboard(
    identifiers: list[str],
    options: DashboardOptions | None = None,
    *,
    fallback: bool = True,
) -> DashboardSnapshot:
    """Fetch channel data, falling back to synthetic data when the API is unusable.

    Synchronous wrapper around :func:`fetch_channels` for scripts and the CLI.
    The synthetic path covers every identifier, resolvable or not.

    Args:
        identifiers: Channel IDs, handles, names, or youtube.com URLs.
        options: Configuration options. Uses defaults if not provided.
        fallback: If False, raise instead of substituting synthetic data.

    Raises:
        InputValidationError: Empty or oversized identifier list.
        ApiUnavailableError: The API is unusable and `fallback` is False.
    """
    if options is None:
        options = DashboardOptions()

    outcome = asyncio.run(fetch_channels(identifiers, options))
    now = datetime.now(timezone.utc)

    if outcome.api_unavailable:
        from yt_dashboard.core.errors import ApiUnavailableError
        from yt_dashboard.core.orchestrator import validate_identifiers

        if not fallback:
            raise ApiUnavailableError(outcome.error or "YouTube API unavailable.")

        names = validate_identifiers(identifiers, options.max_channels)
        return DashboardSnapshot(
            records=generate_mock_channels(names, options),
            source="synthetic",
            notice=f"Showing demo data: {outcome.error}",
            generated_at=now,
        )

    return DashboardSnapshot(
        records=outcome.records,
        source="api",
        skipped=outcome.skipped,
        generated_at=now,
    )


__all__ = [
    "__version__",
    "fetch_channels",
    "generate_mock_channels",
    "load_dashboard",
    "DashboardOptions",
    "BatchOutcome",
    "ChannelRecord",
    "DashboardSnapshot",
    "MonthlyBucket",
    "VideoRecord",
]

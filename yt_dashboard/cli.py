# Copyright (c) 2026 Pointmatic
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""CLI entry point for yt-dashboard."""

from __future__ import annotations

import sys
from datetime import datetime, timezone
from pathlib import Path

import click

from yt_dashboard import __version__
from yt_dashboard.core.errors import ApiUnavailableError, InputValidationError
from yt_dashboard.core.logging import setup_logging, get_logger
from yt_dashboard.core.models import DashboardSnapshot
from yt_dashboard.core.options import DashboardOptions
from yt_dashboard.services.resolver import load_identifiers_from_file


# Exit codes
EXIT_OK = 0
EXIT_ERROR = 1
EXIT_PARTIAL = 2
EXIT_ALL_FAILED = 3


def _input_options(fn):
    """Shared input source options."""
    decorators = [
        click.option("--channel", "-c", "channels", multiple=True, help="Channel ID, @handle, name, or URL (repeatable)."),
        click.option("--file", "file_path", type=click.Path(exists=True, path_type=Path), default=None, help="Text/CSV/JSONL file with channels."),
        click.option("--field", default="channel", help="Column/key holding the channel in CSV/JSONL input."),
        click.option("--out", type=click.Path(path_type=Path), default=None, help="Write the snapshot JSON here."),
        click.option("--synthetic-mode", type=click.Choice(["seeded", "random"]), default=None, help="Demo data magnitude mode."),
        click.option("--verbose", is_flag=True, default=None, help="Verbose console output."),
        click.option("--log-file", type=click.Path(path_type=Path), default=None, help="Also write JSONL logs here."),
    ]
    for decorator in reversed(decorators):
        fn = decorator(fn)
    return fn


def _api_options(fn):
    """Shared Click options that map to DashboardOptions API fields."""
    decorators = [
        click.option("--api-key", type=str, default=None, help="YouTube Data API v3 key."),
        click.option("--api-base-url", type=str, default=None, help="API base URL."),
        click.option("--timeout", type=float, default=None, help="Per-request timeout in seconds."),
        click.option("--retries", type=int, default=None, help="Max retries per request."),
        click.option("--rate-limit", type=float, default=None, help="Requests per second."),
        click.option("--videos", "recent_video_count", type=click.IntRange(1, 50), default=None, help="Recent videos per channel."),
        click.option("--lookback-months", type=click.IntRange(min=1), default=None, help="Only bucket uploads from the last N months (default: the whole page)."),
        click.option("--no-fallback", is_flag=True, default=False, help="Fail instead of showing demo data."),
        click.option("--strict", is_flag=True, default=False, help="Exit 2 when some channels were skipped."),
    ]
    for decorator in reversed(decorators):
        fn = decorator(fn)
    return fn


def _build_options(**cli_kwargs) -> DashboardOptions:
    """Build DashboardOptions from CLI kwargs, filtering out unset (None) values.

    Only explicitly-provided CLI flags are passed to DashboardOptions as init
    overrides. Unset flags fall through to env vars → YAML → defaults.
    """
    overrides = {key: value for key, value in cli_kwargs.items() if value is not None}
    return DashboardOptions(**overrides)


def _collect_channels(channels: tuple[str, ...], file_path: Path | None, field: str) -> list[str]:
    """Collect channel identifiers from flags and file, keeping order."""
    raw: list[str] = [c for c in channels if c.strip()]
    if file_path:
        raw.extend(load_identifiers_from_file(file_path, field=field))
    return raw


def _exit_code(requested: int, fetched: int, strict: bool) -> int:
    """Determine exit code from batch results."""
    if requested == 0 or fetched == requested:
        return EXIT_OK
    if fetched == 0:
        return EXIT_ALL_FAILED
    if strict:
        return EXIT_PARTIAL
    return EXIT_OK


def print_summary(snapshot: DashboardSnapshot, out: Path | None) -> None:
    """Log a human-readable snapshot summary."""
    log = get_logger()
    lines = ["", "=" * 60, f"  yt-dashboard ({snapshot.source} data)", "=" * 60]
    for record in snapshot.records:
        lines.append(
            f"  {record.title[:28]:<28} {record.subscriber_count:>12,} subs "
            f"{len(record.recent_videos):>3} videos {len(record.monthly_performance):>3} months"
        )
    if snapshot.skipped:
        lines.append(f"  Skipped:  {', '.join(snapshot.skipped)}")
    if snapshot.notice:
        lines.append(f"  Notice:   {snapshot.notice}")
    if out is not None:
        lines.append(f"  Output:   {out.resolve()}")
    lines.extend(["=" * 60, ""])
    log.info("\n".join(lines))


def _write(snapshot: DashboardSnapshot, out: Path | None) -> None:
    if out is not None:
        from yt_dashboard.core.writer import write_snapshot

        write_snapshot(snapshot, out)


@click.group()
@click.version_option(version=__version__, prog_name="yt_dashboard")
def cli() -> None:
    """YouTube channel statistics for dashboards, with demo data fallback."""


@cli.command()
@_input_options
@_api_options
def fetch(channels, file_path, field, out, log_file, no_fallback, strict, **kwargs):
    """Fetch channel data from the API (demo data if the API is unusable)."""
    options = _build_options(**kwargs)
    setup_logging(verbose=options.verbose, jsonl_path=log_file)
    log = get_logger()

    identifiers = _collect_channels(channels, file_path, field)

    from yt_dashboard import load_dashboard

    try:
        snapshot = load_dashboard(identifiers, options, fallback=not no_fallback)
    except InputValidationError as exc:
        log.error("%s Use --channel or --file.", exc)
        sys.exit(EXIT_ERROR)
    except ApiUnavailableError as exc:
        log.error("YouTube API unavailable: %s", exc)
        sys.exit(EXIT_ALL_FAILED)

    if snapshot.source == "synthetic":
        log.warning("%s", snapshot.notice)

    _write(snapshot, out)
    print_summary(snapshot, out)
    sys.exit(_exit_code(len(identifiers), len(snapshot.records), strict))


@cli.command()
@_input_options
def mock(channels, file_path, field, out, log_file, **kwargs):
    """Generate demo data without calling the API."""
    options = _build_options(**kwargs)
    setup_logging(verbose=options.verbose, jsonl_path=log_file)
    log = get_logger()

    identifiers = _collect_channels(channels, file_path, field)
    if not identifiers:
        log.error("No channels provided. Use --channel or --file.")
        sys.exit(EXIT_ERROR)

    from yt_dashboard import generate_mock_channels

    snapshot = DashboardSnapshot(
        records=generate_mock_channels(identifiers, options),
        source="synthetic",
        generated_at=datetime.now(timezone.utc),
    )
    _write(snapshot, out)
    print_summary(snapshot, out)
    sys.exit(EXIT_OK)


if __name__ == "__main__":
    cli()

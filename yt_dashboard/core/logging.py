# Copyright (c) 2026 Pointmatic
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Console logging through rich, plus an optional JSONL event log.

Batch and per-channel events carry structured fields so a JSONL log can be
filtered by channel or event type:

- ``identifier``: the raw input string the event is about
- ``channel_id``: the canonical ID, once resolved
- ``event``: short machine-readable name (``channel_ok``, ``resolve_failed``, ...)
- ``details``: free-form mapping (counts, skipped identifiers)
- ``error``: error text or reason code
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.logging import RichHandler


LOGGER_NAME = "yt_dashboard"
EVENT_FIELDS = ("identifier", "channel_id", "event", "details", "error")

_console = Console(stderr=True)


class JsonlFormatter(logging.Formatter):
    """One JSON object per line; event fields are always present, possibly null."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
        }
        for name in EVENT_FIELDS:
            entry[name] = getattr(record, name, None)
        return json.dumps(entry, default=str, ensure_ascii=False)


def setup_logging(*, verbose: bool = False, jsonl_path: Path | None = None) -> logging.Logger:
    """Configure and return the yt_dashboard logger.

    Calling it again replaces the previous handlers. The JSONL file, if any,
    always records DEBUG and up regardless of `verbose`.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.DEBUG if jsonl_path is not None else level)

    console = RichHandler(
        console=_console,
        level=level,
        show_time=verbose,
        show_path=verbose,
        rich_tracebacks=True,
        markup=False,
    )
    logger.addHandler(console)

    if jsonl_path is not None:
        jsonl_path = Path(jsonl_path)
        jsonl_path.parent.mkdir(parents=True, exist_ok=True)
        events = logging.FileHandler(jsonl_path, mode="a", encoding="utf-8")
        events.setLevel(logging.DEBUG)
        events.setFormatter(JsonlFormatter())
        logger.addHandler(events)

    return logger


def get_logger() -> logging.Logger:
    return logging.getLogger(LOGGER_NAME)


def log_event(
    level: int,
    message: str,
    *,
    identifier: str | None = None,
    channel_id: str | None = None,
    event: str | None = None,
    details: dict[str, Any] | None = None,
    error: str | None = None,
) -> None:
    """Log `message` with the structured event fields attached."""
    get_logger().log(
        level,
        message,
        extra={
            "identifier": identifier,
            "channel_id": channel_id,
            "event": event,
            "details": details,
            "error": error,
        },
    )

"""Snapshot file writing (JSON)."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path

from yt_dashboard.core.models import DashboardSnapshot


def write_snapshot(snapshot: DashboardSnapshot, dest: Path) -> Path:
    """Write a dashboard snapshot as JSON. Returns the written file path."""
    dest = Path(dest)
    _atomic_write_json(dest, snapshot.model_dump(mode="json"))
    return dest


def _atomic_write_json(dest: Path, data: dict) -> None:
    """Write JSON atomically: write to temp file, then rename."""
    dest.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(
        dir=dest.parent, suffix=".tmp", prefix=".yt_dashboard_"
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, default=str, ensure_ascii=False)
            f.write("\n")
        os.replace(tmp_path, dest)
    except BaseException:
        os.unlink(tmp_path)
        raise

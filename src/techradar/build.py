"""Build: write the JSON artifacts consumed by the radar and report renderers.

Output layout::

    <dist_dir>/
        data/entries.json     {"entries": [ZalandoEntry...], "config": RadarConfig}
        data/changelog.json   {"days": N, "generated_at": ..., "changes": [ChangeLogEntry...]}

Page templating and markdown rendering are left to downstream renderers;
this step only produces data.
"""

from __future__ import annotations

import json
import shutil
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any

from techradar.core.logging import get_logger
from techradar.core.timestamps import utc_now
from techradar.model.changes import extract_recent_changes
from techradar.model.projection import build_radar_data
from techradar.model.schemas import Blip, ChangeLogEntry, RadarConfig

logger = get_logger(__name__)

DATA_DIR = "data"
ENTRIES_FILE = "entries.json"
CHANGELOG_FILE = "changelog.json"


@dataclass(frozen=True)
class BuildResult:
    """What a build wrote."""

    dist_dir: Path
    entries_path: Path
    changelog_path: Path
    blip_count: int
    change_count: int


def _write_json(path: Path, payload: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")


def changelog_payload(
    changes: Sequence[ChangeLogEntry], days: int, generated_at: datetime
) -> dict[str, Any]:
    return {
        "days": days,
        "generated_at": generated_at.isoformat(),
        "changes": [change.to_json() for change in changes],
    }


def build_site(
    config: RadarConfig,
    blips: Sequence[Blip],
    dist_dir: Path,
    *,
    now: datetime | None = None,
) -> BuildResult:
    """Clean ``dist_dir`` and write the radar and changelog data files.

    Raises:
        UnknownQuadrantError: a blip names a quadrant missing from ``config``.
    """
    now = now or utc_now()
    dist_dir = Path(dist_dir)

    # Project before touching dist so a bad quadrant leaves the previous build intact
    radar_data = build_radar_data(blips, config)
    changes = extract_recent_changes(blips, config.changelog_days, now=now)

    if dist_dir.exists():
        shutil.rmtree(dist_dir)
    data_dir = dist_dir / DATA_DIR

    entries_path = data_dir / ENTRIES_FILE
    _write_json(entries_path, radar_data.to_json())
    logger.info("entries_written", path=str(entries_path), entries=len(radar_data.entries))

    changelog_path = data_dir / CHANGELOG_FILE
    _write_json(changelog_path, changelog_payload(changes, config.changelog_days, now))
    logger.info("changelog_written", path=str(changelog_path), changes=len(changes))

    result = BuildResult(
        dist_dir=dist_dir,
        entries_path=entries_path,
        changelog_path=changelog_path,
        blip_count=len(blips),
        change_count=len(changes),
    )
    logger.info("build_complete", dist_dir=str(dist_dir), blips=result.blip_count)
    return result


__all__ = ["BuildResult", "build_site", "changelog_payload"]

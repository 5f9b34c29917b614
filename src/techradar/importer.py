"""Bulk history import from CSV.

CSV format (header required)::

    name,date,ring,note,pr
    Kubernetes,2023-06-01,Assess,"Initial evaluation",#123
    Kubernetes,2024-01-15,Trial,"Pilot successful",456

Rows are grouped by blip name. Each row is validated as a history entry;
entries whose date already exists on the blip are skipped, the rest are
merged and the history re-sorted by date. A file is only rewritten when at
least one entry was added. The blip's current ring and status are left
alone: importing backfills history, it does not record a new review.
"""

from __future__ import annotations

import csv
from dataclasses import dataclass, field
from pathlib import Path

from techradar.authoring import merge_history, normalize_pr
from techradar.content import find_blip_file, read_blip_file, write_blip_file
from techradar.core.errors import ContentError, ImportRowError, SchemaValidationError
from techradar.core.logging import get_logger
from techradar.model.schemas import HistoryEntry, validate_history_entry

logger = get_logger(__name__)

CSV_COLUMNS = ("name", "date", "ring", "note", "pr")


@dataclass(frozen=True)
class HistoryRow:
    """One CSV row, trimmed."""

    name: str
    date: str
    ring: str
    note: str
    pr: str = ""


@dataclass
class ImportSummary:
    """Outcome of an import run.

    Attributes:
        updated: Blip files rewritten.
        added: Total history entries added.
        unchanged: Blips found but with nothing new to add.
        missing: Blip names with no matching content file.
        errors: Rows that failed validation.
    """

    updated: list[Path] = field(default_factory=list)
    added: int = 0
    unchanged: list[str] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)
    errors: list[ImportRowError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.missing and not self.errors


def read_history_csv(path: Path) -> list[HistoryRow]:
    """Read history rows; blank lines are skipped and values trimmed.

    Raises:
        ContentError: file unreadable, the header lacks a required column, or a
            row has more fields than the header.
    """
    path = Path(path)
    try:
        with path.open(newline="", encoding="utf-8") as f:
            reader = csv.DictReader(f, skipinitialspace=True)
            header = [h.strip() for h in reader.fieldnames or []]
            missing = [c for c in CSV_COLUMNS[:4] if c not in header]
            if missing:
                raise ContentError(
                    f"CSV is missing required columns: {', '.join(missing)}"
                ).with_context(file=str(path))

            rows: list[HistoryRow] = []
            for raw in reader:
                if None in raw:
                    raise ContentError(
                        f"Line {reader.line_num}: expected {len(header)} fields, got more "
                        "(quote values containing commas)"
                    ).with_context(file=str(path))
                values = {(k or "").strip(): (v or "").strip() for k, v in raw.items()}
                if not any(values.values()):
                    continue
                rows.append(HistoryRow(**{c: values.get(c, "") for c in CSV_COLUMNS}))
    except OSError as e:
        raise ContentError(f"Cannot read {path}: {e}", cause=e).with_context(file=str(path)) from e
    except UnicodeDecodeError as e:
        raise ContentError(f"{path} is not valid UTF-8: {e}", cause=e).with_context(file=str(path)) from e

    return rows


def row_to_entry(row: HistoryRow) -> HistoryEntry:
    """Validate a row as a history entry (PR ``123`` normalized to ``#123``).

    Raises:
        ImportRowError: the row does not form a valid entry.
    """
    try:
        pr = normalize_pr(row.pr)
    except ValueError as e:
        raise ImportRowError(row.name, row.date, str(e)) from e

    raw = {"date": row.date, "ring": row.ring, "note": row.note}
    if pr:
        raw["pr"] = pr
    try:
        return validate_history_entry(raw)
    except SchemaValidationError as e:
        raise ImportRowError(row.name, row.date, "; ".join(e.errors), cause=e) from e


def group_rows(rows: list[HistoryRow]) -> dict[str, list[HistoryRow]]:
    """Rows by blip name, first-seen order."""
    grouped: dict[str, list[HistoryRow]] = {}
    for row in rows:
        grouped.setdefault(row.name, []).append(row)
    return grouped


def import_history(radar_dir: Path, rows: list[HistoryRow]) -> ImportSummary:
    """Merge CSV rows into the matching blip files under ``radar_dir``."""
    summary = ImportSummary()

    for name, blip_rows in group_rows(rows).items():
        path = find_blip_file(radar_dir, name)
        if path is None:
            logger.warning("import_blip_missing", blip=name)
            summary.missing.append(name)
            continue

        incoming: list[HistoryEntry] = []
        for row in blip_rows:
            try:
                incoming.append(row_to_entry(row))
            except ImportRowError as e:
                logger.warning("import_row_invalid", blip=name, date=row.date, reason=e.reason)
                summary.errors.append(e)

        front_matter, body = read_blip_file(path)
        merged, added = merge_history(front_matter.history, incoming)
        if not added:
            logger.info("import_nothing_new", blip=name)
            summary.unchanged.append(name)
            continue

        write_blip_file(path, front_matter.model_copy(update={"history": merged}), body)
        logger.info("import_history_added", blip=name, added=len(added))
        summary.updated.append(path)
        summary.added += len(added)

    return summary


__all__ = [
    "CSV_COLUMNS",
    "HistoryRow",
    "ImportSummary",
    "read_history_csv",
    "row_to_entry",
    "group_rows",
    "import_history",
]

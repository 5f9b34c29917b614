"""Read-modify-write helpers for authoring tools.

Every function here is pure: it takes a validated record and returns the
next revision. Ring, status, ``last_reviewed`` and history always change
together in one edit, so a record produced here passes the consistency
checks whenever its input did.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from datetime import date
from pathlib import Path

from techradar.content import slugify
from techradar.core.timestamps import format_date, parse_date, today
from techradar.model.ordinals import ring_index
from techradar.model.schemas import (
    BlipFrontMatter,
    HistoryEntry,
    Link,
    Ring,
    Status,
)

_PR_INPUT_RE = re.compile(r"#?\d+")

BLIP_TEMPLATE = """\
## Overview

Brief description of {name} and what problem it solves.

## Why This Matters

Explain the strategic importance and benefits.

## When to Use

Guidelines for when this technology is appropriate.

## When Not to Use

Scenarios where alternatives might be better.

## Trade-offs & Considerations

Key trade-offs, limitations, or challenges to be aware of.

## Getting Started

Links to documentation, tutorials, or internal resources.

## Related Technologies

Other entries in the radar that relate to this one.
"""


def detect_status(current_ring: Ring, new_ring: Ring) -> Status:
    """Status implied by moving from ``current_ring`` to ``new_ring``."""
    if current_ring == new_ring:
        return Status.NO_CHANGE
    if ring_index(new_ring) < ring_index(current_ring):
        return Status.MOVED_IN
    return Status.MOVED_OUT


def normalize_pr(value: str | None) -> str | None:
    """``123`` or ``#123`` -> ``#123``; empty -> None.

    Raises:
        ValueError: anything else.
    """
    if value is None:
        return None
    value = value.strip()
    if not value:
        return None
    if not _PR_INPUT_RE.fullmatch(value):
        raise ValueError(f"PR must be in format #123 or 123, got {value!r}")
    return value if value.startswith("#") else f"#{value}"


def apply_ring_change(
    front_matter: BlipFrontMatter,
    new_ring: Ring | str,
    note: str,
    *,
    on: date | None = None,
    pr: str | None = None,
    reviewed_by: str | None = None,
) -> BlipFrontMatter:
    """Record a review: new ring, derived status, review date and history entry."""
    new_ring = Ring(new_ring)
    reviewed_on = format_date(on or today())
    if reviewed_by:
        note = f"{note} (reviewed by {reviewed_by})"

    entry = HistoryEntry(date=reviewed_on, ring=new_ring, note=note, pr=normalize_pr(pr))
    return front_matter.model_copy(
        update={
            "ring": new_ring,
            "status": detect_status(front_matter.ring, new_ring),
            "last_reviewed": reviewed_on,
            "history": [*front_matter.history, entry],
        }
    )


def new_blip(
    name: str,
    quadrant: str,
    ring: Ring,
    *,
    on: date | None = None,
    summary: str | None = None,
    tags: Sequence[str] = (),
    owners: Sequence[str] = (),
    links: Sequence[Link] = (),
) -> BlipFrontMatter:
    """Front matter for a brand-new blip with its initial history entry."""
    since = format_date(on or today())
    return BlipFrontMatter(
        name=name,
        quadrant=quadrant,
        ring=ring,
        status=Status.NEW,
        summary=summary or None,
        tags=[t.strip() for t in tags if t.strip()],
        owners=[o.strip() for o in owners if o.strip()],
        since=since,
        last_reviewed=since,
        links=list(links),
        history=[HistoryEntry(date=since, ring=ring, note=f"Initial entry at {Ring(ring).value}")],
    )


def blip_template(name: str) -> str:
    """Markdown body scaffold for a new blip."""
    return BLIP_TEMPLATE.format(name=name)


def blip_path(radar_dir: Path, name: str, quadrant: str) -> Path:
    """``<radar_dir>/<quadrant-slug>/<name-slug>.md``."""
    return Path(radar_dir) / slugify(quadrant) / f"{slugify(name)}.md"


def merge_history(
    existing: Sequence[HistoryEntry],
    incoming: Iterable[HistoryEntry],
) -> tuple[list[HistoryEntry], list[HistoryEntry]]:
    """Add ``incoming`` entries whose date is not already present.

    Returns:
        (merged history sorted by date ascending, entries actually added)
    """
    seen = {entry.date for entry in existing}
    added: list[HistoryEntry] = []
    for entry in incoming:
        if entry.date in seen:
            continue
        seen.add(entry.date)
        added.append(entry)

    merged = sorted([*existing, *added], key=lambda e: parse_date(e.date))
    return merged, added


__all__ = [
    "BLIP_TEMPLATE",
    "detect_status",
    "normalize_pr",
    "apply_ring_change",
    "new_blip",
    "blip_template",
    "blip_path",
    "merge_history",
]

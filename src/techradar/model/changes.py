"""Change extractor: time-windowed ring transitions across all blips.

Manifesto:
    The changelog reports exactly what history contains. Every history entry
    dated strictly after the cutoff becomes one :class:`ChangeLogEntry`; the
    previous stored entry supplies ``from_ring``. Nothing is filtered or
    merged, and no state survives between calls, so the same input and
    ``now`` always produce the same output.

Architecture:
    ::

        blips ──► extract_recent_changes(days_back, now)
                      │  per blip, per history[i] with date > now - days_back
                      │  from_ring = history[i-1].ring (None when i == 0)
                      ▼
                  [ChangeLogEntry] sorted by date, newest first (stable)
                      │
                      ▼
                  group_changes() ──► new / moved_in / moved_out / unchanged

Guardrails:
    ❌ DON'T: Include an entry dated exactly at the cutoff
    ✅ DO: Compare strictly after (midnight UTC of the entry date vs cutoff)

    ❌ DON'T: Re-sort history by date before pairing entries
    ✅ DO: Pair with the previous *stored* entry
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from enum import Enum

from techradar.core.logging import get_logger
from techradar.core.timestamps import as_utc_datetime, parse_date, utc_now
from techradar.model.ordinals import ring_index
from techradar.model.schemas import Blip, ChangeLogEntry

logger = get_logger(__name__)


class ChangeDirection(str, Enum):
    """How a logged transition moved relative to adoption."""

    NEW = "new"
    MOVED_IN = "moved_in"  # toward Adopt
    MOVED_OUT = "moved_out"  # toward Hold
    UNCHANGED = "unchanged"  # re-review logged with the same ring


@dataclass
class ChangeGroups:
    """Changes partitioned by direction, each list in extractor order."""

    new: list[ChangeLogEntry] = field(default_factory=list)
    moved_in: list[ChangeLogEntry] = field(default_factory=list)
    moved_out: list[ChangeLogEntry] = field(default_factory=list)
    unchanged: list[ChangeLogEntry] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.new) + len(self.moved_in) + len(self.moved_out) + len(self.unchanged)


def cutoff_for(days_back: int, now: datetime | None = None) -> datetime:
    """``now - days_back`` days, as an aware UTC datetime."""
    now = now or utc_now()
    if now.tzinfo is None:
        now = now.replace(tzinfo=UTC)
    return now - timedelta(days=days_back)


def extract_recent_changes(
    blips: Iterable[Blip],
    days_back: int,
    *,
    now: datetime | None = None,
) -> list[ChangeLogEntry]:
    """Every history entry dated after ``now - days_back``, newest first.

    Args:
        blips: Validated, loaded blips.
        days_back: Window length in days.
        now: Reference instant; defaults to the current UTC time.

    Returns:
        ChangeLogEntry list sorted by date descending. Entries sharing a
        date keep blip order, then stored history order.
    """
    cutoff = cutoff_for(days_back, now)
    changes: list[ChangeLogEntry] = []

    for blip in blips:
        for i, entry in enumerate(blip.history):
            if as_utc_datetime(parse_date(entry.date)) <= cutoff:
                continue
            changes.append(
                ChangeLogEntry(
                    blip_name=blip.name,
                    quadrant=blip.quadrant,
                    date=entry.date,
                    from_ring=blip.history[i - 1].ring if i > 0 else None,
                    to_ring=entry.ring,
                    note=entry.note,
                    pr=entry.pr,
                    slug=blip.slug,
                )
            )

    changes.sort(key=lambda c: parse_date(c.date), reverse=True)
    logger.debug("changes_extracted", count=len(changes), days_back=days_back, cutoff=cutoff.isoformat())
    return changes


def classify_change(change: ChangeLogEntry) -> ChangeDirection:
    """Direction of a transition by ring index (lower index = closer to Adopt)."""
    if change.from_ring is None:
        return ChangeDirection.NEW
    before, after = ring_index(change.from_ring), ring_index(change.to_ring)
    if after < before:
        return ChangeDirection.MOVED_IN
    if after > before:
        return ChangeDirection.MOVED_OUT
    return ChangeDirection.UNCHANGED


def group_changes(changes: Iterable[ChangeLogEntry]) -> ChangeGroups:
    """Partition changes by :func:`classify_change`."""
    groups = ChangeGroups()
    for change in changes:
        getattr(groups, classify_change(change).value).append(change)
    return groups


__all__ = [
    "ChangeDirection",
    "ChangeGroups",
    "cutoff_for",
    "extract_recent_changes",
    "classify_change",
    "group_changes",
]

"""Ordinal mapper: authored vocabulary -> radar coordinates.

The only bridge between Ring/Status/quadrant names and the integers the
visualization consumes. Direction classification in
:mod:`techradar.model.changes` uses ``ring_index`` too, so both stay in step.

Examples:
    >>> ring_index(Ring.TRIAL)
    1
    >>> status_moved_flag(Status.MOVED_OUT)
    -1
    >>> quadrant_index("tools", ["Techniques", "Platforms", "Tools", "Languages & Frameworks"])
    2
"""

from __future__ import annotations

from collections.abc import Sequence

from techradar.core.errors import UnknownQuadrantError
from techradar.model.schemas import Ring, Status

RING_INDEX: dict[Ring, int] = {
    Ring.ADOPT: 0,
    Ring.TRIAL: 1,
    Ring.ASSESS: 2,
    Ring.HOLD: 3,
}

RINGS_BY_INDEX: tuple[Ring, ...] = tuple(sorted(RING_INDEX, key=RING_INDEX.__getitem__))

STATUS_MOVED_FLAG: dict[Status, int] = {
    Status.NEW: 2,
    Status.MOVED_IN: 1,
    Status.MOVED_OUT: -1,
    Status.NO_CHANGE: 0,
}


def ring_index(ring: Ring) -> int:
    """0 for Adopt through 3 for Hold."""
    return RING_INDEX[Ring(ring)]


def ring_from_index(index: int) -> Ring:
    """Inverse of :func:`ring_index`."""
    if not 0 <= index < len(RINGS_BY_INDEX):
        raise ValueError(f"Ring index out of range: {index}")
    return RINGS_BY_INDEX[index]


def status_moved_flag(status: Status) -> int:
    """radar.js ``moved`` flag: 2 new, 1 in, -1 out, 0 unchanged."""
    return STATUS_MOVED_FLAG[Status(status)]


def quadrant_index(name: str, quadrants: Sequence[str]) -> int:
    """Position of ``name`` in the configured quadrants, ignoring case.

    Raises:
        UnknownQuadrantError: no configured quadrant matches.
    """
    wanted = name.lower()
    for i, quadrant in enumerate(quadrants):
        if quadrant.lower() == wanted:
            return i
    raise UnknownQuadrantError(name, list(quadrants))


__all__ = [
    "RING_INDEX",
    "RINGS_BY_INDEX",
    "STATUS_MOVED_FLAG",
    "ring_index",
    "ring_from_index",
    "status_moved_flag",
    "quadrant_index",
]

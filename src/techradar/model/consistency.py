"""History consistency checks.

Two independent, advisory rules over a validated blip:

- **current ring** -- the last stored history entry carries the blip's
  current ring
- **chronological order** -- stored entries never go back in time

Both return human-readable warnings and never raise; callers decide whether
warnings break a build. Checks look at *stored* order: entries are expected
to be written oldest first, and these checks report when they are not.
"""

from __future__ import annotations

from techradar.core.timestamps import parse_date
from techradar.model.schemas import BlipFrontMatter, ValidationReport


def check_current_ring(blip: BlipFrontMatter) -> list[str]:
    """Warn when the latest history entry disagrees with ``blip.ring``."""
    if not blip.history:
        return []

    latest = blip.history[-1]
    if latest.ring != blip.ring:
        return [
            f'Latest history entry shows ring "{latest.ring.value}" but current ring is '
            f'"{blip.ring.value}". Please add a history entry or update the ring.'
        ]
    return []


def check_chronological_order(blip: BlipFrontMatter) -> list[str]:
    """One warning per adjacent stored pair whose later entry is dated earlier."""
    warnings: list[str] = []
    for previous, current in zip(blip.history, blip.history[1:]):
        if parse_date(current.date) < parse_date(previous.date):
            warnings.append(
                "History entries must be in chronological order: "
                f"{current.date} comes before {previous.date}"
            )
    return warnings


def check_history_consistency(blip: BlipFrontMatter) -> list[str]:
    """All history warnings for ``blip`` (current ring first)."""
    return check_current_ring(blip) + check_chronological_order(blip)


def validate_history_consistency(blip: BlipFrontMatter) -> ValidationReport:
    """``{valid, errors}`` form of :func:`check_history_consistency`."""
    return ValidationReport.from_errors(check_history_consistency(blip))


__all__ = [
    "check_current_ring",
    "check_chronological_order",
    "check_history_consistency",
    "validate_history_consistency",
]

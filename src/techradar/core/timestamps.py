"""
Clock helpers (stdlib-only).

All "now" lookups go through here so callers can inject a fixed instant
instead; the change extractor and authoring helpers accept ``now``/``on``
arguments that default to these functions.
"""

from datetime import UTC, date, datetime

DATE_FORMAT = "%Y-%m-%d"


def utc_now() -> datetime:
    """Get current UTC datetime."""
    return datetime.now(UTC)


def today() -> date:
    """Current UTC calendar date."""
    return utc_now().date()


def format_date(d: date) -> str:
    """Render a date as ``YYYY-MM-DD``."""
    return d.strftime(DATE_FORMAT)


def parse_date(s: str) -> date:
    """Parse a ``YYYY-MM-DD`` string; raises ValueError when malformed."""
    return datetime.strptime(s, DATE_FORMAT).date()


def as_utc_datetime(d: date) -> datetime:
    """Midnight UTC at the start of ``d``."""
    return datetime(d.year, d.month, d.day, tzinfo=UTC)

"""Schema and type layer for radar content.

Turns untyped key/value mappings (front matter, YAML config) into typed,
immutable records, or fails with the complete list of violations.

Manifesto:
    Content is written by many people in many files. A build that stops at
    the first typo in the first file wastes everyone's time, so validation
    collects every ``(field path, reason)`` pair and reports them together.
    Validation is structural only: shapes, formats and enum membership.
    Cross-field rules (history vs. current ring) live in
    :mod:`techradar.model.consistency`; quadrant cross-references against
    configuration live in :mod:`techradar.model.ordinals`.

Architecture:
    ::

        raw mapping ──► validate_blip()   ──► BlipFrontMatter ──► Blip (+slug, content, file_path)
                    └─► validate_config() ──► RadarConfig
                              │
                              └─ SchemaValidationError(violations=[Violation(path, reason), ...])

        derived:  ZalandoEntry, ZalandoRadarData, ChangeLogEntry

Features:
    - Ring and Status as closed ``str`` enums (values are the authored labels)
    - YYYY-MM-DD dates checked for shape and for being a real calendar date;
      YAML-native ``date`` values are accepted and rendered back to strings
    - PR references constrained to ``#<digits>``
    - Absolute URLs for links and ``repo_url``
    - Exactly four quadrants and rings, ``#RRGGBB`` colors
    - ``tags``/``owners``/``links``/``history`` default to empty lists
      (an explicit YAML null is treated the same as absent)

Guardrails:
    ❌ DON'T: Compare rings as strings
    ✅ DO: Go through ``ring_index()`` in the ordinal mapper

    ❌ DON'T: Mutate a loaded record
    ✅ DO: ``model_copy(update=...)`` to produce the next revision

Tags:
    schema, pydantic, validation, blip, radar-config
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Annotated, Any
from urllib.parse import urlsplit

from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    ValidationError,
)

from techradar.core.errors import SchemaValidationError, Violation

# ---------------------------------------------------------------------------
# Controlled vocabularies
# ---------------------------------------------------------------------------


class Ring(str, Enum):
    """Adoption stage, from most adopted (inner) to least (outer)."""

    ADOPT = "Adopt"
    TRIAL = "Trial"
    ASSESS = "Assess"
    HOLD = "Hold"


class Status(str, Enum):
    """How the ring changed at the most recent review."""

    NEW = "New"
    MOVED_IN = "Moved In"
    MOVED_OUT = "Moved Out"
    NO_CHANGE = "No Change"


DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
PR_PATTERN = re.compile(r"^#\d+$")
HEX_COLOR_PATTERN = re.compile(r"^#[0-9a-fA-F]{6}$")


# ---------------------------------------------------------------------------
# Field validators
# ---------------------------------------------------------------------------


def _coerce_yaml_date(value: Any) -> Any:
    # YAML loads unquoted 2024-01-15 as a date object
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return value


def _date_string(label: str):
    def check(value: str) -> str:
        if not DATE_PATTERN.fullmatch(value):
            raise ValueError(f"{label} must be in YYYY-MM-DD format")
        try:
            datetime.strptime(value, "%Y-%m-%d")
        except ValueError:
            raise ValueError(f"{label} is not a real calendar date: {value}") from None
        return value

    return check


def _non_empty(message: str):
    def check(value: str) -> str:
        if not value.strip():
            raise ValueError(message)
        return value

    return check


def _absolute_url(message: str):
    def check(value: str) -> str:
        parts = urlsplit(value)
        if not parts.scheme or not parts.netloc:
            raise ValueError(message)
        return value

    return check


def _pr_reference(value: str) -> str:
    if not PR_PATTERN.fullmatch(value):
        raise ValueError("PR must be in format #123")
    return value


def _hex_color(value: str) -> str:
    if not HEX_COLOR_PATTERN.fullmatch(value):
        raise ValueError("Must be hex color")
    return value


def _none_as_empty(value: Any) -> Any:
    return [] if value is None else value


def _exactly(count: int, noun: str):
    def check(value: list[str]) -> list[str]:
        if len(value) != count:
            raise ValueError(f"Must have exactly {count} {noun}")
        return value

    return check


HistoryDate = Annotated[
    str, BeforeValidator(_coerce_yaml_date), AfterValidator(_date_string("Date"))
]
SinceDate = Annotated[
    str, BeforeValidator(_coerce_yaml_date), AfterValidator(_date_string("Since date"))
]
ReviewedDate = Annotated[
    str, BeforeValidator(_coerce_yaml_date), AfterValidator(_date_string("Last reviewed date"))
]

PrReference = Annotated[str, AfterValidator(_pr_reference)]
HexColor = Annotated[str, AfterValidator(_hex_color)]
StringList = Annotated[list[str], BeforeValidator(_none_as_empty)]


# ---------------------------------------------------------------------------
# Authored entities
# ---------------------------------------------------------------------------


class Link(BaseModel):
    """External resource attached to a blip."""

    model_config = ConfigDict(frozen=True)

    title: Annotated[str, AfterValidator(_non_empty("Link title is required"))]
    url: Annotated[str, AfterValidator(_absolute_url("Must be a valid URL"))]


class HistoryEntry(BaseModel):
    """One dated ring assignment plus its justification."""

    model_config = ConfigDict(frozen=True)

    date: HistoryDate
    ring: Ring
    note: Annotated[str, AfterValidator(_non_empty("History note is required"))]
    pr: PrReference | None = None


class BlipFrontMatter(BaseModel):
    """Authored fields of a blip, as found in a content file's header.

    Unknown header keys are ignored so authors can carry extra metadata.
    ``history`` is kept in stored order; see
    :mod:`techradar.model.consistency` for the ordering rules.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    # Required
    name: Annotated[str, AfterValidator(_non_empty("Blip name is required"))]
    quadrant: Annotated[str, AfterValidator(_non_empty("Quadrant is required"))]
    ring: Ring
    status: Status

    # Optional
    summary: str | None = None
    tags: StringList = Field(default_factory=list)
    owners: StringList = Field(default_factory=list)
    since: SinceDate | None = None
    last_reviewed: ReviewedDate | None = None
    links: Annotated[list[Link], BeforeValidator(_none_as_empty)] = Field(default_factory=list)

    history: Annotated[list[HistoryEntry], BeforeValidator(_none_as_empty)] = Field(
        default_factory=list
    )

    def to_front_matter(self) -> dict[str, Any]:
        """Plain mapping for writing back to a content header.

        Unset optional scalars and empty tags/owners/links are omitted.
        """
        data = self.model_dump(mode="json", include=set(BlipFrontMatter.model_fields))
        for key in ("summary", "since", "last_reviewed"):
            if data.get(key) is None:
                data.pop(key, None)
        for key in ("tags", "owners", "links"):
            if not data.get(key):
                data.pop(key, None)
        data["history"] = [
            {k: v for k, v in entry.items() if v is not None} for entry in data["history"]
        ]
        return data


class Blip(BlipFrontMatter):
    """A loaded blip: front matter plus values derived at load time."""

    slug: str
    content: str = ""
    file_path: str = ""

    @property
    def front_matter(self) -> BlipFrontMatter:
        """The authored part only, without derived fields."""
        return BlipFrontMatter.model_validate(
            self.model_dump(include=set(BlipFrontMatter.model_fields))
        )


class RadarConfig(BaseModel):
    """Process-wide, read-only radar configuration."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    title: Annotated[str, AfterValidator(_non_empty("Radar title is required"))]
    repo_url: Annotated[str, AfterValidator(_absolute_url("Repository URL must be valid"))]
    base_path: str = "/"
    quadrants: Annotated[list[str], AfterValidator(_exactly(4, "quadrants"))]
    rings: Annotated[list[str], AfterValidator(_exactly(4, "rings"))]
    colors: dict[str, HexColor]
    description: str | None = None
    org_name: str | None = None
    show_recent_changes_days: int = Field(default=90, gt=0, strict=True)
    changelog_days: int = Field(default=90, gt=0, strict=True)

    def color_for(self, ring: str) -> str | None:
        """Configured color for a ring name, if any."""
        return self.colors.get(ring)


# ---------------------------------------------------------------------------
# Derived entities
# ---------------------------------------------------------------------------


class ZalandoEntry(BaseModel):
    """One blip projected onto the radar.js coordinate space.

    quadrant: 0..3 in configured order; ring: 0 (Adopt) .. 3 (Hold);
    moved: -1 out, 0 unchanged, 1 in, 2 new.
    """

    model_config = ConfigDict(frozen=True)

    label: str
    quadrant: int = Field(ge=0, le=3)
    ring: int = Field(ge=0, le=3)
    moved: int = Field(ge=-1, le=2)


class ZalandoRadarData(BaseModel):
    """Payload consumed by the radar visualization."""

    model_config = ConfigDict(frozen=True)

    entries: list[ZalandoEntry]
    config: RadarConfig

    def to_json(self) -> dict[str, Any]:
        """JSON-serializable ``{entries, config}``."""
        return self.model_dump(mode="json")


class ChangeLogEntry(BaseModel):
    """One history entry that falls inside a reporting window.

    ``from_ring`` is None exactly when the entry is the blip's first
    history record.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    blip_name: str = Field(alias="blipName")
    quadrant: str
    date: str
    from_ring: Ring | None = Field(default=None, alias="fromRing")
    to_ring: Ring = Field(alias="toRing")
    note: str
    pr: str | None = None
    slug: str

    def to_json(self) -> dict[str, Any]:
        """Camel-cased JSON form, omitting absent optionals."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# ---------------------------------------------------------------------------
# Validation entry points
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ValidationReport:
    """Non-raising validation outcome for authoring tools."""

    valid: bool
    errors: list[str] = field(default_factory=list)

    @classmethod
    def from_errors(cls, errors: list[str]) -> ValidationReport:
        return cls(valid=not errors, errors=list(errors))


def violations_from(exc: ValidationError) -> list[Violation]:
    """Convert a pydantic ValidationError into (path, reason) pairs."""
    result: list[Violation] = []
    for err in exc.errors():
        path = ".".join(str(part) for part in err["loc"])
        if err["type"] == "value_error" and "error" in err.get("ctx", {}):
            reason = str(err["ctx"]["error"])
        else:
            reason = err["msg"]
        result.append(Violation(path=path, reason=reason))
    return result


def _validate(model: type[BaseModel], raw: Any, label: str):
    try:
        return model.model_validate(raw)
    except ValidationError as e:
        raise SchemaValidationError(label, violations_from(e), cause=e) from e


def validate_blip(raw: Any) -> BlipFrontMatter:
    """Validate a raw front-matter mapping.

    Raises:
        SchemaValidationError: with every violation found.
    """
    return _validate(BlipFrontMatter, raw, "blip")


def validate_history_entry(raw: Any) -> HistoryEntry:
    """Validate a single raw history entry."""
    return _validate(HistoryEntry, raw, "history entry")


def validate_config(raw: Any) -> RadarConfig:
    """Validate a raw radar configuration mapping.

    Raises:
        SchemaValidationError: with every violation found.
    """
    return _validate(RadarConfig, raw, "radar config")


def check_blip(raw: Any) -> ValidationReport:
    """Validate a raw blip without raising."""
    try:
        validate_blip(raw)
    except SchemaValidationError as e:
        return ValidationReport.from_errors(e.errors)
    return ValidationReport(valid=True)


def check_config(raw: Any) -> ValidationReport:
    """Validate a raw configuration without raising."""
    try:
        validate_config(raw)
    except SchemaValidationError as e:
        return ValidationReport.from_errors(e.errors)
    return ValidationReport(valid=True)


__all__ = [
    "Ring",
    "Status",
    "Link",
    "HistoryEntry",
    "BlipFrontMatter",
    "Blip",
    "RadarConfig",
    "ZalandoEntry",
    "ZalandoRadarData",
    "ChangeLogEntry",
    "ValidationReport",
    "violations_from",
    "validate_blip",
    "validate_history_entry",
    "validate_config",
    "check_blip",
    "check_config",
]

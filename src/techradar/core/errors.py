"""
Structured error types for techradar.

Every failure the radar tooling can raise is a ``RadarError`` carrying a
category and a structured context, so the CLI and build step can report
problems uniformly instead of parsing exception strings.

Manifesto:
    - **Typed Error Hierarchy:** Schema failures, lookup failures and
      content/config failures are different types
    - **Complete Reports:** Schema failures carry every violation, not just
      the first one
    - **Rich Context:** Errors carry the file and field they relate to
    - **Error Chaining:** Original exceptions are preserved as ``cause``

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────┐
        │                        RadarError                           │
        │          (category, context, cause, to_dict())              │
        ├─────────────────────────────────────────────────────────────┤
        │  SchemaValidationError   UnknownQuadrantError   ConfigError │
        │  (VALIDATION)            (LOOKUP)               (CONFIG)    │
        │        │                                                    │
        │  ImportRowError          ContentError           BlipNotFound│
        │  (VALIDATION)            (PARSE)                (SOURCE)    │
        │                              │                              │
        │                        FrontMatterError                     │
        └─────────────────────────────────────────────────────────────┘

Guardrails:
    ❌ DON'T: Raise for history inconsistencies
    ✅ DO: Return warnings from ``techradar.model.consistency``

    ❌ DON'T: Stop at the first schema violation
    ✅ DO: Collect all of them into ``SchemaValidationError.violations``

Nothing here is retryable: every input is already in memory and
deterministic, so repeating an operation reproduces the same failure.

Usage:
    from techradar.core.errors import SchemaValidationError

    try:
        blip = validate_blip(raw)
    except SchemaValidationError as e:
        for v in e.violations:
            print(f"{v.path}: {v.reason}")
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """
    Standard error categories for classification and reporting.

    Attributes:
        VALIDATION: Schema or value constraint violations
        LOOKUP: Cross-reference against configuration failed
        CONFIG: Missing or unreadable configuration
        PARSE: Malformed content (front matter, CSV)
        SOURCE: Content file not found
        INTERNAL: Bugs, unexpected state
    """

    VALIDATION = "VALIDATION"
    LOOKUP = "LOOKUP"
    CONFIG = "CONFIG"
    PARSE = "PARSE"
    SOURCE = "SOURCE"
    INTERNAL = "INTERNAL"


@dataclass
class ErrorContext:
    """
    Structured metadata context for errors.

    Attributes:
        file: Content or config file the error relates to
        blip: Blip name, when known
        path: Dotted field path, when a single field is at fault
        metadata: Additional key-value pairs
    """

    file: str | None = None
    blip: str | None = None
    path: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["file", "blip", "path"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class RadarError(Exception):
    """
    Base exception for all techradar errors.

    Subclasses set ``default_category``. Context can be attached after
    creation with the fluent ``with_context()``:

    >>> err = RadarError("boom").with_context(file="radar/tools/git.md")
    >>> err.context.file
    'radar/tools/git.md'
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> RadarError:
        """Add context to this error (fluent API)."""
        for key, value in kwargs.items():
            if key != "metadata" and hasattr(self.context, key):
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# VALIDATION ERRORS
# =============================================================================


@dataclass(frozen=True)
class Violation:
    """One structural problem: a dotted field path and a readable reason."""

    path: str
    reason: str

    def __str__(self) -> str:
        return f"{self.path}: {self.reason}" if self.path else self.reason


class SchemaValidationError(RadarError):
    """
    Raw input does not match the schema.

    Carries the complete list of violations so callers can report
    every problem at once.
    """

    default_category = ErrorCategory.VALIDATION

    def __init__(self, model: str, violations: list[Violation], **kwargs: Any):
        self.model = model
        self.violations = list(violations)
        count = len(self.violations)
        noun = "violation" if count == 1 else "violations"
        super().__init__(f"Invalid {model}: {count} {noun}", **kwargs)

    @property
    def errors(self) -> list[str]:
        """Violations rendered as ``path: reason`` strings."""
        return [str(v) for v in self.violations]

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["violations"] = [{"path": v.path, "reason": v.reason} for v in self.violations]
        return result


class ImportRowError(RadarError):
    """A single CSV history row could not be imported."""

    default_category = ErrorCategory.VALIDATION

    def __init__(self, name: str, date: str, reason: str, **kwargs: Any):
        self.name = name
        self.date = date
        self.reason = reason
        super().__init__(f"Invalid entry for {name} on {date}: {reason}", **kwargs)


# =============================================================================
# LOOKUP ERRORS
# =============================================================================


class UnknownQuadrantError(RadarError):
    """A quadrant name does not match any configured quadrant."""

    default_category = ErrorCategory.LOOKUP

    def __init__(self, quadrant: str, known: list[str] | tuple[str, ...], **kwargs: Any):
        self.quadrant = quadrant
        self.known = list(known)
        super().__init__(f"Unknown quadrant: {quadrant}", **kwargs)


# =============================================================================
# CONFIGURATION / CONTENT ERRORS
# =============================================================================


class ConfigError(RadarError):
    """Configuration file missing or unreadable."""

    default_category = ErrorCategory.CONFIG


class ContentError(RadarError):
    """Content file could not be read or parsed."""

    default_category = ErrorCategory.PARSE


class FrontMatterError(ContentError):
    """Front-matter header is not valid YAML or not a mapping."""

    pass


class BlipNotFoundError(RadarError):
    """No content file matches the requested blip."""

    default_category = ErrorCategory.SOURCE

    def __init__(self, search: str, **kwargs: Any):
        self.search = search
        super().__init__(f'Could not find blip matching "{search}"', **kwargs)


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "RadarError",
    "Violation",
    "SchemaValidationError",
    "ImportRowError",
    "UnknownQuadrantError",
    "ConfigError",
    "ContentError",
    "FrontMatterError",
    "BlipNotFoundError",
]

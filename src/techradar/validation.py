"""Whole-radar validation: configuration plus every content file.

Severity model:
    - errors: schema violations, unreadable files, unknown quadrants.
      The file cannot be used as a blip.
    - warnings: history consistency problems. The blip is still usable;
      ``strict`` promotes warnings to failures.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from techradar.content import discover_blip_files, load_config, split_front_matter
from techradar.core.errors import ConfigError, ContentError, SchemaValidationError, UnknownQuadrantError
from techradar.core.logging import get_logger
from techradar.model.consistency import check_history_consistency
from techradar.model.ordinals import quadrant_index
from techradar.model.schemas import RadarConfig, validate_blip

logger = get_logger(__name__)


@dataclass
class FileReport:
    """Validation outcome for one content file."""

    path: Path
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors


@dataclass
class RadarValidation:
    """Validation outcome for a whole radar."""

    config: RadarConfig | None = None
    config_errors: list[str] = field(default_factory=list)
    files: list[FileReport] = field(default_factory=list)

    @property
    def error_count(self) -> int:
        return sum(1 for f in self.files if f.errors)

    @property
    def warning_count(self) -> int:
        return sum(1 for f in self.files if f.valid and f.warnings)

    @property
    def valid_count(self) -> int:
        return sum(1 for f in self.files if f.valid and not f.warnings)

    def passed(self, *, strict: bool = False) -> bool:
        if self.config_errors or self.error_count:
            return False
        return not (strict and self.warning_count)


def validate_file(path: Path, config: RadarConfig | None = None) -> FileReport:
    """Validate one content file; quadrant is cross-checked when ``config`` is given."""
    report = FileReport(path=Path(path))
    try:
        data, _ = split_front_matter(report.path.read_text(encoding="utf-8"))
        blip = validate_blip(data)
    except SchemaValidationError as e:
        report.errors.extend(e.errors)
        return report
    except ContentError as e:
        report.errors.append(e.message)
        return report
    except OSError as e:
        report.errors.append(f"Cannot read file: {e}")
        return report
    except UnicodeDecodeError as e:
        report.errors.append(f"File is not valid UTF-8: {e}")
        return report

    if config is not None:
        try:
            quadrant_index(blip.quadrant, config.quadrants)
        except UnknownQuadrantError as e:
            report.errors.append(f"quadrant: {e.message} (expected one of: {', '.join(e.known)})")

    report.warnings.extend(check_history_consistency(blip))
    return report


def validate_radar(config_file: Path, radar_dir: Path) -> RadarValidation:
    """Validate the configuration file and every blip under ``radar_dir``."""
    result = RadarValidation()
    try:
        result.config = load_config(config_file)
    except SchemaValidationError as e:
        result.config_errors.extend(e.errors)
    except ConfigError as e:
        result.config_errors.append(e.message)

    for path in discover_blip_files(radar_dir):
        report = validate_file(path, result.config)
        if report.errors:
            logger.debug("blip_invalid", file=str(path), errors=len(report.errors))
        result.files.append(report)

    logger.info(
        "radar_validated",
        files=len(result.files),
        errors=result.error_count,
        warnings=result.warning_count,
    )
    return result


__all__ = ["FileReport", "RadarValidation", "validate_file", "validate_radar"]

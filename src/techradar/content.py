"""Content files: markdown with a YAML front-matter header.

A blip lives in ``<radar_dir>/<quadrant-slug>/<blip-slug>.md``::

    ---
    name: Kubernetes
    quadrant: Platforms
    ring: Trial
    status: Moved In
    history:
      - date: 2023-06-01
        ring: Assess
        note: Initial evaluation
    ---

    ## Overview
    ...

This module is the I/O edge around :mod:`techradar.model`: it reads and
writes files, derives slugs, and logs consistency warnings at load time.
The model itself never touches the file system.
"""

from __future__ import annotations

import re
import unicodedata
from pathlib import Path
from typing import Any

import yaml

from techradar.core.errors import (
    ConfigError,
    ContentError,
    FrontMatterError,
    SchemaValidationError,
)
from techradar.core.logging import LogContext, get_logger
from techradar.model.consistency import check_history_consistency
from techradar.model.schemas import Blip, BlipFrontMatter, RadarConfig, validate_blip, validate_config

logger = get_logger(__name__)

FRONT_MATTER_DELIMITER = "---"
_FRONT_MATTER_RE = re.compile(r"\A---[ \t]*\r?\n(.*?)(?:\r?\n)?^---[ \t]*(?:\r?\n|\Z)", re.DOTALL | re.MULTILINE)
_NON_SLUG_RE = re.compile(r"[^a-z0-9]+")


# ---------------------------------------------------------------------------
# Slugs and front matter
# ---------------------------------------------------------------------------


def slugify(name: str) -> str:
    """Lowercase, URL-safe form of ``name``.

    >>> slugify("Languages & Frameworks")
    'languages-frameworks'
    >>> slugify("Café Ops")
    'cafe-ops'
    """
    folded = unicodedata.normalize("NFKD", name).encode("ascii", "ignore").decode("ascii")
    return _NON_SLUG_RE.sub("-", folded.lower()).strip("-")


def split_front_matter(text: str) -> tuple[dict[str, Any], str]:
    """Split a content file into (header mapping, stripped body).

    Text without a header yields an empty mapping and the whole text.

    Raises:
        FrontMatterError: header is not valid YAML or not a mapping.
    """
    match = _FRONT_MATTER_RE.match(text)
    if match is None:
        return {}, text.strip()

    try:
        data = yaml.safe_load(match.group(1))
    except (yaml.YAMLError, ValueError) as e:
        # ValueError: unquoted impossible dates such as 2024-13-01
        raise FrontMatterError(f"Invalid YAML front matter: {e}", cause=e) from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise FrontMatterError(
            f"Front matter must be a mapping, got {type(data).__name__}"
        )
    return data, text[match.end():].strip()


def dump_blip(front_matter: BlipFrontMatter, content: str) -> str:
    """Render a content file from front matter and a markdown body."""
    header = yaml.safe_dump(
        front_matter.to_front_matter(),
        sort_keys=False,
        allow_unicode=True,
        width=10_000,
    )
    return f"{FRONT_MATTER_DELIMITER}\n{header}{FRONT_MATTER_DELIMITER}\n\n{content.strip()}\n"


# ---------------------------------------------------------------------------
# Blip files
# ---------------------------------------------------------------------------


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        raise ContentError(f"Cannot read {path}: {e}", cause=e).with_context(file=str(path)) from e
    except UnicodeDecodeError as e:
        raise ContentError(f"{path} is not valid UTF-8: {e}", cause=e).with_context(file=str(path)) from e


def read_blip_file(path: Path) -> tuple[BlipFrontMatter, str]:
    """Validated front matter and raw body of one content file."""
    data, body = split_front_matter(_read_text(path))
    try:
        front_matter = validate_blip(data)
    except SchemaValidationError as e:
        raise e.with_context(file=str(path))
    return front_matter, body


def load_blip_file(path: Path) -> Blip:
    """Load one content file into a :class:`Blip`.

    History consistency problems are logged as warnings, never raised.
    """
    path = Path(path)
    with LogContext(file=str(path)):
        try:
            data, body = split_front_matter(_read_text(path))
        except FrontMatterError as e:
            raise e.with_context(file=str(path))
        try:
            front_matter = validate_blip(data)
        except SchemaValidationError as e:
            raise e.with_context(file=str(path), blip=data.get("name"))

        for warning in check_history_consistency(front_matter):
            logger.warning("history_inconsistent", blip=front_matter.name, detail=warning)

        blip = Blip(
            **front_matter.model_dump(),
            slug=slugify(front_matter.name),
            content=body,
            file_path=str(path),
        )
        logger.debug("blip_loaded", slug=blip.slug)
        return blip


def discover_blip_files(radar_dir: Path) -> list[Path]:
    """All markdown files under ``radar_dir``, sorted for stable output."""
    return sorted(Path(radar_dir).glob("**/*.md"))


def load_blips(radar_dir: Path) -> list[Blip]:
    """Load every blip under ``radar_dir``; the first schema failure propagates."""
    files = discover_blip_files(radar_dir)
    blips = [load_blip_file(path) for path in files]
    logger.info("blips_loaded", count=len(blips), radar_dir=str(radar_dir))
    return blips


def find_blip_file(radar_dir: Path, name_or_slug: str) -> Path | None:
    """Content file whose blip name slugs to the same value as ``name_or_slug``.

    Files that do not validate are skipped.
    """
    wanted = slugify(name_or_slug)
    for path in discover_blip_files(radar_dir):
        try:
            front_matter, _ = read_blip_file(path)
        except (ContentError, SchemaValidationError):
            logger.debug("blip_skipped", file=str(path))
            continue
        if slugify(front_matter.name) == wanted:
            return path
    return None


def write_blip_file(path: Path, front_matter: BlipFrontMatter, content: str) -> Path:
    """Write a content file, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dump_blip(front_matter, content), encoding="utf-8")
    logger.info("blip_written", file=str(path), blip=front_matter.name)
    return path


# ---------------------------------------------------------------------------
# Configuration file
# ---------------------------------------------------------------------------


def load_config(path: Path) -> RadarConfig:
    """Load and validate ``radar.config.yml``.

    Raises:
        ConfigError: file missing, unreadable or not YAML.
        SchemaValidationError: YAML does not match the config schema.
    """
    path = Path(path)
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ConfigError(f"Configuration file not found: {path}", cause=e).with_context(
            file=str(path)
        ) from e
    except (OSError, yaml.YAMLError, ValueError) as e:
        raise ConfigError(f"Cannot read configuration {path}: {e}", cause=e).with_context(
            file=str(path)
        ) from e

    try:
        config = validate_config(raw)
    except SchemaValidationError as e:
        raise e.with_context(file=str(path))
    logger.debug("config_loaded", file=str(path), title=config.title)
    return config


__all__ = [
    "slugify",
    "split_front_matter",
    "dump_blip",
    "read_blip_file",
    "load_blip_file",
    "discover_blip_files",
    "load_blips",
    "find_blip_file",
    "write_blip_file",
    "load_config",
]

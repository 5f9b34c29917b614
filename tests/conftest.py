"""
Shared pytest fixtures and configuration for techradar tests.

This module provides:
- Logging/settings reset fixtures for test isolation
- Sample radar configuration and blip builders
- An on-disk radar tree (config + content files) under tmp_path
- A fixed reference instant for window-dependent tests

Usage:
    Fixtures are auto-discovered by pytest. Use them as function arguments:

    def test_something(make_blip, radar_config):
        ...
"""

import sys
import textwrap
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, Callable, Generator

import pytest
import structlog

# Ensure techradar package is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from techradar.content import slugify
from techradar.model.schemas import Blip, RadarConfig, validate_config
from techradar.settings import clear_settings_cache


# =============================================================================
# Test Markers Configuration
# =============================================================================


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Auto-mark tests based on their location."""
    for item in items:
        test_path = Path(item.fspath).relative_to(Path(__file__).parent)

        if "integration" in str(test_path) or "cli" in test_path.parts:
            item.add_marker(pytest.mark.integration)

        markers = {mark.name for mark in item.iter_markers()}
        if not markers.intersection({"unit", "integration"}):
            item.add_marker(pytest.mark.unit)


# =============================================================================
# Isolation Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_logging_and_settings(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """
    Reset structlog configuration and cached settings around each test.

    CLI tests configure structlog against CliRunner's temporary streams;
    resetting keeps later tests from writing to a closed stream.
    """
    for key in ("TECHRADAR_CONFIG_FILE", "TECHRADAR_RADAR_DIR", "TECHRADAR_DIST_DIR"):
        monkeypatch.delenv(key, raising=False)
    clear_settings_cache()
    structlog.reset_defaults()
    yield
    structlog.reset_defaults()
    clear_settings_cache()


# =============================================================================
# Reference Time
# =============================================================================


@pytest.fixture
def now() -> datetime:
    """Fixed reference instant: 2024-03-01 12:00 UTC."""
    return datetime(2024, 3, 1, 12, 0, tzinfo=UTC)


# =============================================================================
# Sample Data Fixtures
# =============================================================================


QUADRANTS = ["Techniques", "Platforms", "Tools", "Languages & Frameworks"]
RINGS = ["Adopt", "Trial", "Assess", "Hold"]


@pytest.fixture
def radar_config_data() -> dict[str, Any]:
    """Raw configuration mapping as it would come out of YAML."""
    return {
        "title": "Engineering Tech Radar",
        "repo_url": "https://github.com/example/tech-radar",
        "quadrants": list(QUADRANTS),
        "rings": list(RINGS),
        "colors": {
            "Adopt": "#5ba300",
            "Trial": "#009eb0",
            "Assess": "#c7ba00",
            "Hold": "#e09b96",
        },
        "description": "What we use and why",
        "changelog_days": 90,
    }


@pytest.fixture
def radar_config(radar_config_data: dict[str, Any]) -> RadarConfig:
    return validate_config(radar_config_data)


@pytest.fixture
def make_blip() -> Callable[..., Blip]:
    """
    Factory for loaded blips.

    History is given as (date, ring) or (date, ring, note) tuples; ``ring``
    defaults to the last history ring so the blip is consistent.
    """

    def _make(
        name: str = "Kubernetes",
        *,
        quadrant: str = "Platforms",
        ring: str | None = None,
        status: str = "No Change",
        history: list[tuple] = (),
        **extra: Any,
    ) -> Blip:
        entries = []
        for item in history:
            entry = {"date": item[0], "ring": item[1], "note": item[2] if len(item) > 2 else "Reviewed"}
            if len(item) > 3:
                entry["pr"] = item[3]
            entries.append(entry)
        resolved_ring = ring or (entries[-1]["ring"] if entries else "Assess")
        return Blip(
            name=name,
            quadrant=quadrant,
            ring=resolved_ring,
            status=status,
            history=entries,
            slug=slugify(name),
            **extra,
        )

    return _make


# =============================================================================
# On-disk Radar Fixtures
# =============================================================================


CONFIG_YAML = """\
title: Engineering Tech Radar
repo_url: https://github.com/example/tech-radar
base_path: /radar/
quadrants:
  - Techniques
  - Platforms
  - Tools
  - Languages & Frameworks
rings:
  - Adopt
  - Trial
  - Assess
  - Hold
colors:
  Adopt: "#5ba300"
  Trial: "#009eb0"
  Assess: "#c7ba00"
  Hold: "#e09b96"
changelog_days: 90
"""

KUBERNETES_MD = """\
---
name: Kubernetes
quadrant: Platforms
ring: Trial
status: Moved In
summary: Container orchestration
tags: [containers, orchestration]
owners: ["@platform-team"]
since: 2023-06-01
last_reviewed: 2024-01-15
links:
  - title: Docs
    url: https://kubernetes.io/docs/
history:
  - date: 2023-06-01
    ring: Assess
    note: Initial evaluation
  - date: 2024-01-15
    ring: Trial
    note: Pilot successful
    pr: "#456"
---

## Overview

Kubernetes runs our containers.
"""

TERRAFORM_MD = """\
---
name: Terraform
quadrant: tools
ring: Adopt
status: New
history:
  - date: 2024-02-20
    ring: Adopt
    note: Standard for infrastructure
---

Infrastructure as code.
"""

INCONSISTENT_MD = """\
---
name: Legacy ORM
quadrant: Tools
ring: Hold
status: Moved Out
history:
  - date: '2024-01-01'
    ring: Trial
    note: Pilot
---
"""


def write_file(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(text), encoding="utf-8")
    return path


@pytest.fixture
def radar_tree(tmp_path: Path) -> Path:
    """
    A project directory with radar.config.yml and two valid blips::

        tmp_path/
            radar.config.yml
            radar/platforms/kubernetes.md
            radar/tools/terraform.md
    """
    write_file(tmp_path / "radar.config.yml", CONFIG_YAML)
    write_file(tmp_path / "radar" / "platforms" / "kubernetes.md", KUBERNETES_MD)
    write_file(tmp_path / "radar" / "tools" / "terraform.md", TERRAFORM_MD)
    return tmp_path

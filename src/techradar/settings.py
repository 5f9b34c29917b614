"""
Process settings for the techradar tools.

Manifesto:
    Where things live (config file, content directory, output directory) and
    how to log are process concerns, not radar content, so they come from
    the environment rather than ``radar.config.yml``. The radar
    configuration itself is loaded from YAML and passed explicitly to every
    function that needs it.

All fields can be set via ``TECHRADAR_*`` environment variables (e.g.
``TECHRADAR_RADAR_DIR=content/radar``) or a ``.env`` file in the working
directory. CLI options override both.

Tags:
    configuration, settings, pydantic
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RadarSettings(BaseSettings):
    """Where radar content lives and how the tools log."""

    model_config = SettingsConfigDict(
        env_prefix="TECHRADAR_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    config_file: Path = Field(default=Path("radar.config.yml"))
    radar_dir: Path = Field(default=Path("radar"))
    dist_dir: Path = Field(default=Path("dist"))

    log_level: str = Field(default="WARNING")
    log_format: Literal["console", "json"] = Field(default="console")

    fail_on_warnings: bool = Field(
        default=False, description="Treat history consistency warnings as validation errors"
    )


_settings_cache: RadarSettings | None = None


def get_settings(*, _force_reload: bool = False) -> RadarSettings:
    """Load and cache settings from the environment."""
    global _settings_cache
    if _settings_cache is None or _force_reload:
        _settings_cache = RadarSettings()
    return _settings_cache


def clear_settings_cache() -> None:
    """Forget cached settings (tests, long-lived processes)."""
    global _settings_cache
    _settings_cache = None


__all__ = ["RadarSettings", "get_settings", "clear_settings_cache"]

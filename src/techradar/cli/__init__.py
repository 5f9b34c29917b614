"""Command-line interface: ``techradar <command>``."""

from techradar.cli.app import app

__all__ = ["app"]

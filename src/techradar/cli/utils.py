"""
CLI utility helpers — shared state, console output and error rendering.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import NoReturn

import typer
from rich.console import Console
from rich.markup import escape

from techradar.core.errors import RadarError, SchemaValidationError, UnknownQuadrantError
from techradar.model.schemas import RadarConfig

console = Console()
err_console = Console(stderr=True)


@dataclass
class CliState:
    """Paths resolved once in the root callback and shared by commands."""

    config_file: Path
    radar_dir: Path
    dist_dir: Path
    strict: bool = False


def get_state(ctx: typer.Context) -> CliState:
    state = ctx.find_object(CliState)
    if state is None:
        from techradar.settings import get_settings

        settings = get_settings()
        state = CliState(
            config_file=settings.config_file,
            radar_dir=settings.radar_dir,
            dist_dir=settings.dist_dir,
            strict=settings.fail_on_warnings,
        )
    return state


def fail(error: RadarError) -> NoReturn:
    """Print a RadarError (with every violation) and exit 1."""
    where = error.context.file
    prefix = f"{where}: " if where else ""
    err_console.print(
        f"[bold red]Error[/bold red] ({error.category.value}): {escape(prefix + error.message)}"
    )
    if isinstance(error, SchemaValidationError):
        for line in error.errors:
            err_console.print(f"   {escape(line)}")
    elif isinstance(error, UnknownQuadrantError):
        err_console.print(f"   expected one of: {escape(', '.join(error.known))}")
    raise typer.Exit(code=1)


def load_radar_config(state: CliState) -> RadarConfig:
    from techradar.content import load_config

    try:
        return load_config(state.config_file)
    except RadarError as e:
        fail(e)


__all__ = ["console", "err_console", "CliState", "get_state", "fail", "load_radar_config"]

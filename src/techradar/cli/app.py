"""
Root Typer application for the techradar CLI.

Commands are thin: they resolve paths from settings/options, call into
``techradar.*`` and render with rich. All logic lives in the library.
"""

from __future__ import annotations

from pathlib import Path

import typer
from typer import Typer

from techradar.cli.utils import CliState

app = Typer(
    name="techradar",
    help="techradar — validate, build and maintain a technology radar.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        from importlib.metadata import PackageNotFoundError
        from importlib.metadata import version as pkg_version

        try:
            v = pkg_version("techradar")
        except PackageNotFoundError:
            from techradar import __version__ as v
        typer.echo(f"techradar {v}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    config_file: Path | None = typer.Option(
        None, "--config", "-c", help="Radar config file (default: radar.config.yml)."
    ),
    radar_dir: Path | None = typer.Option(
        None, "--radar-dir", help="Directory holding blip markdown files (default: radar)."
    ),
    dist_dir: Path | None = typer.Option(
        None, "--dist-dir", help="Build output directory (default: dist)."
    ),
    log_level: str | None = typer.Option(None, "--log-level", help="DEBUG, INFO, WARNING, ERROR."),
    log_format: str | None = typer.Option(None, "--log-format", help="console or json."),
    version: bool | None = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """techradar CLI — content validation, radar data and changelog tooling."""
    from techradar.core.logging import configure_logging
    from techradar.settings import get_settings

    settings = get_settings()
    configure_logging(
        level=log_level or settings.log_level,
        json_format=(log_format or settings.log_format) == "json",
        service="techradar",
    )
    ctx.obj = CliState(
        config_file=config_file or settings.config_file,
        radar_dir=radar_dir or settings.radar_dir,
        dist_dir=dist_dir or settings.dist_dir,
        strict=settings.fail_on_warnings,
    )


# ── Command registration ─────────────────────────────────────────────────

from techradar.cli.authoring import (  # noqa: E402
    import_history_command,
    new_command,
    update_status_command,
)
from techradar.cli.build import build_command, changelog_command  # noqa: E402
from techradar.cli.validate import validate_command  # noqa: E402

app.command("validate")(validate_command)
app.command("build")(build_command)
app.command("changelog")(changelog_command)
app.command("new")(new_command)
app.command("update-status")(update_status_command)
app.command("import-history")(import_history_command)

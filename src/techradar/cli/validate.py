"""
CLI: ``techradar validate`` — check configuration and every blip.
"""

from __future__ import annotations

import typer
from rich.markup import escape

from techradar.cli.utils import console, err_console, get_state


def validate_command(
    ctx: typer.Context,
    strict: bool = typer.Option(
        False, "--strict", help="Fail when any blip has history warnings."
    ),
) -> None:
    """Validate radar.config.yml and all blip front matter."""
    from techradar.validation import validate_radar

    state = get_state(ctx)
    result = validate_radar(state.config_file, state.radar_dir)

    if result.config_errors:
        err_console.print(f"[red]✗[/red] Configuration invalid: {escape(str(state.config_file))}")
        for line in result.config_errors:
            err_console.print(f"   {escape(line)}")
    else:
        console.print("[green]✓[/green] Configuration valid")

    for report in result.files:
        if report.errors:
            err_console.print(f"[red]✗[/red] {escape(str(report.path))}:")
            for line in report.errors:
                err_console.print(f"   {escape(line)}")
        elif report.warnings:
            console.print(f"[yellow]![/yellow] {escape(str(report.path))}:")
            for line in report.warnings:
                console.print(f"   {escape(line)}")

    console.print("\n[bold]Validation Summary:[/bold]")
    console.print(f"   Valid: {result.valid_count}")
    console.print(f"   Warnings: {result.warning_count}")
    console.print(f"   Errors: {result.error_count}")

    if result.passed(strict=strict or state.strict):
        console.print("\n[green]✓ All validations passed![/green]")
        return

    console.print("\n[red]✗ Validation failed[/red]")
    raise typer.Exit(code=1)

"""
CLI: authoring commands — ``new``, ``update-status`` and ``import-history``.

Non-interactive: everything comes from arguments so the commands can run
in scripts and CI.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import typer
from rich.markup import escape

from techradar.cli.utils import console, err_console, fail, get_state, load_radar_config
from techradar.core.errors import BlipNotFoundError, ContentError, RadarError, SchemaValidationError
from techradar.model.schemas import Link, Ring


def _parse_day(value: str | None):
    if value is None:
        return None
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise typer.BadParameter("must be YYYY-MM-DD", param_hint="--date") from None


def _parse_link(value: str) -> Link:
    title, sep, url = value.partition("=")
    if not sep:
        raise typer.BadParameter(f"expected TITLE=URL, got {value!r}", param_hint="--link")
    try:
        return Link(title=title.strip(), url=url.strip())
    except ValueError as e:
        raise typer.BadParameter(f"invalid link {value!r}: {e}", param_hint="--link") from None


def new_command(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Blip name."),
    quadrant: str = typer.Option(..., "--quadrant", "-q", help="Quadrant (case-insensitive)."),
    ring: Ring = typer.Option(..., "--ring", "-r", case_sensitive=False, help="Initial ring."),
    summary: str | None = typer.Option(None, "--summary", "-s", help="One-line summary."),
    tags: list[str] = typer.Option([], "--tag", "-t", help="Tag (repeatable)."),
    owners: list[str] = typer.Option([], "--owner", "-o", help="Owner, e.g. @team/name (repeatable)."),
    links: list[str] = typer.Option([], "--link", "-l", help="TITLE=URL (repeatable)."),
    on: str | None = typer.Option(None, "--date", help="Entry date YYYY-MM-DD (default: today)."),
) -> None:
    """Create a new blip file with an initial history entry."""
    from techradar.authoring import blip_path, blip_template, new_blip
    from techradar.content import write_blip_file
    from techradar.model.ordinals import quadrant_index

    state = get_state(ctx)
    config = load_radar_config(state)
    try:
        canonical = config.quadrants[quadrant_index(quadrant, config.quadrants)]
        front_matter = new_blip(
            name,
            canonical,
            ring,
            on=_parse_day(on),
            summary=summary,
            tags=tags,
            owners=owners,
            links=[_parse_link(link) for link in links],
        )
    except RadarError as e:
        fail(e)
    except ValueError as e:
        err_console.print(f"[bold red]Error[/bold red]: {escape(str(e))}")
        raise typer.Exit(code=1) from None

    path = blip_path(state.radar_dir, name, canonical)
    if path.exists():
        err_console.print(f"[bold red]Error[/bold red]: File already exists: {escape(str(path))}")
        raise typer.Exit(code=1)

    write_blip_file(path, front_matter, blip_template(name))
    console.print(f"[green]✓[/green] Created: {escape(str(path))}")


def update_status_command(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Blip name or slug."),
    ring: Ring = typer.Option(..., "--ring", "-r", case_sensitive=False, help="New ring."),
    note: str = typer.Option(..., "--note", "-n", help="Reason for change."),
    pr: str | None = typer.Option(None, "--pr", help="PR number, e.g. #123 or 123."),
    reviewed_by: str | None = typer.Option(None, "--reviewed-by", help="Reviewer, e.g. @username."),
    allow_unchanged: bool = typer.Option(
        False, "--allow-unchanged", help="Record a re-review even when the ring is unchanged."
    ),
    on: str | None = typer.Option(None, "--date", help="Review date YYYY-MM-DD (default: today)."),
) -> None:
    """Move a blip to a new ring, recording status, review date and history."""
    from techradar.authoring import apply_ring_change
    from techradar.content import find_blip_file, read_blip_file, write_blip_file

    state = get_state(ctx)
    if not note.strip():
        raise typer.BadParameter("reason is required", param_hint="--note")

    path = find_blip_file(state.radar_dir, name)
    if path is None:
        fail(BlipNotFoundError(name))

    try:
        front_matter, body = read_blip_file(path)
    except (ContentError, SchemaValidationError) as e:
        fail(e)

    if ring == front_matter.ring and not allow_unchanged:
        err_console.print(
            f"Ring unchanged ({ring.value}). Pass --allow-unchanged to record a re-review."
        )
        raise typer.Exit(code=1)

    try:
        updated = apply_ring_change(
            front_matter, ring, note, on=_parse_day(on), pr=pr, reviewed_by=reviewed_by
        )
    except ValueError as e:
        err_console.print(f"[bold red]Error[/bold red]: {escape(str(e))}")
        raise typer.Exit(code=1) from None

    write_blip_file(path, updated, body)
    console.print(f"[green]✓[/green] Updated: {escape(str(path))}")
    console.print(f"   Ring: {front_matter.ring.value} → {updated.ring.value}")
    console.print(f"   Status: {updated.status.value}")
    console.print(f"   History entry added with date {updated.last_reviewed}")


def import_history_command(
    ctx: typer.Context,
    csv_path: Path = typer.Argument(..., exists=True, dir_okay=False, help="CSV file: name,date,ring,note,pr"),
) -> None:
    """Backfill blip history from a CSV file."""
    from techradar.importer import import_history, read_history_csv

    state = get_state(ctx)
    try:
        rows = read_history_csv(csv_path)
    except RadarError as e:
        fail(e)
    console.print(f"Found {len(rows)} history entries")

    summary = import_history(state.radar_dir, rows)

    for name in summary.missing:
        err_console.print(f'[yellow]![/yellow] Could not find blip "{escape(name)}" - skipping')
    for error in summary.errors:
        err_console.print(f"[yellow]![/yellow] {escape(error.message)}")

    console.print("\n[bold]Import complete[/bold]")
    console.print(f"   Updated: {len(summary.updated)} blips ({summary.added} entries)")
    if summary.unchanged:
        console.print(f"   Unchanged: {len(summary.unchanged)} blips")
    if not summary.ok:
        console.print(f"   Errors: {len(summary.missing) + len(summary.errors)}")
        raise typer.Exit(code=1)

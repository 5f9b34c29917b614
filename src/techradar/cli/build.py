"""
CLI: ``techradar build`` and ``techradar changelog``.
"""

from __future__ import annotations

import json

import typer
from rich.markup import escape
from rich.table import Table

from techradar.cli.utils import console, fail, get_state, load_radar_config
from techradar.core.errors import RadarError
from techradar.model.schemas import ChangeLogEntry

_GROUP_TITLES = (
    ("new", "New Entries"),
    ("moved_in", "Moved Closer to Adopt"),
    ("moved_out", "Moved Away from Adopt"),
    ("unchanged", "Re-reviewed (ring unchanged)"),
)


def build_command(ctx: typer.Context) -> None:
    """Load every blip and write data/entries.json and data/changelog.json."""
    from techradar.build import build_site
    from techradar.content import load_blips

    state = get_state(ctx)
    config = load_radar_config(state)
    console.print(f"[bold]{escape(config.title)}[/bold]")
    console.print(f"   Quadrants: {escape(', '.join(config.quadrants))}")
    console.print(f"   Rings: {escape(', '.join(config.rings))}")

    try:
        blips = load_blips(state.radar_dir)
        result = build_site(config, blips, state.dist_dir)
    except RadarError as e:
        fail(e)

    console.print(f"   Found {result.blip_count} blips")
    console.print(f"   Wrote {escape(str(result.entries_path))}")
    console.print(f"   Wrote {escape(str(result.changelog_path))} ({result.change_count} recent changes)")
    console.print(f"\n[green]✓ Build complete![/green] Output in {escape(str(result.dist_dir))}")


def _change_table(title: str, changes: list[ChangeLogEntry]) -> Table:
    table = Table(title=title, title_justify="left", pad_edge=False)
    table.add_column("Date", no_wrap=True)
    table.add_column("Blip")
    table.add_column("Quadrant")
    table.add_column("Ring")
    table.add_column("Note", overflow="fold")
    table.add_column("PR", no_wrap=True)
    for c in changes:
        ring = f"{c.from_ring.value} → {c.to_ring.value}" if c.from_ring else c.to_ring.value
        table.add_row(
            c.date, escape(c.blip_name), escape(c.quadrant), ring, escape(c.note), c.pr or ""
        )
    return table


def changelog_command(
    ctx: typer.Context,
    days: int | None = typer.Option(
        None, "--days", "-d", min=1, help="Window in days (default: changelog_days from config)."
    ),
    json_out: bool = typer.Option(False, "--json", help="Print the changes as JSON."),
) -> None:
    """Show ring changes recorded within the changelog window."""
    from techradar.content import load_blips
    from techradar.model.changes import extract_recent_changes, group_changes

    state = get_state(ctx)
    config = load_radar_config(state)
    window = days or config.changelog_days

    try:
        changes = extract_recent_changes(load_blips(state.radar_dir), window)
    except RadarError as e:
        fail(e)

    if json_out:
        console.print_json(json.dumps([c.to_json() for c in changes]))
        return

    console.print(f"[bold]Changelog[/bold]: recent changes in the last {window} days")
    if not changes:
        console.print("[dim]No changes.[/dim]")
        return

    groups = group_changes(changes)
    for attr, title in _GROUP_TITLES:
        items = getattr(groups, attr)
        if items:
            console.print(_change_table(title, items))

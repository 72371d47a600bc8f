"""CLI for outline snapshots (import, export, show, tasks)."""

import json
from pathlib import Path
from typing import Annotated

import typer
from loguru import logger

from bulletpoints.config import resolve_snapshot_path
from bulletpoints.core.importer.json_reader import parse_store_data, store_to_data
from bulletpoints.core.tree.navigation import get_breadcrumbs, get_tasks, visible_flat_list
from bulletpoints.core.tree.outline_text import export_outline_text, parse_outline_text, strip_html
from bulletpoints.logging_config import configure_logging
from bulletpoints.models.item import Store

app = typer.Typer(help="Bulletpoints: convert and inspect outline documents.")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    configure_logging(verbose=verbose)


def _load_snapshot(snapshot: Path | None) -> Store:
    """Read a JSON snapshot, exiting with an error message if it is unusable."""
    path = resolve_snapshot_path(snapshot)
    if not path.exists():
        logger.error("Snapshot not found: {}", path)
        raise typer.Exit(1)
    try:
        return parse_store_data(json.loads(path.read_text(encoding="utf-8")))
    except ValueError as e:
        logger.error("Invalid snapshot {}: {}", path, e)
        raise typer.Exit(1) from e


@app.command(name="import")
def import_cmd(
    source: Path = typer.Argument(..., help="Hyphen-indented outline text file"),
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Where to write the JSON snapshot"),
    ] = None,
) -> None:
    """Import hyphen-indented outline text into a JSON snapshot."""
    if not source.exists():
        logger.error("Source file not found: {}", source)
        raise typer.Exit(1)

    store = parse_outline_text(source.read_text(encoding="utf-8"))
    dst = resolve_snapshot_path(output)
    dst.parent.mkdir(parents=True, exist_ok=True)
    dst.write_text(json.dumps(store_to_data(store), indent=2) + "\n", encoding="utf-8")
    typer.echo(f"Imported {len(store.items) - 1} items into {dst}")


@app.command()
def export(
    snapshot: Path | None = typer.Argument(None, help="JSON snapshot (default: data dir)"),
) -> None:
    """Print a snapshot as hyphen-indented outline text."""
    store = _load_snapshot(snapshot)
    text = export_outline_text(store)
    if text:
        typer.echo(text)


@app.command()
def show(
    snapshot: Path | None = typer.Argument(None, help="JSON snapshot (default: data dir)"),
    output_json: bool = typer.Option(False, "--json", "-j", help="Output visible ids as JSON"),
) -> None:
    """Show the visible items of a snapshot as an indented tree."""
    store = _load_snapshot(snapshot)
    visible = visible_flat_list(store, store.root_id)

    if output_json:
        typer.echo(json.dumps({"root_id": store.root_id, "visible": visible}, indent=2))
        return

    for item_id in visible:
        item = store.items[item_id]
        depth = len(get_breadcrumbs(store, item_id)) - 2
        marker = "+" if item.collapsed and item.children else "-"
        check = ""
        if item.is_task:
            check = "[x] " if item.is_completed else "[ ] "
        typer.echo(f"{'    ' * depth}{marker} {check}{strip_html(item.text)}")


@app.command()
def tasks(
    snapshot: Path | None = typer.Argument(None, help="JSON snapshot (default: data dir)"),
) -> None:
    """List task items with their location in the outline."""
    store = _load_snapshot(snapshot)
    found = get_tasks(store)
    if not found:
        typer.echo("No tasks found.")
        return

    for task in found:
        done = "x" if task.is_completed else " "
        typer.echo(f"  [{done}] {strip_html(task.text) or 'Untitled'}")
        trail = get_breadcrumbs(store, task.id)[1:-1]
        if trail:
            typer.echo(f"      in: {' > '.join(strip_html(c.text)[:40] for c in trail)}")
        typer.echo(f"      id={task.id}")

"""Command-line interface for the FAQ tag filter."""

import logging
import sys
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.tree import Tree

from .config import config
from .engine import FaqEngine, build_engine
from .models import CategoryNode
from .sources import FileSnapshotSource, SnapshotError

app = typer.Typer(
    name="faq-filter",
    help="Browse FAQ entries by hierarchical tag and search them."
)
console = Console()


def _load_engine(snapshot: Optional[Path]) -> FaqEngine:
    """Load a snapshot file and build the engine, exiting on failure."""
    path = snapshot or (Path(config.snapshot_path) if config.snapshot_path else None)
    if path is None:
        console.print("[red]No snapshot given. Pass a JSON file or set FAQ_SNAPSHOT_PATH.[/red]")
        raise typer.Exit(1)

    try:
        entries = FileSnapshotSource(path).load()
    except SnapshotError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    engine = build_engine(entries)
    if engine is None:
        console.print("[yellow]No FAQ entries in snapshot.[/yellow]")
        raise typer.Exit(0)
    return engine


def _add_branch(parent: Tree, node: CategoryNode) -> None:
    branch = parent.add(f"[bold]{node.name}[/bold] [dim]({node.count})[/dim]")
    for child in node.visible_children():
        _add_branch(branch, child)


def _show_entries(engine: FaqEngine, title: str) -> None:
    state = engine.view.state
    if state.no_results:
        console.print(f"[yellow]{state.no_results_message}[/yellow]")
        return

    table = Table(title=title, show_header=True)
    table.add_column("ID", style="dim")
    table.add_column("Question", max_width=50)
    table.add_column("Category", style="green")

    for entry in engine.visible_entries():
        table.add_row(entry.id, entry.question, entry.category or "-")

    console.print(table)
    console.print(f"[dim]{state.visible_count} of {len(engine.entries)} entries[/dim]")


SNAPSHOT_ARG = typer.Argument(None, help="JSON snapshot of FAQ entries")


@app.command()
def tree(snapshot: Optional[Path] = SNAPSHOT_ARG):
    """Show the category tree with entry counts."""
    engine = _load_engine(snapshot)

    if engine.hierarchy.is_empty:
        console.print("[yellow]No tagged entries.[/yellow]")
        return

    root = Tree(f"[bold blue]{config.tag_namespace}[/bold blue]")
    for node in engine.hierarchy.top_level_options():
        _add_branch(root, node)
    console.print(root)


@app.command("filter")
def filter_entries(
    snapshot: Optional[Path] = SNAPSHOT_ARG,
    paths: Optional[List[str]] = typer.Option(None, "--path", "-p", help="Category to select; repeat for deeper levels"),
):
    """
    Filter entries by category, one --path per dropdown level.

    Each path must be offered by the level before it, as in the dropdowns.
    """
    engine = _load_engine(snapshot)
    paths = paths or []

    for level, path in enumerate(paths):
        if not engine.select_category(level, path):
            console.print(f"[red]{path} is not offered at level {level}.[/red]")
            filter_level = engine.controller.get_level(level)
            if filter_level is not None:
                options = ", ".join(o.full_path for o in filter_level.options)
                console.print(f"[dim]Options: {options}[/dim]")
            raise typer.Exit(1)

    title = f"Category: {engine.controller.active_path}" if paths else "All entries"
    _show_entries(engine, title)


@app.command()
def search(
    query: str = typer.Argument(..., help="Text to look for"),
    snapshot: Optional[Path] = typer.Option(None, "--snapshot", "-s", help="JSON snapshot of FAQ entries"),
):
    """Search questions and answers."""
    engine = _load_engine(snapshot)
    engine.filter_faqs(query)
    _show_entries(engine, f"Search: {query}")


@app.command()
def suggest(
    query: str = typer.Argument(..., help="Partial query"),
    snapshot: Optional[Path] = typer.Option(None, "--snapshot", "-s", help="JSON snapshot of FAQ entries"),
):
    """Show autosuggestions for a partial query."""
    engine = _load_engine(snapshot)

    if len(query.strip()) < config.suggestion_min_length:
        console.print(
            f"[yellow]Suggestions start at {config.suggestion_min_length} characters.[/yellow]"
        )
        return

    suggestions = engine.get_suggestions(query.strip())
    if not suggestions:
        console.print("[dim]No suggestions.[/dim]")
        return

    for suggestion in suggestions:
        console.print(f"[cyan]→[/cyan] {suggestion}")


@app.command()
def status():
    """Show the current configuration."""
    console.print(Panel("[bold]FAQ Tag Filter - Status[/bold]", border_style="blue"))

    console.print("\n[bold]Configuration:[/bold]")
    console.print(f"  Namespace: {config.tag_namespace}")
    console.print(f"  Snapshot file: {config.snapshot_path or '-'}")
    console.print(f"  Snapshot URL: {config.snapshot_url or '-'}")
    console.print(f"  Authoring mode: {'yes' if config.authoring_mode else 'no'}")

    console.print("\n[bold]Search:[/bold]")
    console.print(f"  Suggestions from: {config.suggestion_min_length} characters")
    console.print(f"  Max suggestions: {config.max_suggestions}")
    console.print(f"  Debounce: {config.suggestion_debounce * 1000:.0f} ms")


@app.command()
def serve(
    snapshot: Optional[Path] = SNAPSHOT_ARG,
    host: str = typer.Option("127.0.0.1", "--host", help="Interface to bind"),
    port: int = typer.Option(8000, "--port", help="Port to listen on"),
):
    """Serve the engine over HTTP."""
    import uvicorn

    from . import api

    logging.basicConfig(
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        level=logging.INFO,
        stream=sys.stdout
    )

    api.set_engine(_load_engine(snapshot))
    uvicorn.run(api.app, host=host, port=port)


if __name__ == "__main__":
    app()

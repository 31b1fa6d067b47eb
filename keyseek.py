"""keyseek CLI: index a document collection and run two-keyword queries.

Four commands: validate, index, query, show.
Uses typer for argument parsing and rich for formatted terminal output.
The index is rebuilt in memory on every invocation.
"""

from __future__ import annotations

import json
import logging

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from core.indexer import index_collection
from core.searcher import search_hits
from core.sources import SourceUnavailableError
from core.store import KeywordIndex
from core.validator import validate_config

app = typer.Typer(help="keyseek: rank documents by how often they use either of two keywords.")
console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _build_index(config_path: str) -> tuple[KeywordIndex, dict]:
    index = KeywordIndex()
    try:
        summary = index_collection(config_path, index)
    except SourceUnavailableError as e:
        console.print(f"[red]Error: {e}[/red]")
        if index.document_count:
            console.print(f"[yellow]{index.document_count} document(s) were indexed before the failure.[/yellow]")
        raise typer.Exit(code=1)
    except ValueError as e:
        console.print(f"[red]Error: invalid config: {e}[/red]")
        raise typer.Exit(code=1)
    return index, summary


# ── validate ────────────────────────────────────────────────────────


@app.command()
def validate(config_path: str = typer.Argument(..., help="Path to collection JSON")):
    """Check a collection config and the files it refers to."""
    passed, errors = validate_config(config_path)

    if passed:
        console.print(
            Panel("[bold green]✓ Validation passed[/bold green]", border_style="green")
        )
    else:
        console.print(
            Panel("[bold red]✗ Validation failed[/bold red]", border_style="red")
        )
        for err in errors:
            console.print(f"  [red]✗[/red] {err}")
        raise typer.Exit(code=1)


# ── index ───────────────────────────────────────────────────────────


@app.command()
def index(config_path: str = typer.Argument(..., help="Path to collection JSON")):
    """Index a collection and summarize the result."""
    with console.status("[bold blue]Indexing documents..."):
        _, summary = _build_index(config_path)

    table = Table(title=f"Indexing Summary: {summary['name']}")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green", justify="right")
    table.add_row("Documents", str(summary["documents"]))
    table.add_row("Skipped", str(len(summary["skipped"])))
    table.add_row("Duplicates", str(len(summary["duplicates"])))
    table.add_row("Unique Keywords", str(summary["keywords"]))
    table.add_row("Occurrences", str(summary["occurrences"]))
    console.print(table)

    for name in summary["duplicates"]:
        console.print(f"  [yellow]duplicate[/yellow] {name}")
    for name in summary["skipped"]:
        console.print(f"  [yellow]skipped[/yellow] {name}")


# ── query ───────────────────────────────────────────────────────────


@app.command()
def query(
    config_path: str = typer.Argument(..., help="Path to collection JSON"),
    keyword1: str = typer.Argument(..., help="First keyword"),
    keyword2: str = typer.Argument(..., help="Second keyword"),
    as_json: bool = typer.Option(False, "--json", help="Print matching documents as JSON"),
):
    """Find documents containing either keyword, most frequent first."""
    idx, summary = _build_index(config_path)

    # The index only holds lower-case keywords.
    kw1, kw2 = keyword1.lower(), keyword2.lower()
    hits = search_hits(kw1, kw2, idx, summary["max_results"])

    if as_json:
        typer.echo(json.dumps([h.document for h in hits]))
        return

    console.print(f'\n[bold]Query:[/bold] "{kw1}" or "{kw2}"')
    console.print(
        f"[bold]Collection:[/bold] {summary['name']} | Documents: {summary['documents']} | Max results: {summary['max_results']}"
    )
    console.print()

    if not hits:
        console.print("[yellow]No matching documents.[/yellow]")
        return

    table = Table()
    table.add_column("#", style="dim", width=3)
    table.add_column("Document", style="cyan", min_width=30)
    table.add_column("Keyword", width=14)
    table.add_column("Frequency", justify="right", width=10)

    for i, h in enumerate(hits, 1):
        table.add_row(str(i), h.document, h.keyword, str(h.frequency))

    console.print(table)
    console.print(f"\n{len(hits)} results returned")


# ── show ────────────────────────────────────────────────────────────


@app.command()
def show(
    config_path: str = typer.Argument(..., help="Path to collection JSON"),
    keyword: str = typer.Argument(..., help="Keyword to inspect"),
):
    """Show a keyword's occurrence list in index order."""
    idx, _ = _build_index(config_path)
    kw = keyword.lower()
    occs = idx.occurrences(kw)

    if not occs:
        console.print(f'[yellow]"{kw}" is not in the index.[/yellow]')
        raise typer.Exit(code=1)

    table = Table(title=f'Occurrences of "{kw}"')
    table.add_column("#", style="dim", width=3)
    table.add_column("Document", style="cyan", min_width=30)
    table.add_column("Frequency", justify="right", width=10)
    for i, occ in enumerate(occs, 1):
        table.add_row(str(i), occ.document, str(occ.frequency))
    console.print(table)


if __name__ == "__main__":
    app()

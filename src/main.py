"""Main CLI module for tiles2db."""

import sys
from datetime import timedelta
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .config import DEFAULT_EXTENSION, ImportSettings
from .errors import TileImportError
from .importer import ImportResult, TileImporter
from .storage import summarize

console = Console()
app = typer.Typer(help="Load a z/x/y tile directory into a SQLite database")


def format_duration(seconds: float) -> str:
    """Render elapsed wall-clock time like ``0:01:02.345``."""
    return str(timedelta(seconds=round(seconds, 3)))


@app.command()
def load(
    source: Optional[Path] = typer.Option(
        None, "--source", "-s", help="Directory of tiles"
    ),
    database: Optional[Path] = typer.Option(
        None, "--database", "-d", help="Database file (replaced if it exists)"
    ),
    table: Optional[str] = typer.Option(None, "--table", "-t", help="Table name"),
    threads: Optional[int] = typer.Option(
        None, "--thread", "-n", help="Thread count (default: number of CPUs)"
    ),
    batch: Optional[int] = typer.Option(
        None, "--batch", "-b", help="Batch of files size (default: threads * 256)"
    ),
    extension: str = typer.Option(
        DEFAULT_EXTENSION, "--ext", "-e", help="Tile file extension"
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Print the running count after every batch"
    ),
) -> None:
    """Walk a tile directory and write every z/x/y tile into one table."""
    try:
        settings = ImportSettings(
            source=source,
            destination=database,
            table=table,
            workers=threads,
            batch_size=batch,
            extension=extension,
            verbose=verbose,
        ).validate()
    except TileImportError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        sys.exit(1)

    console.print(
        f"Start with {settings.workers} threads and batch size {settings.batch_size}"
    )

    try:
        if verbose:
            result = TileImporter(settings, console=console).run()
        else:
            with console.status("[bold green]Loading tiles...") as status:

                def show_progress(totals: ImportResult) -> None:
                    status.update(
                        f"[bold green]Loading tiles...[/bold green] {totals.files_seen} files"
                    )

                result = TileImporter(
                    settings, on_flush=show_progress, console=console
                ).run()
    except TileImportError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        sys.exit(1)

    console.print("[bold green]done[/bold green]")
    console.print(f"total count: {result.files_seen}")
    console.print(f"tiles written: {result.tiles_written}")
    console.print(f"execution time: {format_duration(result.elapsed)}")


@app.command()
def inspect(
    database: Path = typer.Argument(..., help="Database file written by load"),
    table: str = typer.Option(..., "--table", "-t", help="Table name"),
) -> None:
    """Show what a tile database contains."""
    try:
        summary = summarize(database, table)
    except TileImportError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        sys.exit(1)

    info_table = Table(title=f"{database.name}: {summary.table}")
    info_table.add_column("Property", style="cyan")
    info_table.add_column("Value", style="green")
    info_table.add_row("Tiles", str(summary.rows))
    info_table.add_row("Empty tiles", str(summary.empty_tiles))
    if summary.zoom_range:
        info_table.add_row("Zoom levels", f"{summary.zoom_range[0]}-{summary.zoom_range[1]}")
    else:
        info_table.add_row("Zoom levels", "-")
    info_table.add_row("Index (z, x, y)", "yes" if summary.indexed else "[red]missing[/red]")
    console.print(info_table)

    if not summary.indexed:
        console.print(
            "[yellow]Warning: no (z, x, y) index, the import did not finish[/yellow]"
        )


@app.command()
def info() -> None:
    """Display information about the tool."""
    console.print(
        Panel.fit(
            "tiles2db\n\n"
            "Packs a tile cache laid out as {z}/{x}/{y}.png into a single\n"
            "SQLite file with one (z, x, y, data) table.\n\n"
            "Commands:\n"
            "• load: Import a tile directory (replaces the database file)\n"
            "• inspect: Show row count, zoom range and index of a database\n"
            "• info: Show this information",
            style="bold blue",
        )
    )


if __name__ == "__main__":
    app()

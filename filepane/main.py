#!/usr/bin/env python3
"""
Main CLI entry point for filepane
"""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from filepane import __version__
from filepane.config.constants import CURRENT_FILE_KEY
from filepane.config.selection_store import SelectionStore
from filepane.exceptions import FilePaneError
from filepane.models.files import SelectionRecord

app = typer.Typer(
    name="filepane",
    help="File browser pane for a terminal text editor",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)


@app.command()
def browse(
    directory: Path = typer.Argument(
        Path("."),
        exists=True,
        file_okay=False,
        dir_okay=True,
        help="Directory whose files are listed",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at debug level"),
):
    """Browse and edit the files of DIRECTORY."""
    from filepane.repository.local import LocalFileRepository
    from filepane.ui.app import FilePaneApp
    from filepane.utils.logging_utils import setup_tui_logging

    logger, _ = setup_tui_logging(verbose=verbose)

    try:
        repository = LocalFileRepository(directory)
    except (FilePaneError, OSError) as e:
        err_console.print(f"❌ Cannot open {directory}: {e}", style="red")
        raise typer.Exit(1) from e

    logger.info(f"Browsing {repository.directory}")
    try:
        FilePaneApp(repository, SelectionStore(), title=str(repository.directory)).run()
    except KeyboardInterrupt:
        pass


@app.command()
def current():
    """Show the persisted selection."""
    record = SelectionRecord.from_json(SelectionStore().get(CURRENT_FILE_KEY))
    if record is None:
        console.print("[yellow]No file selected yet[/yellow]")
        return

    table = Table(title="Current file")
    table.add_column("Name", style="cyan")
    table.add_column("Path", style="magenta")
    table.add_row(record.name, record.path)
    console.print(table)


@app.command()
def forget():
    """Clear the persisted selection."""
    SelectionStore().remove(CURRENT_FILE_KEY)
    console.print("[green]✅ Selection cleared[/green]")


@app.command()
def version():
    """Show filepane version"""
    typer.echo(f"filepane version {__version__}")


def run():
    """Entry point for the filepane script."""
    app()


if __name__ == "__main__":
    run()

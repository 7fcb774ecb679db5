"""CLI entry point for cashio."""

import logging
import sys

import typer
from rich.console import Console
from rich.markup import escape

from cashio.commands.admin import init_command
from cashio.commands.records import add_command, list_command, modify_command, remove_command
from cashio.config import get_log_level
from cashio.errors import ConfigError
from cashio.logging_setup import configure_logging

app = typer.Typer(
    name="cashio",
    help="cashio - a personal expense ledger",
    add_completion=False,
)

DATE_HELP = "Date: YYYY-MM-DD, D-Mon-YYYY or MM/DD/YYYY; MM-DD or MM/DD (current year); DD (current month)"


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """cashio - a personal expense ledger."""
    try:
        config_level = get_log_level()
    except ConfigError as e:
        Console().print(f"[red]{escape(str(e))}[/red]")
        sys.exit(1)
    configure_logging(logging.DEBUG if verbose else None, config_level=config_level)


@app.command(name="init")
def init() -> None:
    """Initialize the cashio database and configuration."""
    init_command()


@app.command(name="add")
def add(
    name: str = typer.Argument(..., help="Name of the record"),
    amount: str = typer.Argument(..., help="Amount, e.g. 12.5 or -3.99 (put -- before negative amounts)"),
    date: str = typer.Argument(None, help=f"{DATE_HELP}. Defaults to today"),
    category: str = typer.Option(None, "--category", "-c", help="Category for this record (default: 'default')"),
    description: str = typer.Option(None, "--description", "-d", help="Full description of this record"),
) -> None:
    """Add a record."""
    add_command(name, amount, date, category, description)


@app.command(name="ls")
def ls(
    query: str = typer.Argument(None, help="Text to search for in names and descriptions"),
    category: str = typer.Option(None, "--category", "-c", help="Only this category"),
    month: str = typer.Option(None, "--month", "-m", help="Single month (number, name or YYYY-MM)"),
    year: str = typer.Option(None, "--year", "-y", help="Single year (YYYY)"),
    date_from: str = typer.Option(None, "--from", help="Start of date range (inclusive)"),
    date_to: str = typer.Option(None, "--to", help="End of date range (inclusive, requires --from)"),
    all: bool = typer.Option(False, "--all", "-a", help="List records of all dates"),
    case_sensitive: bool = typer.Option(False, "--case-sensitive", help="Match query case exactly"),
) -> None:
    """List records, defaulting to the current month."""
    list_command(query, category, month, year, date_from, date_to, all, case_sensitive)


@app.command(name="mod")
def mod(
    record_id: int = typer.Argument(..., help="Id of the record to modify"),
    name: str = typer.Option(None, "--name", "-n", help="New name"),
    amount: str = typer.Option(None, "--amount", "-a", help="New amount"),
    date: str = typer.Option(None, "--date", "-d", help=f"New date. {DATE_HELP}"),
    category: str = typer.Option(None, "--category", "-c", help="New category"),
    description: str = typer.Option(None, "--description", help="New description"),
    force: bool = typer.Option(False, "--force", "-f", help="Apply without confirmation"),
) -> None:
    """Modify a record."""
    modify_command(record_id, name, amount, date, category, description, force)


@app.command(name="rm")
def rm(
    record_id: int = typer.Argument(..., help="Id of the record to remove"),
) -> None:
    """Remove a record."""
    remove_command(record_id)


if __name__ == "__main__":
    app()

"""Record commands (add, ls, mod, rm)."""

import sys
from datetime import date
from typing import NoReturn

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from cashio.config import resolve_db_path
from cashio.dates import resolve_date
from cashio.domain.amounts import format_cents, parse_amount
from cashio.domain.models import DEFAULT_CATEGORY, CategoryName, Record, RecordUpdate
from cashio.domain.query import build_list_filter
from cashio.errors import CashioError
from cashio.store.records import RecordStore

console = Console()


def format_amount(cents: int) -> str:
    """Format an amount with color for display."""
    if cents < 0:
        return f"[red]{format_cents(cents)}[/red]"
    return f"[green]{format_cents(cents)}[/green]"


def print_record(record: Record) -> None:
    console.print(f"  ID: {record.id}")
    console.print(f"  Name: {record.name}")
    console.print(f"  Amount: {format_amount(record.cents)}")
    console.print(f"  Date: {record.date.isoformat()}")
    console.print(f"  Category: {record.category}")
    if record.description:
        console.print(f"  Description: {record.description}")


def fail(e: Exception) -> NoReturn:
    console.print(f"[red]Error: {escape(str(e))}[/red]")
    sys.exit(1)


def add_command(
    name: str,
    amount: str,
    date_text: str | None = None,
    category: str | None = None,
    description: str | None = None,
) -> None:
    """Add a record.

    Args:
        name: Record name.
        amount: Amount as a decimal string (negative for expenses).
        date_text: Date in any form resolve_date accepts. Defaults to today.
        category: Optional category name.
        description: Optional description.
    """
    today = date.today()

    try:
        record = Record(
            name=name,
            cents=parse_amount(amount),
            date=resolve_date(date_text, today) if date_text else today,
            category=CategoryName(category) if category is not None else DEFAULT_CATEGORY,
            description=description or "",
        )

        with RecordStore.connect(resolve_db_path()) as store:
            stored = store.insert(record)

        console.print("[green]✓[/green] Record added:")
        print_record(stored)

    except CashioError as e:
        fail(e)


def list_command(
    query: str | None = None,
    category: str | None = None,
    month: str | None = None,
    year: str | None = None,
    date_from: str | None = None,
    date_to: str | None = None,
    all_dates: bool = False,
    case_sensitive: bool = False,
) -> None:
    """List records matching the given options."""
    today = date.today()

    try:
        record_filter = build_list_filter(
            today,
            query=query,
            category=category,
            month=month,
            year=year,
            date_from=date_from,
            date_to=date_to,
            all_dates=all_dates,
            case_sensitive=case_sensitive,
        )

        with RecordStore.connect(resolve_db_path()) as store:
            records = store.list(record_filter)

    except CashioError as e:
        fail(e)

    if not records:
        console.print("[yellow]No records found[/yellow]")
        return

    if record_filter.date_from is None:
        period = "all time"
    elif record_filter.date_to is None:
        period = f"since {record_filter.date_from.isoformat()}"
    else:
        period = f"{record_filter.date_from.isoformat()} to {record_filter.date_to.isoformat()}"

    table = Table(title=f"Records ({period}, showing {len(records)})")
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Date", style="cyan")
    table.add_column("Name", style="white")
    table.add_column("Amount", justify="right")
    table.add_column("Category", style="magenta")
    table.add_column("Description", style="dim")

    for record in records:
        table.add_row(
            str(record.id),
            record.date.isoformat(),
            record.name,
            format_amount(record.cents),
            record.category,
            record.description,
        )

    console.print(table)
    console.print(f"Total: {format_amount(sum(record.cents for record in records))}")


def modify_command(
    record_id: int,
    name: str | None = None,
    amount: str | None = None,
    date_text: str | None = None,
    category: str | None = None,
    description: str | None = None,
    force: bool = False,
) -> None:
    """Modify fields of an existing record.

    Shows the current and new values and asks for confirmation unless
    ``force`` is set.
    """
    today = date.today()

    try:
        update = RecordUpdate(
            name=name,
            cents=parse_amount(amount) if amount is not None else None,
            date=resolve_date(date_text, today) if date_text is not None else None,
            category=CategoryName(category) if category is not None else None,
            description=description,
        )

        if update.is_empty():
            console.print("[yellow]Nothing to modify[/yellow]")
            return

        with RecordStore.connect(resolve_db_path()) as store:
            current = store.get(record_id)

            console.print(f"Record {record_id}:")
            for field, value in update.changes().items():
                old = getattr(current, field)
                if field == "cents":
                    console.print(f"  amount: {format_amount(old)} -> {format_amount(value)}")
                else:
                    console.print(f"  {field}: {old} -> {value}")

            if not force and not typer.confirm("Apply these changes?", default=False):
                console.print("[dim]No changes made[/dim]")
                return

            updated = store.modify(record_id, update)

        console.print("[green]✓[/green] Record updated:")
        print_record(updated)

    except CashioError as e:
        fail(e)


def remove_command(record_id: int) -> None:
    """Remove a record by id."""
    try:
        with RecordStore.connect(resolve_db_path()) as store:
            removed = store.remove(record_id)

        console.print("[green]✓[/green] Record removed:")
        print_record(removed)

    except CashioError as e:
        fail(e)

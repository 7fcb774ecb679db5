"""Admin commands for setting up the database and configuration."""

import sys

from rich.console import Console
from rich.markup import escape

from cashio.config import create_default_config, get_config_path, resolve_db_path
from cashio.errors import CashioError, ConfigError
from cashio.store.records import RecordStore

console = Console()


def init_command() -> None:
    """Create the config file if missing and set up the database schema.

    Running it again is safe: existing records and config are kept.
    """
    config_path = get_config_path()

    try:
        if config_path.exists():
            console.print(f"[dim]Config already exists: {config_path}[/dim]")
        else:
            console.print(f"[cyan]Creating config file at {config_path}...[/cyan]")
            create_default_config(config_path)
            console.print("[green]✓[/green] Config file created (permissions: 600)")

        db_path = resolve_db_path(config_path)
        console.print(f"[cyan]Initializing database at {db_path}...[/cyan]")
        with RecordStore.connect(db_path) as store:
            store.init()
            count = store.count()
        console.print("[green]✓[/green] Database ready")

        console.print("\n[green]Initialization complete![/green]", style="bold")
        console.print(f"[dim]Database: {db_path} ({count} records)[/dim]")
        console.print(f"[dim]Config: {config_path}[/dim]")

    except ConfigError as e:
        console.print(f"[red]{escape(str(e))}[/red]", style="bold")
        sys.exit(1)
    except CashioError as e:
        console.print(f"[red]Database error: {escape(str(e))}[/red]", style="bold")
        sys.exit(1)
    except OSError as e:
        console.print(f"[red]Filesystem error: {e}[/red]", style="bold")
        sys.exit(1)

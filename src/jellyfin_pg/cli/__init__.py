"""CLI for PostgreSQL provider maintenance.

Provides commands for inspecting the resolved connection and for creating,
restoring, listing and deleting backups, plus bulk table truncation.

Usage:
    jellyfin-pg info
    jellyfin-pg backup
    jellyfin-pg list
    jellyfin-pg restore 20260101120000 --yes
    jellyfin-pg delete 20260101120000
    jellyfin-pg purge --tables ActivityLogs,Devices --confirm
    jellyfin-pg --config /etc/jellyfin/jellyfin-pg.toml backup

Commands:
    info     - Show provider, data path and connection string (password masked)
    backup   - Create a backup with pg_dump
    list     - List backups found on disk
    restore  - Restore a backup with pg_restore
    delete   - Delete a backup file
    purge    - Truncate tables with CASCADE
"""

import argparse
import asyncio
import sys
from pathlib import Path

from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from jellyfin_pg.backup.files import backup_file_path, list_backups
from jellyfin_pg.config.loader import load_provider_config
from jellyfin_pg.config.models import ProviderConfig
from jellyfin_pg.errors import JellyfinPgError
from jellyfin_pg.factory import get_provider
from jellyfin_pg.log import setup_logging
from jellyfin_pg.providers.postgres import PostgresDatabaseProvider

console = Console()


# ============================================================================
# Helpers
# ============================================================================


def _load_config(args: argparse.Namespace) -> ProviderConfig | None:
    """Load the TOML config, printing the error and returning None on failure."""
    config_path = Path(args.config) if args.config else None
    try:
        return load_provider_config(config_path)
    except (FileNotFoundError, ValidationError) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        return None


def _open_provider(args: argparse.Namespace) -> PostgresDatabaseProvider | None:
    """Build the configured provider, printing the error on failure."""
    config = _load_config(args)
    if config is None:
        return None
    try:
        return get_provider(config.database, config.paths)
    except (JellyfinPgError, ValueError) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        return None


# ============================================================================
# Async command implementations
# ============================================================================


async def _async_backup(args: argparse.Namespace) -> int:
    """Async implementation for backup command.

    Returns:
        0 on success, 1 on failure.
    """
    provider = _open_provider(args)
    if provider is None:
        return 1

    console.print("Creating backup...", style="dim")
    try:
        key = await provider.create_backup()
    except (JellyfinPgError, OSError) as e:
        console.print(f"[bold red]x[/bold red] Backup failed: {escape(str(e))}")
        return 1
    finally:
        await provider.close()

    console.print(f"[bold green]v[/bold green] Backup created: [cyan]{key}[/cyan]")
    return 0


async def _async_restore(args: argparse.Namespace) -> int:
    """Async implementation for restore command.

    Returns:
        0 on success or when cancelled at the prompt, 1 on failure.
    """
    if not args.yes:
        console.print(f"This will restore backup [cyan]{args.key}[/cyan].")
        console.print("[yellow]Existing database objects will be dropped first.[/yellow]")
        response = console.input("Continue? [y/N] ")
        if response.lower() not in ["y", "yes"]:
            console.print("Cancelled.")
            return 0

    provider = _open_provider(args)
    if provider is None:
        return 1

    if not backup_file_path(provider.app_paths.data_path, args.key).exists():
        console.print(f"[yellow]Backup {args.key} not found; nothing restored.[/yellow]")
        await provider.close()
        return 0

    console.print("Restoring backup...", style="dim")
    try:
        await provider.restore_backup(args.key)
    except (JellyfinPgError, OSError) as e:
        console.print(f"[bold red]x[/bold red] Restore failed: {escape(str(e))}")
        return 1
    finally:
        await provider.close()

    console.print("[bold green]v[/bold green] Restore complete.")
    return 0


async def _async_delete(args: argparse.Namespace) -> int:
    """Async implementation for delete command."""
    provider = _open_provider(args)
    if provider is None:
        return 1

    try:
        await provider.delete_backup(args.key)
    except (JellyfinPgError, OSError) as e:
        console.print(f"[bold red]x[/bold red] Delete failed: {escape(str(e))}")
        return 1
    finally:
        await provider.close()

    console.print(f"[bold green]v[/bold green] Deleted {args.key}")
    return 0


async def _async_purge(args: argparse.Namespace) -> int:
    """Async implementation for purge command."""
    tables = [t.strip() for t in args.tables.split(",") if t.strip()]
    if not tables:
        console.print("[red]Error: --tables is empty[/red]")
        return 1

    console.print(f"  Tables: [dim]{', '.join(tables)}[/dim]")
    if not args.confirm:
        console.print()
        console.print(
            "[bold yellow]Not confirmed[/bold yellow] - re-run with --confirm to truncate."
        )
        return 1

    provider = _open_provider(args)
    if provider is None:
        return 1

    try:
        await provider.purge_tables(provider.engine, tables)
    except Exception as e:
        console.print(f"[bold red]x[/bold red] Purge failed: {escape(str(e))}")
        return 1
    finally:
        await provider.close()

    console.print(f"[bold green]v[/bold green] Truncated {len(tables)} table(s).")
    return 0


# ============================================================================
# Command handlers
# ============================================================================


def cmd_info(args: argparse.Namespace) -> int:
    """Show the resolved provider configuration.

    Builds the engine but never connects.

    Returns:
        0 on success, 1 if the config cannot be loaded.
    """
    provider = _open_provider(args)
    if provider is None:
        return 1

    table = Table(title="PostgreSQL Provider", show_header=False)
    table.add_column("Key", style="dim")
    table.add_column("Value")

    table.add_row("Provider", f"[bold cyan]{provider.provider_key}[/bold cyan]")
    table.add_row("Implementation", type(provider).__name__)
    table.add_row("Data path", str(provider.app_paths.data_path))
    table.add_row("Connection", provider.connection_info.describe())

    console.print(table)
    asyncio.run(provider.close())
    return 0


def cmd_list(args: argparse.Namespace) -> int:
    """List backups on disk.

    Reads only the TOML config and the backups directory.

    Returns:
        0 on success, 1 if the config cannot be loaded.
    """
    config = _load_config(args)
    if config is None:
        return 1

    keys = list_backups(config.paths.data_path)
    if not keys:
        console.print("[yellow]No backups found.[/yellow]")
        return 0

    table = Table(title="Backups", show_header=True, header_style="bold")
    table.add_column("Key")
    table.add_column("Size", justify="right")

    for key in keys:
        try:
            size = backup_file_path(config.paths.data_path, key).stat().st_size
        except FileNotFoundError:
            # deleted since listing
            continue
        table.add_row(key, f"{size:,}")

    console.print(table)
    return 0


def cmd_backup(args: argparse.Namespace) -> int:
    """Create a backup.

    Wraps the async implementation with ``asyncio.run()``.
    """
    return asyncio.run(_async_backup(args))


def cmd_restore(args: argparse.Namespace) -> int:
    """Restore a backup.

    Wraps the async implementation with ``asyncio.run()``.
    """
    return asyncio.run(_async_restore(args))


def cmd_delete(args: argparse.Namespace) -> int:
    """Delete a backup.

    Wraps the async implementation with ``asyncio.run()``.
    """
    return asyncio.run(_async_delete(args))


def cmd_purge(args: argparse.Namespace) -> int:
    """Truncate tables.

    Wraps the async implementation with ``asyncio.run()``.
    """
    return asyncio.run(_async_purge(args))


# ============================================================================
# Main entry point
# ============================================================================


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point.

    Parses command line arguments and dispatches to appropriate handler.

    Args:
        argv: Argument list (default: ``sys.argv[1:]``).

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    parser = argparse.ArgumentParser(
        prog="jellyfin-pg",
        description="PostgreSQL provider maintenance",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to jellyfin-pg.toml (default: $JELLYFIN_PG_CONFIG or ./jellyfin-pg.toml)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level (default: $LOG_LEVEL or INFO)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    p_info = subparsers.add_parser("info", help="Show resolved connection settings")
    p_info.set_defaults(func=cmd_info)

    p_backup = subparsers.add_parser("backup", help="Create a backup")
    p_backup.set_defaults(func=cmd_backup)

    p_list = subparsers.add_parser("list", help="List backups on disk")
    p_list.set_defaults(func=cmd_list)

    p_restore = subparsers.add_parser("restore", help="Restore a backup")
    p_restore.add_argument("key", help="Backup key (e.g., 20260101120000)")
    p_restore.add_argument(
        "--yes",
        "-y",
        action="store_true",
        help="Skip the confirmation prompt",
    )
    p_restore.set_defaults(func=cmd_restore)

    p_delete = subparsers.add_parser("delete", help="Delete a backup")
    p_delete.add_argument("key", help="Backup key")
    p_delete.set_defaults(func=cmd_delete)

    p_purge = subparsers.add_parser("purge", help="Truncate tables with CASCADE")
    p_purge.add_argument(
        "--tables",
        required=True,
        help="Comma-separated list of tables (trusted names only)",
    )
    p_purge.add_argument(
        "--confirm",
        action="store_true",
        help="Actually truncate (required)",
    )
    p_purge.set_defaults(func=cmd_purge)

    args = parser.parse_args(argv)
    setup_logging(args.log_level)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())

"""Command-line interface for tmenu."""

import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from tmenu import __version__
from tmenu.allocator import Allocator, TrackingAllocator, get_allocator
from tmenu.common.config import SCAN_ORDERS, AppConfig
from tmenu.common.errors import AllocationError, AllocatorError, ConfigurationError, LaunchError
from tmenu.common.logging import setup_logging
from tmenu.discovery import ScanOrder, discover
from tmenu.filtering import FilterSession

console = Console()
err_console = Console(stderr=True)


def _release(session: FilterSession, allocator: Allocator) -> None:
    session.destroy(allocator)
    if isinstance(allocator, TrackingAllocator):
        try:
            allocator.check_leaks()
        except AllocatorError as err:
            err_console.print(f"[red]Error:[/red] {err}")
            sys.exit(1)


def _discover_session(ctx: click.Context) -> FilterSession:
    """Scan the configured search path, exiting before any UI on fatal errors."""
    launcher = ctx.obj["config"].launcher
    try:
        entries = discover(
            launcher.search_path,
            ctx.obj["allocator"],
            order=ctx.obj["order"],
            max_path_length=launcher.max_path_length,
        )
    except AllocationError as err:
        err_console.print(f"[red]Error:[/red] {err}")
        sys.exit(1)

    if not launcher.search_path:
        err_console.print("[yellow]Search path is not set (PATH / TMENU_PATH)[/yellow]")
    return FilterSession(entries)


@click.group(invoke_without_command=True)
@click.version_option(version=__version__)
@click.option(
    "--config",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to .env configuration file",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output (DEBUG level)")
@click.option("--path", "search_path", help="Search path to scan instead of $PATH")
@click.option(
    "--order",
    type=click.Choice(SCAN_ORDERS),
    help="Order of executables within each directory (default: desc)",
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Also write logs to this file",
)
@click.pass_context
def cli(ctx, config, verbose, search_path, order, log_file):
    """
    tmenu - Launch any executable on your PATH.

    Type to filter by name (case-sensitive substring), use the arrow keys
    to move, Enter to launch and Escape to quit.

    Examples:
        # Open the launcher
        tmenu

        # Print the chosen path instead of running it
        tmenu run --print

        # List executables whose name contains "git"
        tmenu list git
    """
    ctx.ensure_object(dict)

    app_config = AppConfig(env_file=config)
    if search_path is not None:
        app_config.launcher.search_path = search_path
    if order is not None:
        app_config.launcher.scan_order = order

    log_level = logging.DEBUG if verbose else app_config.log_level
    logger = setup_logging("tmenu", level=log_level, log_file=log_file or app_config.log_file)
    ctx.obj["logger"] = logger

    try:
        app_config.require_valid("launcher")
        ctx.obj["allocator"] = get_allocator(app_config.launcher.allocator)
        ctx.obj["order"] = ScanOrder.from_name(app_config.launcher.scan_order)
    except ConfigurationError as err:
        err_console.print(f"[red]Error:[/red] {err}")
        sys.exit(2)
    ctx.obj["config"] = app_config

    logger.debug(f"Search path: {app_config.launcher.search_path}")

    if ctx.invoked_subcommand is None:
        ctx.invoke(run)


@cli.command()
@click.option("--print", "print_only", is_flag=True, help="Print the selected path instead of launching it")
@click.option("--query", "-q", default="", help="Initial filter text")
@click.option("--show-paths", is_flag=True, help="Show full paths next to names")
@click.pass_context
def run(ctx, print_only, query, show_paths):
    """Open the interactive launcher (default command)."""
    from tmenu.launch import launch
    from tmenu.menu import run_menu

    allocator = ctx.obj["allocator"]
    session = _discover_session(ctx)
    if session.total == 0:
        err_console.print("[yellow]No executables found[/yellow]")
        _release(session, allocator)
        return

    session.set_query(query)
    entry = run_menu(session, show_paths=show_paths)

    if entry is None:
        ctx.obj["logger"].debug("Selection aborted")
        _release(session, allocator)
        return

    if print_only:
        click.echo(entry.path)
        _release(session, allocator)
        return

    try:
        launch(entry)
    except LaunchError as err:
        err_console.print(f"[red]Error:[/red] {err}")
        _release(session, allocator)
        sys.exit(1)


@cli.command("list")
@click.argument("query", default="")
@click.option("--table", "as_table", is_flag=True, help="Show names and paths as a table")
@click.pass_context
def list_cmd(ctx, query, as_table):
    """List discovered executables, optionally filtered by QUERY."""
    allocator = ctx.obj["allocator"]
    session = _discover_session(ctx)
    session.set_query(query)

    if as_table:
        table = Table(
            title=f"Executables ({len(session.visible)}/{session.total})",
            show_header=True,
            header_style="bold cyan",
        )
        table.add_column("Name", style="green", no_wrap=True)
        table.add_column("Path", style="dim")
        for name, path in session.matches():
            table.add_row(name, path)
        console.print(table)
    else:
        session.visible.dump()

    _release(session, allocator)


def main():
    """Entry point for the tmenu command."""
    cli(obj={})


if __name__ == "__main__":
    main()

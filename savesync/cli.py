"""Click-based CLI for savesync - game save backup synchronization."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import click
import yaml
from pydantic import ValidationError
from rich.console import Console as RichConsole
from rich.live import Live

from savesync import __version__
from savesync.config import (
    SaveSyncConfig,
    ensure_config_exists,
    get_config_path,
    load_config,
    load_or_create_config,
    validate_config_file,
)
from savesync.errors import ReconcileError, SaveSyncError
from savesync.host import HostLoop, KeyReader
from savesync.logger import LogFileSink, SyncLogger
from savesync.output.console import Console, create_console, record_line
from savesync.sync.engine import ReconcileEngine
from savesync.sync.events import EventSink, FanoutSink
from savesync.sync.pending import NOT_DELETING, Delete, index_for_letter
from savesync.sync.records import ReconciliationState
from savesync.sync.scanner import scan_state
from savesync.utils.paths import ensure_dir


def _load(config_path: Optional[Path]) -> SaveSyncConfig:
    """Load configuration, creating the default file on first use."""
    try:
        if config_path is not None:
            return load_config(config_path)
        config, _ = load_or_create_config()
        return config
    except (FileNotFoundError, ValueError, ValidationError, yaml.YAMLError) as e:
        create_console().print_error(str(e))
        sys.exit(1)


def _build_sink(config: SaveSyncConfig, console: RichConsole, verbose: bool) -> EventSink:
    """Console sink plus the configured log file."""
    sinks: list[EventSink] = [SyncLogger(console, verbose=verbose)]
    if config.output.log_file:
        sinks.append(LogFileSink(Path(config.output.log_file)))
    return FanoutSink(*sinks)


def _scan(config: SaveSyncConfig, console: Console) -> ReconciliationState:
    try:
        return scan_state(config.save_dir, config.backup_dir, config.get_filter())
    except SaveSyncError as e:
        console.print_error(e.message)
        sys.exit(1)


@click.group()
@click.version_option(version=__version__, prog_name="savesync")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to configuration file",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[Path]) -> None:
    """savesync - keep game saves and their backups in sync.

    Saves that exist only in the save directory are copied to the backup
    directory and vice versa. Existing files are never overwritten.

    \b
    Workflows:
      savesync init            # create config and backup directory
      savesync status          # show which saves are synced
      savesync sync            # copy missing saves once
      savesync watch           # keep syncing, delete saves interactively
    """
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


@cli.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show current sync status without making changes."""
    config = _load(ctx.obj["config_path"])
    console = create_console(verbose=config.output.verbose, colored=config.output.colored)

    console.print_info(f"Saves:   {config.save_dir}")
    console.print_info(f"Backups: {config.backup_dir}")
    console.print()

    state = _scan(config, console)
    console.print_state(state)


@cli.command()
@click.option("--dry-run", "-n", is_flag=True, help="Preview copies without applying")
@click.option("--verbose", "-v", is_flag=True, help="Show skipped copies")
@click.pass_context
def sync(ctx: click.Context, dry_run: bool, verbose: bool) -> None:
    """Copy saves missing on either side, once.

    Saves that exist in only one directory are copied to the other.
    Saves present in both directories are left untouched.
    """
    config = _load(ctx.obj["config_path"])
    verbose = verbose or config.output.verbose
    console = create_console(verbose=verbose, colored=config.output.colored)

    state = _scan(config, console)
    if state.is_converged:
        console.print_success("Everything is in sync!")
        return

    engine = ReconcileEngine(
        config.save_dir,
        config.backup_dir,
        _build_sink(config, console.rich, verbose),
        dry_run=dry_run,
    )
    result = engine.tick(state, NOT_DELETING)
    console.print_tick_result(result, dry_run=dry_run)

    if not result.success:
        sys.exit(1)


@cli.command()
@click.argument("letter")
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation prompt")
@click.pass_context
def delete(ctx: click.Context, letter: str, yes: bool) -> None:
    """Delete a save from both directories.

    LETTER is the position shown by 'savesync status' (a, b, c, ...).
    """
    config = _load(ctx.obj["config_path"])
    console = create_console(verbose=config.output.verbose, colored=config.output.colored)

    index = index_for_letter(letter)
    state = _scan(config, console)
    record = state.get(index) if index is not None else None
    if record is None:
        console.print_error(f"No save at position '{letter}'")
        sys.exit(1)

    console.print(record_line(index, record))
    if not yes and not console.confirm_delete(record):
        console.print_warning("Delete cancelled")
        return

    engine = ReconcileEngine(config.save_dir, config.backup_dir, _build_sink(config, console.rich, True))
    result = engine.tick(state, Delete(index))
    console.print_tick_result(result)

    if not result.success:
        sys.exit(1)


@cli.command()
@click.pass_context
def watch(ctx: click.Context) -> None:
    """Keep both directories in sync until you quit.

    \b
    Keys:
      d        choose a save to delete (then press its letter)
      ESC      cancel delete
      q        quit
    """
    config = _load(ctx.obj["config_path"])
    console = create_console(verbose=config.output.verbose, colored=config.output.colored)

    if not config.backup_dir.is_dir():
        console.print_error(f"Backup directory missing: {config.backup_dir}\nRun 'savesync init' first.")
        sys.exit(1)

    keys = KeyReader().start()
    try:
        with Live(console=console.rich, auto_refresh=False, transient=False) as live:
            sink = _build_sink(config, live.console, config.output.verbose)
            engine = ReconcileEngine(config.save_dir, config.backup_dir, sink)
            loop = HostLoop(
                config,
                engine,
                key_source=keys.poll,
                render=lambda view: live.update(view, refresh=True),
                sink=sink,
            )
            loop.run()
    except ReconcileError as e:
        console.print_error(e.message)
        for failure in e.failures:
            console.print(f"  [red]✗[/red] {failure.message}")
        sys.exit(1)


@cli.command()
@click.pass_context
def init(ctx: click.Context) -> None:
    """Create the configuration file and the backup directory."""
    config_path = ctx.obj["config_path"] or get_config_path()
    path, created = ensure_config_exists(config_path)
    config = _load(path)
    console = create_console(colored=config.output.colored)

    if created:
        console.print_success(f"Created configuration: {path}")
    else:
        console.print_info(f"Configuration exists: {path}")

    if not config.backup_dir.exists():
        ensure_dir(config.backup_dir)
        console.print_success(f"Created backup directory: {config.backup_dir}")

    if not config.save_dir.is_dir():
        console.print_warning(f"Save directory not found: {config.save_dir}")


# ============================================================================
# Configuration Commands
# ============================================================================


@cli.group("config")
def config_group() -> None:
    """Manage the savesync configuration file."""


@config_group.command("show")
@click.pass_context
def config_show(ctx: click.Context) -> None:
    """Show the effective configuration."""
    config_path = ctx.obj["config_path"] or get_config_path()
    config = _load(ctx.obj["config_path"])
    console = create_console(colored=config.output.colored)

    console.print(f"[bold]Config:[/bold]    {config_path}")
    console.print(f"[bold]Saves:[/bold]     {config.save_dir}")
    console.print(f"[bold]Backups:[/bold]   {config.backup_dir}")
    console.print(f"[bold]Filter:[/bold]    {config.filter.prefix}*.{config.filter.extension}")
    console.print(f"[bold]Tick:[/bold]      {config.loop.tick_interval_ms} ms")
    console.print(f"[bold]Log file:[/bold]  {config.output.log_file or '-'}")


@config_group.command("init")
@click.option("--force", "-f", is_flag=True, help="Overwrite an existing configuration")
@click.pass_context
def config_init(ctx: click.Context, force: bool) -> None:
    """Write the default configuration file."""
    console = create_console()
    config_path = ctx.obj["config_path"] or get_config_path()
    path, created = ensure_config_exists(config_path, force=force)

    if created:
        console.print_success(f"Created configuration: {path}")
    else:
        console.print_warning(f"Configuration already exists: {path} (use --force to overwrite)")


@config_group.command("check")
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def config_check(file: Path) -> None:
    """Validate a configuration file."""
    console = create_console()
    is_valid, errors = validate_config_file(file)

    if is_valid:
        console.print_success(f"Configuration is valid: {file}")
        return

    console.print_error(f"Invalid configuration: {file}")
    for error in errors:
        console.print(f"  [red]•[/red] {error}")
    sys.exit(1)

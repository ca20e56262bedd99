# savesync Console Output
# Rich-based rendering of the reconciliation state

from rich.console import Console as RichConsole
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.prompt import Confirm
from rich.table import Table
from rich.text import Text

from savesync.sync.engine import TickResult
from savesync.sync.pending import NOT_DELETING, Delete, DeletePending, describe_pending, letter_for_index
from savesync.sync.records import BackupOnly, OriginOnly, PresenceRecord, ReconciliationState, Synced, describe

_RECORD_STYLES = {
    OriginOnly: "yellow",
    BackupOnly: "cyan",
    Synced: "green",
}


def record_line(index: int, record: PresenceRecord) -> str:
    """Lettered line for one record, e.g. ``a) SAVE S<-xB Saved #1.broguesave``."""
    letter = letter_for_index(index) or "-"
    return f"{letter}) {describe(record)}"


def state_table(state: ReconciliationState, pending: DeletePending = NOT_DELETING) -> Table:
    """Build a table with one lettered row per record."""
    table = Table(show_header=True, header_style="bold", expand=True)
    table.add_column("", width=2)
    table.add_column("State")
    table.add_column("Direction", justify="center")
    table.add_column("Save", style="cyan")

    selected = pending.index if isinstance(pending, Delete) else None
    for index, record in enumerate(state):
        style = _RECORD_STYLES.get(type(record), "white")
        row_style = "reverse" if index == selected else None
        table.add_row(
            letter_for_index(index) or "-",
            f"[{style}]{record.code}[/{style}]",
            record.arrow,
            record.name,
            style=row_style,
        )
    return table


def render_view(state: ReconciliationState, pending: DeletePending) -> RenderableType:
    """Layout for the interactive watch display."""
    saves: RenderableType
    if not state:
        saves = Text("No saves found", style="dim")
    else:
        saves = state_table(state, pending)

    help_text = Text()
    help_text.append(describe_pending(pending) + "\n")
    help_text.append("press 'q' to quit", style="dim")

    return Group(
        Panel(saves, title="Saves", border_style="blue"),
        Panel(help_text, title="Keys", border_style="dim"),
    )


class Console:
    """
    Console output manager using Rich.

    Provides formatted output for the CLI commands.
    """

    def __init__(self, *, verbose: bool = False, colored: bool = True):
        """
        Initialize console.

        Args:
            verbose: Enable verbose output.
            colored: Enable colored output.
        """
        self.verbose = verbose
        self._console = RichConsole(no_color=not colored)

    @property
    def rich(self) -> RichConsole:
        """Underlying rich console."""
        return self._console

    def print(self, *args, **kwargs) -> None:
        """Print to console."""
        self._console.print(*args, **kwargs)

    def print_error(self, message: str) -> None:
        """Print error message."""
        self._console.print(f"[red]Error:[/red] {message}")

    def print_warning(self, message: str) -> None:
        """Print warning message."""
        self._console.print(f"[yellow]Warning:[/yellow] {message}")

    def print_success(self, message: str) -> None:
        """Print success message."""
        self._console.print(f"[green]{message}[/green]")

    def print_info(self, message: str) -> None:
        """Print info message."""
        self._console.print(f"[blue]{message}[/blue]")

    def print_state(self, state: ReconciliationState) -> None:
        """Print the lettered state table with a short summary."""
        if not state:
            self._console.print("[dim]No saves found[/dim]")
            return

        self._console.print(state_table(state))

        synced = sum(1 for r in state if isinstance(r, Synced))
        parts = [f"[green]{synced} synced[/green]"]
        if state.pending:
            parts.append(f"[yellow]{len(state.pending)} to sync[/yellow]")
        self._console.print(f"{len(state)} saves: " + ", ".join(parts))

    def print_tick_result(self, result: TickResult, *, dry_run: bool = False) -> None:
        """Print summary panel for a tick."""
        copy_verb = "would copy" if dry_run else "copied"
        failures = result.failures
        status = "Dry run completed" if dry_run else "Sync completed"

        if failures:
            body = f"[red]{status} with errors[/red]\n"
        else:
            body = f"[green]{status}[/green]\n"
        body += f"Saves: {result.copied} {copy_verb}, {result.deleted} deleted, {len(failures)} errors"

        self._console.print(
            Panel(body, title="Summary", border_style="red" if failures else "green")
        )

    def confirm_delete(self, record: PresenceRecord) -> bool:
        """Ask before deleting a record from both directories."""
        where = {
            OriginOnly: "the save directory",
            BackupOnly: "the backup directory",
            Synced: "both directories",
        }[type(record)]
        return Confirm.ask(f"Delete [cyan]{record.name}[/cyan] from {where}?", console=self._console, default=False)


def create_console(*, verbose: bool = False, colored: bool = True) -> Console:
    """Create a console instance."""
    return Console(verbose=verbose, colored=colored)

"""Event sinks: rich console output and an append-only log file."""

from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.text import Text

from savesync.sync.events import EventKind, SyncEvent

_STYLE_MAP: dict[EventKind, tuple[str, str]] = {
    EventKind.COPIED: ("green", "✓"),
    EventKind.WOULD_COPY: ("cyan", "→"),
    EventKind.COPY_SKIPPED: ("dim", "○"),
    EventKind.SOURCE_MISSING: ("dim", "○"),
    EventKind.COPY_FAILED: ("red", "✗"),
    EventKind.DELETED: ("yellow", "×"),
    EventKind.DELETE_FAILED: ("red", "✗"),
    EventKind.DELETE_DEFERRED: ("yellow", "⚠"),
    EventKind.SCAN_FAILED: ("red", "✗"),
}


class SyncLogger:
    """Rich console output for sync events."""

    def __init__(self, console: Optional[Console] = None, verbose: bool = False):
        """Initialize logger.

        Args:
            console: Rich Console instance
            verbose: Also show skipped copies and deferred deletes
        """
        self.console = console or Console()
        self.verbose = verbose

    def emit(self, event: SyncEvent) -> None:
        """Display a sync event with appropriate styling."""
        if event.is_quiet and not self.verbose:
            return

        color, icon = _STYLE_MAP.get(event.kind, ("white", "?"))
        text = Text()
        text.append(f"{icon} ", style=color)
        text.append(event.message, style="red" if event.is_error else "")
        self.console.print(text)


class LogFileSink:
    """Appends one line per sync event to a log file."""

    TIME_FORMAT = "%Y-%m-%d %H:%M:%S.%f"

    def __init__(self, path: Path):
        self.path = path

    def emit(self, event: SyncEvent) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        level = "ERROR" if event.is_error else "INFO"
        stamp = event.timestamp.strftime(self.TIME_FORMAT)[:-3]
        with open(self.path, "a", encoding="utf-8") as f:
            f.write(f"[{stamp}][{level}] {event.message}\n")

# savesync Host Loop
# Poll-driven scan, render and reconcile loop behind 'savesync watch'

import queue
import threading
import time
from collections.abc import Callable
from typing import Optional

import click
from rich.console import RenderableType

from savesync.config.schema import SaveSyncConfig
from savesync.errors import ReconcileError, ScanError
from savesync.output.console import render_view
from savesync.sync.engine import ReconcileEngine, TickResult
from savesync.sync.events import EventKind, EventSink, NullSink, SyncEvent
from savesync.sync.pending import (
    NOT_DELETING,
    AwaitingIndex,
    DeletePending,
    cancel_delete,
    choose_index,
    request_delete,
)
from savesync.sync.records import ReconciliationState
from savesync.sync.scanner import scan_state

ESCAPE = "\x1b"
INTERRUPT_KEYS = frozenset({"\x03", "\x04"})  # Ctrl-C, Ctrl-D


class KeyReader:
    """
    Reads keystrokes on a daemon thread.

    click.getchar() blocks, so keys are pushed into a queue that the
    loop polls with a timeout.
    """

    def __init__(self, getchar: Callable[[], str] = click.getchar):
        self._getchar = getchar
        self._keys: "queue.Queue[str]" = queue.Queue()
        self._thread = threading.Thread(target=self._read, name="savesync-keys", daemon=True)

    def start(self) -> "KeyReader":
        self._thread.start()
        return self

    def _read(self) -> None:
        while True:
            try:
                key = self._getchar()
            except (KeyboardInterrupt, EOFError):
                self._keys.put("\x03")
                return
            self._keys.put(key)

    def poll(self, timeout: float) -> Optional[str]:
        """Wait up to timeout seconds for a key."""
        try:
            return self._keys.get(timeout=max(timeout, 0))
        except queue.Empty:
            return None


class HostLoop:
    """
    Drives the scanner and engine on a fixed tick.

    Every iteration re-scans and renders. Once per tick interval the
    engine acts on the latest state and the current delete selection.
    """

    def __init__(
        self,
        config: SaveSyncConfig,
        engine: ReconcileEngine,
        *,
        key_source: Callable[[float], Optional[str]],
        render: Callable[[RenderableType], None],
        sink: EventSink | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize host loop.

        Args:
            config: savesync configuration.
            engine: Reconcile engine bound to the configured directories.
            key_source: Returns a key or None, waiting at most the given seconds.
            render: Receives the renderable view after each successful scan.
            sink: Receiver for scan failure events.
            clock: Monotonic time source.
        """
        self.config = config
        self.engine = engine
        self.key_source = key_source
        self.render = render
        self.sink = sink or NullSink()
        self.clock = clock
        self.save_filter = config.get_filter()

        self.state: Optional[ReconciliationState] = None
        self.pending: DeletePending = NOT_DELETING
        self.scan_error: Optional[str] = None
        self.running = True

    def refresh(self) -> bool:
        """
        Re-scan both directories.

        Returns:
            True if the scan succeeded.
        """
        try:
            self.state = scan_state(self.config.save_dir, self.config.backup_dir, self.save_filter)
        except ScanError as e:
            # Only report when the failure changes, the loop re-scans every iteration
            if e.message != self.scan_error:
                self.sink.emit(SyncEvent(kind=EventKind.SCAN_FAILED, source=e.path, error=e.message))
            self.scan_error = e.message
            return False
        self.scan_error = None
        return True

    def view(self) -> RenderableType:
        """Watch display for the latest successful scan."""
        return render_view(self.state or ReconciliationState(), self.pending)

    def handle_key(self, key: str) -> None:
        """Apply a keystroke to the delete selection or quit."""
        if key in INTERRUPT_KEYS:
            self.running = False
        elif key == ESCAPE:
            self.pending = cancel_delete(self.pending)
        elif isinstance(self.pending, AwaitingIndex):
            self.pending = choose_index(self.pending, key)
        elif key == "q":
            self.running = False
        elif key == "d":
            self.pending = request_delete(self.pending)

    def step(self) -> TickResult:
        """
        Run one engine tick on the current state.

        Raises:
            ReconcileError: If a copy failed and the loop is configured to stop.
        """
        result = self.engine.tick(self.state or ReconciliationState(), self.pending)
        self.pending = result.pending

        copy_failures = [e for e in result.failures if e.kind == EventKind.COPY_FAILED]
        if copy_failures and self.config.loop.stop_on_copy_error:
            raise ReconcileError(f"{len(copy_failures)} copy operation(s) failed", copy_failures)
        return result

    def run(self) -> None:
        """Loop until the user quits or a copy fails."""
        interval = self.config.loop.tick_interval
        last_tick = self.clock()

        while self.running:
            scanned = self.refresh()
            if scanned:
                self.render(self.view())

            timeout = interval - (self.clock() - last_tick)
            key = self.key_source(max(timeout, 0.0))
            if key is not None:
                self.handle_key(key)
            if not self.running:
                break

            if self.clock() - last_tick >= interval:
                if scanned:
                    self.step()
                last_tick = self.clock()

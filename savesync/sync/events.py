# savesync Sync Events
# Structured events emitted by the scanner host and reconcile engine

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Optional, Protocol


class EventKind(str, Enum):
    """Types of sync events."""

    # Copy branch
    COPIED = "copied"
    WOULD_COPY = "would_copy"
    COPY_SKIPPED = "copy_skipped"  # Destination already exists
    SOURCE_MISSING = "source_missing"  # Source vanished before the copy
    COPY_FAILED = "copy_failed"

    # Delete branch
    DELETED = "deleted"
    DELETE_FAILED = "delete_failed"
    DELETE_DEFERRED = "delete_deferred"  # Index not in current state

    # Host loop
    SCAN_FAILED = "scan_failed"


_ERROR_KINDS = frozenset({EventKind.COPY_FAILED, EventKind.DELETE_FAILED, EventKind.SCAN_FAILED})
_QUIET_KINDS = frozenset({EventKind.COPY_SKIPPED, EventKind.SOURCE_MISSING, EventKind.DELETE_DEFERRED})


@dataclass(frozen=True)
class SyncEvent:
    """A single thing that happened (or failed) during a tick."""

    kind: EventKind
    name: str = ""
    source: Optional[Path] = None
    dest: Optional[Path] = None
    error: Optional[str] = None
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def is_error(self) -> bool:
        return self.kind in _ERROR_KINDS

    @property
    def is_quiet(self) -> bool:
        """Benign races only shown in verbose output."""
        return self.kind in _QUIET_KINDS

    @property
    def message(self) -> str:
        """Plain-text description of the event."""
        if self.kind == EventKind.COPIED:
            return f"copied {self.source} to {self.dest}"
        if self.kind == EventKind.WOULD_COPY:
            return f"would copy {self.source} to {self.dest}"
        if self.kind == EventKind.COPY_SKIPPED:
            return f"skipped {self.name}: {self.dest} already exists"
        if self.kind == EventKind.SOURCE_MISSING:
            return f"skipped {self.name}: {self.source} no longer exists"
        if self.kind == EventKind.COPY_FAILED:
            return f"copy failed for {self.name}: {self.error}"
        if self.kind == EventKind.DELETED:
            return f"deleted {self.source}"
        if self.kind == EventKind.DELETE_FAILED:
            return f"delete failed for {self.source}: {self.error}"
        if self.kind == EventKind.DELETE_DEFERRED:
            return f"delete deferred: {self.error}"
        return f"scan failed: {self.error}"


class EventSink(Protocol):
    """Anything that accepts sync events."""

    def emit(self, event: SyncEvent) -> None: ...


class NullSink:
    """Discards all events."""

    def emit(self, event: SyncEvent) -> None:
        pass


class FanoutSink:
    """Forwards every event to several sinks."""

    def __init__(self, *sinks: EventSink):
        self.sinks = list(sinks)

    def emit(self, event: SyncEvent) -> None:
        for sink in self.sinks:
            sink.emit(event)

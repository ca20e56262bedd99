# savesync Errors
# Exception hierarchy shared by scanner, host loop and CLI

from pathlib import Path
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from savesync.sync.events import SyncEvent


class SaveSyncError(Exception):
    """Base exception for savesync failures."""

    def __init__(self, message: str, path: Optional[Path] = None):
        self.message = message
        self.path = path
        super().__init__(message)


class ScanError(SaveSyncError):
    """A directory listing or stat failed while building the state."""


class ReconcileError(SaveSyncError):
    """One or more copies failed during a synchronization tick."""

    def __init__(self, message: str, failures: "list[SyncEvent]"):
        self.failures = failures
        super().__init__(message)

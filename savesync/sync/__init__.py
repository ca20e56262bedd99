# savesync Sync Module
# Presence model, state scanner and reconcile engine

from savesync.sync.engine import ReconcileEngine, TickResult
from savesync.sync.events import EventKind, EventSink, FanoutSink, NullSink, SyncEvent
from savesync.sync.pending import (
    AWAITING_INDEX,
    NOT_DELETING,
    AwaitingIndex,
    Delete,
    DeletePending,
    NotDeleting,
    index_for_letter,
    letter_for_index,
)
from savesync.sync.records import (
    BackupOnly,
    OriginOnly,
    PresenceRecord,
    ReconciliationState,
    SaveFile,
    Synced,
    describe,
)
from savesync.sync.scanner import SaveFilter, list_save_files, scan_state

__all__ = [
    # Records
    "SaveFile",
    "OriginOnly",
    "BackupOnly",
    "Synced",
    "PresenceRecord",
    "ReconciliationState",
    "describe",
    # Delete selection
    "DeletePending",
    "NotDeleting",
    "AwaitingIndex",
    "Delete",
    "NOT_DELETING",
    "AWAITING_INDEX",
    "letter_for_index",
    "index_for_letter",
    # Scanner
    "SaveFilter",
    "list_save_files",
    "scan_state",
    # Events
    "EventKind",
    "SyncEvent",
    "EventSink",
    "NullSink",
    "FanoutSink",
    # Engine
    "ReconcileEngine",
    "TickResult",
]

# savesync Reconcile Engine
# Acts on a scanned state: deletes a requested pair or copies missing sides

from dataclasses import dataclass, field
from pathlib import Path

from savesync.sync.events import EventKind, EventSink, NullSink, SyncEvent
from savesync.sync.pending import NOT_DELETING, Delete, DeletePending
from savesync.sync.records import (
    BackupOnly,
    OriginOnly,
    PresenceRecord,
    ReconciliationState,
    Synced,
)
from savesync.utils.paths import copy_no_clobber, remove_if_exists


@dataclass
class TickResult:
    """Outcome of one engine tick."""

    pending: DeletePending
    events: list[SyncEvent] = field(default_factory=list)

    @property
    def failures(self) -> list[SyncEvent]:
        """Events describing failed operations."""
        return [e for e in self.events if e.is_error]

    @property
    def success(self) -> bool:
        return not self.failures

    @property
    def copied(self) -> int:
        return sum(1 for e in self.events if e.kind in (EventKind.COPIED, EventKind.WOULD_COPY))

    @property
    def deleted(self) -> int:
        return sum(1 for e in self.events if e.kind == EventKind.DELETED)


class ReconcileEngine:
    """
    Converges the save and backup directories.

    Each tick runs exactly one of two branches. A pending delete(i) that
    addresses a record runs the deletion branch. Anything else runs the
    synchronization branch, which copies every one-sided save to the other
    directory without overwriting existing files. A delete(i) past the end
    of the state stays pending while the copies go ahead.

    Per-record I/O errors never raise. They are reported as failure
    events and the remaining records are still attempted.
    """

    def __init__(
        self,
        save_dir: Path,
        backup_dir: Path,
        sink: EventSink | None = None,
        *,
        dry_run: bool = False,
    ):
        """
        Initialize reconcile engine.

        Args:
            save_dir: The live save directory.
            backup_dir: The backup directory.
            sink: Receiver for sync events.
            dry_run: If True, report copies without performing them.
        """
        self.save_dir = save_dir
        self.backup_dir = backup_dir
        self.sink = sink or NullSink()
        self.dry_run = dry_run

    def tick(self, state: ReconciliationState, pending: DeletePending) -> TickResult:
        """
        Run one reconciliation step.

        Args:
            state: Freshly scanned state.
            pending: Current delete selection.

        Returns:
            TickResult with the new delete selection and emitted events.
        """
        if isinstance(pending, Delete):
            return self._delete(state, pending)
        return self._sync(state, pending)

    def _emit(self, result: TickResult, event: SyncEvent) -> None:
        result.events.append(event)
        self.sink.emit(event)

    def _delete(self, state: ReconciliationState, pending: Delete) -> TickResult:
        record = state.get(pending.index)
        if record is None:
            # Keep the request for a fresher state or a cancel, backups continue
            result = TickResult(pending=pending)
            self._emit(
                result,
                SyncEvent(
                    kind=EventKind.DELETE_DEFERRED,
                    error=f"no save at position {pending.index} (of {len(state)})",
                ),
            )
            self._copy_missing(result, state)
            return result

        result = TickResult(pending=NOT_DELETING)
        for path in _deletion_order(record):
            try:
                removed = remove_if_exists(path)
            except OSError as e:
                self._emit(
                    result,
                    SyncEvent(kind=EventKind.DELETE_FAILED, name=record.name, source=path, error=str(e)),
                )
                # Keep the origin when its backup could not be removed
                break
            if removed:
                self._emit(result, SyncEvent(kind=EventKind.DELETED, name=record.name, source=path))
        return result

    def _sync(self, state: ReconciliationState, pending: DeletePending) -> TickResult:
        result = TickResult(pending=pending)
        self._copy_missing(result, state)
        return result

    def _copy_missing(self, result: TickResult, state: ReconciliationState) -> None:
        for record in state:
            match record:
                case OriginOnly(origin=origin):
                    self._copy(result, record.name, origin.path, self.backup_dir / origin.name)
                case BackupOnly(backup=backup):
                    self._copy(result, record.name, backup.path, self.save_dir / backup.name)
                case Synced():
                    pass
                case _:
                    raise TypeError(f"Unknown presence record: {record!r}")

    def _copy(self, result: TickResult, name: str, source: Path, dest: Path) -> None:
        if dest.exists():
            self._emit(result, SyncEvent(kind=EventKind.COPY_SKIPPED, name=name, source=source, dest=dest))
            return

        if not source.exists():
            self._emit(result, SyncEvent(kind=EventKind.SOURCE_MISSING, name=name, source=source, dest=dest))
            return

        if self.dry_run:
            self._emit(result, SyncEvent(kind=EventKind.WOULD_COPY, name=name, source=source, dest=dest))
            return

        try:
            copied = copy_no_clobber(source, dest)
        except FileNotFoundError as e:
            if source.exists():
                self._emit(
                    result,
                    SyncEvent(kind=EventKind.COPY_FAILED, name=name, source=source, dest=dest, error=str(e)),
                )
            else:
                self._emit(result, SyncEvent(kind=EventKind.SOURCE_MISSING, name=name, source=source, dest=dest))
            return
        except OSError as e:
            self._emit(
                result,
                SyncEvent(kind=EventKind.COPY_FAILED, name=name, source=source, dest=dest, error=str(e)),
            )
            return

        kind = EventKind.COPIED if copied else EventKind.COPY_SKIPPED
        self._emit(result, SyncEvent(kind=kind, name=name, source=source, dest=dest))


def _deletion_order(record: PresenceRecord) -> tuple[Path, ...]:
    """Paths to remove for a record, backup before origin."""
    match record:
        case OriginOnly(origin=origin):
            return (origin.path,)
        case BackupOnly(backup=backup):
            return (backup.path,)
        case Synced(origin=origin, backup=backup):
            return (backup.path, origin.path)
        case _:
            raise TypeError(f"Unknown presence record: {record!r}")

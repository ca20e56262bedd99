# savesync State Scanner
# Classifies save files found in the save and backup directories

from dataclasses import dataclass
from pathlib import Path

from savesync.errors import ScanError
from savesync.sync.records import (
    BackupOnly,
    OriginOnly,
    PresenceRecord,
    ReconciliationState,
    SaveFile,
    Synced,
)
from savesync.utils.paths import get_mtime, list_entries


@dataclass(frozen=True)
class SaveFilter:
    """
    Predicate selecting the files that count as saves.

    A file qualifies if it is not a directory, has the configured
    extension and its name starts with the configured prefix.
    """

    prefix: str = "Saved"
    extension: str = "broguesave"

    def matches(self, path: Path) -> bool:
        return (
            path.is_file()
            and path.suffix == f".{self.extension}"
            and path.name.startswith(self.prefix)
        )


def list_save_files(directory: Path, save_filter: SaveFilter) -> list[SaveFile]:
    """
    List qualifying save files directly inside a directory.

    Args:
        directory: Directory to list.
        save_filter: Save file predicate.

    Returns:
        Save files with their modification times.

    Raises:
        ScanError: If the directory cannot be listed or a file vanished
            between listing and stat.
    """
    try:
        entries = list_entries(directory)
    except OSError as e:
        raise ScanError(f"Cannot list {directory}: {e}", path=directory) from e

    files: list[SaveFile] = []
    for path in entries:
        if not save_filter.matches(path):
            continue
        try:
            mtime = get_mtime(path)
        except OSError as e:
            raise ScanError(f"Cannot stat {path}: {e}", path=path) from e
        files.append(SaveFile(path=path, mtime=mtime))
    return files


def scan_state(
    save_dir: Path,
    backup_dir: Path,
    save_filter: SaveFilter | None = None,
) -> ReconciliationState:
    """
    Build the reconciliation state for a directory pair.

    Every origin file is seeded as OriginOnly. A backup file upgrades an
    existing OriginOnly to Synced, or is recorded as BackupOnly.

    Args:
        save_dir: The live save directory.
        backup_dir: The backup directory.
        save_filter: Save file predicate (defaults to Brogue saves).

    Returns:
        State sorted ascending by recency.

    Raises:
        ScanError: If either directory cannot be read. No partial state
            is returned.
    """
    save_filter = save_filter or SaveFilter()
    origin_files = list_save_files(save_dir, save_filter)
    backup_files = list_save_files(backup_dir, save_filter)

    records: dict[str, PresenceRecord] = {}

    for save_file in origin_files:
        records.setdefault(save_file.name, OriginOnly(save_file))

    for backup_file in backup_files:
        existing = records.get(backup_file.name)
        if existing is None:
            records[backup_file.name] = BackupOnly(backup_file)
        elif isinstance(existing, OriginOnly):
            records[backup_file.name] = Synced(existing.origin, backup_file)

    return ReconciliationState.from_records(list(records.values()))

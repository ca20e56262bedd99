# savesync Presence Records
# Per-save classification of which directory holds a copy

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union


@dataclass(frozen=True)
class SaveFile:
    """A qualifying save file on disk, identified by its base name."""

    path: Path
    mtime: float

    @property
    def name(self) -> str:
        return self.path.name


@dataclass(frozen=True)
class OriginOnly:
    """Save exists in the save directory only."""

    origin: SaveFile

    code = "SAVE"
    arrow = "S<-xB"

    @property
    def name(self) -> str:
        return self.origin.name

    @property
    def recency(self) -> float:
        return self.origin.mtime


@dataclass(frozen=True)
class BackupOnly:
    """Save exists in the backup directory only."""

    backup: SaveFile

    code = "BACK"
    arrow = "Sx->B"

    @property
    def name(self) -> str:
        return self.backup.name

    @property
    def recency(self) -> float:
        return self.backup.mtime


@dataclass(frozen=True)
class Synced:
    """Save exists in both directories. Contents are never compared."""

    origin: SaveFile
    backup: SaveFile

    code = "SYNC"
    arrow = "S<->B"

    @property
    def name(self) -> str:
        return self.origin.name

    @property
    def recency(self) -> float:
        return max(self.origin.mtime, self.backup.mtime)


PresenceRecord = Union[OriginOnly, BackupOnly, Synced]


def describe(record: PresenceRecord) -> str:
    """Short display form, e.g. ``SYNC S<->B Saved #1.broguesave``."""
    return f"{record.code} {record.arrow} {record.name}"


@dataclass(frozen=True)
class ReconciliationState:
    """
    Ordered classification of every save found in one scan.

    Records are sorted ascending by recency. The order is only used for
    display and letter addressing.
    """

    records: tuple[PresenceRecord, ...] = field(default_factory=tuple)

    @classmethod
    def from_records(cls, records: Sequence[PresenceRecord]) -> ReconciliationState:
        """Build a state, sorting records by recency then name."""
        return cls(records=tuple(sorted(records, key=lambda r: (r.recency, r.name))))

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[PresenceRecord]:
        return iter(self.records)

    def __getitem__(self, index: int) -> PresenceRecord:
        return self.records[index]

    def get(self, index: int) -> Optional[PresenceRecord]:
        """Get record at index, or None when the index is out of range."""
        if 0 <= index < len(self.records):
            return self.records[index]
        return None

    def by_name(self, name: str) -> Optional[PresenceRecord]:
        """Find the record for a base name."""
        for record in self.records:
            if record.name == name:
                return record
        return None

    @property
    def pending(self) -> list[PresenceRecord]:
        """Records not yet present on both sides."""
        return [r for r in self.records if not isinstance(r, Synced)]

    @property
    def is_converged(self) -> bool:
        """True when every record is Synced."""
        return not self.pending

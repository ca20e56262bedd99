# savesync Scanner Tests
# Tests for save file filtering and presence classification

from pathlib import Path

import pytest

from savesync.errors import ScanError
from savesync.sync import scanner
from savesync.sync.records import BackupOnly, OriginOnly, Synced
from savesync.sync.scanner import SaveFilter, list_save_files, scan_state


class TestSaveFilter:
    """Tests for the save file predicate."""

    def test_matches_save(self, save_dir: Path, make_save):
        path = make_save(save_dir, "Saved #1.broguesave")
        assert SaveFilter().matches(path) is True

    def test_rejects_wrong_extension(self, save_dir: Path, make_save):
        path = make_save(save_dir, "Saved #1.txt")
        assert SaveFilter().matches(path) is False

    def test_rejects_wrong_prefix(self, save_dir: Path, make_save):
        path = make_save(save_dir, "Recording #1.broguesave")
        assert SaveFilter().matches(path) is False

    def test_rejects_directory(self, save_dir: Path):
        path = save_dir / "Saved #2.broguesave"
        path.mkdir()
        assert SaveFilter().matches(path) is False

    def test_custom_filter(self, save_dir: Path, make_save):
        path = make_save(save_dir, "slot1.sav")
        assert SaveFilter(prefix="slot", extension="sav").matches(path) is True
        assert SaveFilter().matches(path) is False


class TestListSaveFiles:
    """Tests for directory listing."""

    def test_filters_entries(self, save_dir: Path, make_save):
        """Only qualifying files are listed."""
        make_save(save_dir, "Saved #1.broguesave")
        make_save(save_dir, "notes.txt")
        (save_dir / "Saved #2.broguesave").mkdir()

        files = list_save_files(save_dir, SaveFilter())
        assert [f.name for f in files] == ["Saved #1.broguesave"]

    def test_records_mtime(self, save_dir: Path, make_save):
        make_save(save_dir, "Saved #1.broguesave", mtime=1_000_000)
        files = list_save_files(save_dir, SaveFilter())
        assert files[0].mtime == 1_000_000

    def test_missing_directory(self, temp_dir: Path):
        with pytest.raises(ScanError) as exc_info:
            list_save_files(temp_dir / "missing", SaveFilter())
        assert exc_info.value.path == temp_dir / "missing"
        assert isinstance(exc_info.value.__cause__, OSError)

    def test_file_vanishes_before_stat(self, save_dir: Path, make_save, monkeypatch: pytest.MonkeyPatch):
        """A file deleted between listing and stat fails the scan."""
        make_save(save_dir, "Saved #1.broguesave")

        def vanished(path: Path) -> float:
            raise FileNotFoundError(2, "No such file", str(path))

        monkeypatch.setattr(scanner, "get_mtime", vanished)
        with pytest.raises(ScanError):
            list_save_files(save_dir, SaveFilter())


class TestScanState:
    """Tests for presence classification."""

    def test_empty_directories(self, save_dir: Path, backup_dir: Path):
        state = scan_state(save_dir, backup_dir)
        assert len(state) == 0
        assert state.is_converged

    def test_classification(self, save_dir: Path, backup_dir: Path, make_save):
        """Origin-only, backup-only and common names get one record each."""
        origin_only = ["Saved #1.broguesave", "Saved #2.broguesave"]
        backup_only = ["Saved #3.broguesave"]
        common = ["Saved #4.broguesave", "Saved #5.broguesave"]

        for name in origin_only + common:
            make_save(save_dir, name)
        for name in backup_only + common:
            make_save(backup_dir, name)

        state = scan_state(save_dir, backup_dir)

        assert len(state) == 5
        for name in origin_only:
            assert isinstance(state.by_name(name), OriginOnly)
        for name in backup_only:
            assert isinstance(state.by_name(name), BackupOnly)
        for name in common:
            record = state.by_name(name)
            assert isinstance(record, Synced)
            assert record.origin.path == save_dir / name
            assert record.backup.path == backup_dir / name

    def test_one_record_per_name(self, save_dir: Path, backup_dir: Path, make_save):
        make_save(save_dir, "Saved #1.broguesave")
        make_save(backup_dir, "Saved #1.broguesave")

        state = scan_state(save_dir, backup_dir)
        assert [r.name for r in state] == ["Saved #1.broguesave"]

    def test_filter_end_to_end(self, save_dir: Path, backup_dir: Path, make_save):
        """Non-saves and directories never appear in the state."""
        make_save(save_dir, "Saved #1.broguesave")
        make_save(save_dir, "notes.txt")
        (save_dir / "Saved #2.broguesave").mkdir()
        make_save(backup_dir, "Other #3.broguesave")

        state = scan_state(save_dir, backup_dir)
        assert [r.name for r in state] == ["Saved #1.broguesave"]
        assert isinstance(state[0], OriginOnly)

    def test_ordering_by_recency(self, save_dir: Path, backup_dir: Path, make_save):
        make_save(save_dir, "Saved #new.broguesave", mtime=3000)
        make_save(save_dir, "Saved #old.broguesave", mtime=1000)
        make_save(backup_dir, "Saved #mid.broguesave", mtime=2000)

        state = scan_state(save_dir, backup_dir)
        assert [r.name for r in state] == [
            "Saved #old.broguesave",
            "Saved #mid.broguesave",
            "Saved #new.broguesave",
        ]

    def test_synced_recency_is_latest_side(self, save_dir: Path, backup_dir: Path, make_save):
        """A synced record sorts by the newer of its two files."""
        make_save(save_dir, "Saved #a.broguesave", mtime=1000)
        make_save(backup_dir, "Saved #a.broguesave", mtime=4000)
        make_save(save_dir, "Saved #b.broguesave", mtime=3000)

        state = scan_state(save_dir, backup_dir)

        synced = state.by_name("Saved #a.broguesave")
        assert synced.recency == 4000
        assert [r.name for r in state] == ["Saved #b.broguesave", "Saved #a.broguesave"]

    def test_missing_backup_directory(self, save_dir: Path, temp_dir: Path, make_save):
        """No partial state is returned when one side is unreadable."""
        make_save(save_dir, "Saved #1.broguesave")
        with pytest.raises(ScanError):
            scan_state(save_dir, temp_dir / "gone")

    def test_scan_is_read_only(self, save_dir: Path, backup_dir: Path, make_save):
        make_save(save_dir, "Saved #1.broguesave")
        scan_state(save_dir, backup_dir)
        assert list(backup_dir.iterdir()) == []

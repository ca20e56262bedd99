# savesync Test Fixtures
# Pytest fixtures for savesync tests

import os
import tempfile
from collections.abc import Callable, Generator
from pathlib import Path

import pytest
import yaml


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_home(temp_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Create a temporary home directory."""
    home = temp_dir / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("SAVESYNC_CONFIG", raising=False)
    return home


@pytest.fixture
def save_dir(temp_dir: Path) -> Path:
    """Create a mock game save directory."""
    path = temp_dir / "saves"
    path.mkdir()
    return path


@pytest.fixture
def backup_dir(temp_dir: Path) -> Path:
    """Create a mock backup directory."""
    path = temp_dir / "backup"
    path.mkdir()
    return path


@pytest.fixture
def make_save() -> Callable[..., Path]:
    """Factory writing a file with optional content and modification time."""

    def _make_save(directory: Path, name: str, content: str = "save", mtime: float | None = None) -> Path:
        path = directory / name
        path.write_text(content, encoding="utf-8")
        if mtime is not None:
            os.utime(path, (mtime, mtime))
        return path

    return _make_save


@pytest.fixture
def sample_config(temp_dir: Path, save_dir: Path, backup_dir: Path) -> dict:
    """Create sample configuration dict."""
    return {
        "directories": {
            "save_dir": str(save_dir),
            "backup_dir": str(backup_dir),
        },
        "filter": {"prefix": "Saved", "extension": "broguesave"},
        "loop": {"tick_interval_ms": 10, "stop_on_copy_error": True},
        "output": {
            "verbose": False,
            "colored": False,
            "log_file": str(temp_dir / "logs" / "savesync.log"),
        },
    }


@pytest.fixture
def config_file(temp_dir: Path, sample_config: dict) -> Path:
    """Create a configuration file."""
    config_path = temp_dir / "config" / "config.yaml"
    config_path.parent.mkdir(parents=True)

    with open(config_path, "w", encoding="utf-8") as f:
        yaml.dump(sample_config, f, default_flow_style=False)

    return config_path

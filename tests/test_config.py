# savesync Config Tests
# Tests for configuration loading and validation

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from savesync.config.defaults import DEFAULT_CONFIG, generate_default_config
from savesync.config.loader import (
    ensure_config_exists,
    get_config_path,
    load_config,
    load_or_create_config,
    validate_config_file,
)
from savesync.config.schema import FilterConfig, LoopConfig, SaveSyncConfig


class TestSaveSyncConfig:
    """Tests for SaveSyncConfig schema."""

    def test_defaults(self, temp_home: Path):
        config = SaveSyncConfig()
        assert config.backup_dir == temp_home / ".brogue"
        assert config.save_dir == temp_home / "Library" / "Application Support" / "Brogue" / "Brogue CE"
        assert config.filter.prefix == "Saved"
        assert config.filter.extension == "broguesave"
        assert config.loop.tick_interval_ms == 250

    def test_full_config(self, sample_config: dict, save_dir: Path):
        config = SaveSyncConfig.model_validate(sample_config)
        assert config.save_dir == save_dir
        assert config.loop.tick_interval == 0.01
        assert config.output.colored is False

    def test_get_filter(self, sample_config: dict):
        save_filter = SaveSyncConfig.model_validate(sample_config).get_filter()
        assert save_filter.prefix == "Saved"
        assert save_filter.extension == "broguesave"

    def test_env_vars_expanded(self, temp_dir: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("SAVESYNC_TEST_ROOT", str(temp_dir))
        config = SaveSyncConfig.model_validate(
            {"directories": {"backup_dir": "$SAVESYNC_TEST_ROOT/backups"}, "output": {"log_file": None}}
        )
        assert config.backup_dir == temp_dir / "backups"
        assert config.output.log_file is None


class TestFilterConfig:
    """Tests for filter validation."""

    def test_extension_dot_stripped(self):
        assert FilterConfig(extension=".broguesave").extension == "broguesave"

    def test_empty_prefix_rejected(self):
        with pytest.raises(ValidationError):
            FilterConfig(prefix="  ")

    def test_dot_only_extension_rejected(self):
        with pytest.raises(ValidationError):
            FilterConfig(extension=".")


class TestLoopConfig:
    """Tests for loop settings."""

    def test_tick_must_be_positive(self):
        with pytest.raises(ValidationError):
            LoopConfig(tick_interval_ms=0)


class TestConfigLoader:
    """Tests for config loading and saving."""

    def test_load_config(self, config_file: Path, save_dir: Path):
        config = load_config(config_file)
        assert config.save_dir == save_dir

    def test_load_missing_config(self, temp_dir: Path):
        with pytest.raises(FileNotFoundError):
            load_config(temp_dir / "nonexistent.yaml")

    def test_partial_config_merged(self, temp_dir: Path, temp_home: Path):
        """Missing sections and keys fall back to defaults."""
        config_path = temp_dir / "partial.yaml"
        config_path.write_text("loop:\n  tick_interval_ms: 500\n", encoding="utf-8")

        config = load_config(config_path)
        assert config.loop.tick_interval_ms == 500
        assert config.loop.stop_on_copy_error is True
        assert config.filter.prefix == "Saved"

    def test_empty_file_uses_defaults(self, temp_dir: Path, temp_home: Path):
        config_path = temp_dir / "empty.yaml"
        config_path.write_text("", encoding="utf-8")
        assert load_config(config_path).loop.tick_interval_ms == 250

    def test_non_mapping_rejected(self, temp_dir: Path):
        config_path = temp_dir / "list.yaml"
        config_path.write_text("- a\n- b\n", encoding="utf-8")

        with pytest.raises(ValueError, match="must be a mapping"):
            load_config(config_path)

    def test_config_path_env_override(self, temp_dir: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("SAVESYNC_CONFIG", str(temp_dir / "custom.yaml"))
        assert get_config_path() == temp_dir / "custom.yaml"

    def test_default_config_path(self, temp_home: Path):
        assert get_config_path() == temp_home / ".config" / "savesync" / "config.yaml"

    def test_ensure_config_exists(self, temp_home: Path):
        path, created = ensure_config_exists()
        assert created is True
        assert path.exists()

        path, created = ensure_config_exists()
        assert created is False

    def test_ensure_config_force(self, temp_dir: Path):
        config_path = temp_dir / "config.yaml"
        config_path.write_text("loop:\n  tick_interval_ms: 5\n", encoding="utf-8")

        _, created = ensure_config_exists(config_path, force=True)
        assert created is True
        assert load_config(config_path).loop.tick_interval_ms == 250

    def test_load_or_create(self, temp_home: Path):
        config, created = load_or_create_config()
        assert created is True
        assert config.backup_dir == temp_home / ".brogue"


class TestValidateConfigFile:
    """Tests for config file validation."""

    def test_valid(self, config_file: Path):
        is_valid, errors = validate_config_file(config_file)
        assert is_valid is True
        assert errors == []

    def test_invalid_yaml(self, temp_dir: Path):
        bad_file = temp_dir / "bad.yaml"
        bad_file.write_text("{ invalid yaml [", encoding="utf-8")

        is_valid, errors = validate_config_file(bad_file)
        assert is_valid is False
        assert "Invalid YAML" in errors[0]

    def test_invalid_values(self, temp_dir: Path):
        bad_file = temp_dir / "bad.yaml"
        bad_file.write_text("loop:\n  tick_interval_ms: -1\n", encoding="utf-8")

        is_valid, errors = validate_config_file(bad_file)
        assert is_valid is False
        assert errors[0].startswith("loop -> tick_interval_ms")

    def test_empty_file(self, temp_dir: Path):
        empty = temp_dir / "empty.yaml"
        empty.write_text("", encoding="utf-8")
        assert validate_config_file(empty) == (False, ["Configuration file is empty"])

    def test_non_mapping(self, temp_dir: Path):
        config_path = temp_dir / "scalar.yaml"
        config_path.write_text("just a string\n", encoding="utf-8")

        is_valid, errors = validate_config_file(config_path)
        assert is_valid is False
        assert "must be a mapping" in errors[0]

    def test_missing_file(self, temp_dir: Path):
        is_valid, errors = validate_config_file(temp_dir / "missing.yaml")
        assert is_valid is False


class TestDefaults:
    """Tests for default configuration."""

    def test_default_config_structure(self):
        assert set(DEFAULT_CONFIG) == {"directories", "filter", "loop", "output"}

    def test_generate_default_config(self):
        yaml_str = generate_default_config()
        assert yaml_str.startswith("# savesync configuration")

        parsed = yaml.safe_load(yaml_str)
        assert parsed == DEFAULT_CONFIG
        SaveSyncConfig.model_validate(parsed)

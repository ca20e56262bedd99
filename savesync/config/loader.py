# savesync Configuration Loader
# Locate, create, read and validate the YAML configuration file

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError

from savesync.config.defaults import generate_default_config, get_default_config
from savesync.config.schema import SaveSyncConfig


def get_config_path() -> Path:
    """Get the path to the configuration file."""
    # SAVESYNC_CONFIG wins over ~/.config/savesync/config.yaml
    env_path = os.environ.get("SAVESYNC_CONFIG")
    if env_path:
        return Path(env_path).expanduser()
    return Path.home() / ".config" / "savesync" / "config.yaml"


def load_config(config_path: Optional[Path] = None) -> SaveSyncConfig:
    """
    Load configuration from YAML file.

    Sections and keys missing from the file take their default values.

    Args:
        config_path: Optional path to config file. Uses default if not provided.

    Returns:
        SaveSyncConfig: Validated configuration object.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If the file does not hold a mapping.
        ValidationError: If a value is invalid.
    """
    config_path = config_path or get_config_path()
    if not config_path.exists():
        raise FileNotFoundError(
            f"Configuration file not found: {config_path}\nRun 'savesync config init' to create one."
        )

    data = _read_mapping(config_path)
    return SaveSyncConfig.model_validate(_merge_with_defaults(data))


def ensure_config_exists(config_path: Optional[Path] = None, *, force: bool = False) -> tuple[Path, bool]:
    """
    Ensure configuration file exists, creating default if needed.

    Args:
        config_path: Optional path to config file.
        force: Overwrite an existing file with the defaults.

    Returns:
        Tuple of (config_path, was_created).
    """
    config_path = config_path or get_config_path()
    if config_path.exists() and not force:
        return config_path, False

    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(generate_default_config(), encoding="utf-8")
    return config_path, True


def load_or_create_config(config_path: Optional[Path] = None) -> tuple[SaveSyncConfig, bool]:
    """Load config if it exists, or write and load the defaults."""
    config_path, was_created = ensure_config_exists(config_path)
    return load_config(config_path), was_created


def validate_config_file(config_path: Optional[Path] = None) -> tuple[bool, list[str]]:
    """
    Validate a configuration file without loading it into the system.

    Returns:
        Tuple of (is_valid, error_messages).
    """
    config_path = config_path or get_config_path()
    if not config_path.exists():
        return False, [f"Configuration file not found: {config_path}"]

    try:
        data = _read_mapping(config_path)
    except yaml.YAMLError as e:
        return False, [f"Invalid YAML syntax: {e}"]
    except ValueError as e:
        return False, [str(e)]

    if not data:
        return False, ["Configuration file is empty"]

    try:
        SaveSyncConfig.model_validate(data)
    except ValidationError as e:
        return False, [
            f"{' -> '.join(str(part) for part in error['loc'])}: {error['msg']}" for error in e.errors()
        ]
    return True, []


def _read_mapping(config_path: Path) -> dict[str, Any]:
    """
    Parse a YAML file whose top level must be a mapping.

    An empty file yields an empty mapping.

    Raises:
        yaml.YAMLError: If the file is not valid YAML.
        ValueError: If the top level is not a mapping.
    """
    with open(config_path, encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Configuration must be a mapping, got {type(data).__name__}: {config_path}")
    return data


def _merge_with_defaults(data: dict[str, Any]) -> dict[str, Any]:
    """Overlay loaded sections onto the defaults, key by key."""
    result = get_default_config()
    for section, values in data.items():
        if isinstance(values, dict) and isinstance(result.get(section), dict):
            result[section].update(values)
        else:
            result[section] = values
    return result

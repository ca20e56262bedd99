# savesync Configuration Module
# Handles YAML-based configuration loading, validation, and defaults

from savesync.config.defaults import DEFAULT_CONFIG, generate_default_config
from savesync.config.loader import (
    ensure_config_exists,
    get_config_path,
    load_config,
    load_or_create_config,
    validate_config_file,
)
from savesync.config.schema import (
    DirectoriesConfig,
    FilterConfig,
    LoopConfig,
    OutputConfig,
    SaveSyncConfig,
)

__all__ = [
    # Schema
    "SaveSyncConfig",
    "DirectoriesConfig",
    "FilterConfig",
    "LoopConfig",
    "OutputConfig",
    # Loader
    "load_config",
    "get_config_path",
    "ensure_config_exists",
    "load_or_create_config",
    "validate_config_file",
    # Defaults
    "DEFAULT_CONFIG",
    "generate_default_config",
]

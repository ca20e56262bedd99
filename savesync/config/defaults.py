# savesync Default Configuration
# Default configuration as Python dict and YAML generator

import copy
from typing import Any

import yaml

DEFAULT_CONFIG: dict[str, Any] = {
    "directories": {
        "save_dir": "~/Library/Application Support/Brogue/Brogue CE",
        "backup_dir": "~/.brogue",
    },
    "filter": {
        "prefix": "Saved",
        "extension": "broguesave",
    },
    "loop": {
        "tick_interval_ms": 250,
        "stop_on_copy_error": True,
    },
    "output": {
        "verbose": False,
        "colored": True,
        "log_file": "~/.config/savesync/savesync.log",
    },
}


def get_default_config() -> dict[str, Any]:
    """Return a deep copy of the default configuration."""
    return copy.deepcopy(DEFAULT_CONFIG)


def generate_default_config() -> str:
    """Generate default configuration as YAML string with comments."""
    header = """# savesync configuration
#
# Keeps a game save directory and a backup directory in sync.
# Saves that exist on only one side are copied to the other side;
# existing files are never overwritten.
#
# directories:
#   save_dir:   live save directory written by the game
#   backup_dir: local backup directory (created by 'savesync init')
#
# filter:
#   Only files named '<prefix>*.<extension>' are synchronized.
#
# loop:
#   tick_interval_ms:   delay between reconcile steps in 'savesync watch'
#   stop_on_copy_error: stop watching when a copy fails

"""
    return header + yaml.dump(DEFAULT_CONFIG, default_flow_style=False, sort_keys=False, allow_unicode=True)

# savesync Utilities Module
# Helper functions for filesystem access

from savesync.utils.paths import (
    copy_no_clobber,
    ensure_dir,
    expand_path,
    get_mtime,
    list_entries,
    remove_if_exists,
)

__all__ = [
    "expand_path",
    "ensure_dir",
    "list_entries",
    "get_mtime",
    "copy_no_clobber",
    "remove_if_exists",
]

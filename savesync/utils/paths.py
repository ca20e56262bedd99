# savesync Path Utilities
# Filesystem primitives used by the scanner and the reconcile engine

import os
import shutil
from pathlib import Path


def expand_path(path: str | Path) -> Path:
    """
    Expand ~ and environment variables in path.

    Args:
        path: Path string or Path object.

    Returns:
        Expanded Path object.
    """
    path_str = os.path.expanduser(str(path))
    path_str = os.path.expandvars(path_str)
    return Path(path_str)


def ensure_dir(path: Path) -> Path:
    """Ensure directory exists, creating if necessary."""
    path.mkdir(parents=True, exist_ok=True)
    return path


def list_entries(directory: Path) -> list[Path]:
    """
    List the direct entries of a directory.

    Raises:
        OSError: If the directory cannot be read.
    """
    return sorted(directory.iterdir())


def get_mtime(path: Path) -> float:
    """
    Get modification time of a file.

    Raises:
        OSError: If the file vanished or cannot be stat'ed.
    """
    return path.stat().st_mtime


def copy_no_clobber(source: Path, dest: Path) -> bool:
    """
    Copy a file unless the destination already exists.

    The content is first written to a hidden temporary file next to the
    destination and then hard-linked into place, so a partial copy is never
    visible under the final name and a file that appears concurrently is
    never overwritten. On filesystems without hard links (FAT, exFAT, many
    SMB shares) the destination is created exclusively instead.

    Args:
        source: File to copy.
        dest: Destination file path.

    Returns:
        True if the file was copied, False if the destination already existed.

    Raises:
        OSError: If the source cannot be read or the destination written.
    """
    if dest.exists():
        return False

    temp_dest = dest.with_name(f".{dest.name}.tmp.{os.getpid()}")
    try:
        shutil.copy2(source, temp_dest)
        try:
            os.link(temp_dest, dest)
        except FileExistsError:
            return False
        except OSError:
            return _copy_exclusive(temp_dest, dest)
    finally:
        temp_dest.unlink(missing_ok=True)

    return True


def _copy_exclusive(source: Path, dest: Path) -> bool:
    """Copy into a destination that must not exist yet, removing it on failure."""
    try:
        out = open(dest, "xb")
    except FileExistsError:
        return False

    try:
        with out, open(source, "rb") as src:
            shutil.copyfileobj(src, out)
        shutil.copystat(source, dest)
    except OSError:
        dest.unlink(missing_ok=True)
        raise
    return True


def remove_if_exists(path: Path) -> bool:
    """
    Remove a file, treating an already missing file as success.

    Returns:
        True if a file was removed, False if it was already gone.

    Raises:
        OSError: If the file exists but cannot be removed.
    """
    try:
        path.unlink()
    except FileNotFoundError:
        return False
    return True

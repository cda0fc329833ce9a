"""Recursive size aggregation for cleanup targets.

Every function here is read-only and never raises for filesystem reasons:
a missing path is an ordinary, expected state and yields zeros, and an entry
that cannot be listed or stat'ed contributes nothing while the walk carries on.

Entries discovered during a walk are never followed through symlinks, so a
symlink loop cannot make a walk run forever. The root path itself is resolved
normally, which keeps symlinked roots such as macOS ``/tmp`` working.
"""

import logging
import os
from pathlib import Path

log = logging.getLogger(__name__)

# Substrings that mark a file name as transient
TRANSIENT_MARKERS = ("tmp", "temp", "cache")
BACKUP_AFFIX = "~"


def is_transient_name(name: str) -> bool:
    """Return True if a file name looks like a temporary or backup file."""
    if name.startswith(BACKUP_AFFIX) or name.endswith(BACKUP_AFFIX):
        return True
    return any(marker in name for marker in TRANSIENT_MARKERS)


def aggregate(path: Path | str) -> tuple[int, int, int]:
    """
    Measure everything beneath a path.

    Args:
        path: File or directory to measure

    Returns:
        Tuple of (total_bytes, file_count, dir_count). A subdirectory adds
        one to dir_count plus its own nested directories; the root is not
        counted. A file path yields its own size and a file count of one.
    """
    path = Path(path)
    try:
        if path.is_file():
            return path.stat().st_size, 1, 0
        if not path.is_dir():
            return 0, 0, 0
    except OSError:
        return 0, 0, 0

    total = files = dirs = 0
    stack: list[str | Path] = [path]
    while stack:
        current = stack.pop()
        try:
            with os.scandir(current) as entries:
                for entry in entries:
                    try:
                        if entry.is_file(follow_symlinks=False):
                            total += entry.stat(follow_symlinks=False).st_size
                            files += 1
                        elif entry.is_dir(follow_symlinks=False):
                            dirs += 1
                            stack.append(entry.path)
                    except OSError:
                        continue
        except OSError:
            continue

    log.debug("Aggregated %s: %d files, %d dirs, %d bytes", path, files, dirs, total)
    return total, files, dirs


def aggregate_transient(path: Path | str) -> tuple[int, int]:
    """
    Measure the transient-looking files beneath a directory.

    Subdirectories are always walked whatever their name, but only files
    whose own name passes ``is_transient_name`` are counted.

    Returns:
        Tuple of (total_bytes, file_count)
    """
    path = Path(path)
    try:
        if not path.is_dir():
            return 0, 0
    except OSError:
        return 0, 0

    total = files = 0
    stack: list[str | Path] = [path]
    while stack:
        current = stack.pop()
        try:
            with os.scandir(current) as entries:
                for entry in entries:
                    try:
                        if entry.is_dir(follow_symlinks=False):
                            stack.append(entry.path)
                        elif entry.is_file(follow_symlinks=False) and is_transient_name(
                            entry.name
                        ):
                            total += entry.stat(follow_symlinks=False).st_size
                            files += 1
                    except OSError:
                        continue
        except OSError:
            continue

    log.debug("Aggregated transient files in %s: %d files, %d bytes", path, files, total)
    return total, files

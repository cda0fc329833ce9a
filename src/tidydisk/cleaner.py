"""Best-effort deletion primitives for tidydisk.

A failed delete never stops the walk on its own. What happens to the failure
is decided by a ``FailureTracker`` built from the active ``FailurePolicy``.
"""

import logging
import os
import shutil
import sys
from pathlib import Path

from tidydisk.aggregator import is_transient_name
from tidydisk.errors import DeletionError
from tidydisk.models import FailurePolicy

log = logging.getLogger(__name__)


class FailureTracker:
    """Apply a failure policy to individual delete failures."""

    def __init__(self, policy: FailurePolicy = FailurePolicy.SILENT):
        self.policy = FailurePolicy(policy)
        self.errors: list[str] = []

    def record(self, path: Path | str, exc: OSError) -> None:
        """Handle one failed delete.

        Raises:
            DeletionError: Under the abort policy.
        """
        log.debug("Could not delete %s: %s", path, exc)
        if self.policy == FailurePolicy.ABORT:
            raise DeletionError(Path(path), exc)
        if self.policy == FailurePolicy.COLLECT:
            self.errors.append(f"{path}: {exc}")

    @property
    def failed(self) -> int:
        return len(self.errors)


def _unlink(path: Path | str, tracker: FailureTracker) -> bool:
    try:
        os.unlink(path)
        return True
    except FileNotFoundError:
        # Already gone, e.g. removed by another process mid-walk
        return True
    except OSError as e:
        tracker.record(path, e)
        return False


def remove_tree(path: Path | str, tracker: FailureTracker) -> bool:
    """
    Remove a directory tree with ``shutil.rmtree``, best-effort.

    Symlinks inside the tree are unlinked, never followed. Every entry that
    cannot be removed goes to ``tracker`` and the rest of the tree is still
    removed.

    Args:
        path: Directory to remove
        tracker: Receives every individual failure

    Returns:
        True if the directory itself was removed
    """

    def on_error(func, failed_path, exc_info):
        exc = exc_info[1] if isinstance(exc_info, tuple) else exc_info
        if isinstance(exc, FileNotFoundError):
            return
        tracker.record(failed_path, exc)

    if sys.version_info >= (3, 12):
        shutil.rmtree(path, onexc=on_error)
    else:
        shutil.rmtree(path, onerror=on_error)
    return not os.path.lexists(path)


def empty_directory(path: Path, tracker: FailureTracker) -> None:
    """
    Delete every direct entry of a directory, keeping the directory itself.

    Only regular files and subdirectories are removed, the same entries
    ``aggregate`` counts. Symlinks, sockets and FIFOs directly under the
    root are left alone. A plain file path is deleted outright.

    Args:
        path: Directory to empty
        tracker: Receives every individual failure
    """
    if path.is_file():
        _unlink(path, tracker)
        return
    if not path.is_dir():
        return

    try:
        with os.scandir(path) as it:
            entries = list(it)
    except OSError as e:
        tracker.record(path, e)
        return

    for entry in entries:
        try:
            if entry.is_dir(follow_symlinks=False):
                remove_tree(entry.path, tracker)
            elif entry.is_file(follow_symlinks=False):
                _unlink(entry.path, tracker)
            else:
                log.debug("Skipping special entry %s", entry.path)
        except OSError:
            continue


def remove_transient_files(path: Path, tracker: FailureTracker) -> None:
    """
    Delete transient-looking files beneath a directory.

    Directories are walked but never removed.

    Args:
        path: Directory to sweep
        tracker: Receives every individual failure
    """
    if not path.is_dir():
        return

    stack: list[str | Path] = [path]
    while stack:
        current = stack.pop()
        try:
            with os.scandir(current) as it:
                entries = list(it)
        except OSError:
            continue

        for entry in entries:
            try:
                if entry.is_dir(follow_symlinks=False):
                    stack.append(entry.path)
                elif entry.is_file(follow_symlinks=False) and is_transient_name(entry.name):
                    _unlink(entry.path, tracker)
            except OSError:
                continue

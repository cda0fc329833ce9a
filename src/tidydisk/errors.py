"""Exception types for tidydisk."""

from pathlib import Path


class TidyDiskError(Exception):
    """Base class for all tidydisk errors."""


class NotSupportedError(TidyDiskError):
    """The requested operation is not available on this platform.

    Callers treat this as informational: it never counts toward the error
    tally or the exit code.
    """


class DeletionError(TidyDiskError):
    """A delete failed under the ``abort`` failure policy."""

    def __init__(self, path: Path, cause: OSError):
        super().__init__(f"Failed to delete {path}: {cause}")
        self.path = path
        self.cause = cause


class ConfigError(TidyDiskError):
    """The configuration file holds invalid values."""

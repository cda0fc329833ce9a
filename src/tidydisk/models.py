"""Data models for tidydisk."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class FailurePolicy(str, Enum):
    """What to do when a single file or directory cannot be deleted."""

    SILENT = "silent"  # Swallow, keep going
    COLLECT = "collect"  # Record in the result, keep going
    ABORT = "abort"  # Raise DeletionError on the first failure


class Phase(str, Enum):
    """Stage of a session in the scan/clean lifecycle."""

    IDLE = "idle"
    SCANNING = "scanning"
    SCANNED = "scanned"
    CLEANING = "cleaning"
    CLEANED = "cleaned"


class ScanResult(BaseModel):
    """What a target holds, or what a clean removed (or would remove)."""

    file_count: int = Field(0, ge=0, description="Number of files counted")
    dir_count: int = Field(0, ge=0, description="Number of directories counted")
    size_bytes: int = Field(0, ge=0, description="Total size of the counted files")
    has_data: bool = Field(False, description="Whether anything was found")
    errors: list[str] = Field(
        default_factory=list,
        description="Deletion failures recorded under the collect policy",
    )

    @classmethod
    def empty(cls) -> "ScanResult":
        """Result for a target that does not exist or holds nothing."""
        return cls()

    @classmethod
    def combine(cls, results: list["ScanResult"]) -> "ScanResult":
        """Sum counts of several results; has_data is true if any had data."""
        return cls(
            file_count=sum(r.file_count for r in results),
            dir_count=sum(r.dir_count for r in results),
            size_bytes=sum(r.size_bytes for r in results),
            has_data=any(r.has_data for r in results),
            errors=[e for r in results for e in r.errors],
        )

    @property
    def size_mb(self) -> float:
        """Size in mebibytes."""
        return self.size_bytes / (1024 * 1024)

    @property
    def total_items(self) -> int:
        """Files plus directories."""
        return self.file_count + self.dir_count

    @property
    def size_human(self) -> str:
        """Human-readable size string (binary units)."""
        return format_size(self.size_bytes)


class CleanReport(BaseModel):
    """Totals of one finished clean pass."""

    timestamp: datetime = Field(default_factory=datetime.now)
    size_bytes: int = Field(0, description="Bytes freed, or that would be freed")
    file_count: int = Field(0, description="Files deleted, or that would be deleted")
    targets_cleaned: int = Field(0, description="Number of enabled targets processed")
    errors: list[str] = Field(default_factory=list)
    dry_run: bool = Field(False, description="Whether this was a dry run")

    @property
    def size_mb(self) -> float:
        """Size in mebibytes."""
        return self.size_bytes / (1024 * 1024)

    @property
    def error_count(self) -> int:
        return len(self.errors)


def format_size(size_bytes: int) -> str:
    """Format bytes to a human-readable string."""
    if size_bytes >= 1024**3:
        return f"{size_bytes / (1024**3):.1f} GB"
    elif size_bytes >= 1024**2:
        return f"{size_bytes / (1024**2):.1f} MB"
    elif size_bytes >= 1024:
        return f"{size_bytes / 1024:.1f} KB"
    else:
        return f"{size_bytes} B"

"""Cleanup targets and their match rules.

A target owns exactly one match rule. The rules are a closed set of tagged
variants, each carrying its own scan and delete handler:

- ``WholeDirectory``: everything inside one directory (the directory stays)
- ``MultipleDirectories``: the same, for several directories summed together
- ``TempFilePattern``: only transient-looking files under a directory tree
"""

import logging
from pathlib import Path
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from tidydisk.aggregator import aggregate, aggregate_transient
from tidydisk.cleaner import FailureTracker, empty_directory, remove_transient_files
from tidydisk.models import FailurePolicy, ScanResult

log = logging.getLogger(__name__)


def _scan_directory(path: Path) -> ScanResult:
    size, files, dirs = aggregate(path)
    return ScanResult(
        file_count=files,
        dir_count=dirs,
        size_bytes=size,
        has_data=files + dirs > 0,
    )


class WholeDirectory(BaseModel):
    """Every file and subdirectory inside one directory."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["directory"] = "directory"
    path: Path

    def scan(self) -> ScanResult:
        return _scan_directory(self.path)

    def delete(self, tracker: FailureTracker) -> None:
        empty_directory(self.path, tracker)

    def describe(self) -> str:
        return str(self.path)


class MultipleDirectories(BaseModel):
    """Several independent directories treated as one target."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["directories"] = "directories"
    paths: tuple[Path, ...]

    def scan(self) -> ScanResult:
        return ScanResult.combine([_scan_directory(p) for p in self.paths])

    def delete(self, tracker: FailureTracker) -> None:
        for path in self.paths:
            empty_directory(path, tracker)

    def describe(self) -> str:
        return ", ".join(str(p) for p in self.paths)


class TempFilePattern(BaseModel):
    """Files under a directory tree whose names mark them as temporary."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["temp_files"] = "temp_files"
    path: Path

    def scan(self) -> ScanResult:
        size, files = aggregate_transient(self.path)
        return ScanResult(file_count=files, size_bytes=size, has_data=files > 0)

    def delete(self, tracker: FailureTracker) -> None:
        remove_transient_files(self.path, tracker)

    def describe(self) -> str:
        return f"{self.path} (temporary file names)"


MatchRule = Annotated[
    Union[WholeDirectory, MultipleDirectories, TempFilePattern],
    Field(discriminator="kind"),
]


class CleanupTarget(BaseModel):
    """A named, independently toggleable cleanup candidate."""

    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(..., min_length=1, frozen=True, description="Stable unique identifier")
    name: str = Field(..., frozen=True, description="Human-readable name")
    description: str = Field("", frozen=True, description="What this target contains")
    rule: MatchRule = Field(..., frozen=True, description="Which files belong to the target")
    enabled: bool = Field(True, description="Whether scan/clean passes include this target")

    def toggle(self) -> bool:
        """Flip ``enabled`` and return the new value."""
        self.enabled = not self.enabled
        return self.enabled

    def scan(self) -> ScanResult:
        """Measure what a clean would remove, without touching anything."""
        result = self.rule.scan()
        log.debug(
            "Scanned %s: %d files, %d dirs, %.2f MB",
            self.name,
            result.file_count,
            result.dir_count,
            result.size_mb,
        )
        return result

    def clean(
        self,
        dry_run: bool = False,
        policy: FailurePolicy = FailurePolicy.SILENT,
        precomputed: Optional[ScanResult] = None,
    ) -> ScanResult:
        """
        Delete the target's files on a best-effort basis.

        Args:
            dry_run: If True, report but delete nothing
            policy: How individual delete failures are handled
            precomputed: Scan result to report instead of re-scanning first

        Returns:
            The pre-deletion scan, so the reported figure is the intended
            effect even when some deletes fail. Failures recorded under the
            collect policy are attached as ``errors``.

        Raises:
            DeletionError: On the first failure, under the abort policy only.
        """
        if precomputed is not None:
            result = precomputed.model_copy(update={"errors": []})
        else:
            result = self.scan()

        if dry_run:
            log.info(
                "[DRY RUN] Would clean %s: %d files (%.2f MB)",
                self.name,
                result.file_count,
                result.size_mb,
            )
            return result

        if not result.has_data:
            return result

        log.info("Cleaning %s...", self.name)
        tracker = FailureTracker(policy)
        self.rule.delete(tracker)

        if tracker.errors:
            log.warning("%s: %d entries could not be deleted", self.name, tracker.failed)
            result = result.model_copy(update={"errors": list(tracker.errors)})
        return result

"""Scan/clean session state machine for tidydisk.

A session walks its targets through a fixed lifecycle::

    idle --scan()--> scanning --> scanned --clean()--> cleaning --> cleaned
    any phase --reset()--> idle (fresh catalog, all results cleared)

``scan()`` is accepted from idle or scanned, ``clean()`` only from scanned;
anywhere else both are silent no-ops, so duplicate key presses cannot start a
second pass. Selection changes are accepted only while idle or scanned, which
is also what keeps a toggle from racing a pass running in a worker thread.
"""

import logging
import threading
from typing import Callable, Optional

from tidydisk.catalog import build_catalog
from tidydisk.errors import DeletionError
from tidydisk.models import CleanReport, FailurePolicy, Phase, ScanResult
from tidydisk.targets import CleanupTarget

log = logging.getLogger(__name__)

CatalogFactory = Callable[[], list[CleanupTarget]]
ProgressCallback = Callable[[str, int, int], None]  # (target name, current, total)

SELECTABLE_PHASES = (Phase.IDLE, Phase.SCANNED)
SCANNABLE_PHASES = (Phase.IDLE, Phase.SCANNED)
CLEANABLE_PHASES = (Phase.SCANNED,)

IDLE_MESSAGE = "SPACE to select, ENTER to scan, C to clean, R to reset, Q to quit"


class Session:
    """Drive a catalog of cleanup targets through scan and clean passes."""

    def __init__(
        self,
        catalog_factory: Optional[CatalogFactory] = None,
        *,
        dry_run: bool = False,
        failure_policy: FailurePolicy = FailurePolicy.SILENT,
        reuse_scan: bool = False,
        auto_reset: bool = True,
    ):
        """
        Args:
            catalog_factory: Builds the target list; called now and on every reset
            dry_run: Report what a clean would remove without deleting anything
            failure_policy: How individual delete failures are handled
            reuse_scan: Clean from the last scan result instead of re-scanning
            auto_reset: Start over with a fresh catalog once a clean completes
        """
        self._catalog_factory = catalog_factory or build_catalog
        self.dry_run = dry_run
        self.failure_policy = FailurePolicy(failure_policy)
        self.reuse_scan = reuse_scan
        self.auto_reset = auto_reset

        self._lock = threading.Lock()
        self._generation = 0
        self.last_report: Optional[CleanReport] = None

        self.targets: list[CleanupTarget] = []
        self.scan_results: list[Optional[ScanResult]] = []
        self.clean_results: list[Optional[ScanResult]] = []
        self.phase = Phase.IDLE
        self.selected_index = 0
        self.status_message = IDLE_MESSAGE
        self._load_targets()

    def _load_targets(self) -> None:
        targets = list(self._catalog_factory())
        self.targets = targets
        self.scan_results = [None] * len(targets)
        self.clean_results = [None] * len(targets)
        self.phase = Phase.IDLE
        self.selected_index = 0
        self.status_message = IDLE_MESSAGE

    # ------------------------------------------------------------------
    # State queries
    # ------------------------------------------------------------------

    @property
    def can_select(self) -> bool:
        """Whether selection may change in the current phase."""
        return self.phase in SELECTABLE_PHASES

    @property
    def is_busy(self) -> bool:
        """Whether a scan or clean pass is in progress."""
        return self.phase in (Phase.SCANNING, Phase.CLEANING)

    @property
    def selected_target(self) -> Optional[CleanupTarget]:
        if not self.targets:
            return None
        return self.targets[self.selected_index]

    @property
    def enabled_count(self) -> int:
        return sum(1 for t in self.targets if t.enabled)

    @property
    def current_results(self) -> list[Optional[ScanResult]]:
        """The results sequence relevant to the current phase."""
        if self.phase == Phase.CLEANED:
            return self.clean_results
        return self.scan_results

    def _results(self, use_clean_results: bool) -> list[ScanResult]:
        results = self.clean_results if use_clean_results else self.scan_results
        return [r for r in results if r is not None]

    def get_total_bytes(self, use_clean_results: bool = False) -> int:
        """Sum of ``size_bytes`` over the populated result slots."""
        return sum(r.size_bytes for r in self._results(use_clean_results))

    def get_total_size(self, use_clean_results: bool = False) -> float:
        """Total size in MiB over the populated result slots."""
        return self.get_total_bytes(use_clean_results) / (1024 * 1024)

    def get_total_files(self, use_clean_results: bool = False) -> int:
        """Sum of ``file_count`` over the populated result slots."""
        return sum(r.file_count for r in self._results(use_clean_results))

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def toggle(self) -> bool:
        """Flip ``enabled`` on the target under the cursor."""
        with self._lock:
            if not self.can_select or not self.targets:
                return False
            target = self.targets[self.selected_index]
            target.toggle()
            log.debug("Toggled selection for %s: %s", target.id, target.enabled)
            return True

    def _set_all(self, value: Callable[[CleanupTarget], bool]) -> bool:
        with self._lock:
            if not self.can_select:
                return False
            for target in self.targets:
                target.enabled = value(target)
            return True

    def select_all(self) -> bool:
        """Enable every target."""
        return self._set_all(lambda t: True)

    def deselect_all(self) -> bool:
        """Disable every target."""
        return self._set_all(lambda t: False)

    def invert_selection(self) -> bool:
        """Flip ``enabled`` on every target."""
        return self._set_all(lambda t: not t.enabled)

    def move_next(self) -> bool:
        """Move the cursor down, wrapping to the top."""
        with self._lock:
            if not self.can_select or not self.targets:
                return False
            self.selected_index = (self.selected_index + 1) % len(self.targets)
            return True

    def move_previous(self) -> bool:
        """Move the cursor up, wrapping to the bottom."""
        with self._lock:
            if not self.can_select or not self.targets:
                return False
            self.selected_index = (self.selected_index - 1) % len(self.targets)
            return True

    def move_to(self, index: int) -> bool:
        """Put the cursor on a specific target."""
        with self._lock:
            if not self.can_select or not 0 <= index < len(self.targets):
                return False
            self.selected_index = index
            return True

    # ------------------------------------------------------------------
    # Passes
    # ------------------------------------------------------------------

    def _begin(self, allowed: tuple[Phase, ...], busy: Phase, message: str) -> Optional[int]:
        """Atomically enter a busy phase. Returns the generation, or None."""
        with self._lock:
            if self.phase not in allowed:
                log.debug("Ignoring %s request in phase %s", busy.value, self.phase.value)
                return None
            self.phase = busy
            self.status_message = message
            if busy == Phase.SCANNING:
                self.scan_results = [None] * len(self.targets)
            else:
                self.clean_results = [None] * len(self.targets)
            return self._generation

    def _finish(
        self,
        generation: int,
        done: Phase,
        message: str,
        report: Optional[CleanReport] = None,
    ) -> bool:
        """Leave a busy phase unless a reset happened meanwhile."""
        with self._lock:
            if generation != self._generation:
                log.debug("Discarding results of a pass interrupted by reset")
                return False
            self.phase = done
            self.status_message = message
            if report is not None:
                self.last_report = report
            return True

    def scan(self, progress_callback: Optional[ProgressCallback] = None) -> bool:
        """
        Measure every enabled target, in catalog order.

        Disabled targets keep an empty (None) slot. Any previous scan
        results are discarded first. A target that fails gets a result
        carrying the error; the session always leaves the scanning phase,
        even if ``progress_callback`` raises.

        Args:
            progress_callback: Optional callback(name, current, total)

        Returns:
            True if the pass ran, False if the phase did not allow it
        """
        generation = self._begin(SCANNABLE_PHASES, Phase.SCANNING, "Scanning...")
        if generation is None:
            return False

        targets = self.targets
        results = self.scan_results

        enabled = [(i, t) for i, t in enumerate(targets) if t.enabled]
        try:
            for current, (i, target) in enumerate(enabled, 1):
                if progress_callback:
                    progress_callback(target.name, current, len(enabled))
                try:
                    results[i] = target.scan()
                except Exception as e:
                    log.exception("Target '%s' failed during scan", target.id)
                    results[i] = ScanResult(errors=[f"{target.id}: {e}"])
        finally:
            self._finish(generation, Phase.SCANNED, "Scan complete! Press C to clean, or Q to quit")

        total = sum(r.size_bytes for r in results if r is not None)
        log.info("Scanning complete: %.2f MB in %d targets", total / (1024 * 1024), len(enabled))
        return True

    def clean(self, progress_callback: Optional[ProgressCallback] = None) -> bool:
        """
        Clean every enabled target, in catalog order.

        Only allowed straight after a scan, so reported totals always come
        from the most recent scan of this session. With ``auto_reset`` the
        session returns to idle with a fresh catalog afterwards; the totals
        stay available as ``last_report``.

        A target that fails unexpectedly is recorded in the report's errors
        and the pass moves on. Under the abort policy the first failed
        delete ends the pass. A pass interrupted by ``reset()`` leaves
        neither its phase nor its report behind.

        Args:
            progress_callback: Optional callback(name, current, total)

        Returns:
            True if the pass ran, False if the phase did not allow it
        """
        generation = self._begin(CLEANABLE_PHASES, Phase.CLEANING, "Cleaning...")
        if generation is None:
            return False

        targets = self.targets
        scan_results = self.scan_results
        results = self.clean_results
        errors: list[str] = []

        enabled = [(i, t) for i, t in enumerate(targets) if t.enabled]
        try:
            for current, (i, target) in enumerate(enabled, 1):
                if progress_callback:
                    progress_callback(target.name, current, len(enabled))
                precomputed = scan_results[i] if self.reuse_scan else None
                try:
                    result = target.clean(
                        dry_run=self.dry_run,
                        policy=self.failure_policy,
                        precomputed=precomputed,
                    )
                except DeletionError as e:
                    log.error("Cleaning aborted at %s: %s", target.id, e)
                    errors.append(str(e))
                    break
                except Exception as e:
                    log.exception("Target '%s' failed during clean", target.id)
                    errors.append(f"{target.id}: {e}")
                    continue
                results[i] = result
                errors.extend(result.errors)
        finally:
            report = self._build_report(results, errors)
            message = self._report_message(report)
            finished = self._finish(generation, Phase.CLEANED, message, report)

        log.info(message)
        if finished and self.auto_reset:
            self.reset(keep_report=True)
            self.status_message = message
        return True

    def _build_report(self, results: list[Optional[ScanResult]], errors: list[str]) -> CleanReport:
        cleaned = [r for r in results if r is not None]
        return CleanReport(
            size_bytes=sum(r.size_bytes for r in cleaned),
            file_count=sum(r.file_count for r in cleaned),
            targets_cleaned=len(cleaned),
            errors=errors,
            dry_run=self.dry_run,
        )

    def _report_message(self, report: CleanReport) -> str:
        if report.dry_run:
            message = f"Dry run complete! Would free {report.size_mb:.2f} MB"
        else:
            message = f"Cleaning complete! Freed {report.size_mb:.2f} MB"
        if report.errors:
            message += f" ({report.error_count} errors)"
        return message

    def reset(self, keep_report: bool = False) -> None:
        """Discard all results and rebuild the target list from the catalog.

        A pass still running in another thread finishes against the old
        target list and no longer affects this session.
        """
        with self._lock:
            self._generation += 1
            self._load_targets()
            if not keep_report:
                self.last_report = None
        log.debug("Session reset with %d targets", len(self.targets))

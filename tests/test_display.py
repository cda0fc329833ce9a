"""Tests for rich display helpers."""

from rich.console import Console

from tidydisk import display
from tidydisk.config import Settings
from tidydisk.models import CleanReport, ScanResult
from tidydisk.session import Session


def capture(monkeypatch) -> Console:
    """Swap the module console for a recording one."""
    recorder = Console(record=True, width=200)
    monkeypatch.setattr(display, "console", recorder)
    return recorder


class TestDescribeResult:
    def test_none_is_skipped(self):
        assert "skipped" in display.describe_result(None)

    def test_no_data(self):
        assert "nothing found" in display.describe_result(ScanResult())

    def test_with_data(self):
        result = ScanResult(file_count=3, size_bytes=2 * 1024 * 1024, has_data=True)
        assert display.describe_result(result) == "2.00 MB, 3 files"
        assert display.describe_result(result, cleaned=True).startswith("cleaned ")

    def test_with_errors(self):
        result = ScanResult(file_count=1, has_data=True, errors=["x"])
        assert "(1 errors)" in display.describe_result(result)


class TestShowTargets:
    def test_lists_targets(self, monkeypatch, sample_catalog):
        recorder = capture(monkeypatch)
        display.show_targets(sample_catalog())
        output = recorder.export_text()
        assert "Cleanup Targets" in output
        assert "Target A" in output
        assert "[✓]" in output


class TestShowScanResults:
    def test_totals(self, monkeypatch, sample_catalog):
        recorder = capture(monkeypatch)
        session = Session(sample_catalog, auto_reset=False)
        session.targets[1].enabled = False
        session.scan()

        display.show_scan_results(session)

        output = recorder.export_text()
        assert "Scan Results" in output
        assert "skipped" in output
        assert "Total: 0.00 MB (2 files)" in output


class TestShowSummary:
    def test_dry_run(self, monkeypatch):
        recorder = capture(monkeypatch)
        display.show_summary(CleanReport(size_bytes=1024 * 1024, file_count=4, dry_run=True))
        output = recorder.export_text()
        assert "[DRY RUN] Summary" in output
        assert "Would free approximately 1.00 MB" in output

    def test_real_run_with_errors(self, monkeypatch):
        recorder = capture(monkeypatch)
        errors = [f"/tmp/f{i}: denied" for i in range(7)]
        display.show_summary(CleanReport(size_bytes=0, errors=errors))
        output = recorder.export_text()
        assert "Freed 0.00 MB" in output
        assert "Errors encountered: 7" in output
        assert "...and 2 more" in output


class TestShowCleanResult:
    def test_nothing_to_clean(self, monkeypatch, sample_catalog):
        recorder = capture(monkeypatch)
        display.show_clean_result(sample_catalog()[0], ScanResult())
        assert "nothing to clean" in recorder.export_text()

    def test_dry_run(self, monkeypatch, sample_catalog):
        recorder = capture(monkeypatch)
        result = ScanResult(file_count=2, size_bytes=1037, has_data=True)
        display.show_clean_result(sample_catalog()[0], result, dry_run=True)
        assert "Would clean Target A: 2 files" in recorder.export_text()


class TestShowSettings:
    def test_shows_values_and_path(self, monkeypatch, isolate_config):
        recorder = capture(monkeypatch)
        display.show_settings(Settings(), isolate_config)
        output = recorder.export_text()
        assert "failure_policy" in output
        assert "silent" in output
        assert "not created yet" in output

"""Tests for CLI interface."""

import json
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from tidydisk import display
from tidydisk.cli import app
from tidydisk.errors import NotSupportedError
from tidydisk.targets import CleanupTarget, WholeDirectory

runner = CliRunner()


@pytest.fixture(autouse=True)
def wide_console(monkeypatch):
    """Keep rich tables from wrapping ids and numbers."""
    monkeypatch.setattr(display.console, "width", 200)


@pytest.fixture
def extra_dir_config(isolate_config, sample_tree):
    """Config offering target_a as custom_1."""
    dir_a, _ = sample_tree
    isolate_config.parent.mkdir(parents=True)
    isolate_config.write_text(json.dumps({"extra_directories": [str(dir_a)]}))
    return dir_a


class TestVersion:
    def test_version_flag(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "tidydisk version" in result.output

    def test_version_short_flag(self):
        result = runner.invoke(app, ["-V"])
        assert result.exit_code == 0
        assert "tidydisk version" in result.output


class TestHelp:
    def test_help_flag(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        for command in ("list", "scan", "clean", "tui", "config"):
            assert command in result.output

    def test_clean_help(self):
        result = runner.invoke(app, ["clean", "--help"])
        assert result.exit_code == 0
        assert "--dry-run" in result.output
        assert "--recycle" in result.output


class TestList:
    def test_list_command(self):
        result = runner.invoke(app, ["list"])
        assert result.exit_code == 0
        assert "Cleanup Targets" in result.output
        assert "temp_files" in result.output

    def test_list_includes_extra_directories(self, extra_dir_config):
        result = runner.invoke(app, ["list"])
        assert result.exit_code == 0
        assert "custom_1" in result.output

    def test_invalid_config_exits(self, isolate_config):
        isolate_config.parent.mkdir(parents=True)
        isolate_config.write_text(json.dumps({"failure_policy": "explode"}))
        result = runner.invoke(app, ["list"])
        assert result.exit_code == 1
        assert "Invalid configuration" in result.output


class TestScan:
    def test_scan_selected_target(self, extra_dir_config):
        result = runner.invoke(app, ["scan", "--target", "custom_1"])
        assert result.exit_code == 0
        assert "Scan Results" in result.output
        assert "(2 files)" in result.output
        assert (extra_dir_config / "file1.txt").exists()

    def test_unknown_target(self):
        result = runner.invoke(app, ["scan", "--target", "nope"])
        assert result.exit_code == 1
        assert "Unknown target: nope" in result.output


class TestClean:
    def test_dry_run(self, sample_tree):
        dir_a, _ = sample_tree
        result = runner.invoke(app, ["clean", "--directory", str(dir_a), "--dry-run"])
        assert result.exit_code == 0
        assert "DRY RUN" in result.output
        assert "Would free approximately" in result.output
        assert (dir_a / "file1.txt").exists()

    def test_clean_directory(self, sample_tree):
        _, dir_b = sample_tree
        result = runner.invoke(app, ["clean", "--directory", str(dir_b), "--yes"])
        assert result.exit_code == 0
        assert "Freed" in result.output
        assert dir_b.is_dir()
        assert list(dir_b.iterdir()) == []

    def test_cancelled(self, sample_tree):
        dir_a, _ = sample_tree
        with patch("tidydisk.cli.confirm_action", return_value=False):
            result = runner.invoke(app, ["clean", "--directory", str(dir_a)])
        assert result.exit_code == 0
        assert "Cancelled" in result.output
        assert (dir_a / "file1.txt").exists()

    def test_confirmed(self, sample_tree):
        dir_a, _ = sample_tree
        with patch("tidydisk.cli.confirm_action", return_value=True) as confirm:
            result = runner.invoke(app, ["clean", "--directory", str(dir_a)])
        assert result.exit_code == 0
        confirm.assert_called_once()
        assert not (dir_a / "file1.txt").exists()

    def test_clean_catalog_target(self, extra_dir_config):
        result = runner.invoke(app, ["clean", "--target", "custom_1", "-y"])
        assert result.exit_code == 0
        assert list(extra_dir_config.iterdir()) == []

    def test_collected_errors_exit_nonzero(self, sample_tree):
        dir_a, _ = sample_tree
        with patch("tidydisk.cleaner.os.unlink", side_effect=PermissionError(13, "denied")):
            result = runner.invoke(
                app, ["clean", "--directory", str(dir_a), "--policy", "collect", "-y"]
            )
        assert result.exit_code == 1
        assert "Errors encountered: 2" in result.output

    def test_default_cleans_temp_and_recycle_bin(self, sample_tree):
        dir_a, _ = sample_tree
        temp_target = CleanupTarget(id="temp_files", name="Temp", rule=WholeDirectory(path=dir_a))
        with (
            patch("tidydisk.cli.temp_directory_target", return_value=temp_target),
            patch("tidydisk.cli.empty_trash") as empty_trash,
        ):
            result = runner.invoke(app, ["clean", "--dry-run"])

        assert result.exit_code == 0
        empty_trash.assert_called_once_with(dry_run=True)
        assert "Would free approximately" in result.output
        assert (dir_a / "file1.txt").exists()

    def test_same_target_selected_twice_is_counted_once(self, sample_tree):
        dir_a, _ = sample_tree

        def temp_target():
            return CleanupTarget(id="temp_files", name="Temp", rule=WholeDirectory(path=dir_a))

        with (
            patch("tidydisk.cli.temp_directory_target", side_effect=temp_target),
            patch("tidydisk.cli.build_catalog", side_effect=lambda settings: [temp_target()]),
        ):
            result = runner.invoke(
                app, ["clean", "--temp", "--target", "temp_files", "--dry-run"]
            )

        assert result.exit_code == 0
        assert "Total: 0.00 MB (2 files)" in result.output
        assert "Would free approximately 0.00 MB (2 files)" in result.output

    def test_recycle_not_supported_is_not_an_error(self):
        with patch("tidydisk.cli.empty_trash", side_effect=NotSupportedError("no bin")):
            result = runner.invoke(app, ["clean", "--recycle"])
        assert result.exit_code == 0

    def test_recycle_failure_exits_nonzero(self):
        with patch("tidydisk.cli.empty_trash", side_effect=OSError("shell error")):
            result = runner.invoke(app, ["clean", "--recycle"])
        assert result.exit_code == 1


class TestConfig:
    def test_config_command(self, isolate_config):
        result = runner.invoke(app, ["config"])
        assert result.exit_code == 0
        assert "failure_policy" in result.output
        assert "config.json" in result.output


class TestInteractive:
    def test_no_command_launches_tui(self):
        with patch("tidydisk.tui.run_tui") as run_tui:
            result = runner.invoke(app, [])
        assert result.exit_code == 0
        run_tui.assert_called_once()
        assert run_tui.call_args.kwargs["dry_run"] is False

    def test_tui_dry_run(self):
        with patch("tidydisk.tui.run_tui") as run_tui:
            result = runner.invoke(app, ["tui", "--dry-run"])
        assert result.exit_code == 0
        assert run_tui.call_args.kwargs["dry_run"] is True

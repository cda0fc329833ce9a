"""Interactive terminal interface for tidydisk."""

from tidydisk.tui.app import TidyDiskApp, run_tui

__all__ = ["TidyDiskApp", "run_tui"]

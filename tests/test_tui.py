"""Tests for the textual TUI."""

import asyncio

from tidydisk.debounce import InputDebouncer
from tidydisk.models import Phase
from tidydisk.session import Session
from tidydisk.tui import TidyDiskApp
from tidydisk.tui.widgets import SessionHeader, TargetList


def make_app(catalog, cooldown: float = 0, **session_kwargs) -> TidyDiskApp:
    session = Session(catalog, **session_kwargs)
    return TidyDiskApp(session, InputDebouncer(cooldown))


class TestTargetListRendering:
    def test_checkboxes_and_descriptions(self, sample_catalog):
        session = Session(sample_catalog)
        session.targets[1].enabled = False
        text = TargetList.render_session(session).plain
        assert "[✓] Target A" in text
        assert "[ ] Target B (disabled)" in text

    def test_scan_results_shown(self, sample_catalog):
        session = Session(sample_catalog)
        session.scan()
        text = TargetList.render_session(session).plain
        assert "Target B - 0.00 MB, 1 files" in text

    def test_cleaned_results_shown(self, sample_catalog):
        session = Session(sample_catalog, auto_reset=False)
        session.scan()
        session.clean()
        assert "✓ cleaned" in TargetList.render_session(session).plain

    def test_empty_catalog(self):
        text = TargetList.render_session(Session(lambda: [])).plain
        assert "No cleanup targets" in text


class TestSessionHeaderRendering:
    def test_idle(self, sample_catalog):
        text = SessionHeader.render_session(Session(sample_catalog)).plain
        assert "press [ENTER] to scan" in text

    def test_scanned(self, sample_catalog):
        session = Session(sample_catalog)
        session.scan()
        assert "Scan complete!" in SessionHeader.render_session(session).plain

    def test_report_after_auto_reset(self, sample_catalog):
        session = Session(sample_catalog, dry_run=True)
        session.scan()
        session.clean()
        text = SessionHeader.render_session(session).plain
        assert "Would free" in text
        assert "DRY RUN" in text


class TestApp:
    def test_space_toggles_selected_target(self, sample_catalog):
        async def run():
            app = make_app(sample_catalog)
            async with app.run_test() as pilot:
                await pilot.press("space")
                assert app.session.targets[0].enabled is False
                await pilot.press("down", "space")
                assert app.session.targets[1].enabled is False
                assert app.session.selected_index == 1

        asyncio.run(run())

    def test_held_key_is_debounced(self, sample_catalog):
        async def run():
            app = make_app(sample_catalog, cooldown=60)
            async with app.run_test() as pilot:
                await pilot.press("space", "space", "space")
                assert app.session.targets[0].enabled is False

        asyncio.run(run())

    def test_bulk_selection_keys(self, sample_catalog):
        async def run():
            app = make_app(sample_catalog)
            async with app.run_test() as pilot:
                await pilot.press("u")
                assert app.session.enabled_count == 0
                await pilot.press("i")
                assert app.session.enabled_count == 2
                await pilot.press("u", "a")
                assert app.session.enabled_count == 2

        asyncio.run(run())

    def test_scan_then_clean(self, sample_catalog, sample_tree):
        async def run():
            app = make_app(sample_catalog, auto_reset=False)
            async with app.run_test() as pilot:
                await pilot.press("enter")
                await app.workers.wait_for_complete()
                await pilot.pause()
                assert app.session.phase == Phase.SCANNED
                assert app.session.get_total_files() == 3

                await pilot.press("c")
                await app.workers.wait_for_complete()
                await pilot.pause()
                assert app.session.phase == Phase.CLEANED

        asyncio.run(run())
        for directory in sample_tree:
            assert list(directory.iterdir()) == []

    def test_clean_before_scan_does_nothing(self, sample_catalog, sample_tree):
        async def run():
            app = make_app(sample_catalog)
            async with app.run_test() as pilot:
                await pilot.press("c")
                await app.workers.wait_for_complete()
                await pilot.pause()
                assert app.session.phase == Phase.IDLE

        asyncio.run(run())
        dir_a, _ = sample_tree
        assert (dir_a / "file1.txt").exists()

    def test_reset(self, sample_catalog):
        async def run():
            app = make_app(sample_catalog)
            async with app.run_test() as pilot:
                await pilot.press("space", "enter")
                await app.workers.wait_for_complete()
                await pilot.press("r")
                assert app.session.phase == Phase.IDLE
                assert app.session.targets[0].enabled is True
                assert app.session.scan_results == [None, None]

        asyncio.run(run())

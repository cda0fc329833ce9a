"""Main TUI application for tidydisk."""

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import VerticalScroll
from textual.widgets import Footer, Header, Static

from tidydisk.catalog import build_catalog
from tidydisk.config import Settings
from tidydisk.debounce import InputDebouncer
from tidydisk.session import Session
from tidydisk.tui.widgets import SessionHeader, TargetList


class TidyDiskApp(App):
    """Interactive scan-then-clean application."""

    TITLE = "tidydisk"
    SUB_TITLE = "Disk Cleanup"

    CSS_PATH = "styles.tcss"

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("space", "toggle", "Select"),
        Binding("up,k", "previous", "Up", show=False, priority=True),
        Binding("down,j", "next", "Down", show=False, priority=True),
        Binding("a", "select_all", "All"),
        Binding("u", "deselect_all", "None"),
        Binding("i", "invert", "Invert"),
        Binding("enter", "scan", "Scan"),
        Binding("c", "clean", "Clean"),
        Binding("r", "reset", "Reset"),
    ]

    def __init__(self, session: Session, debouncer: InputDebouncer | None = None):
        super().__init__()
        self.session = session
        self.debouncer = debouncer or InputDebouncer()

    def compose(self) -> ComposeResult:
        yield Header()
        yield SessionHeader(id="session-header")
        with VerticalScroll(id="targets-panel"):
            yield TargetList(id="target-list")
        yield Static("", id="status-bar")
        yield Footer()

    def on_mount(self) -> None:
        """Called when the app is mounted."""
        self.query_one("#targets-panel").border_title = "Cleanup targets (SPACE select, ENTER scan)"
        self.refresh_view()

    def refresh_view(self) -> None:
        """Redraw everything from the session state."""
        session = self.session
        self.query_one("#session-header", SessionHeader).show_session(session)
        self.query_one("#target-list", TargetList).show_session(session)
        self.query_one("#status-bar", Static).update(session.status_message)

    # Selection: auto-repeating keys go through the debouncer

    def _debounced(self, operation) -> None:
        if not self.debouncer.should_process():
            return
        if operation():
            self.refresh_view()

    def action_toggle(self) -> None:
        self._debounced(self.session.toggle)

    def action_next(self) -> None:
        self._debounced(self.session.move_next)

    def action_previous(self) -> None:
        self._debounced(self.session.move_previous)

    def action_select_all(self) -> None:
        if self.session.select_all():
            self.refresh_view()

    def action_deselect_all(self) -> None:
        if self.session.deselect_all():
            self.refresh_view()

    def action_invert(self) -> None:
        if self.session.invert_selection():
            self.refresh_view()

    # Passes: the session phase makes repeated presses harmless

    def action_scan(self) -> None:
        """Start a scan pass in a worker thread."""
        if self.session.is_busy:
            return
        self.run_worker(self._scan, thread=True, exclusive=True, group="pass")

    def action_clean(self) -> None:
        """Start a clean pass in a worker thread."""
        if self.session.is_busy:
            return
        self.run_worker(self._clean, thread=True, exclusive=True, group="pass")

    def action_reset(self) -> None:
        """Start over with a fresh target list."""
        self.session.reset()
        self.debouncer.reset()
        self.refresh_view()

    def _progress(self, name: str, current: int, total: int) -> None:
        self.call_from_thread(self._show_progress, name, current, total)

    def _show_progress(self, name: str, current: int, total: int) -> None:
        self.refresh_view()
        self.query_one("#status-bar", Static).update(f"{name} ({current}/{total})")

    def _scan(self) -> None:
        self.session.scan(progress_callback=self._progress)
        self.call_from_thread(self.refresh_view)

    def _clean(self) -> None:
        if self.session.clean(progress_callback=self._progress):
            self.call_from_thread(self._notify_report)
        self.call_from_thread(self.refresh_view)

    def _notify_report(self) -> None:
        report = self.session.last_report
        if report is None:
            return
        if report.errors:
            self.notify(f"{report.error_count} entries could not be deleted", severity="warning")
        else:
            verb = "Would free" if report.dry_run else "Freed"
            self.notify(f"{verb} {report.size_mb:.2f} MB", timeout=5)


def run_tui(settings: Settings | None = None, dry_run: bool = False) -> None:
    """Run the interactive TUI.

    Args:
        settings: Loaded configuration (defaults if None)
        dry_run: If True, don't actually delete files
    """
    settings = settings or Settings()
    session = Session(
        lambda: build_catalog(settings),
        dry_run=dry_run,
        failure_policy=settings.failure_policy,
        reuse_scan=settings.reuse_scan,
        auto_reset=settings.auto_reset,
    )
    app = TidyDiskApp(session, InputDebouncer(settings.debounce_seconds))
    app.run()

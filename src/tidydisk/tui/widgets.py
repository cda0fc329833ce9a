"""Custom widgets for the tidydisk TUI."""

from rich.text import Text
from textual.widgets import Static

from tidydisk.models import Phase
from tidydisk.session import Session


class SessionHeader(Static):
    """Headline describing where the session is in its lifecycle."""

    def show_session(self, session: Session) -> None:
        self.update(self.render_session(session))

    @staticmethod
    def render_session(session: Session) -> Text:
        text = Text(justify="center")

        if session.phase == Phase.SCANNING:
            text.append("Scanning...", style="yellow")
        elif session.phase == Phase.CLEANING:
            text.append("Cleaning...", style="yellow")
        elif session.phase == Phase.CLEANED:
            text.append("Cleaning complete! ", style="green")
            verb = "Would free" if session.dry_run else "Freed"
            size = session.get_total_size(True)
            text.append(f"{verb} {size:.2f} MB ", style="bold yellow")
            text.append(f"({session.get_total_files(True)} files)", style="grey50")
        elif session.phase == Phase.SCANNED:
            text.append("Scan complete! ", style="cyan")
            size = session.get_total_size(False)
            text.append(f"{size:.2f} MB can be freed ", style="bold yellow")
            text.append(f"({session.get_total_files(False)} files)\n", style="grey50")
            text.append("Press [C] to clean, [R] to reset", style="yellow")
        elif session.last_report is not None:
            report = session.last_report
            verb = "Would free" if report.dry_run else "Freed"
            text.append("Cleaning complete! ", style="green")
            text.append(f"{verb} {report.size_mb:.2f} MB ", style="bold yellow")
            text.append(f"({report.file_count} files)", style="grey50")
            if report.errors:
                text.append(f" {report.error_count} errors", style="red")
            text.append("\nSelect targets and press [ENTER] to scan again", style="white")
        else:
            text.append("Select the targets to clean, then press [ENTER] to scan", style="white")

        if session.dry_run:
            text.append("\nDRY RUN - no files will be deleted", style="yellow")
        return text


class TargetList(Static):
    """Checkbox list of cleanup targets with per-target results."""

    def show_session(self, session: Session) -> None:
        self.update(self.render_session(session))

    @staticmethod
    def render_session(session: Session) -> Text:
        text = Text()
        if not session.targets:
            text.append("No cleanup targets are available on this system", style="dim")
            return text

        cleaned = session.phase == Phase.CLEANED
        results = session.current_results
        show_results = session.phase in (Phase.SCANNED, Phase.CLEANED)

        for i, target in enumerate(session.targets):
            style = "green" if target.enabled else "grey50"
            if i == session.selected_index:
                style += " bold reverse"

            line = Text(style=style)
            line.append("[✓] " if target.enabled else "[ ] ")
            line.append(target.name)
            if not target.enabled:
                line.append(" (disabled)")

            result = results[i] if show_results else None
            if result is not None:
                if not result.has_data:
                    line.append(" - no data")
                elif cleaned:
                    line.append(f" - ✓ cleaned {result.size_mb:.2f} MB")
                else:
                    line.append(f" - {result.size_mb:.2f} MB, {result.file_count} files")
            else:
                line.append(f"  {target.description}", style="dim")

            if i:
                text.append("\n")
            text.append_text(line)

        return text

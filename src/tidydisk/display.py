"""Rich terminal display for tidydisk."""

from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.table import Table

from tidydisk.config import Settings
from tidydisk.models import CleanReport, ScanResult, format_size
from tidydisk.session import Session
from tidydisk.targets import CleanupTarget

console = Console()


def status_icon(enabled: bool) -> str:
    """Checkbox marker for a target's selection state."""
    return "[green][✓][/green]" if enabled else "[dim][ ][/dim]"


def describe_result(result: ScanResult | None, cleaned: bool = False) -> str:
    """One-line summary of a scan or clean result."""
    if result is None:
        return "[dim]skipped[/dim]"
    if not result.has_data:
        return "[dim]nothing found[/dim]"
    prefix = "cleaned " if cleaned else ""
    text = f"{prefix}{result.size_mb:.2f} MB, {result.file_count} files"
    if result.errors:
        text += f" [red]({len(result.errors)} errors)[/red]"
    return text


def show_targets(targets: list[CleanupTarget]) -> None:
    """Display the target catalog."""
    table = Table(title="Cleanup Targets", show_header=True, header_style="bold")
    table.add_column("", width=3)
    table.add_column("ID", style="bold")
    table.add_column("Name")
    table.add_column("Location")

    for target in targets:
        table.add_row(
            status_icon(target.enabled),
            target.id,
            target.name,
            target.rule.describe(),
        )

    console.print(table)


def show_scan_results(session: Session, use_clean_results: bool = False) -> None:
    """Display per-target results and totals for the session."""
    results = session.clean_results if use_clean_results else session.scan_results
    title = "Clean Results" if use_clean_results else "Scan Results"

    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("", width=3)
    table.add_column("Target")
    table.add_column("Files", justify="right")
    table.add_column("Dirs", justify="right")
    table.add_column("Size", justify="right")

    for target, result in zip(session.targets, results):
        if result is None:
            table.add_row(status_icon(target.enabled), target.name, "-", "-", "[dim]skipped[/dim]")
            continue
        table.add_row(
            status_icon(target.enabled),
            target.name,
            str(result.file_count),
            str(result.dir_count),
            format_size(result.size_bytes) if result.has_data else "[dim]no data[/dim]",
        )

    console.print(table)
    console.print(
        f"[bold]Total: {session.get_total_size(use_clean_results):.2f} MB "
        f"({session.get_total_files(use_clean_results)} files)[/bold]"
    )


def show_clean_result(target: CleanupTarget, result: ScanResult, dry_run: bool = False) -> None:
    """Display what happened to one target."""
    if not result.has_data:
        console.print(f"  [dim]-[/dim] {target.name}: nothing to clean")
        return

    if dry_run:
        console.print(
            f"  [yellow][DRY RUN][/yellow] Would clean {target.name}: "
            f"{result.file_count} files ({result.size_mb:.2f} MB)"
        )
    elif result.errors:
        console.print(
            f"  [yellow]![/yellow] {target.name}: {result.file_count} files "
            f"({result.size_mb:.2f} MB), {len(result.errors)} could not be deleted"
        )
    else:
        console.print(
            f"  [green]✓[/green] {target.name}: "
            f"{result.file_count} files ({result.size_mb:.2f} MB)"
        )


def show_summary(report: CleanReport) -> None:
    """Display the end-of-run summary."""
    if report.dry_run:
        body = f"Would free approximately {report.size_mb:.2f} MB ({report.file_count} files)"
        title = "[DRY RUN] Summary"
        style = "yellow"
    else:
        body = f"Freed {report.size_mb:.2f} MB of disk space ({report.file_count} files)"
        title = "Summary"
        style = "green"

    if report.errors:
        body += f"\n[red]Errors encountered: {report.error_count}[/red]"
        for error in report.errors[:5]:
            body += f"\n  [dim]{error}[/dim]"
        if report.error_count > 5:
            body += f"\n  [dim]...and {report.error_count - 5} more[/dim]"

    console.print()
    console.print(Panel(body, title=title, border_style=style))


def show_settings(settings: Settings, path: Path) -> None:
    """Display the effective configuration."""
    table = Table(title="Configuration", show_header=True, header_style="bold")
    table.add_column("Setting", style="bold")
    table.add_column("Value")

    for key, value in settings.model_dump(mode="json").items():
        if isinstance(value, list):
            value = ", ".join(value) if value else "[dim](none)[/dim]"
        table.add_row(key, str(value))

    console.print(table)
    exists = "" if path.exists() else " [dim](not created yet)[/dim]"
    console.print(f"[dim]Config file:[/dim] {path}{exists}")


def show_scanning_progress() -> Progress:
    """Create progress bar for scan and clean passes."""
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TextColumn("{task.completed}/{task.total}"),
        TimeElapsedColumn(),
        console=console,
    )


def confirm_action(message: str) -> bool:
    """Ask for confirmation."""
    from rich.prompt import Confirm

    return Confirm.ask(message)

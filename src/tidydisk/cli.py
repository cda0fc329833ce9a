"""CLI interface for tidydisk."""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape

from tidydisk import __version__
from tidydisk.catalog import (
    build_catalog,
    custom_directory_target,
    get_target,
    temp_directory_target,
)
from tidydisk.config import Settings, config_path, load_settings
from tidydisk.display import (
    confirm_action,
    console,
    show_clean_result,
    show_scan_results,
    show_scanning_progress,
    show_settings,
    show_summary,
    show_targets,
)
from tidydisk.errors import ConfigError, NotSupportedError
from tidydisk.log_setup import setup_logging
from tidydisk.models import FailurePolicy
from tidydisk.session import Session
from tidydisk.targets import CleanupTarget
from tidydisk.trash import empty_trash

log = logging.getLogger(__name__)

# Create Typer app
app = typer.Typer(
    name="tidydisk",
    help="Interactive disk cleanup - scan and remove temp files and caches",
    add_completion=False,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"tidydisk version {__version__}")
        raise typer.Exit()


def _settings(ctx: typer.Context) -> Settings:
    if ctx.obj is None:
        ctx.obj = {}
    if "settings" not in ctx.obj:
        try:
            ctx.obj["settings"] = load_settings()
        except ConfigError as e:
            console.print(f"[red]{escape(str(e))}[/red]")
            raise typer.Exit(1)
    return ctx.obj["settings"]


def _select_targets(targets: list[CleanupTarget], target_ids: list[str]) -> None:
    """Enable exactly the named targets, or exit if one is unknown."""
    for target_id in target_ids:
        if get_target(targets, target_id) is None:
            console.print(f"[red]Unknown target: {target_id}[/red]")
            console.print("\nAvailable targets:")
            for target in targets:
                console.print(f"  • {target.id}")
            raise typer.Exit(1)
    for target in targets:
        target.enabled = target.id in target_ids


def _unique_targets(targets: list[CleanupTarget]) -> list[CleanupTarget]:
    """Drop repeated target ids, keeping the first occurrence."""
    unique: dict[str, CleanupTarget] = {}
    for target in targets:
        unique.setdefault(target.id, target)
    return list(unique.values())


def _run_pass(session: Session, verb: str) -> None:
    total = max(session.enabled_count, 1)
    with show_scanning_progress() as progress:
        task = progress.add_task(f"{verb}...", total=total)

        def update_progress(name: str, current: int, total: int) -> None:
            progress.update(task, completed=current - 1, description=f"{verb} {name}...")

        if verb == "Scanning":
            session.scan(progress_callback=update_progress)
        else:
            session.clean(progress_callback=update_progress)
        progress.update(task, completed=total)


def _pause_if_needed(pause: bool) -> None:
    if pause:
        console.input("\nPress Enter to exit...")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only show errors"),
) -> None:
    """tidydisk - interactive disk cleanup."""
    ctx.obj = {"verbose": verbose, "quiet": quiet}

    # No command: go interactive
    if ctx.invoked_subcommand is None:
        ctx.invoke(tui, ctx=ctx, dry_run=False)
        return

    setup_logging(verbose=verbose, quiet=quiet)


@app.command(name="list")
def list_targets(ctx: typer.Context) -> None:
    """List the cleanup targets available on this system."""
    targets = build_catalog(_settings(ctx))
    show_targets(targets)
    console.print("\n[dim]Run [bold]tidydisk scan[/bold] to measure the selected targets[/dim]")


@app.command()
def scan(
    ctx: typer.Context,
    target: Optional[list[str]] = typer.Option(
        None, "--target", "-t", help="Scan only this target (repeatable)"
    ),
) -> None:
    """Measure how much space the selected targets would free."""
    settings = _settings(ctx)
    session = Session(lambda: build_catalog(settings), auto_reset=False)
    if target:
        _select_targets(session.targets, target)

    console.print("[bold blue]Scanning cleanup targets...[/bold blue]\n")
    _run_pass(session, "Scanning")
    console.print()
    show_scan_results(session)


@app.command()
def clean(
    ctx: typer.Context,
    temp: bool = typer.Option(False, "--temp", help="Clean the temporary directory"),
    recycle: bool = typer.Option(False, "--recycle", "-r", help="Empty the recycle bin (Windows)"),
    directory: Optional[Path] = typer.Option(
        None, "--directory", "-d", help="Clean a custom directory", metavar="DIR"
    ),
    target: Optional[list[str]] = typer.Option(
        None, "--target", "-t", help="Clean a catalog target (repeatable)"
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Show what would be deleted without deleting"
    ),
    yes: bool = typer.Option(False, "-y", "--yes", help="Skip confirmation prompt"),
    policy: Optional[FailurePolicy] = typer.Option(
        None, "--policy", help="How to handle files that cannot be deleted"
    ),
    pause: bool = typer.Option(False, "--pause", help="Wait for Enter before exiting"),
) -> None:
    """Clean selected locations in one shot.

    With no selection flags, cleans the temporary directory and empties the
    recycle bin.
    """
    settings = _settings(ctx)
    selected: list[CleanupTarget] = []
    if target:
        catalog = build_catalog(settings)
        _select_targets(catalog, target)
        selected.extend(t for t in catalog if t.enabled)
    if temp:
        selected.append(temp_directory_target())
    if directory is not None:
        if not directory.expanduser().exists():
            log.warning("Directory does not exist: %s", directory)
        selected.append(custom_directory_target(directory))

    nothing_chosen = not (temp or recycle or directory is not None or target)
    if nothing_chosen:
        selected.append(temp_directory_target())
    selected = _unique_targets(selected)

    if dry_run:
        console.print("[yellow]DRY RUN - no files will be deleted[/yellow]\n")

    has_error = False
    session = Session(
        lambda: selected,
        dry_run=dry_run,
        failure_policy=policy or settings.failure_policy,
        reuse_scan=settings.reuse_scan,
        auto_reset=False,
    )

    if session.targets:
        _run_pass(session, "Scanning")
        console.print()
        show_scan_results(session)

        if not yes and not dry_run and session.get_total_bytes() > 0:
            console.print()
            if not confirm_action("Proceed with cleanup?"):
                console.print("[yellow]Cancelled[/yellow]")
                raise typer.Exit(0)

        console.print("\n[bold]Cleaning...[/bold]")
        _run_pass(session, "Cleaning")
        for t, result in zip(session.targets, session.clean_results):
            if result is not None:
                show_clean_result(t, result, dry_run=dry_run)

    if recycle or nothing_chosen:
        try:
            empty_trash(dry_run=dry_run)
        except NotSupportedError as e:
            log.info("%s", e)
        except OSError as e:
            log.error("Failed to empty recycle bin: %s", e)
            has_error = True

    report = session.last_report
    if report is not None:
        show_summary(report)
        has_error = has_error or bool(report.errors)

    _pause_if_needed(pause)

    if has_error:
        raise typer.Exit(1)
    log.info("Complete!")


@app.command()
def tui(
    ctx: typer.Context,
    dry_run: bool = typer.Option(False, "--dry-run", help="Simulate cleanup without deleting"),
) -> None:
    """Launch the interactive terminal interface (default)."""
    settings = _settings(ctx)

    # Log output would corrupt the full-screen display
    setup_logging(silent=True)

    from tidydisk.tui import run_tui

    run_tui(settings=settings, dry_run=dry_run)


@app.command()
def config(ctx: typer.Context) -> None:
    """Show the effective configuration."""
    show_settings(_settings(ctx), config_path())


if __name__ == "__main__":
    app()

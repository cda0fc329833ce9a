"""Emptying the platform recycle bin / trash."""

import logging
import sys

from tidydisk.errors import NotSupportedError

log = logging.getLogger(__name__)

# SHEmptyRecycleBinW flags
SHERB_NOCONFIRMATION = 0x00000001
SHERB_NOPROGRESSUI = 0x00000002
SHERB_NOSOUND = 0x00000004


def empty_trash(dry_run: bool = False, platform_name: str | None = None) -> None:
    """
    Empty the recycle bin.

    Args:
        dry_run: If True, only report what would happen
        platform_name: ``sys.platform`` value to act for (defaults to the host)

    Raises:
        NotSupportedError: On platforms without a single system recycle bin.
            Callers should report it as information, not as a failure.
    """
    platform_name = platform_name or sys.platform

    if platform_name != "win32":
        if dry_run:
            log.info("[DRY RUN] Recycle Bin cleaning is not supported on this platform")
        raise NotSupportedError(f"Recycle Bin is not available on {platform_name}")

    log.info("Checking Windows Recycle Bin...")
    if dry_run:
        log.info("[DRY RUN] Would empty the Recycle Bin")
        return

    _empty_windows_recycle_bin()


def _empty_windows_recycle_bin() -> None:
    import ctypes

    log.info("Emptying Recycle Bin...")
    result = ctypes.windll.shell32.SHEmptyRecycleBinW(
        None,
        None,
        SHERB_NOCONFIRMATION | SHERB_NOPROGRESSUI | SHERB_NOSOUND,
    )
    if result == 0:
        log.info("Recycle Bin emptied successfully")
    else:
        # An already-empty bin also lands here; not worth failing the run
        log.warning(
            "Failed to empty Recycle Bin (error: %#x). This is not critical.",
            result & 0xFFFFFFFF,
        )

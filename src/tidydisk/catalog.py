"""Cleanup target catalog for tidydisk.

The catalog is rebuilt on every call: which targets exist depends on the
host platform and on environment variables that may change between session
resets.
"""

import os
import sys
import tempfile
from pathlib import Path

from tidydisk.config import Settings
from tidydisk.targets import (
    CleanupTarget,
    MultipleDirectories,
    TempFilePattern,
    WholeDirectory,
)


def temp_dir() -> Path:
    """The system temporary directory."""
    return Path(tempfile.gettempdir())


def home_dir() -> Path:
    try:
        return Path.home()
    except RuntimeError:
        return Path("/")


def user_cache_dir(platform_name: str | None = None) -> Path:
    """Per-user cache directory for the platform."""
    platform_name = platform_name or sys.platform
    if platform_name == "win32":
        return Path(os.environ.get("LOCALAPPDATA", home_dir() / "AppData" / "Local"))
    if platform_name == "darwin":
        return home_dir() / "Library" / "Caches"
    return Path(os.environ.get("XDG_CACHE_HOME", home_dir() / ".cache"))


def local_data_dir(platform_name: str | None = None) -> Path:
    """Per-user local application data directory for the platform."""
    platform_name = platform_name or sys.platform
    if platform_name == "win32":
        return Path(os.environ.get("LOCALAPPDATA", home_dir() / "AppData" / "Local"))
    if platform_name == "darwin":
        return home_dir() / "Library" / "Application Support"
    return Path(os.environ.get("XDG_DATA_HOME", home_dir() / ".local" / "share"))


def temp_directory_target() -> CleanupTarget:
    """Stand-alone target for the system temp directory."""
    return CleanupTarget(
        id="temp_files",
        name="Temporary Files",
        description=f"System temporary directory: {temp_dir()}",
        rule=WholeDirectory(path=temp_dir()),
    )


def custom_directory_target(path: Path | str, target_id: str = "custom") -> CleanupTarget:
    """Stand-alone target for a user-supplied directory."""
    path = Path(path).expanduser()
    return CleanupTarget(
        id=target_id,
        name="Custom Directory",
        description=str(path),
        rule=WholeDirectory(path=path),
    )


def build_catalog(
    settings: Settings | None = None,
    platform_name: str | None = None,
) -> list[CleanupTarget]:
    """
    Build the ordered list of cleanup targets available on this host.

    Args:
        settings: Optional overrides for default selection and extra directories
        platform_name: ``sys.platform`` value to build for (defaults to the host)

    Returns:
        Targets in display order
    """
    platform_name = platform_name or sys.platform
    is_windows = platform_name == "win32"
    home = home_dir()
    tmp = temp_dir()
    cache = user_cache_dir(platform_name)
    local_data = local_data_dir(platform_name)

    targets: list[CleanupTarget] = [
        CleanupTarget(
            id="temp_files",
            name="Temporary Files",
            description=f"System temporary directory: {tmp}",
            rule=WholeDirectory(path=tmp),
            enabled=True,
        ),
    ]

    if is_windows:
        targets.append(
            CleanupTarget(
                id="prefetch",
                name="Windows Prefetch",
                description="Windows prefetch file cache",
                rule=WholeDirectory(path=Path("C:/Windows/Prefetch")),
                enabled=True,
            )
        )
        targets.append(
            CleanupTarget(
                id="chrome_cache",
                name="Chrome Cache",
                description="Chrome browser cache files",
                rule=WholeDirectory(
                    path=local_data / "Google" / "Chrome" / "User Data" / "Default" / "Cache"
                ),
                enabled=False,
            )
        )

    targets.append(
        CleanupTarget(
            id="vscode_cache",
            name="VS Code Cache",
            description="Visual Studio Code cache files",
            rule=WholeDirectory(path=cache / "Code"),
            enabled=False,
        )
    )
    if is_windows:
        pip_paths = [local_data / "pip" / "Cache"]
    else:
        # Same path twice on Linux with the default XDG cache location
        pip_paths = list(dict.fromkeys([cache / "pip", home / ".cache" / "pip"]))
    targets.append(
        CleanupTarget(
            id="pip_cache",
            name="Pip Cache",
            description="Cached pip downloads and wheels",
            rule=MultipleDirectories(paths=tuple(pip_paths)),
            enabled=False,
        )
    )

    if is_windows:
        targets.append(
            CleanupTarget(
                id="cargo_cache",
                name="Cargo Cache",
                description="Rust Cargo package manager cache",
                rule=WholeDirectory(path=home / ".cargo" / "registry" / "cache"),
                enabled=False,
            )
        )
        targets.append(
            CleanupTarget(
                id="npm_cache",
                name="NPM Cache",
                description="Node.js npm package manager cache",
                rule=WholeDirectory(path=home / "AppData" / "Roaming" / "npm-cache"),
                enabled=False,
            )
        )

    targets.append(
        CleanupTarget(
            id="log_files",
            name="Leftover Temp Files",
            description="Temporary, cache and backup files left in the temp directory",
            rule=TempFilePattern(path=tmp),
            enabled=True,
        )
    )

    if is_windows:
        targets.append(
            CleanupTarget(
                id="thumbnail_cache",
                name="Thumbnail Cache",
                description="Windows file thumbnail cache",
                rule=WholeDirectory(path=local_data / "Microsoft" / "Windows" / "Explorer"),
                enabled=False,
            )
        )
        targets.append(
            CleanupTarget(
                id="recent_docs",
                name="Recent Documents",
                description="Windows recently opened documents list",
                rule=WholeDirectory(path=local_data / "Microsoft" / "Windows" / "Recent"),
                enabled=False,
            )
        )
    elif platform_name.startswith("linux"):
        targets.append(
            CleanupTarget(
                id="thumbnail_cache",
                name="Thumbnail Cache",
                description="Desktop file thumbnail cache",
                rule=MultipleDirectories(paths=(cache / "thumbnails", home / ".thumbnails")),
                enabled=False,
            )
        )

    if settings is not None:
        targets.extend(_extra_targets(settings))
        _apply_selection(targets, settings)

    _check_unique(targets)
    return targets


def _extra_targets(settings: Settings) -> list[CleanupTarget]:
    return [
        custom_directory_target(directory, target_id=f"custom_{i}")
        for i, directory in enumerate(settings.extra_directories, 1)
    ]


def _apply_selection(targets: list[CleanupTarget], settings: Settings) -> None:
    for target in targets:
        if target.id in settings.enabled_targets:
            target.enabled = True
        if target.id in settings.disabled_targets:
            target.enabled = False


def _check_unique(targets: list[CleanupTarget]) -> None:
    seen: set[str] = set()
    for target in targets:
        if target.id in seen:
            raise ValueError(f"Duplicate target id: {target.id}")
        seen.add(target.id)


def get_target(targets: list[CleanupTarget], target_id: str) -> CleanupTarget | None:
    """Get a target by ID."""
    for target in targets:
        if target.id == target_id:
            return target
    return None

"""Persistent settings for tidydisk."""

import json
import logging
import os
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from tidydisk.errors import ConfigError
from tidydisk.models import FailurePolicy

log = logging.getLogger(__name__)

CONFIG_ENV_VAR = "TIDYDISK_CONFIG"
DEFAULT_CONFIG_FILE = Path("~/.tidydisk/config.json")


class Settings(BaseModel):
    """User-adjustable behaviour."""

    failure_policy: FailurePolicy = Field(
        FailurePolicy.SILENT,
        description="How individual delete failures are handled",
    )
    debounce_ms: int = Field(
        150,
        ge=0,
        description="Minimum time between accepted repeated toggles/moves in the TUI",
    )
    reuse_scan: bool = Field(
        False,
        description="Clean from the last scan instead of re-scanning each target first",
    )
    auto_reset: bool = Field(
        True,
        description="Return to a fresh target list after a clean completes",
    )
    enabled_targets: list[str] = Field(
        default_factory=list,
        description="Target ids to enable regardless of their default",
    )
    disabled_targets: list[str] = Field(
        default_factory=list,
        description="Target ids to disable regardless of their default",
    )
    extra_directories: list[str] = Field(
        default_factory=list,
        description="Additional directories offered as whole-directory targets",
    )

    @property
    def debounce_seconds(self) -> float:
        return self.debounce_ms / 1000


def config_path() -> Path:
    """Location of the settings file (``$TIDYDISK_CONFIG`` wins)."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return DEFAULT_CONFIG_FILE.expanduser()


def load_settings(path: Path | None = None) -> Settings:
    """
    Load settings from disk.

    A missing or unreadable file yields defaults.

    Raises:
        ConfigError: If the file parses but holds invalid values.
    """
    path = path or config_path()
    if not path.exists():
        return Settings()

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        log.warning("Ignoring unreadable config %s: %s", path, e)
        return Settings()

    try:
        return Settings.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e


def save_settings(settings: Settings, path: Path | None = None) -> bool:
    """Save settings to disk. Returns False if the file could not be written."""
    path = path or config_path()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(settings.model_dump(mode="json"), f, indent=2)
        return True
    except OSError as e:
        log.warning("Could not save config %s: %s", path, e)
        return False

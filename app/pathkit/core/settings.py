"""Walk settings used by the command-line tools.

Settings are stored in ~/.config/pathkit/config.toml under a ``[walk]``
table. Every key is optional; missing keys take the model defaults.
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from pathkit.core.flags import SymlinkOption
from pathkit.core.paths import get_settings_path

logger = logging.getLogger(__name__)


class WalkSettings(BaseModel):
    """Defaults for ``pathkit ls`` and ``pathkit tree``.

    Attributes:
        follow_symlinks: Descend into directory symlinks while walking.
        show_hidden: List entries whose name starts with a dot.
        max_depth: Deepest level to descend to (0 = only the top directory),
            or None for no limit.
        report_errors: Print a warning for each directory that cannot be read.
        sort_entries: Sort entries by name within each directory.
    """

    model_config = ConfigDict(extra="forbid")

    follow_symlinks: Annotated[
        bool,
        Field(description="Descend into directory symlinks"),
    ] = False
    show_hidden: Annotated[
        bool,
        Field(description="Show dot files"),
    ] = True
    max_depth: Annotated[
        int | None,
        Field(ge=0, description="Maximum recursion depth (None = unlimited)"),
    ] = None
    report_errors: Annotated[
        bool,
        Field(description="Warn about unreadable directories"),
    ] = True
    sort_entries: Annotated[
        bool,
        Field(description="Sort entries by name"),
    ] = False

    @property
    def symlink_option(self) -> SymlinkOption:
        return SymlinkOption.RECURSE if self.follow_symlinks else SymlinkOption.NONE


class SettingsError(Exception):
    """Base exception for settings errors."""


class SettingsNotFoundError(SettingsError):
    """Raised when the settings file is not found."""


class SettingsParseError(SettingsError):
    """Raised when the settings file cannot be parsed."""


def load_settings(path: Path | None = None) -> WalkSettings:
    """Load walk settings from a TOML file.

    Args:
        path: Path to the settings file. If None, uses the default location.

    Returns:
        Validated WalkSettings object.

    Raises:
        SettingsNotFoundError: If the file doesn't exist.
        SettingsParseError: If the TOML syntax is invalid.
        SettingsError: If the content doesn't match the schema.
    """
    settings_path = path or get_settings_path()

    if not settings_path.exists():
        raise SettingsNotFoundError(f"Settings file not found: {settings_path}")

    try:
        with open(settings_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise SettingsParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise SettingsError(f"Failed to read settings: {e}") from e

    walk = data.get("walk", {})
    if not isinstance(walk, dict):
        raise SettingsError("Invalid settings content: [walk] must be a table")

    try:
        return WalkSettings.model_validate(walk)
    except (ValueError, ValidationError) as e:
        raise SettingsError(f"Invalid settings content: {e}") from e


def save_settings(settings: WalkSettings, path: Path | None = None) -> Path:
    """Save walk settings to a TOML file.

    The file is written atomically through a temporary file and
    os.replace().

    Args:
        settings: The settings to save.
        path: Destination. If None, uses the default location.

    Returns:
        Path where the settings were saved.

    Raises:
        SettingsError: If the file cannot be written.
    """
    settings_path = path or get_settings_path()
    settings_path.parent.mkdir(parents=True, exist_ok=True)

    # TOML has no null; an unset max_depth is simply omitted
    data = {"walk": settings.model_dump(exclude_none=True)}

    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="wb",
            dir=settings_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(settings_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise SettingsError(f"Failed to write settings: {e}") from e

    logger.debug("Saved settings to %s", settings_path)
    return settings_path


def get_default_settings() -> WalkSettings:
    return WalkSettings()


def load_settings_or_default(path: Path | None = None) -> WalkSettings:
    """Load settings, falling back to defaults when the file is missing.

    A malformed file is still an error.

    Raises:
        SettingsParseError: If the TOML syntax is invalid.
        SettingsError: If the content doesn't match the schema.
    """
    try:
        return load_settings(path)
    except SettingsNotFoundError:
        logger.debug("No settings file, using defaults")
        return get_default_settings()


def require_settings(path: Path | None = None) -> WalkSettings:
    """Load settings (or defaults) or exit with a readable error message.

    Args:
        path: Optional custom settings path.

    Returns:
        Loaded WalkSettings.

    Raises:
        typer.Exit: If the settings file exists but cannot be loaded.
    """
    import typer
    from rich.markup import escape

    from pathkit.utils.formatting import print_error, print_info

    try:
        return load_settings_or_default(path)
    except SettingsError as e:
        print_error(f"Failed to load settings: {escape(str(e))}")
        print_info("Run 'pathkit config init --force' to write a fresh settings file.")
        raise typer.Exit(code=1) from e

"""Unit tests for XDG path management."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from pathkit.core.paths import (
    APP_NAME,
    ensure_config_dir,
    get_config_dir,
    get_settings_path,
    get_user_theme_path,
)


class TestGetConfigDir:
    """Tests for get_config_dir function."""

    def test_default_config_dir(self) -> None:
        """get_config_dir returns default path when XDG_CONFIG_HOME not set."""
        with patch.dict(os.environ, {}, clear=True):
            os.environ.pop("XDG_CONFIG_HOME", None)

            result = get_config_dir()

        assert result == Path.home() / ".config" / APP_NAME

    def test_respects_xdg_config_home(self, tmp_path: Path) -> None:
        """get_config_dir respects XDG_CONFIG_HOME environment variable."""
        with patch.dict(os.environ, {"XDG_CONFIG_HOME": str(tmp_path)}):
            result = get_config_dir()

        assert result == tmp_path / APP_NAME

    def test_empty_xdg_value_ignored(self) -> None:
        """An empty XDG_CONFIG_HOME falls back to ~/.config."""
        with patch.dict(os.environ, {"XDG_CONFIG_HOME": ""}):
            assert get_config_dir() == Path.home() / ".config" / APP_NAME


class TestFilePaths:
    """Tests for files inside the config directory."""

    def test_settings_and_theme_paths(self, tmp_path: Path) -> None:
        """Settings and theme live side by side in the config dir."""
        with patch.dict(os.environ, {"XDG_CONFIG_HOME": str(tmp_path)}):
            assert get_settings_path() == tmp_path / APP_NAME / "config.toml"
            assert get_user_theme_path() == tmp_path / APP_NAME / "theme.toml"


class TestEnsureConfigDir:
    """Tests for ensure_config_dir function."""

    def test_creates_directory(self, tmp_path: Path) -> None:
        """The directory is created with parents."""
        with patch.dict(os.environ, {"XDG_CONFIG_HOME": str(tmp_path / "nested")}):
            result = ensure_config_dir()

        assert result.is_dir()
        assert result == tmp_path / "nested" / APP_NAME

    def test_permission_error_becomes_runtime_error(self, tmp_path: Path) -> None:
        """A permission failure is reported as RuntimeError."""
        with (
            patch.dict(os.environ, {"XDG_CONFIG_HOME": str(tmp_path)}),
            patch.object(Path, "mkdir", side_effect=PermissionError("denied")),
            pytest.raises(RuntimeError, match="Permission denied"),
        ):
            ensure_config_dir()

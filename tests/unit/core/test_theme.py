"""Unit tests for theme module.

Tests for theme loading, validation, and Rich theme generation.
"""

# pyright: reportPrivateUsage=false

from pathlib import Path
from unittest.mock import patch

import pathkit.core.theme as theme_module
import pytest
from pathkit.core.theme import (
    ThemeColors,
    _load_toml_colors,
    get_bundled_theme_path,
    get_rich_theme,
    get_theme,
    load_theme,
    reload_theme,
)
from rich.theme import Theme


class TestThemeColors:
    """Tests for ThemeColors Pydantic model."""

    def test_default_values(self) -> None:
        """ThemeColors has sensible defaults."""
        colors = ThemeColors()
        assert colors.text == "#ffffff"
        assert colors.directory == "#0e8ac8"
        assert colors.symlink == "#d44ebc"

    def test_short_hex_accepted(self) -> None:
        """Three-digit hex codes are valid."""
        assert ThemeColors(muted="#abc").muted == "#abc"

    def test_invalid_format(self) -> None:
        """Colors without # or with a bad length are rejected."""
        with pytest.raises(ValueError, match="#RGB or #RRGGBB"):
            ThemeColors(text="ffffff")
        with pytest.raises(ValueError, match="#RGB or #RRGGBB"):
            ThemeColors(text="#ff")

    def test_invalid_hex_chars(self) -> None:
        """ThemeColors rejects invalid hex characters."""
        with pytest.raises(ValueError, match="invalid hex color"):
            ThemeColors(text="#gggggg")

    def test_extra_fields_forbidden(self) -> None:
        """ThemeColors rejects unknown fields."""
        with pytest.raises(ValueError):
            ThemeColors(unknown_field="#ffffff")  # type: ignore[call-arg]


class TestLoadTomlColors:
    """Tests for _load_toml_colors internal function."""

    def test_loads_valid_toml(self, tmp_path: Path) -> None:
        """Loads colors from valid TOML file."""
        theme_file = tmp_path / "theme.toml"
        theme_file.write_text('[colors]\ntext = "#000000"\ndirectory = "#aabbcc"\n')

        result = _load_toml_colors(theme_file)

        assert result == {"text": "#000000", "directory": "#aabbcc"}

    def test_returns_none_for_missing_file(self, tmp_path: Path) -> None:
        """Returns None when file doesn't exist."""
        assert _load_toml_colors(tmp_path / "nonexistent.toml") is None

    def test_returns_none_for_invalid_toml(self, tmp_path: Path) -> None:
        """Returns None for malformed TOML."""
        theme_file = tmp_path / "theme.toml"
        theme_file.write_text("not valid [ toml syntax")
        assert _load_toml_colors(theme_file) is None

    def test_non_string_values_dropped(self, tmp_path: Path) -> None:
        """Only string values are kept from the colors table."""
        theme_file = tmp_path / "theme.toml"
        theme_file.write_text('[colors]\ntext = 5\nmuted = "#111111"\n')
        assert _load_toml_colors(theme_file) == {"muted": "#111111"}


class TestLoadTheme:
    """Tests for load_theme function."""

    def test_bundled_theme_exists(self) -> None:
        """The bundled theme ships with the package."""
        assert Path(get_bundled_theme_path()).is_file()

    def test_loads_bundled_theme(self, tmp_path: Path) -> None:
        """Without user overrides the bundled colors are used."""
        colors = load_theme(tmp_path / "absent.toml")
        assert colors == ThemeColors()

    def test_user_theme_overrides_bundled(self, tmp_path: Path) -> None:
        """User theme overrides bundled theme values key by key."""
        user_theme = tmp_path / "theme.toml"
        user_theme.write_text('[colors]\ndirectory = "#ff0000"\n')

        colors = load_theme(user_theme)

        assert colors.directory == "#ff0000"
        assert colors.symlink == "#d44ebc"

    def test_default_user_path(self, tmp_path: Path) -> None:
        """load_theme reads the XDG theme file when no path is given."""
        user_theme = tmp_path / "theme.toml"
        user_theme.write_text('[colors]\nsuccess = "#00ff00"\n')

        with patch("pathkit.core.theme.get_user_theme_path", return_value=user_theme):
            colors = load_theme()

        assert colors.success == "#00ff00"

    def test_invalid_override_falls_back_to_defaults(self, tmp_path: Path) -> None:
        """A bad color in the user file yields the default theme."""
        user_theme = tmp_path / "theme.toml"
        user_theme.write_text('[colors]\nerror = "red"\n')

        colors = load_theme(user_theme)

        assert colors == ThemeColors()


class TestGetRichTheme:
    """Tests for get_rich_theme function."""

    def test_entry_styles_present(self) -> None:
        """The theme defines a style per entry type."""
        theme = get_rich_theme(ThemeColors())
        assert isinstance(theme, Theme)
        for name in ("entry.directory", "entry.symlink", "entry.file", "entry.other", "entry.perms"):
            assert name in theme.styles

    def test_base_styles_present(self) -> None:
        """Semantic styles used by the print helpers exist."""
        theme = get_rich_theme(ThemeColors())
        for name in ("info", "success", "warning", "error", "bold_header", "border", "muted"):
            assert name in theme.styles


class TestThemeCache:
    """Tests for get_theme caching."""

    def test_get_theme_is_cached(self) -> None:
        """Repeated calls return the same Theme object."""
        assert get_theme() is get_theme()

    def test_reload_replaces_cache(self) -> None:
        """reload_theme builds a new Theme and caches it."""
        before = get_theme()
        after = reload_theme()
        assert after is not before
        assert theme_module._cached_theme is after

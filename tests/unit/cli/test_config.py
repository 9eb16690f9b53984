"""Unit tests for the config commands."""

from pathlib import Path

from pathkit.cli.main import app
from pathkit.core.settings import load_settings
from typer.testing import CliRunner

runner = CliRunner()


class TestConfigShow:
    """Tests for pathkit config show."""

    def test_defaults(self) -> None:
        """Without a file the defaults are shown."""
        result = runner.invoke(app, ["config", "show"])
        assert result.exit_code == 0
        assert "defaults" in result.output
        assert "follow_symlinks" in result.output

    def test_from_file(self, tmp_path: Path) -> None:
        """Values come from the given file."""
        settings = tmp_path / "cfg.toml"
        settings.write_text("[walk]\nmax_depth = 7\n")

        result = runner.invoke(app, ["config", "show", "--path", str(settings)])

        assert result.exit_code == 0
        assert "max_depth" in result.output
        assert "7" in result.output

    def test_invalid_file(self, tmp_path: Path) -> None:
        """A file with unknown keys exits 1."""
        settings = tmp_path / "cfg.toml"
        settings.write_text("[walk]\nunknown_key = 1\n")

        result = runner.invoke(app, ["config", "show", "--path", str(settings)])

        assert result.exit_code == 1
        assert "Failed to load settings" in result.output


class TestConfigInit:
    """Tests for pathkit config init."""

    def test_writes_defaults(self, tmp_path: Path) -> None:
        """init writes a loadable file."""
        settings = tmp_path / "cfg.toml"

        result = runner.invoke(app, ["config", "init", "--path", str(settings)])

        assert result.exit_code == 0
        assert "Settings written" in result.output
        assert load_settings(settings).follow_symlinks is False

    def test_default_location(self, isolated_config: Path) -> None:
        """Without --path the file goes to the XDG config directory."""
        result = runner.invoke(app, ["config", "init"])
        assert result.exit_code == 0
        assert (isolated_config / "pathkit" / "config.toml").exists()

    def test_existing_file_kept(self, tmp_path: Path) -> None:
        """An existing file is left alone unless --force is given."""
        settings = tmp_path / "cfg.toml"
        settings.write_text("[walk]\nmax_depth = 2\n")

        kept = runner.invoke(app, ["config", "init", "--path", str(settings)])
        assert kept.exit_code == 0
        assert "already exist" in kept.output
        assert load_settings(settings).max_depth == 2

        forced = runner.invoke(app, ["config", "init", "--path", str(settings), "--force"])
        assert forced.exit_code == 0
        assert load_settings(settings).max_depth is None

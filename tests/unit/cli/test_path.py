"""Unit tests for the path commands."""

import json
import os

import pytest
from pathkit.cli.main import app
from typer.testing import CliRunner

runner = CliRunner()


class TestInspect:
    """Tests for pathkit path inspect."""

    def test_posix_json(self) -> None:
        """JSON output carries every element of the decomposition."""
        result = runner.invoke(app, ["path", "inspect", "/var/log/app.txt", "--flavor", "posix", "-f", "json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["root_directory"] == "/"
        assert data["relative_path"] == "var/log/app.txt"
        assert data["parent_path"] == "/var/log"
        assert data["filename"] == "app.txt"
        assert data["stem"] == "app"
        assert data["extension"] == ".txt"
        assert data["is_absolute"] is True
        assert data["elements"] == ["/", "var", "log", "app.txt"]

    def test_windows_json(self) -> None:
        """The windows flavor recognizes drive letters and backslashes."""
        result = runner.invoke(app, ["path", "inspect", "c:\\dir\\file.txt", "--flavor", "windows", "-f", "json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["root_name"] == "c:"
        assert data["root_directory"] == "\\"
        assert data["filename"] == "file.txt"
        assert data["generic"] == "c:/dir/file.txt"
        assert data["is_absolute"] is True

    def test_normal_in_json(self) -> None:
        """The normal form is included."""
        result = runner.invoke(app, ["path", "inspect", "a/b/../c", "--flavor", "posix", "-f", "json"])
        assert json.loads(result.output)["normal"] == "a/c"

    def test_table(self) -> None:
        """The default table output names each element."""
        result = runner.invoke(app, ["path", "inspect", "/var/log/app.txt", "--flavor", "posix"])
        assert result.exit_code == 0
        assert "filename" in result.output
        assert "'app.txt'" in result.output


class TestTransforms:
    """Tests for normal, relative and proximate."""

    def test_normal(self) -> None:
        """normal prints the lexically normal form."""
        result = runner.invoke(app, ["path", "normal", "a/./b/../c", "--flavor", "posix"])
        assert result.exit_code == 0
        assert result.output.strip() == "a/c"

    def test_relative(self) -> None:
        """relative walks up from the base."""
        result = runner.invoke(app, ["path", "relative", "/a/b/c", "/a/d", "--flavor", "posix"])
        assert result.exit_code == 0
        assert result.output.strip() == "../b/c"

    def test_relative_impossible(self) -> None:
        """Mixing relative and absolute paths fails with exit code 1."""
        result = runner.invoke(app, ["path", "relative", "a", "/b", "--flavor", "posix"])
        assert result.exit_code == 1
        assert "No relative path" in result.output

    def test_proximate_falls_back(self) -> None:
        """proximate prints the path itself when no relative form exists."""
        result = runner.invoke(app, ["path", "proximate", "a", "/b", "--flavor", "posix"])
        assert result.exit_code == 0
        assert result.output.strip() == "a"


class TestCheck:
    """Tests for pathkit path check."""

    def test_portable_name(self) -> None:
        """A portable name passes."""
        result = runner.invoke(app, ["path", "check", "notes.txt"])
        assert result.exit_code == 0
        assert "portable_file" in result.output
        assert "pass" in result.output

    @pytest.mark.skipif(os.name == "nt", reason="POSIX rules")
    def test_invalid_native_name(self) -> None:
        """A name with a slash is invalid here and exits 1."""
        result = runner.invoke(app, ["path", "check", "a/b"])
        assert result.exit_code == 1
        assert "fail" in result.output

"""Unit tests for CLI formatting helpers."""

import pytest
from pathkit.core.flags import Perms
from pathkit.models.status import FileStatus, FileType
from pathkit.utils.formatting import (
    create_entry_table,
    format_entry_name,
    format_perms,
    print_error,
    print_success,
    print_warning,
)


class TestFormatPerms:
    """Tests for format_perms."""

    def test_directory(self) -> None:
        """A 755 directory renders like ls -l."""
        assert format_perms(FileStatus(FileType.DIRECTORY, Perms(0o755))) == "drwxr-xr-x"

    def test_regular_file(self) -> None:
        """A 640 file renders with dashes for missing bits."""
        assert format_perms(FileStatus(FileType.REGULAR, Perms(0o640))) == "-rw-r-----"

    def test_symlink_and_fifo(self) -> None:
        """Other types use their ls type character."""
        assert format_perms(FileStatus(FileType.SYMLINK, Perms(0o777))) == "lrwxrwxrwx"
        assert format_perms(FileStatus(FileType.FIFO, Perms(0o600)))[0] == "p"

    def test_unknown(self) -> None:
        """Unknown type and permissions render as question marks."""
        assert format_perms(FileStatus()) == "??????????"


class TestFormatEntryName:
    """Tests for format_entry_name."""

    def test_directory_gets_slash(self) -> None:
        """Directories are styled and suffixed with a slash."""
        assert format_entry_name("src", FileType.DIRECTORY) == "[entry.directory]src/[/]"

    def test_markup_is_escaped(self) -> None:
        """Names that look like markup are escaped."""
        assert format_entry_name("[red]x", FileType.REGULAR) == "[entry.file]\\[red]x[/]"

    def test_other_types(self) -> None:
        """Types without a dedicated style use entry.other."""
        assert format_entry_name("pipe", FileType.FIFO).startswith("[entry.other]")


class TestOutput:
    """Tests for the table and message helpers."""

    def test_entry_table_columns(self) -> None:
        """The listing table has mode, type and name columns."""
        table = create_entry_table("Listing")
        assert table.title == "Listing"
        assert [column.header for column in table.columns] == ["Mode", "Type", "Name"]

    def test_messages(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Success goes to stdout; warnings and errors go to stderr."""
        print_success("done")
        print_warning("careful")
        print_error("broken")

        captured = capsys.readouterr()
        assert "done" in captured.out
        assert "Warning: careful" in captured.err
        assert "Error: broken" in captured.err

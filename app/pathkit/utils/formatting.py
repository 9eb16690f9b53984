"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

from __future__ import annotations

import sys

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from pathkit.core.flags import Perms
from pathkit.core.theme import get_theme
from pathkit.models.status import FileStatus, FileType


def _detect_color_system() -> str | None:
    """Use truecolor on interactive terminals, otherwise let Rich decide."""
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances (theme loaded once at import)
console = Console(theme=get_theme(), color_system=_detect_color_system())
err_console = Console(theme=get_theme(), stderr=True, color_system=_detect_color_system())

_TYPE_STYLES: dict[FileType, str] = {
    FileType.DIRECTORY: "entry.directory",
    FileType.SYMLINK: "entry.symlink",
    FileType.REGULAR: "entry.file",
}

_TYPE_CHARS: dict[FileType, str] = {
    FileType.DIRECTORY: "d",
    FileType.SYMLINK: "l",
    FileType.REGULAR: "-",
    FileType.BLOCK: "b",
    FileType.CHARACTER: "c",
    FileType.FIFO: "p",
    FileType.SOCKET: "s",
}

_PERM_BITS = (
    (Perms.OWNER_READ, "r"),
    (Perms.OWNER_WRITE, "w"),
    (Perms.OWNER_EXEC, "x"),
    (Perms.GROUP_READ, "r"),
    (Perms.GROUP_WRITE, "w"),
    (Perms.GROUP_EXEC, "x"),
    (Perms.OTHERS_READ, "r"),
    (Perms.OTHERS_WRITE, "w"),
    (Perms.OTHERS_EXEC, "x"),
)


def format_perms(status: FileStatus) -> str:
    """Format a status as an ``ls -l`` style mode string (e.g. ``drwxr-xr-x``).

    Unknown permissions are shown as ``?``.
    """
    kind = _TYPE_CHARS.get(status.type, "?")
    if not status.permissions_present():
        return kind + "?" * len(_PERM_BITS)
    return kind + "".join(char if status.permissions & bit else "-" for bit, char in _PERM_BITS)


def format_entry_name(name: str, file_type: FileType) -> str:
    """Wrap an entry name in the markup for its type."""
    style = _TYPE_STYLES.get(file_type, "entry.other")
    suffix = "/" if file_type == FileType.DIRECTORY else ""
    return f"[{style}]{escape(name)}{suffix}[/]"


def create_entry_table(title: str) -> Table:
    """Create a table for a directory listing.

    Args:
        title: Table title.

    Returns:
        Rich Table with mode, type and name columns.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Mode", style="entry.perms", no_wrap=True)
    table.add_column("Type", style="muted", width=10)
    table.add_column("Name", no_wrap=True)
    return table


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{message}[/]")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{message}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {message}")

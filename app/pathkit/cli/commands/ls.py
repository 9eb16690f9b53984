"""List command: one directory level with per-entry status."""

import json
from enum import Enum
from typing import Annotated

import typer
from rich.markup import escape

from pathkit.core.errors import ErrorCode, FilesystemError
from pathkit.core.settings import require_settings
from pathkit.iteration import DirectoryIterator
from pathkit.models.entry import DirectoryEntry
from pathkit.utils.formatting import (
    console,
    create_entry_table,
    format_entry_name,
    format_perms,
    print_error,
    print_info,
    print_warning,
)


class OutputFormat(str, Enum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"


def collect_entries(directory: str, *, show_hidden: bool, sort: bool) -> list[DirectoryEntry]:
    """Read every entry of ``directory``.

    Raises:
        FilesystemError: If the directory cannot be opened or read.
    """
    entries = [
        entry
        for entry in DirectoryIterator(directory)
        if show_hidden or not entry.path.filename().native().startswith(".")
    ]
    if sort:
        entries.sort()
    return entries


def ls(
    directory: Annotated[str, typer.Argument(help="Directory to list.")] = ".",
    show_all: Annotated[
        bool,
        typer.Option(
            "--all",
            "-a",
            help="Include dot files even if hidden by settings.",
        ),
    ] = False,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format: table or json.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
) -> None:
    """List the entries of a directory.

    Examples:
        pathkit ls                 # Current directory
        pathkit ls /etc --all      # Include dot files
        pathkit ls src -f json     # JSON output for scripting
    """
    settings = require_settings()
    try:
        entries = collect_entries(
            directory,
            show_hidden=show_all or settings.show_hidden,
            sort=settings.sort_entries,
        )
    except FilesystemError as e:
        print_error(escape(str(e)))
        raise typer.Exit(code=1) from e

    rows: list[dict[str, str]] = []
    for entry in entries:
        ec = ErrorCode()
        status = entry.symlink_status(ec)
        if ec and settings.report_errors:
            print_warning(escape(ec.message()))
        rows.append(
            {
                "name": entry.path.filename().native(),
                "path": entry.path.native(),
                "type": status.type.value,
                "mode": format_perms(status),
            }
        )

    if output_format == OutputFormat.JSON:
        console.print_json(json.dumps(rows))
        return

    if not rows:
        print_info(f"{escape(directory)} is empty.")
        return

    table = create_entry_table(escape(directory))
    for entry, row in zip(entries, rows, strict=True):
        table.add_row(row["mode"], row["type"], format_entry_name(row["name"], entry.symlink_file_type(ErrorCode())))
    console.print(table)
    console.print(f"\n[dim]{len(rows)} entries[/dim]")

"""Tree command: recursive listing of a directory.

The walk runs in reporting mode: a directory that cannot be read is
reported as a warning and the walk carries on with the next entry.
"""

from typing import Annotated

import typer
from rich.markup import escape

from pathkit.core.errors import ErrorCode
from pathkit.core.settings import require_settings
from pathkit.iteration import RecursiveDirectoryIterator
from pathkit.utils.formatting import console, format_entry_name, print_error, print_warning

INDENT = "  "


def tree(
    directory: Annotated[str, typer.Argument(help="Root directory.")] = ".",
    follow_symlinks: Annotated[
        bool | None,
        typer.Option(
            "--follow-symlinks/--no-follow-symlinks",
            "-L",
            help="Descend into directory symlinks (default from settings).",
        ),
    ] = None,
    max_depth: Annotated[
        int | None,
        typer.Option(
            "--max-depth",
            "-d",
            min=0,
            help="Deepest level to descend to; 0 lists only the root's entries.",
        ),
    ] = None,
    show_all: Annotated[
        bool,
        typer.Option("--all", "-a", help="Include dot files even if hidden by settings."),
    ] = False,
) -> None:
    """Print a directory tree.

    Examples:
        pathkit tree                     # Current directory
        pathkit tree /srv -d 2           # Two levels deep
        pathkit tree ~/src -L            # Follow directory symlinks

    Exits with status 1 if any directory could not be read.
    """
    settings = require_settings()
    if follow_symlinks is not None:
        settings = settings.model_copy(update={"follow_symlinks": follow_symlinks})
    limit = settings.max_depth if max_depth is None else max_depth
    show_hidden = show_all or settings.show_hidden

    ec = ErrorCode()
    walker = RecursiveDirectoryIterator(directory, settings.symlink_option, ec)
    if ec:
        print_error(escape(ec.message()))
        raise typer.Exit(code=1)

    console.print(f"[entry.directory]{escape(directory)}[/]")
    shown = 0
    errors = 0
    while not walker.at_end:
        entry = walker.entry
        depth = walker.depth()
        name = entry.path.filename().native()
        if not show_hidden and name.startswith("."):
            walker.disable_recursion_pending()
        else:
            label = format_entry_name(name, entry.symlink_file_type(ErrorCode()))
            console.print(f"{INDENT * (depth + 1)}{label}", highlight=False)
            shown += 1
        if limit is not None and depth >= limit:
            walker.disable_recursion_pending()

        walker.increment(ec)
        if ec:
            errors += 1
            if settings.report_errors:
                print_warning(escape(ec.message()))

    console.print(f"\n[dim]{shown} entries[/dim]")
    if errors:
        raise typer.Exit(code=1)

"""Path commands: lexical inspection and transformation.

None of these commands touch the file system.
"""

import json
from enum import Enum
from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from pathkit.core.path import BaseFsPath, FsPath, PosixFsPath, WindowsFsPath
from pathkit.portability import check_name
from pathkit.utils.formatting import console, print_error

app = typer.Typer(
    help="Decompose and transform paths lexically.",
    no_args_is_help=True,
)


class OutputFormat(str, Enum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"


class Flavor(str, Enum):
    """Path grammar to parse with."""

    NATIVE = "native"
    POSIX = "posix"
    WINDOWS = "windows"


_FLAVORS: dict[Flavor, type[BaseFsPath]] = {
    Flavor.NATIVE: FsPath,
    Flavor.POSIX: PosixFsPath,
    Flavor.WINDOWS: WindowsFsPath,
}

FlavorOption = Annotated[
    Flavor,
    typer.Option(
        "--flavor",
        help="Path grammar: native, posix or windows.",
        case_sensitive=False,
    ),
]


def _make(text: str, flavor: Flavor) -> BaseFsPath:
    return _FLAVORS[flavor](text)


def describe(p: BaseFsPath) -> dict[str, object]:
    """Return the decomposition of ``p`` as plain values."""
    return {
        "path": p.native(),
        "generic": p.generic_string(),
        "root_name": p.root_name().native(),
        "root_directory": p.root_directory().native(),
        "root_path": p.root_path().native(),
        "relative_path": p.relative_path().native(),
        "parent_path": p.parent_path().native(),
        "filename": p.filename().native(),
        "stem": p.stem().native(),
        "extension": p.extension().native(),
        "is_absolute": p.is_absolute(),
        "elements": list(p.parts()),
        "normal": p.lexically_normal().native(),
    }


@app.command()
def inspect(
    path: Annotated[str, typer.Argument(help="Path to decompose.")],
    flavor: FlavorOption = Flavor.NATIVE,
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
    """Show every grammar element of a path.

    Examples:
        pathkit path inspect /var/log/app.txt
        pathkit path inspect 'c:\\dir\\file.txt' --flavor windows
        pathkit path inspect a/b/../c --format json
    """
    data = describe(_make(path, flavor))

    if output_format == OutputFormat.JSON:
        console.print_json(json.dumps(data))
        return

    table = Table(title=f"Path: {escape(path)}", header_style="bold_header", border_style="border")
    table.add_column("Element", style="muted")
    table.add_column("Value", style="text")
    for key, value in data.items():
        if key == "path":
            continue
        if isinstance(value, list):
            shown = " | ".join(repr(v) for v in value) if value else "-"
        elif isinstance(value, bool):
            shown = "yes" if value else "no"
        else:
            shown = repr(value) if value else "-"
        table.add_row(key, escape(shown))
    console.print(table)


@app.command()
def normal(
    path: Annotated[str, typer.Argument(help="Path to normalize.")],
    flavor: FlavorOption = Flavor.NATIVE,
) -> None:
    """Print the lexically normal form of a path."""
    console.print(escape(_make(path, flavor).lexically_normal().native()), highlight=False)


@app.command()
def relative(
    path: Annotated[str, typer.Argument(help="Target path.")],
    base: Annotated[str, typer.Argument(help="Base path.")],
    flavor: FlavorOption = Flavor.NATIVE,
) -> None:
    """Print PATH relative to BASE, computed lexically.

    Fails when no relative form exists (different roots, or one path
    absolute and the other not).
    """
    result = _make(path, flavor).lexically_relative(_make(base, flavor))
    if result.empty():
        print_error(f"No relative path from {escape(base)} to {escape(path)}")
        raise typer.Exit(code=1)
    console.print(escape(result.native()), highlight=False)


@app.command()
def proximate(
    path: Annotated[str, typer.Argument(help="Target path.")],
    base: Annotated[str, typer.Argument(help="Base path.")],
    flavor: FlavorOption = Flavor.NATIVE,
) -> None:
    """Print PATH relative to BASE, or PATH itself when no relative form exists."""
    result = _make(path, flavor).lexically_proximate(_make(base, flavor))
    console.print(escape(result.native()), highlight=False)


@app.command()
def check(
    name: Annotated[str, typer.Argument(help="Single file name to check.")],
) -> None:
    """Check a file name against the portability rules.

    Exits with status 1 if the name is not valid on this platform.
    """
    results = check_name(name)
    table = Table(title=f"Name: {escape(name)}", header_style="bold_header", border_style="border")
    table.add_column("Check", style="muted")
    table.add_column("Result")
    for check_label, passed in results.items():
        table.add_row(check_label, "[success]pass[/]" if passed else "[error]fail[/]")
    console.print(table)
    if not results["native"]:
        raise typer.Exit(code=1)

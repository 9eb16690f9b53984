"""Config commands: show and initialize walk settings."""

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from pathkit.core.paths import ensure_config_dir, get_settings_path
from pathkit.core.settings import SettingsError, get_default_settings, require_settings, save_settings
from pathkit.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Show or create the settings file.",
    no_args_is_help=True,
)


@app.command()
def show(
    path: Annotated[
        Path | None,
        typer.Option("--path", "-p", help="Settings file to read."),
    ] = None,
) -> None:
    """Show the effective walk settings."""
    settings_path = path or get_settings_path()
    settings = require_settings(settings_path)

    source = str(settings_path) if settings_path.exists() else "defaults"
    table = Table(title=f"Settings ({escape(source)})", header_style="bold_header", border_style="border")
    table.add_column("Key", style="muted")
    table.add_column("Value", style="text")
    for key, value in settings.model_dump().items():
        table.add_row(key, "-" if value is None else str(value))
    console.print(table)


@app.command()
def init(
    path: Annotated[
        Path | None,
        typer.Option("--path", "-p", help="Where to write the settings file."),
    ] = None,
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite an existing file."),
    ] = False,
) -> None:
    """Write a settings file with the default values."""
    settings_path = path or get_settings_path()
    if settings_path.exists() and not force:
        print_info(f"Settings already exist: {escape(str(settings_path))} (use --force to overwrite)")
        return

    if path is None:
        try:
            ensure_config_dir()
        except RuntimeError as e:
            print_error(escape(str(e)))
            raise typer.Exit(code=1) from e

    try:
        saved = save_settings(get_default_settings(), settings_path)
    except SettingsError as e:
        print_error(escape(str(e)))
        raise typer.Exit(code=1) from e
    print_success(f"Settings written to {escape(str(saved))}")

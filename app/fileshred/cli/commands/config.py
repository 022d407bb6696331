"""Settings commands.

Provides commands to show, create and locate the fileshred settings
file that holds the default shred configuration.
"""

import json
from typing import Annotated

import typer
from rich.table import Table

from fileshred.core.paths import get_settings_path
from fileshred.shredder.settings import (
    SettingsError,
    ShredSettings,
    load_settings_or_default,
    save_settings,
)
from fileshred.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Show or create the default shred settings.",
    no_args_is_help=True,
)


@app.command()
def show(
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON."),
    ] = False,
) -> None:
    """Show the effective shred settings."""
    try:
        settings = load_settings_or_default()
    except SettingsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if json_output:
        console.print_json(json.dumps(settings.model_dump(mode="json")))
        return

    path = get_settings_path()
    source = str(path) if path.exists() else "built-in defaults"

    table = Table(
        title="Shred Settings",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Setting", style="bold")
    table.add_column("Value")
    table.add_column("Description", style="muted")

    for name, field in ShredSettings.model_fields.items():
        value = getattr(settings, name)
        shown = value.value if hasattr(value, "value") else str(value)
        table.add_row(name, str(shown), field.description or "")

    console.print(table)
    console.print(f"[dim]Source: {source}[/dim]")


@app.command()
def init(
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite an existing settings file."),
    ] = False,
) -> None:
    """Write a settings file with the default values."""
    path = get_settings_path()
    if path.exists() and not force:
        print_info(f"Settings file already exists: {path} (use --force to overwrite)")
        raise typer.Exit(code=1)

    try:
        saved = save_settings(ShredSettings(), path)
    except SettingsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Settings written to {saved}")


@app.command("path")
def show_path() -> None:
    """Print the settings file location."""
    typer.echo(str(get_settings_path()))

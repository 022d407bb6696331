"""Main CLI application entry point.

Defines the Typer application and global options.
"""

import logging
from typing import Annotated

import typer
from rich.logging import RichHandler

from fileshred import __version__
from fileshred.cli.commands import config, history, shred
from fileshred.utils.formatting import err_console

app = typer.Typer(
    name="fileshred",
    help="Secure file deletion: overwrite, rename and remove files for good.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"fileshred version {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Route fileshred log records to stderr through Rich.

    Args:
        verbose: If True, show debug records; otherwise only errors.
    """
    logger = logging.getLogger("fileshred")
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)
    logger.addHandler(RichHandler(console=err_console, show_path=False, rich_tracebacks=True))
    logger.setLevel(logging.DEBUG if verbose else logging.ERROR)


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress non-essential output.",
        ),
    ] = False,
) -> None:
    """fileshred - Secure file deletion.

    Overwrites files with zeros, 0xFF bytes or random data, renames them
    to random names, and deletes them so their contents cannot be
    recovered through the filesystem.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    configure_logging(verbose)


# Register commands
app.command("files")(shred.files)
app.command("folder")(shred.folder)
app.add_typer(config.app, name="config")
app.add_typer(history.app, name="history")


if __name__ == "__main__":
    app()

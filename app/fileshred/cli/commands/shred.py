"""Shred commands.

Provides ``fileshred files`` for an explicit list of files and
``fileshred folder`` for every file below a directory. Both commands
validate their targets, show the plan, ask for confirmation, and then
hand the batch to a ShredSession.
"""

import os
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer
from rich.progress import BarColumn, MofNCompleteColumn, Progress, TextColumn

from fileshred.cli.display import (
    create_plan_table,
    create_results_table,
    describe_config,
    print_results_summary,
)
from fileshred.shredder.history import record_shred_session
from fileshred.shredder.models import FillMode, ShredConfig, ShredOutcome, ShredReport
from fileshred.shredder.session import ShredSession
from fileshred.shredder.settings import SettingsError, load_settings_or_default
from fileshred.utils.formatting import (
    console,
    print_error,
    print_info,
    print_warning,
)


class FillChoice(str, Enum):
    """Fill mode options for the CLI."""

    ZERO = "zero"
    MAX = "max"
    RANDOM = "random"


FillOption = Annotated[
    FillChoice | None,
    typer.Option("--fill", "-f", help="Byte pattern to overwrite with.", case_sensitive=False),
]
RenameOption = Annotated[
    bool | None,
    typer.Option("--rename/--no-rename", help="Rename files to random names first."),
]
RenamePassesOption = Annotated[
    int | None,
    typer.Option("--rename-passes", min=0, help="Number of obfuscation renames per file."),
]
PassesOption = Annotated[
    int | None,
    typer.Option("--passes", "-p", min=1, help="Number of overwrite passes per file."),
]
WorkersOption = Annotated[
    int | None,
    typer.Option("--workers", "-w", min=1, help="Number of files shredded in parallel."),
]
DryRunOption = Annotated[
    bool,
    typer.Option("--dry-run", help="Show what would be shredded."),
]
YesOption = Annotated[
    bool,
    typer.Option("--yes", "-y", help="Skip confirmation prompt."),
]


def files(
    ctx: typer.Context,
    paths: Annotated[
        list[Path],
        typer.Argument(help="Files to shred.", show_default=False),
    ],
    fill: FillOption = None,
    rename: RenameOption = None,
    rename_passes: RenamePassesOption = None,
    passes: PassesOption = None,
    workers: WorkersOption = None,
    dry_run: DryRunOption = False,
    yes: YesOption = False,
) -> None:
    """Securely shred individual files."""
    config = _build_config(
        fill=fill,
        rename=rename,
        rename_passes=rename_passes,
        passes=passes,
        workers=workers,
        dry_run=dry_run,
    )

    targets: list[Path] = []
    for path in paths:
        problem = _check_target(path)
        if problem:
            print_warning(f"Skipping {path}: {problem}")
            continue
        targets.append(path.absolute())

    if not targets:
        print_error("No files to shred.")
        raise typer.Exit(code=1)

    session = ShredSession(config)
    session.collect_files(targets)
    _confirm_and_run(ctx, session, yes=yes, command="fileshred files")


def folder(
    ctx: typer.Context,
    directory: Annotated[
        Path,
        typer.Argument(help="Folder whose files are shredded (recursively).", show_default=False),
    ],
    delete_folder: Annotated[
        bool | None,
        typer.Option(
            "--delete-folder/--keep-folder",
            help="Remove emptied subfolders afterwards (the folder itself is kept).",
        ),
    ] = None,
    fill: FillOption = None,
    rename: RenameOption = None,
    rename_passes: RenamePassesOption = None,
    passes: PassesOption = None,
    workers: WorkersOption = None,
    dry_run: DryRunOption = False,
    yes: YesOption = False,
) -> None:
    """Securely shred every file below a folder."""
    config = _build_config(
        fill=fill,
        rename=rename,
        rename_passes=rename_passes,
        passes=passes,
        workers=workers,
        dry_run=dry_run,
        delete_container_folder=delete_folder,
    )

    if directory.is_symlink():
        print_error(f"Symbolic link not followed: {directory}")
        raise typer.Exit(code=1)

    if not directory.is_dir():
        print_error(f"Not a directory: {directory}")
        raise typer.Exit(code=1)

    session = ShredSession(config)
    targets = session.collect_directory(
        directory.absolute(),
        delete_folders=config.delete_container_folder,
        accept=lambda p: _check_target(p) is None,
    )

    if not targets:
        print_info(f"No shreddable files found in {directory}.")
        return

    _confirm_and_run(ctx, session, yes=yes, command="fileshred folder")


# === Private helper functions ===


def _build_config(**overrides: object) -> ShredConfig:
    """Merge CLI overrides into the stored settings."""
    try:
        settings = load_settings_or_default()
    except SettingsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    fill = overrides.pop("fill")
    rename = overrides.pop("rename")
    passes = overrides.pop("passes")
    return settings.to_config(
        fill_mode=FillMode(fill.value) if isinstance(fill, FillChoice) else None,
        rename_enabled=rename,
        overwrite_passes=passes,
        **overrides,
    )


def _check_target(path: Path) -> str | None:
    """Return why a path cannot be shredded, or None if it can."""
    if path.is_symlink():
        return "symbolic links are not shredded"
    if not path.exists():
        return "does not exist"
    if not path.is_file():
        return "not a regular file"
    if not os.access(path, os.R_OK | os.W_OK):
        return "not readable and writable"
    return None


def _confirm_and_run(
    ctx: typer.Context,
    session: ShredSession,
    *,
    yes: bool,
    command: str,
) -> None:
    """Show the plan, confirm, run the session and report the results."""
    config = session.config
    quiet = bool(ctx.obj and ctx.obj.get("quiet"))

    if not quiet:
        console.print(create_plan_table(session.targets, config))
        console.print(f"[dim]{describe_config(config)}[/dim]")

    if not config.dry_run and not yes:
        confirmed = typer.confirm(
            f"\nSecurely delete {len(session.targets)} file(s)? Files cannot be recovered!",
            default=False,
        )
        if not confirmed:
            session.confirm(False)
            print_info("Aborted.")
            raise typer.Exit(code=0)

    session.confirm()
    report = _run_with_progress(session)

    console.print(create_results_table(report.outcomes))
    print_results_summary(report)

    if not config.dry_run:
        try:
            if record_shred_session(report, config, command=command) is not None:
                print_info("Session recorded to history.")
        except (OSError, RuntimeError) as e:
            print_warning(f"Could not record to history: {e}")

    if not report.all_succeeded:
        raise typer.Exit(code=1)


def _run_with_progress(session: ShredSession) -> ShredReport:
    """Run a confirmed session while showing a transient progress bar."""
    with Progress(
        TextColumn("[info]Shredding[/info]"),
        BarColumn(),
        MofNCompleteColumn(),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task("shred", total=len(session.targets))

        def advance(completed: int, total: int, outcome: ShredOutcome) -> None:
            progress.update(task, completed=completed, total=total)

        session.set_progress(advance)
        return session.run()

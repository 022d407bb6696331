"""History command for viewing past shred sessions.

This module provides the ``fileshred history`` command for viewing the
audit trail of shred sessions.
"""

import json
from typing import Annotated

import typer
from rich.table import Table

from fileshred.core.state import StateManager
from fileshred.models.history import HistoryEntry
from fileshred.utils.formatting import console, print_info

app = typer.Typer(
    name="history",
    help="View history of shred sessions.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def history(
    ctx: typer.Context,
    limit: Annotated[
        int,
        typer.Option(
            "--limit",
            "-n",
            min=1,
            help="Maximum number of entries to show.",
        ),
    ] = 20,
    failed_only: Annotated[
        bool,
        typer.Option(
            "--failed",
            help="Only show sessions with failed files.",
        ),
    ] = False,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Output as JSON.",
        ),
    ] = False,
) -> None:
    """Show history of shred sessions.

    Examples:
        fileshred history              # Show last 20 sessions
        fileshred history -n 50        # Show last 50 sessions
        fileshred history --failed     # Sessions that left files behind
        fileshred history --json       # JSON output for scripting
    """
    if ctx.invoked_subcommand is not None:
        return

    if failed_only:
        entries = [e for e in StateManager().get_history() if e.failed][:limit]
    else:
        entries = StateManager().get_history(limit=limit)

    if not entries:
        print_info("No shred history found.")
        return

    if json_output:
        console.print_json(json.dumps([e.to_dict() for e in entries]))
        return

    _print_history_table(entries)


def _print_history_table(entries: list[HistoryEntry]) -> None:
    """Display history entries as a Rich table."""
    table = Table(
        title="Shred History",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("ID", style="muted", width=12)
    table.add_column("When", width=19)
    table.add_column("Mode", width=7)
    table.add_column("Fill", width=7)
    table.add_column("Shredded", justify="right")
    table.add_column("Failed", justify="right")
    table.add_column("Target")

    for entry in entries:
        when = entry.timestamp[:19].replace("T", " ")
        failed = f"[error]{entry.failed}[/error]" if entry.failed else "0"
        if entry.root is not None:
            target = entry.root
        elif len(entry.items) == 1:
            target = entry.items[0].path
        else:
            target = f"{entry.items[0].path} (+{len(entry.items) - 1} more)"
        table.add_row(
            entry.id,
            when,
            entry.mode.value,
            entry.fill_mode,
            str(entry.succeeded),
            failed,
            target,
        )

    console.print(table)

"""Shared Rich display functions for shred plans and results.

Provides reusable table builders and summary printers used by the
files and folder commands.
"""

from pathlib import Path

from rich.table import Table
from rich.text import Text

from fileshred.shredder.models import ShredConfig, ShredOutcome, ShredReport
from fileshred.utils.formatting import console, format_size, print_info, print_success


def create_plan_table(targets: tuple[Path, ...], config: ShredConfig) -> Table:
    """Create a Rich table listing the files about to be shredded.

    Args:
        targets: Files that will be shredded.
        config: Configuration of the pending session.

    Returns:
        Rich Table configured for plan display.
    """
    title = "Planned Shredding (Dry Run)" if config.dry_run else "Planned Shredding"

    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("File", no_wrap=True)
    table.add_column("Size", style="info", justify="right", width=10)

    for target in targets:
        try:
            size = format_size(target.stat().st_size)
        except OSError:
            size = "-"
        table.add_row(Text(str(target)), size)

    return table


def describe_config(config: ShredConfig) -> str:
    """Summarize a shred configuration on one line."""
    parts = [f"fill={config.fill_mode.value}"]
    if config.overwrite_passes > 1:
        parts.append(f"passes={config.overwrite_passes}")
    if config.rename_enabled and config.rename_passes:
        parts.append(f"renames={config.rename_passes}")
    else:
        parts.append("renames=off")
    if config.workers > 1:
        parts.append(f"workers={config.workers}")
    return ", ".join(parts)


def create_results_table(outcomes: list[ShredOutcome]) -> Table:
    """Create a Rich table displaying shred outcomes.

    Failed targets are shown with their reason so they are never
    mistaken for destroyed files.

    Args:
        outcomes: Outcomes in submission order.

    Returns:
        Rich Table configured for results display.
    """
    table = Table(
        title="Shred Results",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Status", width=10, justify="center")
    table.add_column("File", no_wrap=True)
    table.add_column("Details")

    for outcome in outcomes:
        if outcome.dry_run:
            status = "[info]dry-run[/info]"
            detail = f"Would shred {format_size(outcome.bytes_overwritten)}"
        elif outcome.success:
            status = "[destroyed]shredded[/destroyed]"
            detail = format_size(outcome.bytes_overwritten)
        else:
            status = "[error]FAIL[/error]"
            reason = outcome.reason.value if outcome.reason else "unknown"
            detail = f"{reason}: {outcome.error or 'Unknown error'}"
            if outcome.final_path:
                detail += f" (left at {outcome.final_path})"

        # Failed files are still on disk
        path_style = "kept" if outcome.failed else ""
        table.add_row(status, Text(outcome.path, style=path_style), Text(detail, style="muted"))

    return table


def print_results_summary(report: ShredReport) -> None:
    """Print a summary of a shred report.

    Args:
        report: Report returned by the session.
    """
    dry_count = sum(1 for o in report.outcomes if o.dry_run)
    if dry_count:
        print_info(f"Dry-run: {dry_count} file(s) would be shredded.")
        return

    if report.failed == 0:
        print_success(f"All {report.succeeded} file(s) shredded.")
    else:
        console.print(
            f"\n[success]{report.succeeded} shredded[/success], "
            f"[error]{report.failed} failed (still on disk or partially overwritten)[/error]"
        )

    if report.folders_removed:
        print_info(f"Removed {report.folders_removed} emptied folder(s).")

"""Console output helpers shared by all commands.

Regular output goes to ``console`` (stdout); warnings, errors and log
records go to ``err_console`` (stderr) so that ``--json`` output stays
machine-readable.
"""

import sys

from rich.console import Console

from fileshred.core.theme import get_theme

# Interactive terminals get full hex colors; otherwise Rich decides
_COLOR_SYSTEM = "truecolor" if sys.stdout.isatty() else None

console = Console(theme=get_theme(), color_system=_COLOR_SYSTEM)
err_console = Console(theme=get_theme(), stderr=True, color_system=_COLOR_SYSTEM)


def print_info(message: str) -> None:
    """Print an informational line."""
    console.print(f"[info]{message}[/]")


def print_success(message: str) -> None:
    """Print a success line."""
    console.print(f"[success]{message}[/]")


def print_warning(message: str) -> None:
    """Print a warning to stderr."""
    err_console.print(f"[warning]Warning:[/] {message}")


def print_error(message: str) -> None:
    """Print an error to stderr."""
    err_console.print(f"[error]Error:[/] {message}")


_UNITS = ("B", "KB", "MB", "GB", "TB")


def format_size(size_bytes: int | None) -> str:
    """Render a byte count with binary units, e.g. ``2.0 KB``."""
    if not size_bytes:
        return "0 B"
    size = float(size_bytes)
    for unit in _UNITS[:-1]:
        if abs(size) < 1024:
            return f"{int(size)} B" if unit == "B" else f"{size:.1f} {unit}"
        size /= 1024
    return f"{size:.1f} {_UNITS[-1]}"

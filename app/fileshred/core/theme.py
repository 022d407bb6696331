"""Color theme for fileshred output.

The bundled palette lives in ``fileshred/data/theme.toml``. Users may
override any subset of its keys in ``~/.config/fileshred/theme.toml``;
an unreadable or invalid override is ignored with a warning so that a
typo never stops a shred run.
"""

import logging
import re
import tomllib
from functools import cache
from importlib import resources
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from rich.theme import Theme

from fileshred.core.paths import get_theme_path

logger = logging.getLogger(__name__)

_HEX_COLOR = re.compile(r"#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})")


class ThemeColors(BaseModel):
    """Palette used by the CLI, as #RGB or #RRGGBB hex codes.

    ``destroyed`` marks files that were shredded; ``kept`` marks files
    that are still on disk after a failed shred.
    """

    model_config = ConfigDict(extra="forbid")

    text: str = "#ffffff"
    muted: str = "#b2bec3"
    header: str = "#69B9A1"
    border: str = "#29526d"
    success: str = "#03b971"
    warning: str = "#f5b332"
    error: str = "#f53263"
    info: str = "#0ec1c8"
    destroyed: str = "#f53263"
    kept: str = "#c1ff62"

    @field_validator("*", mode="before")
    @classmethod
    def check_hex(cls, v: object, info: Any) -> str:
        """Accept only hex color strings."""
        if not isinstance(v, str) or not _HEX_COLOR.fullmatch(v.strip()):
            msg = f"{info.field_name}: expected #RGB or #RRGGBB, got {v!r}"
            raise ValueError(msg)
        return v.strip()


def get_bundled_theme_path() -> Path:
    """Location of the palette shipped with the package."""
    return Path(str(resources.files("fileshred.data").joinpath("theme.toml")))


def _read_colors(path: Path) -> dict[str, object]:
    """Return the [colors] table of a theme file, or {} if unusable."""
    try:
        with open(path, "rb") as f:
            table = tomllib.load(f).get("colors", {})
    except FileNotFoundError:
        return {}
    except (tomllib.TOMLDecodeError, OSError) as e:
        logger.warning("Ignoring theme file %s: %s", path, e)
        return {}

    if not isinstance(table, dict):
        logger.warning("Ignoring theme file %s: [colors] is not a table", path)
        return {}
    return table


def load_theme(user_path: Path | None = None) -> ThemeColors:
    """Merge user overrides onto the bundled palette.

    Args:
        user_path: Override file; defaults to the XDG theme path.

    Returns:
        Validated colors. Falls back to the defaults if the merged
        palette is invalid.
    """
    colors = _read_colors(get_bundled_theme_path())
    colors.update(_read_colors(user_path or get_theme_path()))

    try:
        return ThemeColors.model_validate(colors)
    except ValidationError as e:
        logger.warning("Invalid theme colors, using defaults: %s", e)
        return ThemeColors()


def get_rich_theme(colors: ThemeColors | None = None) -> Theme:
    """Build the Rich style table used by the consoles."""
    c = colors or load_theme()
    return Theme(
        {
            "text": c.text,
            "muted": c.muted,
            "dim": c.muted,
            "header": c.header,
            "bold_header": f"bold {c.header}",
            "border": c.border,
            "success": c.success,
            "warning": c.warning,
            "error": f"bold {c.error}",
            "info": c.info,
            "destroyed": f"bold {c.destroyed}",
            "kept": c.kept,
        }
    )


@cache
def get_theme() -> Theme:
    """Rich theme for the shared consoles, loaded once per process."""
    return get_rich_theme()

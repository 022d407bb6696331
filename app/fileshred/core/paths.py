"""Where fileshred keeps its settings and its audit trail.

Locations follow the XDG Base Directory layout:

- ``$XDG_CONFIG_HOME/fileshred`` (default ``~/.config/fileshred``) holds
  ``config.toml`` with the shred defaults and an optional ``theme.toml``.
- ``$XDG_STATE_HOME/fileshred`` (default ``~/.local/state/fileshred``)
  holds ``history.jsonl``, the record of past shred sessions.

Nothing here creates directories except ``ensure_dir``.
"""

import os
from pathlib import Path

APP_NAME = "fileshred"

SETTINGS_FILENAME = "config.toml"
THEME_FILENAME = "theme.toml"
HISTORY_FILENAME = "history.jsonl"


def _xdg_base(env_var: str, fallback: str) -> Path:
    """Resolve an XDG base directory and append the application name.

    An empty or unset variable falls back to ``~/<fallback>``.
    """
    base = os.environ.get(env_var) or str(Path.home() / fallback)
    return Path(base) / APP_NAME


def get_config_dir() -> Path:
    """Directory holding the settings and theme files."""
    return _xdg_base("XDG_CONFIG_HOME", ".config")


def get_state_dir() -> Path:
    """Directory holding the shred history."""
    return _xdg_base("XDG_STATE_HOME", ".local/state")


def get_settings_path() -> Path:
    """Path of the TOML file with the stored shred defaults."""
    return get_config_dir() / SETTINGS_FILENAME


def get_theme_path() -> Path:
    """Path of the optional user color overrides."""
    return get_config_dir() / THEME_FILENAME


def get_history_path() -> Path:
    """Path of the JSON Lines shred history."""
    return get_state_dir() / HISTORY_FILENAME


def ensure_dir(path: Path) -> Path:
    """Create a directory (and its parents) unless it already exists.

    Args:
        path: Directory to create.

    Returns:
        The directory path.

    Raises:
        RuntimeError: If the directory cannot be created.
    """
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        reason = "Permission denied" if isinstance(e, PermissionError) else str(e)
        msg = f"Cannot create directory {path}: {reason}"
        raise RuntimeError(msg) from e
    return path

"""Persisted shred defaults.

Users can store their preferred fill mode, rename behaviour and other
defaults in ~/.config/fileshred/config.toml. Command-line options
override individual settings for a single run.
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated, Any

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from fileshred.core.paths import get_settings_path
from fileshred.shredder.models import (
    DEFAULT_CHUNK_SIZE,
    DEFAULT_RENAME_PASSES,
    FillMode,
    ShredConfig,
)

logger = logging.getLogger(__name__)


class ShredSettings(BaseModel):
    """User defaults for shred sessions.

    Attributes:
        fill_mode: Byte pattern used for overwriting.
        rename_enabled: Rename files to random names before overwriting.
        rename_passes: Number of obfuscation renames per file.
        delete_container_folder: Remove emptied subfolders after a folder run.
        overwrite_passes: Number of full-length overwrite passes.
        chunk_size: Size of each write in bytes.
        sync: fsync after each overwrite pass.
        workers: Number of files processed in parallel.
    """

    model_config = ConfigDict(extra="forbid")

    fill_mode: Annotated[
        FillMode,
        Field(description="Byte pattern: zero, max or random"),
    ] = FillMode.RANDOM
    rename_enabled: Annotated[
        bool,
        Field(description="Rename files before overwriting"),
    ] = True
    rename_passes: Annotated[
        int,
        Field(ge=0, le=1000, description="Obfuscation renames per file (0-1000)"),
    ] = DEFAULT_RENAME_PASSES
    delete_container_folder: Annotated[
        bool,
        Field(description="Remove emptied subfolders after a folder run"),
    ] = True
    overwrite_passes: Annotated[
        int,
        Field(ge=1, le=35, description="Overwrite passes per file (1-35)"),
    ] = 1
    chunk_size: Annotated[
        int,
        Field(ge=512, le=64 * 1024 * 1024, description="Write chunk size in bytes"),
    ] = DEFAULT_CHUNK_SIZE
    sync: Annotated[
        bool,
        Field(description="fsync after each overwrite pass"),
    ] = True
    workers: Annotated[
        int,
        Field(ge=1, le=64, description="Files processed in parallel (1-64)"),
    ] = 1

    def to_config(self, **overrides: Any) -> ShredConfig:
        """Build a ShredConfig from these settings.

        Args:
            **overrides: ShredConfig fields to override. None values are
                ignored so that unset CLI options keep the stored default.

        Returns:
            Immutable ShredConfig for one session.
        """
        values: dict[str, Any] = self.model_dump()
        values.update({k: v for k, v in overrides.items() if v is not None})
        return ShredConfig(**values)


class SettingsError(Exception):
    """Base exception for settings errors."""


class SettingsNotFoundError(SettingsError):
    """Raised when the settings file is not found."""


class SettingsParseError(SettingsError):
    """Raised when the settings file cannot be parsed."""


def load_settings(path: Path | None = None) -> ShredSettings:
    """Load shred settings from a TOML file.

    Args:
        path: Path to the settings file. If None, uses the default path.

    Returns:
        Validated ShredSettings object.

    Raises:
        SettingsNotFoundError: If the settings file doesn't exist.
        SettingsParseError: If the TOML syntax is invalid.
        SettingsError: If the content doesn't match the schema.
    """
    settings_path = path or get_settings_path()

    if not settings_path.exists():
        raise SettingsNotFoundError(f"Settings file not found: {settings_path}")

    try:
        with open(settings_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise SettingsParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise SettingsError(f"Failed to read settings: {e}") from e

    # Accept a [shred] table as well as top-level keys
    if isinstance(data.get("shred"), dict) and len(data) == 1:
        data = data["shred"]

    try:
        return ShredSettings.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise SettingsError(f"Invalid settings content: {e}") from e


def load_settings_or_default(path: Path | None = None) -> ShredSettings:
    """Load settings, falling back to defaults when no file exists.

    Args:
        path: Path to the settings file. If None, uses the default path.

    Returns:
        Stored settings, or ShredSettings() if the file is missing.

    Raises:
        SettingsParseError: If the TOML syntax is invalid.
        SettingsError: If the content doesn't match the schema.
    """
    try:
        return load_settings(path)
    except SettingsNotFoundError:
        logger.debug("No settings file, using defaults")
        return ShredSettings()


def save_settings(settings: ShredSettings, path: Path | None = None) -> Path:
    """Save shred settings to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        settings: The settings to save.
        path: Path to save the settings. If None, uses the default path.

    Returns:
        Path where the settings were saved.

    Raises:
        SettingsError: If the file cannot be written.
    """
    settings_path = path or get_settings_path()

    tmp_path: Path | None = None
    try:
        settings_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=settings_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(settings.model_dump(mode="json"), f)
        os.replace(str(tmp_path), str(settings_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise SettingsError(f"Failed to write settings: {e}") from e

    return settings_path

"""Unit tests for persisted shred settings."""

from pathlib import Path

import pytest
from fileshred.shredder.models import FillMode
from fileshred.shredder.settings import (
    SettingsError,
    SettingsNotFoundError,
    SettingsParseError,
    ShredSettings,
    load_settings,
    load_settings_or_default,
    save_settings,
)


class TestShredSettings:
    """Tests for the ShredSettings model."""

    def test_defaults(self) -> None:
        """Default settings use random fill and 25 renames."""
        settings = ShredSettings()
        assert settings.fill_mode == FillMode.RANDOM
        assert settings.rename_passes == 25
        assert settings.workers == 1

    def test_extra_keys_forbidden(self) -> None:
        """Unknown keys are rejected."""
        with pytest.raises(ValueError):
            ShredSettings.model_validate({"colour": "red"})

    def test_range_validation(self) -> None:
        """Numeric settings are range-checked."""
        with pytest.raises(ValueError):
            ShredSettings(workers=0)

    def test_to_config_applies_overrides(self) -> None:
        """CLI overrides win, None keeps the stored value."""
        settings = ShredSettings(fill_mode=FillMode.MAX, rename_passes=7)

        config = settings.to_config(fill_mode=None, rename_passes=2, dry_run=True)

        assert config.fill_mode == FillMode.MAX
        assert config.rename_passes == 2
        assert config.dry_run is True


class TestLoadSaveSettings:
    """Tests for settings file I/O."""

    def test_round_trip(self, tmp_path: Path) -> None:
        """Saved settings load back unchanged."""
        path = tmp_path / "config.toml"
        original = ShredSettings(fill_mode=FillMode.ZERO, rename_enabled=False, workers=3)

        save_settings(original, path)

        assert load_settings(path) == original

    def test_missing_file(self, tmp_path: Path) -> None:
        """A missing file raises SettingsNotFoundError."""
        with pytest.raises(SettingsNotFoundError):
            load_settings(tmp_path / "missing.toml")

    def test_missing_file_defaults(self, tmp_path: Path) -> None:
        """load_settings_or_default falls back to defaults."""
        assert load_settings_or_default(tmp_path / "missing.toml") == ShredSettings()

    def test_invalid_toml(self, tmp_path: Path) -> None:
        """Broken TOML raises SettingsParseError."""
        path = tmp_path / "config.toml"
        path.write_text("fill_mode = [")
        with pytest.raises(SettingsParseError):
            load_settings(path)

    def test_invalid_content(self, tmp_path: Path) -> None:
        """Schema violations raise SettingsError."""
        path = tmp_path / "config.toml"
        path.write_text('fill_mode = "sparkles"\n')
        with pytest.raises(SettingsError):
            load_settings(path)

    def test_shred_table_accepted(self, tmp_path: Path) -> None:
        """Settings may live under a [shred] table."""
        path = tmp_path / "config.toml"
        path.write_text('[shred]\nfill_mode = "max"\nrename_passes = 3\n')

        settings = load_settings(path)

        assert settings.fill_mode == FillMode.MAX
        assert settings.rename_passes == 3

    def test_default_path_uses_xdg(self, isolated_xdg: Path) -> None:
        """Without a path, settings are stored under XDG_CONFIG_HOME."""
        saved = save_settings(ShredSettings())
        assert saved == isolated_xdg / "config" / "fileshred" / "config.toml"
        assert saved.exists()

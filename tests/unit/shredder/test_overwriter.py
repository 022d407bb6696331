"""Unit tests for Overwriter.

Covers pattern correctness before deletion, length preservation,
deletion, and error mapping for vanished files and failing writes.
"""

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from fileshred.shredder.errors import (
    ConfigurationError,
    NotFoundError,
    PermissionDeniedError,
    ShredIOError,
)
from fileshred.shredder.models import FillMode
from fileshred.shredder.overwriter import Overwriter


class TestOverwrite:
    """Tests for Overwriter.overwrite (content only, no delete)."""

    @pytest.mark.parametrize(
        ("mode", "expected"),
        [(FillMode.ZERO, 0x00), (FillMode.MAX, 0xFF)],
    )
    def test_every_byte_matches_pattern(self, make_file, mode: FillMode, expected: int) -> None:
        """Fixed patterns cover the whole prior length."""
        target = make_file("data.bin", size=10_000, byte=0x5A)

        written = Overwriter().overwrite(target, mode)

        data = target.read_bytes()
        assert written == 10_000
        assert len(data) == 10_000
        assert data == bytes([expected]) * 10_000

    def test_random_shows_variance(self, make_file) -> None:
        """Random fill replaces content with high-variance bytes."""
        target = make_file("data.bin", size=64 * 1024, byte=0x00)

        Overwriter().overwrite(target, FillMode.RANDOM)

        data = target.read_bytes()
        assert len(data) == 64 * 1024
        assert len(set(data)) > 200

    @pytest.mark.parametrize("size", [1, 4095, 4096, 4097, 10_000])
    def test_length_is_preserved(self, make_file, size: int) -> None:
        """The final chunk never writes past the original length."""
        target = make_file("data.bin", size=size)
        Overwriter().overwrite(target, FillMode.MAX)
        assert target.stat().st_size == size

    def test_small_chunks(self, make_file) -> None:
        """Odd chunk sizes still cover the file exactly."""
        target = make_file("data.bin", size=1000, byte=0x11)
        Overwriter(chunk_size=7).overwrite(target, FillMode.ZERO)
        assert target.read_bytes() == bytes(1000)

    def test_empty_file(self, make_file) -> None:
        """An empty file is accepted and stays empty."""
        target = make_file("empty.bin", size=0)
        assert Overwriter().overwrite(target, FillMode.ZERO) == 0
        assert target.stat().st_size == 0

    def test_multiple_passes_end_with_pattern(self, make_file) -> None:
        """With several passes the file ends up holding the pattern."""
        target = make_file("data.bin", size=5000, byte=0x77)
        Overwriter(passes=3).overwrite(target, FillMode.MAX)
        assert target.read_bytes() == b"\xff" * 5000

    def test_sync_calls_fsync_per_pass(self, make_file) -> None:
        """fsync runs once per pass when sync is enabled."""
        target = make_file("data.bin", size=100)
        with patch("fileshred.shredder.overwriter.os.fsync") as mock_fsync:
            Overwriter(passes=2, sync=True).overwrite(target, FillMode.ZERO)
        assert mock_fsync.call_count == 2

    def test_no_sync(self, make_file) -> None:
        """fsync is skipped when sync is disabled."""
        target = make_file("data.bin", size=100)
        with patch("fileshred.shredder.overwriter.os.fsync") as mock_fsync:
            Overwriter(sync=False).overwrite(target, FillMode.ZERO)
        mock_fsync.assert_not_called()

    def test_missing_file_raises_not_found(self, tmp_path: Path) -> None:
        """A vanished file fails with NotFoundError."""
        with pytest.raises(NotFoundError):
            Overwriter().overwrite(tmp_path / "gone.bin", FillMode.ZERO)

    def test_directory_rejected(self, tmp_path: Path) -> None:
        """Directories are not regular files."""
        with pytest.raises(ShredIOError, match="Not a regular file"):
            Overwriter().overwrite(tmp_path, FillMode.ZERO)

    def test_symlink_rejected(self, make_file, tmp_path: Path) -> None:
        """Symlinks are refused and their target stays intact."""
        real = make_file("real.bin", size=10)
        link = tmp_path / "link.bin"
        link.symlink_to(real)

        with pytest.raises(ShredIOError):
            Overwriter().overwrite(link, FillMode.ZERO)

        assert real.read_bytes() == b"A" * 10

    def test_none_mode_rejected_before_write(self, make_file) -> None:
        """No fill mode is a configuration error and nothing is written."""
        target = make_file("data.bin", size=10)
        with pytest.raises(ConfigurationError):
            Overwriter().overwrite(target, FillMode.NONE)
        assert target.read_bytes() == b"A" * 10

    def test_open_permission_denied(self, make_file) -> None:
        """A refused open raises PermissionDeniedError."""
        target = make_file("data.bin", size=10)
        with (
            patch(
                "fileshred.shredder.overwriter.os.open",
                side_effect=PermissionError(13, "Permission denied"),
            ),
            pytest.raises(PermissionDeniedError),
        ):
            Overwriter().overwrite(target, FillMode.ZERO)

    def test_write_failure_raises_io_error(self, make_file) -> None:
        """A failing write (e.g. disk full) surfaces as ShredIOError."""
        target = make_file("data.bin", size=10_000)
        with (
            patch("fileshred.shredder.overwriter.os.fsync", side_effect=OSError(28, "No space")),
            pytest.raises(ShredIOError),
        ):
            Overwriter().overwrite(target, FillMode.ZERO)

    def test_invalid_passes(self) -> None:
        """At least one pass is required."""
        with pytest.raises(ValueError, match="passes"):
            Overwriter(passes=0)


class TestShred:
    """Tests for Overwriter.shred (overwrite then delete)."""

    def test_file_is_deleted(self, make_file) -> None:
        """Shredding removes the file from the filesystem."""
        target = make_file("data.bin", size=10_000)

        written = Overwriter().shred(target, FillMode.ZERO)

        assert written == 10_000
        assert not target.exists()

    def test_content_overwritten_before_unlink(self, make_file) -> None:
        """The pattern is on disk at the moment the file is unlinked."""
        target = make_file("data.bin", size=6000, byte=0x33)
        seen: list[bytes] = []
        real_unlink = os.unlink

        def capture(path: Path) -> None:
            seen.append(Path(path).read_bytes())
            real_unlink(path)

        with patch("fileshred.shredder.overwriter.os.unlink", side_effect=capture):
            Overwriter().shred(target, FillMode.MAX)

        assert seen == [b"\xff" * 6000]
        assert not target.exists()

    def test_delete_failure_reported(self, make_file) -> None:
        """A failing unlink is an error even though content was destroyed."""
        target = make_file("data.bin", size=100)
        with (
            patch(
                "fileshred.shredder.overwriter.os.unlink",
                side_effect=OSError(16, "Device or resource busy"),
            ),
            pytest.raises(ShredIOError, match="delete"),
        ):
            Overwriter().shred(target, FillMode.ZERO)

        assert target.exists()
        assert target.read_bytes() == bytes(100)

    def test_missing_file(self, tmp_path: Path) -> None:
        """Shredding a missing file fails with NotFoundError."""
        with pytest.raises(NotFoundError):
            Overwriter().shred(tmp_path / "nope", FillMode.RANDOM)

"""Unit tests for formatting helpers."""

import pytest
from fileshred.utils.formatting import format_size


class TestFormatSize:
    """Tests for format_size."""

    @pytest.mark.parametrize(
        ("size", "expected"),
        [
            (None, "0 B"),
            (0, "0 B"),
            (512, "512 B"),
            (2048, "2.0 KB"),
            (5 * 1024 * 1024, "5.0 MB"),
            (3 * 1024**4, "3.0 TB"),
        ],
    )
    def test_format(self, size: int | None, expected: str) -> None:
        """Sizes are rendered with binary units."""
        assert format_size(size) == expected

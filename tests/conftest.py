"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def isolated_xdg(tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG config and state directories at a throwaway location."""
    base = tmp_path_factory.mktemp("xdg")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(base / "config"))
    monkeypatch.setenv("XDG_STATE_HOME", str(base / "state"))
    return base


@pytest.fixture
def make_file(tmp_path: Path):
    """Factory creating a file with the given size and byte content."""

    def _make(name: str, size: int = 1024, byte: int = 0x41, parent: Path | None = None) -> Path:
        path = (parent or tmp_path) / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(bytes([byte]) * size)
        return path

    return _make


@pytest.fixture
def nested_tree(tmp_path: Path) -> Path:
    """Directory with 3 files spread over 2 nested subdirectories.

    Layout::

        root/
            top.txt
            sub1/
                a.txt
                sub2/
                    b.txt
    """
    root = tmp_path / "root"
    (root / "sub1" / "sub2").mkdir(parents=True)
    (root / "top.txt").write_bytes(b"top secret" * 100)
    (root / "sub1" / "a.txt").write_bytes(b"a" * 5000)
    (root / "sub1" / "sub2" / "b.txt").write_bytes(b"b" * 123)
    return root

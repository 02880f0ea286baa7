"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from collections.abc import Callable
from pathlib import Path

import pytest


@pytest.fixture
def dest(tmp_path: Path) -> Path:
    """Empty build destination directory."""
    path = tmp_path / "_site"
    path.mkdir()
    return path


@pytest.fixture
def make_tree() -> Callable[[Path, list[str]], None]:
    """Create files (and directories, for entries ending in '/') under a root."""

    def _make(root: Path, entries: list[str]) -> None:
        for entry in entries:
            path = root / entry
            if entry.endswith("/"):
                path.mkdir(parents=True, exist_ok=True)
            else:
                path.parent.mkdir(parents=True, exist_ok=True)
                path.write_text(f"content of {entry}")

    return _make


@pytest.fixture
def list_tree() -> Callable[[Path], set[str]]:
    """List every path under a root, relative to it."""

    def _list(root: Path) -> set[str]:
        return {str(p.relative_to(root)) for p in root.rglob("*")}

    return _list

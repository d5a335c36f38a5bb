"""
Pytest configuration and shared fixtures for filename_change tests.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Callable

import pytest

# Qt must not need a display (set BEFORE any PySide6 import)
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture
def make_files(tmp_path: Path) -> Callable[..., Path]:
    """Create files (relative paths, parents made as needed) under a fresh folder.

    Returns:
        Factory taking relative names and returning the folder.
    """
    root = tmp_path / "work"
    root.mkdir()

    def _make(*names: str) -> Path:
        for name in names:
            path = root / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(name, encoding="utf-8")
        return root

    return _make


@pytest.fixture
def report_dir(make_files) -> Path:
    """Folder holding Report.TXT, report_old.txt and image.png."""
    return make_files("Report.TXT", "report_old.txt", "image.png")

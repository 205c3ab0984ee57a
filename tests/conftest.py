"""Test setup for mdchangelog."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

FIXTURES = Path(__file__).resolve().parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    """Directory holding the sample changelogs."""
    return FIXTURES


@pytest.fixture
def write_changelog(tmp_path: Path):
    """Write Markdown text to a file under ``tmp_path`` and return its path."""

    def _write(text: str, name: str = "CHANGELOG.md") -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write

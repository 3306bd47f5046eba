"""Shared fixtures: throwaway wiki directories."""

from pathlib import Path

import pytest

from wikihome.config import Settings


@pytest.fixture
def write_file():
    """Return a helper that creates a file (and its parents) under a root."""

    def _write(root: Path, relative: str, content: str = "") -> Path:
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def wiki(tmp_path, write_file):
    """An empty wiki: a root directory holding only Home.md."""
    root = tmp_path / "wiki"
    root.mkdir()
    write_file(root, "Home.md", "old home content\n")
    return root


@pytest.fixture
def wiki_settings():
    """Settings with defaults, independent of the process environment."""
    return Settings(_env_file=None)

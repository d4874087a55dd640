"""Shared pytest fixtures for test files."""

from __future__ import annotations

import os
import time
from pathlib import Path

import pytest

from cleanup_target_dirs.config import SECONDS_PER_DAY

OLD_AGE_DAYS = 30


def _age_tree(path: Path, mtime: float) -> None:
    """Set the modification time of path and everything below it."""
    for dirpath, dirnames, filenames in os.walk(path):
        for name in filenames + dirnames:
            os.utime(os.path.join(dirpath, name), (mtime, mtime), follow_symlinks=False)
    os.utime(path, (mtime, mtime))


@pytest.fixture(name="old_mtime")
def fixture_old_mtime() -> float:
    """A modification time well before any cutoff used in the tests."""
    return time.time() - OLD_AGE_DAYS * SECONDS_PER_DAY


@pytest.fixture(name="make_project")
def fixture_make_project(old_mtime):
    """Factory building a project directory with a Cargo.toml and a populated target/ dir.

    Returns the project directory. ``files`` maps paths relative to target/ to contents.
    """

    def _make(parent: Path, name: str = "crate", files: dict[str, bytes] | None = None, aged: bool = True) -> Path:
        project = parent / name
        project.mkdir(parents=True, exist_ok=True)
        (project / "Cargo.toml").write_text('[package]\nname = "crate"\n')
        target = project / "target"
        target.mkdir()
        contents = files if files is not None else {"debug/app": b"x" * 100, "debug/deps/lib.rlib": b"y" * 50}
        for rel_path, data in contents.items():
            file_path = target / rel_path
            file_path.parent.mkdir(parents=True, exist_ok=True)
            file_path.write_bytes(data)
        if aged:
            _age_tree(target, old_mtime)
        return project

    return _make

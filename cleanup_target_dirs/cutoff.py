"""
Age cutoff evaluation for build-output directories.

Walks a build-output directory and decides whether every file in it is older than the
cutoff, returning the aggregate size of the directory when it is.
"""

from __future__ import annotations

import errno
import logging
import os
import stat
from dataclasses import dataclass
from pathlib import Path

UNSUPPORTED_ERRNOS = frozenset(
    code
    for code in (getattr(errno, "ENOTSUP", None), getattr(errno, "EOPNOTSUPP", None), errno.ENOSYS)
    if code is not None
)


class UnsupportedPlatformError(RuntimeError):
    """Raised when the platform cannot report file metadata or modification times."""


@dataclass(frozen=True)
class CutoffDecision:
    """Outcome of evaluating a build-output directory against an age cutoff."""

    eligible: bool
    total_bytes: int = 0

    @classmethod
    def eligible_with(cls, total_bytes: int) -> CutoffDecision:
        """Build a decision allowing deletion of total_bytes."""
        return cls(eligible=True, total_bytes=total_bytes)

    @classmethod
    def not_eligible(cls) -> CutoffDecision:
        """Build a decision that keeps the directory."""
        return cls(eligible=False)


def read_entry_metadata(path: str) -> os.stat_result:
    """Return lstat metadata for path.

    Raises:
        UnsupportedPlatformError: If the platform cannot provide metadata at all.
        OSError: For ordinary I/O failures (permissions, vanished entries, ...).
    """
    try:
        metadata = os.lstat(path)
    except NotImplementedError as exc:
        raise UnsupportedPlatformError(
            "This platform does not support reading the metadata of files"
        ) from exc
    except OSError as exc:
        if exc.errno in UNSUPPORTED_ERRNOS:
            raise UnsupportedPlatformError(
                f"This platform does not support reading the metadata of files: {exc}"
            ) from exc
        raise
    return metadata


def _iter_subtree(directory: Path, walk_errors: list[OSError]):
    """Yield every entry path below directory (directory included), without following links."""
    yield str(directory)
    for dirpath, dirnames, filenames in os.walk(directory, onerror=walk_errors.append):
        for name in dirnames:
            yield os.path.join(dirpath, name)
        for name in filenames:
            yield os.path.join(dirpath, name)


def evaluate_target_dir(directory: Path, cutoff: float) -> CutoffDecision:
    """Decide whether every regular file under directory was last modified at or before cutoff."""
    total_size = 0
    walk_errors: list[OSError] = []
    for entry_path in _iter_subtree(directory, walk_errors):
        if walk_errors:
            break
        try:
            metadata = read_entry_metadata(entry_path)
        except OSError as exc:
            logging.warning(
                "Error accessing metadata of file %s: %s, skipping cleaning folder %s",
                entry_path,
                exc,
                directory,
            )
            return CutoffDecision.not_eligible()
        if not stat.S_ISREG(metadata.st_mode):
            continue
        if metadata.st_mtime > cutoff:
            logging.debug("%s modified after cutoff; keeping %s", entry_path, directory)
            return CutoffDecision.not_eligible()
        total_size += metadata.st_size

    if walk_errors:
        exc = walk_errors[0]
        logging.warning(
            "Error listing %s: %s, skipping cleaning folder %s",
            exc.filename or directory,
            exc.strerror or exc,
            directory,
        )
        return CutoffDecision.not_eligible()
    return CutoffDecision.eligible_with(total_size)


def measure_dir_size(directory: Path) -> int:
    """Return the aggregate size of regular files under directory, skipping unreadable entries.

    Raises:
        OSError: If directory itself cannot be listed.
    """
    root_errors: list[OSError] = []
    total_size = 0
    walked = False
    for dirpath, _dirnames, filenames in os.walk(directory, onerror=root_errors.append):
        walked = True
        for name in filenames:
            file_path = os.path.join(dirpath, name)
            try:
                metadata = os.lstat(file_path)
            except OSError as exc:
                logging.debug("Unable to stat %s while sizing %s: %s", file_path, directory, exc)
                continue
            if stat.S_ISREG(metadata.st_mode):
                total_size += metadata.st_size
    if not walked and root_errors:
        raise root_errors[0]
    for exc in root_errors:
        logging.debug("Unable to list %s while sizing %s: %s", exc.filename, directory, exc)
    return total_size

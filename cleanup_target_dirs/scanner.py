"""
Recursive scanning for stale build-output directories.

Walks the tree below a root, treats every directory that holds both a manifest file and a
build-output directory as a project, and evaluates, reports, and optionally deletes that
project's build output. Descent through symbolic links is guarded by a stack of canonical
paths so that link cycles are reported instead of followed.
"""

from __future__ import annotations

import logging
import os
import stat
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator

from .config import ScanConfig
from .cutoff import CutoffDecision, evaluate_target_dir, measure_dir_size
from .reports import delete_target_dir, print_target_dir


class CycleError(ValueError):
    """Raised when a path is pushed onto a VisitedStack that already holds it."""


@dataclass
class ScanNode:
    """Classification of one directory's immediate children."""

    path: Path
    subdirs: list[Path] = field(default_factory=list)
    symlink_dirs: list[Path] = field(default_factory=list)
    other_entries: int = 0
    has_manifest: bool = False
    has_build_output: bool = False

    @property
    def is_project(self) -> bool:
        return self.has_manifest and self.has_build_output

    @property
    def candidates(self) -> list[Path]:
        """Directories to descend into, real subdirectories first."""
        return self.subdirs + self.symlink_dirs


class VisitedStack:
    """Canonical paths from the scan root to the directory currently being visited."""

    def __init__(self, paths: list[Path] | None = None):
        self._paths: list[Path] = []
        for path in paths or []:
            self.push(path)

    def __contains__(self, path: object) -> bool:
        return path in self._paths

    def __len__(self) -> int:
        return len(self._paths)

    @property
    def paths(self) -> list[Path]:
        return list(self._paths)

    def push(self, path: Path) -> None:
        if path in self._paths:
            raise CycleError(f"{path} is already on the descent path")
        self._paths.append(path)

    def pop(self) -> Path:
        return self._paths.pop()

    def cycle_chain(self, path: Path) -> list[Path] | None:
        """Return the chain from the first occurrence of path back to path, or None."""
        try:
            start = self._paths.index(path)
        except ValueError:
            return None
        return self._paths[start:] + [path]

    @contextmanager
    def descend(self, path: Path) -> Iterator[None]:
        """Push path for the duration of the block, popping it on every exit path."""
        self.push(path)
        try:
            yield
        finally:
            self.pop()


@dataclass
class ReclaimedDir:
    """A build-output directory found eligible for deletion."""

    path: Path
    size_bytes: int
    deleted: bool = False
    error: str | None = None


@dataclass
class ScanResult:
    """Aggregate outcome of a full scan."""

    total_bytes: int
    reclaimed: list[ReclaimedDir]
    elapsed_seconds: float
    actually_delete: bool


@dataclass
class ScanContext:
    """State shared by every frame of one scan."""

    config: ScanConfig
    stack: VisitedStack
    reclaimed: list[ReclaimedDir] = field(default_factory=list)


def _resolve_symlink_dir(directory: Path, link_path: Path) -> bool:
    """Return True if the symlink at link_path points to an existing directory."""
    try:
        inner = Path(os.readlink(link_path))
    except OSError as exc:
        logging.warning("Error following symlink %s: %s", link_path, exc)
        return False
    symlink_target = inner if inner.is_absolute() else directory / inner
    try:
        is_dir = stat.S_ISDIR(symlink_target.stat().st_mode)
    except OSError as exc:
        logging.warning(
            "Error reading metadata of entry %s behind symlink %s: %s",
            symlink_target,
            link_path,
            exc,
        )
        return False
    if not is_dir:
        logging.debug("Symlink %s does not point to a directory; skipping", link_path)
    return is_dir


def _classify_entry(node: ScanNode, entry: os.DirEntry, config: ScanConfig) -> None:
    """Record one directory entry on node as a flag, recursion candidate, or other entry."""
    if entry.name == config.manifest_name:
        node.has_manifest = True
    elif entry.name == config.build_dir_name and entry.is_dir(follow_symlinks=False):
        node.has_build_output = True
    if node.is_project:
        return
    entry_path = node.path / entry.name
    if entry.is_symlink():
        if _resolve_symlink_dir(node.path, entry_path):
            node.symlink_dirs.append(entry_path)
    elif entry.is_dir(follow_symlinks=False):
        node.subdirs.append(entry_path)
    else:
        node.other_entries += 1


def classify_directory(directory: Path, config: ScanConfig) -> ScanNode | None:
    """List directory and classify its children; returns None if it cannot be listed."""
    node = ScanNode(path=directory)
    try:
        with os.scandir(directory) as entries:
            for entry in entries:
                try:
                    _classify_entry(node, entry, config)
                except OSError as exc:
                    logging.warning("Error accessing entry %s in folder %s: %s", entry.name, directory, exc)
                    continue
                if node.is_project:
                    break
    except OSError as exc:
        logging.warning("Error scanning directory %s: %s", directory, exc)
        return None
    return node


def _evaluate_project(node: ScanNode, context: ScanContext) -> int:
    """Evaluate, report, and optionally delete the build output of a project directory."""
    config = context.config
    target_path = node.path / config.build_dir_name
    if config.cutoff is not None:
        decision = evaluate_target_dir(target_path, config.cutoff)
    else:
        try:
            decision = CutoffDecision.eligible_with(measure_dir_size(target_path))
        except OSError as exc:
            logging.warning("Error measuring size of target directory %s: %s", target_path, exc)
            decision = CutoffDecision.not_eligible()

    if not decision.eligible:
        return 0

    print_target_dir(target_path, decision.total_bytes)
    record = ReclaimedDir(path=target_path, size_bytes=decision.total_bytes)
    if config.actually_delete:
        record.error = delete_target_dir(target_path)
        record.deleted = record.error is None
    context.reclaimed.append(record)
    return decision.total_bytes


def _log_cycle(chain: list[Path]) -> None:
    """Warn about a symlink cycle, one path per line."""
    lines = "\n".join(f"\t{path}" for path in chain)
    logging.warning("Circular symlink reference detected:\n%s", lines)


def scan_for_target_dirs(directory: Path, context: ScanContext) -> int:
    """Scan directory recursively and return the bytes reclaimed (or reclaimable) below it."""
    node = classify_directory(directory, context.config)
    if node is None:
        return 0
    if node.is_project:
        return _evaluate_project(node, context)

    total_size = 0
    for candidate in node.candidates:
        try:
            canonical_path = candidate.resolve(strict=True)
        except (OSError, RuntimeError) as exc:
            logging.warning("Error resolving path %s: %s", candidate, exc)
            continue
        chain = context.stack.cycle_chain(canonical_path)
        if chain is not None:
            _log_cycle(chain)
            continue
        with context.stack.descend(canonical_path):
            total_size += scan_for_target_dirs(candidate, context)
    return total_size


def run_scan(config: ScanConfig) -> ScanResult:
    """Scan config.root and return the aggregated result.

    Raises:
        UnsupportedPlatformError: If file modification times cannot be read on this platform.
    """
    root = Path(config.root)
    try:
        canonical_root = root.resolve(strict=True)
    except (OSError, RuntimeError):
        canonical_root = root.absolute()
    context = ScanContext(config=config, stack=VisitedStack([canonical_root]))
    start_time = time.perf_counter()
    total_bytes = scan_for_target_dirs(root, context)
    return ScanResult(
        total_bytes=total_bytes,
        reclaimed=context.reclaimed,
        elapsed_seconds=time.perf_counter() - start_time,
        actually_delete=config.actually_delete,
    )

"""
Report generation and deletion helpers for cleanup_target_dirs.

Handles size formatting, per-directory report lines, removal of build-output
directories, the closing summary, and the optional JSON report.
"""

from __future__ import annotations

import json
import logging
import shutil
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cleanup_target_dirs.scanner import ReclaimedDir, ScanResult

BYTES_PER_KB = 1000
SIZE_UNITS = ["B", "kB", "MB", "GB", "TB", "PB"]


def format_size(num_bytes: int | None, decimal_places: int = 2) -> str:
    """Convert a byte count to a human-readable string using decimal (SI) units.

    Examples:
        >>> format_size(999)
        '999 B'
        >>> format_size(1500)
        '1.50 kB'
        >>> format_size(None)
        'n/a'
    """
    if num_bytes is None:
        return "n/a"
    if num_bytes < BYTES_PER_KB:
        return f"{num_bytes} B"
    value = float(num_bytes)
    for unit in SIZE_UNITS:
        if value < BYTES_PER_KB or unit == SIZE_UNITS[-1]:
            return f"{value:.{decimal_places}f} {unit}"
        value /= BYTES_PER_KB
    return f"{value:.{decimal_places}f} {SIZE_UNITS[-1]}"


def print_target_dir(target_path: Path, size_bytes: int) -> None:
    """Print the report line for an eligible build-output directory."""
    print(f"Deleting {format_size(size_bytes)} of files in target directory {target_path}")


def delete_target_dir(target_path: Path) -> str | None:
    """Remove target_path recursively, returning an error message on failure."""
    try:
        shutil.rmtree(target_path)
    except OSError as exc:
        logging.error("Error deleting target directory %s: %s", target_path, exc)
        return str(exc)
    logging.debug("Deleted %s", target_path)
    return None


def print_dry_run_notice() -> None:
    """Explain that nothing will be deleted without --actually-delete."""
    print(
        "Because you ran without --actually-delete, no folders will actually be deleted. "
        "This will simply list out what would be deleted, which is useful for debug purposes."
    )


def print_summary(result: ScanResult) -> None:
    """Print the reclaimed total and elapsed wall-clock time."""
    verb = "Deleted" if result.actually_delete else "Would delete"
    print(
        f"{verb} {format_size(result.total_bytes)} of data in target folders "
        f"in {result.elapsed_seconds:.2f} seconds"
    )
    failures = [item for item in result.reclaimed if item.error is not None]
    if failures:
        print(f"{len(failures)} target directory(ies) could not be fully deleted; see log for details.")


def write_json_report(reclaimed: list[ReclaimedDir], json_path: Path) -> None:
    """Write the eligible build-output directories to json_path."""
    rows = [
        {
            "path": str(item.path),
            "size_bytes": item.size_bytes,
            "size_human": format_size(item.size_bytes),
            "deleted": item.deleted,
            "error": item.error,
        }
        for item in reclaimed
    ]
    json_path.parent.mkdir(parents=True, exist_ok=True)
    json_path.write_text(json.dumps(rows, indent=2))

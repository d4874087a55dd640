"""
Configuration and path resolution for cleanup_target_dirs.

Handles default root determination and construction of the immutable scan configuration.
"""

from __future__ import annotations

import os
import time
from dataclasses import dataclass
from pathlib import Path

DEFAULT_MANIFEST_NAME = "Cargo.toml"
DEFAULT_BUILD_DIR_NAME = "target"
ROOT_ENV_VARS = ("CLEANUP_TARGET_ROOT", "CARGO_CLEANUP_ROOT")
SECONDS_PER_DAY = 86400


class ConfigurationError(RuntimeError):
    """Raised when required configuration is missing or invalid."""


@dataclass(frozen=True)
class ScanConfig:
    """Immutable parameters for a single scan run."""

    root: Path
    cutoff: float | None = None
    actually_delete: bool = False
    manifest_name: str = DEFAULT_MANIFEST_NAME
    build_dir_name: str = DEFAULT_BUILD_DIR_NAME


def _load_env_root_paths() -> list[Path]:
    """Collect root path candidates from supported environment variables."""
    paths: list[Path] = []
    for name in ROOT_ENV_VARS:
        env_val = os.environ.get(name)
        if env_val:
            paths.append(Path(env_val).expanduser())
    return paths


def determine_default_root() -> Path | None:
    """Return the first configured root that exists, or None when nothing is configured.

    Raises:
        ConfigurationError: If roots are configured but none of them exist.
    """
    candidates = _load_env_root_paths()
    if not candidates:
        return None
    for candidate in dict.fromkeys(candidates):
        if candidate.exists():
            return candidate
    raise ConfigurationError(
        "None of the configured roots exist: " + ", ".join(str(path) for path in candidates)
    )


def build_cutoff(days_old: int, now: float | None = None) -> float | None:
    """Convert a minimum age in days to an epoch cutoff; 0 disables the age filter."""
    if days_old < 0:
        raise ConfigurationError(f"days_old must be non-negative, got {days_old}")
    if days_old == 0:
        return None
    if now is None:
        now = time.time()
    return now - days_old * SECONDS_PER_DAY

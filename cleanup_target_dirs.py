#!/usr/bin/env python3
"""
Scan a source tree for stale build-output directories and optionally delete them.

A directory holding both a Cargo.toml and a target/ directory is treated as a project;
its target/ directory is removed when nothing inside it changed within the age window.

This is a thin wrapper around the cleanup_target_dirs package.
"""
from __future__ import annotations

from cleanup_target_dirs.cli import main

if __name__ == "__main__":
    raise SystemExit(main())

"""
Command-line interface and main entry point for cleanup_target_dirs.

Handles workflow orchestration and user interaction.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .args_parser import parse_args
from .config import ScanConfig, build_cutoff
from .cutoff import UnsupportedPlatformError
from .reports import print_dry_run_notice, print_summary, write_json_report
from .scanner import run_scan

EXIT_OK = 0
EXIT_BAD_ROOT = 1
EXIT_UNSUPPORTED_PLATFORM = 3


def _setup_root(args: argparse.Namespace) -> Path | int:
    """Validate the root path. Returns the expanded path or an error code."""
    root = Path(args.path).expanduser()
    if not root.exists():
        logging.error("Path %s does not exist.", root)
        return EXIT_BAD_ROOT
    if not root.is_dir():
        logging.error("Path %s is not a directory.", root)
        return EXIT_BAD_ROOT
    return root


def build_config(args: argparse.Namespace, root: Path) -> ScanConfig:
    """Build the immutable scan configuration from parsed arguments."""
    return ScanConfig(
        root=root,
        cutoff=build_cutoff(args.days_old),
        actually_delete=args.actually_delete,
        manifest_name=args.manifest_name,
        build_dir_name=args.target_name,
    )


def main(argv: list[str] | None = None) -> int:
    """Main entry point for cleanup_target_dirs CLI."""
    args = parse_args(sys.argv[1:] if argv is None else argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(message)s",
    )

    root = _setup_root(args)
    if isinstance(root, int):
        return root
    config = build_config(args, root)

    if not config.actually_delete:
        print_dry_run_notice()

    try:
        result = run_scan(config)
    except UnsupportedPlatformError as exc:
        logging.error("%s", exc)
        return EXIT_UNSUPPORTED_PLATFORM

    print_summary(result)
    if args.report_json:
        write_json_report(result.reclaimed, args.report_json)
    return EXIT_OK

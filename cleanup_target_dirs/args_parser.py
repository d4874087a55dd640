"""
Argument parsing for cleanup_target_dirs CLI.

Handles command-line argument definition, parsing, and validation.
"""

from __future__ import annotations

import argparse
from pathlib import Path

from .config import (
    DEFAULT_BUILD_DIR_NAME,
    DEFAULT_MANIFEST_NAME,
    ROOT_ENV_VARS,
    ConfigurationError,
    determine_default_root,
)


def non_negative_int(value: str) -> int:
    """argparse type for a whole number of days."""
    try:
        number = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Invalid number of days: {value}") from exc
    if number < 0:
        raise argparse.ArgumentTypeError(f"Number of days must be non-negative, got {number}")
    return number


def add_scan_arguments(parser: argparse.ArgumentParser, default_root: Path | None) -> None:
    """Add root, age, and layout arguments."""
    parser.add_argument(
        "-p",
        "--path",
        type=Path,
        default=default_root,
        help=f"Path of the folder to clean (default: ${ROOT_ENV_VARS[0]} or ${ROOT_ENV_VARS[1]}).",
    )
    parser.add_argument(
        "-d",
        "--days-old",
        type=non_negative_int,
        required=True,
        metavar="DAYS",
        help="Minimum number of days since modification to be cleaned (0 disables the age check).",
    )
    parser.add_argument(
        "--manifest-name",
        default=DEFAULT_MANIFEST_NAME,
        help="File marking a project directory (default: %(default)s).",
    )
    parser.add_argument(
        "--target-name",
        default=DEFAULT_BUILD_DIR_NAME,
        help="Build-output directory deleted from each project (default: %(default)s).",
    )


def add_action_arguments(parser: argparse.ArgumentParser) -> None:
    """Add the deletion authorization argument."""
    parser.add_argument(
        "--actually-delete",
        action="store_true",
        help="Delete the matched target directories. Default is dry-run/report only.",
    )


def add_output_arguments(parser: argparse.ArgumentParser) -> None:
    """Add output and reporting arguments."""
    parser.add_argument("--report-json", type=Path, help="Optional path to write the eligible directories as JSON.")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging.")


def _validate_args(
    args: argparse.Namespace,
    parser: argparse.ArgumentParser,
    root_error: str | None = None,
) -> None:
    """Validate parsed arguments; a stale environment root only matters without --path."""
    if args.path is None:
        if root_error:
            parser.error(root_error)
        parser.error("--path is required when no default root is configured.")
    if not args.manifest_name or not args.target_name:
        parser.error("--manifest-name and --target-name must not be empty.")
    if args.manifest_name == args.target_name:
        parser.error("--manifest-name and --target-name must differ.")


def parse_args(argv: list[str]) -> argparse.Namespace:
    """Parse and validate command-line arguments for cleanup_target_dirs."""
    parser = argparse.ArgumentParser(
        description=(
            "Find project directories holding both a manifest and a build-output directory, "
            "and delete build output that has not been modified recently."
        )
    )
    root_error: str | None = None
    try:
        default_root = determine_default_root()
    except ConfigurationError as exc:
        default_root = None
        root_error = str(exc)
    add_scan_arguments(parser, default_root)
    add_action_arguments(parser)
    add_output_arguments(parser)

    args = parser.parse_args(argv)
    _validate_args(args, parser, root_error)
    return args

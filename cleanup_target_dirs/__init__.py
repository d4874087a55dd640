"""
Cleanup target directories package.

Find stale build-output directories next to project manifests and optionally delete them.
"""

from . import args_parser, cli, config, cutoff, reports, scanner
from .config import ScanConfig
from .cutoff import CutoffDecision, UnsupportedPlatformError, evaluate_target_dir
from .scanner import ScanResult, VisitedStack, run_scan, scan_for_target_dirs

__all__ = [
    "CutoffDecision",
    "ScanConfig",
    "ScanResult",
    "UnsupportedPlatformError",
    "VisitedStack",
    "args_parser",
    "cli",
    "config",
    "cutoff",
    "evaluate_target_dir",
    "reports",
    "run_scan",
    "scan_for_target_dirs",
    "scanner",
]

"""Tests for cleanup_target_dirs/args_parser.py module."""

from __future__ import annotations

import argparse
from pathlib import Path

import pytest

from cleanup_target_dirs.args_parser import non_negative_int, parse_args
from tests.assertions import assert_equal


@pytest.fixture(autouse=True)
def _clear_root_env(monkeypatch):
    monkeypatch.delenv("CLEANUP_TARGET_ROOT", raising=False)
    monkeypatch.delenv("CARGO_CLEANUP_ROOT", raising=False)


def test_parse_minimal_args():
    """Path and age are enough; everything else has defaults."""
    args = parse_args(["--path", "/src", "--days-old", "30"])
    assert_equal(args.path, Path("/src"))
    assert_equal(args.days_old, 30)
    assert args.actually_delete is False
    assert_equal(args.manifest_name, "Cargo.toml")
    assert_equal(args.target_name, "target")
    assert args.report_json is None
    assert args.verbose is False


def test_parse_short_flags():
    args = parse_args(["-p", "/src", "-d", "0", "--actually-delete"])
    assert_equal(args.days_old, 0)
    assert args.actually_delete is True


def test_days_old_is_required():
    with pytest.raises(SystemExit):
        parse_args(["--path", "/src"])


def test_negative_days_rejected():
    with pytest.raises(SystemExit):
        parse_args(["--path", "/src", "--days-old", "-1"])


def test_path_required_without_env():
    with pytest.raises(SystemExit):
        parse_args(["--days-old", "3"])


def test_path_defaults_from_env(tmp_path, monkeypatch):
    monkeypatch.setenv("CLEANUP_TARGET_ROOT", str(tmp_path))
    args = parse_args(["--days-old", "3"])
    assert_equal(args.path, tmp_path)


def test_missing_env_root_is_usage_error(tmp_path, monkeypatch):
    monkeypatch.setenv("CLEANUP_TARGET_ROOT", str(tmp_path / "missing"))
    with pytest.raises(SystemExit):
        parse_args(["--days-old", "3"])


def test_identical_layout_names_rejected():
    with pytest.raises(SystemExit):
        parse_args(["-p", "/src", "-d", "1", "--manifest-name", "x", "--target-name", "x"])


def test_non_negative_int():
    assert_equal(non_negative_int("12"), 12)
    with pytest.raises(argparse.ArgumentTypeError):
        non_negative_int("abc")
    with pytest.raises(argparse.ArgumentTypeError):
        non_negative_int("-5")


def test_explicit_path_wins_over_missing_env_root(tmp_path, monkeypatch):
    """A stale environment root does not block an explicit --path."""
    monkeypatch.setenv("CLEANUP_TARGET_ROOT", str(tmp_path / "missing"))
    args = parse_args(["-p", str(tmp_path), "-d", "3"])
    assert_equal(args.path, tmp_path)


def test_missing_env_root_message_reported(tmp_path, monkeypatch, capsys):
    """Without --path the stale environment root is named in the usage error."""
    monkeypatch.setenv("CLEANUP_TARGET_ROOT", str(tmp_path / "missing"))
    with pytest.raises(SystemExit) as exc_info:
        parse_args(["-d", "3"])
    assert_equal(exc_info.value.code, 2)
    assert "None of the configured roots exist" in capsys.readouterr().err

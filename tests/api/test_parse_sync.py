# topmark:header:start
#
#   project      : OptSync
#   file         : test_parse_sync.py
#   file_relpath : tests/api/test_parse_sync.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""End-to-end tests for `optsync.parse`: file merge, rewrite and command-line precedence.

Each test uses a fresh registry (see `make_server_registry`) and a config file
under `tmp_path`, selected through the ``MYAPPINF0`` override.
"""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import TYPE_CHECKING

import pytest

from optsync import (
    AlreadyFinalizedError,
    ConfigIOError,
    OptionRegistry,
    RegistryState,
    parse,
    render_config,
)
from optsync.exit_codes import ExitCode
from optsync.pipeline.status import ComparisonStatus, WriteStatus
from tests.conftest import APP_NAME, make_server_registry, mark_integration

if TYPE_CHECKING:
    from pathlib import Path

    from optsync import SyncResult


def _sync(environ: dict[str, str], *args: str) -> tuple[OptionRegistry, SyncResult]:
    registry = make_server_registry()
    result = parse(APP_NAME, registry, list(args), environ=environ, prog_name="myapp")
    return registry, result


@mark_integration
def test_missing_file_is_created_with_all_options(
    config_path: Path, environ: dict[str, str]
) -> None:
    """A first run writes the header and one block per option, nothing else."""
    registry, result = _sync(environ)

    assert result.written
    assert result.path == str(config_path)
    assert result.obsolete == ()
    text = config_path.read_text(encoding="utf-8")
    assert text == render_config(APP_NAME, make_server_registry())
    assert "deprecated" not in text
    assert registry.state is RegistryState.FINALIZED


@mark_integration
def test_second_run_is_idempotent(config_path: Path, environ: dict[str, str]) -> None:
    """Running twice without changes leaves the file alone."""
    _sync(environ)
    before = config_path.read_bytes()
    mtime = config_path.stat().st_mtime_ns

    _, result = _sync(environ)

    assert result.up_to_date
    assert not result.written
    assert result.write is WriteStatus.SKIPPED
    assert config_path.read_bytes() == before
    assert config_path.stat().st_mtime_ns == mtime


@mark_integration
def test_command_line_beats_file(config_path: Path, environ: dict[str, str]) -> None:
    """``--port=9090`` wins over ``port=8080`` in the file; the file keeps its value."""
    config_path.write_text("port=8080\n", encoding="utf-8")

    registry, _ = _sync(environ, "--port=9090")

    assert registry["port"].value.get() == 9090
    assert "\nport=8080\n" in config_path.read_text(encoding="utf-8")


@mark_integration
def test_file_values_round_trip(config_path: Path, environ: dict[str, str]) -> None:
    """A known key is applied and written back in canonical form."""
    config_path.write_text("  host :  localhost  \ntimeout=90s\n", encoding="utf-8")

    registry, result = _sync(environ)

    assert registry["host"].value.get() == "localhost"
    assert result.applied == 2
    text = config_path.read_text(encoding="utf-8")
    assert "\nhost=localhost\n" in text
    assert "\ntimeout=1m30s\n" in text


@mark_integration
def test_obsolete_entries_are_kept_and_reported(
    config_path: Path, environ: dict[str, str], caplog: pytest.LogCaptureFixture
) -> None:
    """Unknown keys move to the trailing section and trigger a warning."""
    config_path.write_text("old-flag=42\nport=1\n", encoding="utf-8")

    with caplog.at_level(logging.WARNING, logger="optsync.api"):
        registry, result = _sync(environ)

    assert registry["port"].value.get() == 1
    assert result.obsolete == (("old-flag", "42"),)
    assert result.written
    text = config_path.read_text(encoding="utf-8")
    assert text.endswith(
        "\n\n# The following options are probably deprecated and not used currently!\n"
        "old-flag=42\n"
    )
    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert any(str(config_path) in r.getMessage() for r in warnings)
    assert any(d.message.startswith("1 obsolete entry") for d in result.diagnostics)


@mark_integration
def test_obsolete_section_is_stable(config_path: Path, environ: dict[str, str]) -> None:
    """Once rewritten, a file with obsolete entries is not rewritten again."""
    config_path.write_text("zz=1\naa=2\n", encoding="utf-8")
    _sync(environ)

    _, result = _sync(environ)

    assert result.up_to_date
    assert result.obsolete == (("aa", "2"), ("zz", "1"))


@mark_integration
def test_alias_is_written_under_longest_name(
    config_path: Path, environ: dict[str, str]
) -> None:
    """``v=true`` in the file ends up as ``verbose=true``."""
    config_path.write_text("v=true\n", encoding="utf-8")

    registry, result = _sync(environ)

    assert registry["verbose"].value.get() is True
    assert result.obsolete == ()
    text = config_path.read_text(encoding="utf-8")
    assert "\nverbose=true\n" in text
    assert "\nv=" not in text


@mark_integration
def test_malformed_lines_are_tolerated(config_path: Path, environ: dict[str, str]) -> None:
    """Lines without a separator are skipped and dropped on rewrite."""
    config_path.write_text("this is junk\nport=1\n", encoding="utf-8")

    registry, result = _sync(environ)

    assert registry["port"].value.get() == 1
    assert result.obsolete == ()
    assert "junk" not in config_path.read_text(encoding="utf-8")


@mark_integration
def test_invalid_value_becomes_obsolete(config_path: Path, environ: dict[str, str]) -> None:
    """A known key with a value its option rejects is preserved, not applied."""
    config_path.write_text("port=eighty\n", encoding="utf-8")

    registry, result = _sync(environ)

    assert registry["port"].value.get() == 8080
    assert result.obsolete == (("port", "eighty"),)
    text = config_path.read_text(encoding="utf-8")
    assert "\nport=8080\n" in text
    assert text.endswith("\nport=eighty\n")


def test_one_shot_guard(config_path: Path, environ: dict[str, str]) -> None:
    """A finalized registry is refused before the file is even created."""
    registry = make_server_registry()
    registry.finalize([], prog_name="myapp")

    with pytest.raises(AlreadyFinalizedError, match="flags have been parsed already") as excinfo:
        parse(APP_NAME, registry, [], environ=environ)

    assert excinfo.value.exit_code == ExitCode.USAGE_ERROR
    assert not config_path.exists()


def test_dry_run_leaves_file_untouched(config_path: Path, environ: dict[str, str]) -> None:
    """``apply_changes=False`` merges and finalizes but never writes."""
    config_path.write_text("port=1\n", encoding="utf-8")
    registry = make_server_registry()

    result = parse(APP_NAME, registry, [], environ=environ, apply_changes=False)

    assert result.comparison is ComparisonStatus.CHANGED
    assert not result.written
    assert config_path.read_text(encoding="utf-8") == "port=1\n"
    assert registry["port"].value.get() == 1
    assert registry.finalized


def test_io_failure_does_not_finalize(tmp_path: Path) -> None:
    """Fatal errors propagate before the command line is parsed."""
    registry = make_server_registry()
    environ = {"MYAPPINF0": str(tmp_path / "no-such-dir" / "cfg")}

    with pytest.raises(ConfigIOError):
        parse(APP_NAME, registry, [], environ=environ)

    assert not registry.finalized


@mark_integration
def test_out_of_range_duration_becomes_obsolete(
    config_path: Path, environ: dict[str, str]
) -> None:
    """A duration too large to represent is kept aside, and startup goes on."""
    config_path.write_text("timeout=99999999999999h\n", encoding="utf-8")

    registry, result = _sync(environ)

    assert result.obsolete == (("timeout", "99999999999999h"),)
    assert registry["timeout"].value.get() == timedelta(seconds=30)
    assert registry.finalized
    text = config_path.read_text(encoding="utf-8")
    assert "\ntimeout=30s\n" in text
    assert text.endswith("\ntimeout=99999999999999h\n")


@mark_integration
def test_second_parse_leaves_file_untouched(
    config_path: Path, environ: dict[str, str]
) -> None:
    """Synchronizing the same registry twice fails without reading or writing the file."""
    registry = make_server_registry()
    parse(APP_NAME, registry, [], environ=environ)
    config_path.write_text("port=1\nhand-edited=yes\n", encoding="utf-8")
    before = config_path.read_bytes()

    with pytest.raises(AlreadyFinalizedError, match="flags have been parsed already"):
        parse(APP_NAME, registry, [], environ=environ)

    assert config_path.read_bytes() == before
    assert registry["port"].value.get() == 8080

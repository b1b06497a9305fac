# topmark:header:start
#
#   project      : OptSync
#   file         : test_writer_step.py
#   file_relpath : tests/pipeline/steps/test_writer_step.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Unit tests for the `WriterStep` and its sinks."""

from __future__ import annotations

import io
from typing import TYPE_CHECKING

import pytest

from optsync.core.diagnostics import DiagnosticLevel
from optsync.errors import ConfigIOError
from optsync.pipeline.context import SyncContext
from optsync.pipeline.status import ComparisonStatus, WriteStatus
from optsync.pipeline.steps.reader import ReaderStep
from optsync.pipeline.steps.writer import NullSink, WriterStep
from optsync.registry import OptionRegistry

if TYPE_CHECKING:
    from pathlib import Path


def _opened(path: Path, rendered: bytes, *, apply_changes: bool = True) -> SyncContext:
    ctx = SyncContext(
        app_name="myapp",
        registry=OptionRegistry(),
        path=str(path),
        apply_changes=apply_changes,
    )
    ctx = ReaderStep()(ctx)
    ctx.rendered = rendered
    ctx.status.comparison = (
        ComparisonStatus.UNCHANGED if ctx.original == rendered else ComparisonStatus.CHANGED
    )
    return ctx


def test_rewrite_truncates_longer_content(config_path: Path) -> None:
    """The old content is fully replaced, even when it was longer."""
    config_path.write_bytes(b"a much longer original content\n")
    ctx = _opened(config_path, b"short\n")

    ctx = WriterStep()(ctx)
    ctx.close()

    assert config_path.read_bytes() == b"short\n"
    assert ctx.status.write is WriteStatus.WRITTEN
    assert ctx.bytes_written == len(b"short\n")
    assert ctx.diagnostics.items[-1].message == f"Updated config file {config_path}"


def test_unchanged_file_is_not_written(config_path: Path) -> None:
    """No write, so the modification time stays put."""
    config_path.write_bytes(b"same\n")
    mtime = config_path.stat().st_mtime_ns
    ctx = _opened(config_path, b"same\n")

    ctx = WriterStep()(ctx)
    ctx.close()

    assert ctx.status.write is WriteStatus.SKIPPED
    assert config_path.stat().st_mtime_ns == mtime


def test_dry_run_uses_null_sink(config_path: Path) -> None:
    """With ``apply_changes=False`` nothing reaches the disk."""
    config_path.write_bytes(b"old\n")
    ctx = _opened(config_path, b"new\n", apply_changes=False)

    ctx = WriterStep()(ctx)
    ctx.close()

    assert ctx.status.write is WriteStatus.SKIPPED
    assert config_path.read_bytes() == b"old\n"
    assert NullSink().write(ctx=ctx).bytes_written == 0


class _ReadOnlyHandle(io.BytesIO):
    def write(self, data: object, /) -> int:
        raise OSError(28, "No space left on device")


def test_write_failure_is_fatal() -> None:
    """A failing write marks the status, records an error and raises."""
    ctx = SyncContext(app_name="myapp", registry=OptionRegistry(), path="cfg")
    ctx.handle = _ReadOnlyHandle(b"old\n")
    ctx.rendered = b"new\n"
    ctx.status.comparison = ComparisonStatus.CHANGED

    with pytest.raises(ConfigIOError, match="failed to write cfg: No space left on device"):
        WriterStep()(ctx)

    assert ctx.status.write is WriteStatus.FAILED
    assert ctx.diagnostics.has_error()
    assert ctx.diagnostics.items[-1].level is DiagnosticLevel.ERROR


def test_waits_for_comparison() -> None:
    """The writer is gated on a finished comparison."""
    ctx = SyncContext(app_name="myapp", registry=OptionRegistry())
    ctx = WriterStep()(ctx)
    assert ctx.status.write is WriteStatus.PENDING

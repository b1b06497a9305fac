# topmark:header:start
#
#   project      : OptSync
#   file         : writer.py
#   file_relpath : src/optsync/pipeline/steps/writer.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Writer step for committing the canonical config file.

The step only writes when the comparer found a difference, which keeps the
file's mtime stable for file watchers and avoids needless writes on read-only
setups where nothing changed.

Sinks
-----
- FileSystemSink: seek to the start of the open handle, truncate, write.
- NullSink: no-op (dry-run, ``apply_changes=False``).

A failing write raises [`ConfigIOError`][optsync.errors.ConfigIOError]. Values
already applied to the registry stay applied.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from optsync.config.logging import get_logger
from optsync.errors import ConfigIOError
from optsync.pipeline.status import ComparisonStatus, WriteStatus
from optsync.pipeline.steps.base import BaseStep

if TYPE_CHECKING:
    from optsync.config.logging import OptsyncLogger
    from optsync.pipeline.context import SyncContext

logger: OptsyncLogger = get_logger(__name__)


@dataclass
class WriteResult:
    """Structured result of a write operation."""

    status: WriteStatus
    bytes_written: int = 0


class WriteSink(Protocol):
    """Protocol for write sinks used by the writer step."""

    def write(self, *, ctx: SyncContext) -> WriteResult:
        """Write ``ctx.rendered`` to the target.

        Args:
            ctx (SyncContext): Context that holds the rendered content.

        Returns:
            WriteResult: The write status and the number of bytes written.
        """
        ...


class NullSink:
    """Dry-run sink: does not write anything."""

    def write(self, *, ctx: SyncContext) -> WriteResult:
        """No-op write for dry-run mode."""
        return WriteResult(status=WriteStatus.SKIPPED, bytes_written=0)


class FileSystemSink:
    """Rewrite the config file through the handle opened by the reader."""

    def write(self, *, ctx: SyncContext) -> WriteResult:
        """Replace the file content with ``ctx.rendered``.

        Args:
            ctx (SyncContext): Context with an open handle and rendered content.

        Returns:
            WriteResult: ``WRITTEN`` with the number of bytes written.

        Raises:
            ConfigIOError: If seeking, truncating or writing fails.
        """
        assert ctx.handle is not None, "context.handle not defined"
        assert ctx.rendered is not None, "context.rendered not defined"
        path: str = ctx.path or ""
        handle = ctx.handle

        try:
            offset: int = handle.seek(0)
        except OSError as exc:
            raise ConfigIOError(
                f"failed to seek to beginning of {path}: {exc.strerror or exc}",
                path=path,
                cause=exc,
            ) from exc
        if offset != 0:
            raise ConfigIOError(f"failed to seek to beginning of {path}", path=path)

        try:
            handle.truncate(0)
        except OSError as exc:
            raise ConfigIOError(
                f"failed to truncate {path}: {exc.strerror or exc}", path=path, cause=exc
            ) from exc

        try:
            handle.write(ctx.rendered)
            handle.flush()
        except OSError as exc:
            raise ConfigIOError(
                f"failed to write {path}: {exc.strerror or exc}", path=path, cause=exc
            ) from exc

        logger.debug("FileSystemSink: wrote %d bytes to file %s", len(ctx.rendered), path)
        return WriteResult(status=WriteStatus.WRITTEN, bytes_written=len(ctx.rendered))


def _select_sink(ctx: SyncContext) -> WriteSink:
    """Return ``NullSink`` when not applying changes, otherwise ``FileSystemSink``."""
    if not ctx.apply_changes:
        logger.debug("Selected NULL sink (ctx.apply_changes is False)")
        return NullSink()
    return FileSystemSink()


class WriterStep(BaseStep):
    """Commit ``ctx.rendered`` when the file changed.

    Sets:
      - WriteStatus: {WRITTEN, SKIPPED, FAILED}
    """

    def __init__(self) -> None:
        super().__init__(name=self.__class__.__name__)

    def may_proceed(self, ctx: SyncContext) -> bool:
        return ctx.status.comparison is not ComparisonStatus.PENDING

    def run(self, ctx: SyncContext) -> None:
        if ctx.status.comparison is ComparisonStatus.UNCHANGED:
            ctx.status.write = WriteStatus.SKIPPED
            logger.debug("File unchanged - nothing to write")
            return

        try:
            result: WriteResult = _select_sink(ctx).write(ctx=ctx)
        except ConfigIOError as exc:
            ctx.status.write = WriteStatus.FAILED
            ctx.diagnostics.add_error(exc.format_message())
            raise

        ctx.status.write = result.status
        ctx.bytes_written = result.bytes_written
        if result.status is WriteStatus.WRITTEN:
            ctx.diagnostics.add_info(f"Updated config file {ctx.path}")

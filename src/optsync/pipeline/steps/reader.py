# topmark:header:start
#
#   project      : OptSync
#   file         : reader.py
#   file_relpath : src/optsync/pipeline/steps/reader.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""File reader step for the synchronization pipeline.

Opens the config file for reading *and* writing, creating it when it does not
exist, and loads its full content into ``ctx.original``. The handle stays open
on the context so the writer can rewrite the same file later.

A missing file is not an error: it is created empty and treated exactly like an
existing empty file. Every other failure aborts the run with
[`ConfigIOError`][optsync.errors.ConfigIOError].
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, BinaryIO, cast

from optsync.config.logging import get_logger
from optsync.errors import ConfigIOError
from optsync.pipeline.status import FsStatus
from optsync.pipeline.steps.base import BaseStep

if TYPE_CHECKING:
    from optsync.config.logging import OptsyncLogger
    from optsync.pipeline.context import SyncContext

logger: OptsyncLogger = get_logger(__name__)


class ReaderStep(BaseStep):
    """Open (or create) the config file and read its bytes.

    Sets:
      - FsStatus: {OK, EMPTY, CREATED}
    """

    def __init__(self) -> None:
        super().__init__(name=self.__class__.__name__)

    def may_proceed(self, ctx: SyncContext) -> bool:
        return ctx.path is not None and ctx.handle is None

    def run(self, ctx: SyncContext) -> None:
        """Open ``ctx.path`` read/write and load ``ctx.original``.

        Args:
            ctx (SyncContext): The synchronization context.

        Raises:
            ConfigIOError: If the file cannot be opened or read.
        """
        assert ctx.path, "context.path not defined"
        path: str = ctx.path
        existed: bool = os.path.exists(path)

        try:
            fd: int = os.open(path, os.O_RDWR | os.O_CREAT, 0o666)
        except OSError as exc:
            raise ConfigIOError(
                f"unable to open {ctx.app_name} config file {path} "
                f"for reading and writing: {exc.strerror or exc}",
                path=path,
                cause=exc,
            ) from exc

        handle: BinaryIO = cast("BinaryIO", os.fdopen(fd, "r+b"))
        try:
            data: bytes = handle.read()
        except OSError as exc:
            handle.close()
            raise ConfigIOError(
                f"failed to read {path}: {exc.strerror or exc}", path=path, cause=exc
            ) from exc

        ctx.handle = handle
        ctx.original = data
        if not existed:
            ctx.status.fs = FsStatus.CREATED
            ctx.diagnostics.add_info(f"Created config file {path}")
        elif not data:
            ctx.status.fs = FsStatus.EMPTY
        else:
            ctx.status.fs = FsStatus.OK
        logger.debug("Reader: %s (%d bytes): %s", path, len(data), ctx.status.fs.value)

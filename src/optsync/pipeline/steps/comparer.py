# topmark:header:start
#
#   project      : OptSync
#   file         : comparer.py
#   file_relpath : src/optsync/pipeline/steps/comparer.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Comparer step: decide whether the config file must be rewritten.

The rendered image and the original file content are compared byte for byte.
Any difference (values, comments, ordering, whitespace, a missing trailing
newline) marks the file as ``CHANGED``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from optsync.config.logging import get_logger
from optsync.pipeline.status import ComparisonStatus, RenderStatus
from optsync.pipeline.steps.base import BaseStep
from optsync.utils.diff import render_patch, unified_config_diff

if TYPE_CHECKING:
    from optsync.config.logging import OptsyncLogger
    from optsync.pipeline.context import SyncContext

logger: OptsyncLogger = get_logger(__name__)


class ComparerStep(BaseStep):
    """Compare ``ctx.original`` with ``ctx.rendered``.

    Sets:
      - ComparisonStatus: {CHANGED, UNCHANGED}
    """

    def __init__(self) -> None:
        super().__init__(name=self.__class__.__name__)

    def may_proceed(self, ctx: SyncContext) -> bool:
        return ctx.status.render is RenderStatus.RENDERED and ctx.rendered is not None

    def run(self, ctx: SyncContext) -> None:
        assert ctx.rendered is not None, "context.rendered not defined"
        if ctx.original == ctx.rendered:
            ctx.status.comparison = ComparisonStatus.UNCHANGED
            logger.debug("Comparer: %s is up to date", ctx.path)
            return

        ctx.status.comparison = ComparisonStatus.CHANGED
        if logger.isEnabledFor(logging.DEBUG):
            diff: str = unified_config_diff(
                ctx.original.decode("utf-8", errors="replace"),
                ctx.rendered.decode("utf-8"),
                ctx.path or "",
            )
            logger.debug("Comparer: %s changes:\n%s", ctx.path, render_patch(diff))

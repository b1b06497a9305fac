# topmark:header:start
#
#   project      : OptSync
#   file         : runner.py
#   file_relpath : src/optsync/pipeline/runner.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Run a synchronization pipeline over a context."""

from __future__ import annotations

from typing import TYPE_CHECKING

from optsync.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Sequence

    from optsync.config.logging import OptsyncLogger
    from optsync.pipeline.context import SyncContext
    from optsync.pipeline.steps.base import BaseStep

logger: OptsyncLogger = get_logger(__name__)


def run(ctx: SyncContext, steps: Sequence[BaseStep]) -> SyncContext:
    """Execute the pipeline sequentially.

    Args:
        ctx (SyncContext): Mutable synchronization context.
        steps (Sequence[BaseStep]): Ordered sequence of pipeline steps.

    Returns:
        SyncContext: The final context after all steps have run.
    """
    for step in steps:
        ctx = step(ctx)
    logger.trace("Pipeline finished: %s", ctx.to_dict())
    return ctx

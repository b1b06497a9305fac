# topmark:header:start
#
#   project      : OptSync
#   file         : base.py
#   file_relpath : src/optsync/pipeline/steps/base.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Base class for class-based pipeline steps.

The runner invokes steps as *callables*. `BaseStep` implements the common
lifecycle:

    ctx = step(ctx)  # internally: may_proceed → run?

Fatal conditions are raised from ``run()`` as [`OptsyncError`][optsync.errors.OptsyncError]
subclasses; they abort the pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from optsync.config.logging import get_logger

if TYPE_CHECKING:
    from optsync.config.logging import OptsyncLogger
    from optsync.pipeline.context import SyncContext

logger: OptsyncLogger = get_logger(__name__)


@dataclass
class BaseStep:
    """Reusable foundation for pipeline steps.

    Subclass this to implement a concrete step by overriding ``may_proceed()``
    and ``run()``. Do not override ``__call__``.

    Attributes:
        name (str): Stable step identifier for logs.
    """

    name: str

    def __call__(self, ctx: SyncContext) -> SyncContext:
        """Invoke the step lifecycle: gate → run (if allowed).

        Args:
            ctx (SyncContext): The mutable synchronization context.

        Returns:
            SyncContext: The same context instance after mutation.
        """
        ctx.steps.append(self)
        if self.may_proceed(ctx):
            logger.debug("Pipeline step %s - running", self.name)
            self.run(ctx)
        else:
            logger.debug("Pipeline step %s may not proceed", self.name)
        return ctx

    def may_proceed(self, ctx: SyncContext) -> bool:
        """Return whether the step should run given the current context.

        Default: ``True`` (always run).
        """
        return True

    def run(self, ctx: SyncContext) -> None:
        """Perform the step's primary work, mutating ``ctx`` in place."""
        pass

# topmark:header:start
#
#   project      : OptSync
#   file         : resolver.py
#   file_relpath : src/optsync/pipeline/steps/resolver.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Resolver step: determine which file the run synchronizes.

A path set on the context beforehand is kept; otherwise it is derived from the
application name via [`resolve_config_path`][optsync.config.paths.resolve_config_path].
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from optsync.config.logging import get_logger
from optsync.config.paths import resolve_config_path
from optsync.pipeline.steps.base import BaseStep

if TYPE_CHECKING:
    from optsync.config.logging import OptsyncLogger
    from optsync.pipeline.context import SyncContext

logger: OptsyncLogger = get_logger(__name__)


class ResolverStep(BaseStep):
    """Set ``ctx.path``.

    Raises:
        EnvironmentResolutionError: Propagated from the path resolution.
    """

    def __init__(self) -> None:
        super().__init__(name=self.__class__.__name__)

    def may_proceed(self, ctx: SyncContext) -> bool:
        return ctx.path is None

    def run(self, ctx: SyncContext) -> None:
        ctx.path = resolve_config_path(ctx.app_name, ctx.environ)
        logger.info("Using %s config file %s", ctx.app_name, ctx.path)

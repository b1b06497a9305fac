# topmark:header:start
#
#   project      : OptSync
#   file         : api.py
#   file_relpath : src/optsync/api.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Public entry points of OptSync.

[`parse`][optsync.api.parse] is meant to be called exactly once at process
startup, in place of a plain command-line parse:

```python
from optsync import OptionRegistry, parse

registry = OptionRegistry()
port = registry.add_int("port", 8080, "Port to run the server on")
parse("myapp", registry)
```

It merges ``~/.myappinf0`` (or ``$MYAPPINF0``) into the registry, rewrites the
file in canonical form when needed, and finally parses the command line over
the result. The effective precedence is ``defaults < file < command line``.

[`check`][optsync.api.check] runs the same merge without writing and without
finalizing, and [`render_config`][optsync.api.render_config] renders the
canonical file text without any I/O.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from optsync.config.logging import get_logger
from optsync.constants import CONFIG_SUFFIX, UPDATE_WARNING
from optsync.errors import AlreadyFinalizedError
from optsync.pipeline import runner
from optsync.pipeline.context import SyncContext
from optsync.pipeline.pipelines import CHECK_PIPELINE, SYNC_PIPELINE
from optsync.pipeline.status import ComparisonStatus, WriteStatus
from optsync.pipeline.steps.renderer import render_config

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from optsync.config.logging import OptsyncLogger
    from optsync.core.diagnostics import Diagnostic
    from optsync.pipeline.steps.base import BaseStep
    from optsync.registry.registry import OptionRegistry

logger: OptsyncLogger = get_logger(__name__)

__all__ = ["SyncResult", "check", "parse", "render_config"]


@dataclass(frozen=True)
class SyncResult:
    """Immutable summary of a synchronization run.

    Attributes:
        app_name (str): The application name.
        path (str): The config file that was synchronized.
        obsolete (tuple[tuple[str, str], ...]): Obsolete entries, sorted by key.
        applied (int): Number of file assignments applied to the registry.
        comparison (ComparisonStatus): Whether the file differed from its canonical form.
        write (WriteStatus): What the writer did.
        diagnostics (tuple[Diagnostic, ...]): Diagnostics collected during the run.
    """

    app_name: str
    path: str
    obsolete: tuple[tuple[str, str], ...]
    applied: int
    comparison: ComparisonStatus
    write: WriteStatus
    diagnostics: tuple[Diagnostic, ...]

    @property
    def written(self) -> bool:
        """Whether the config file was rewritten."""
        return self.write is WriteStatus.WRITTEN

    @property
    def up_to_date(self) -> bool:
        """Whether the config file already had its canonical content."""
        return self.comparison is ComparisonStatus.UNCHANGED

    @classmethod
    def from_context(cls, ctx: SyncContext) -> SyncResult:
        """Snapshot a finished context."""
        return cls(
            app_name=ctx.app_name,
            path=ctx.path or "",
            obsolete=tuple(sorted(ctx.obsolete.items())),
            applied=ctx.applied,
            comparison=ctx.status.comparison,
            write=ctx.status.write,
            diagnostics=ctx.diagnostics.freeze(),
        )


def _run(ctx: SyncContext, steps: Sequence[BaseStep]) -> SyncContext:
    try:
        return runner.run(ctx, steps)
    finally:
        ctx.close()


def _warn_obsolete(ctx: SyncContext) -> None:
    """Report obsolete entries; never fatal."""
    message: str = UPDATE_WARNING.format(
        app_name=ctx.app_name.lower(), suffix=CONFIG_SUFFIX, path=ctx.path
    )
    ctx.diagnostics.add_warning(
        f"{len(ctx.obsolete)} obsolete entr{'y' if len(ctx.obsolete) == 1 else 'ies'} "
        f"in {ctx.path}: {', '.join(sorted(ctx.obsolete))}"
    )
    logger.warning("%s", message)


def parse(
    app_name: str,
    registry: OptionRegistry,
    args: Sequence[str] | None = None,
    *,
    environ: Mapping[str, str] | None = None,
    apply_changes: bool = True,
    prog_name: str | None = None,
) -> SyncResult:
    """Synchronize the config file of ``app_name`` with ``registry``, then parse the command line.

    Args:
        app_name (str): Application name; selects ``$<APP>INF0`` or ``~/.<app>inf0``.
        registry (OptionRegistry): The (not yet finalized) option registry.
        args (Sequence[str] | None): Command-line arguments; defaults to ``sys.argv[1:]``.
        environ (Mapping[str, str] | None): Environment for path resolution;
            defaults to ``os.environ``.
        apply_changes (bool): When ``False``, the file is never rewritten.
        prog_name (str | None): Program name used in command-line usage messages.

    Returns:
        SyncResult: Summary of the run.

    Raises:
        AlreadyFinalizedError: If ``registry`` was finalized before; the file is not touched.
        EnvironmentResolutionError: If the config path cannot be determined.
        ConfigIOError: If the config file cannot be read or rewritten.
    """
    if registry.finalized:
        raise AlreadyFinalizedError("flags have been parsed already")

    ctx = SyncContext(
        app_name=app_name,
        registry=registry,
        environ=environ,
        apply_changes=apply_changes,
    )
    ctx = _run(ctx, SYNC_PIPELINE)

    if ctx.obsolete:
        _warn_obsolete(ctx)

    registry.finalize(args, prog_name=prog_name)
    logger.info(
        "%s: %s, %s", ctx.path, ctx.status.comparison.value, ctx.status.write.value
    )
    return SyncResult.from_context(ctx)


def check(
    app_name: str,
    registry: OptionRegistry,
    *,
    environ: Mapping[str, str] | None = None,
) -> SyncResult:
    """Merge the config file into ``registry`` and report whether it is canonical.

    Nothing is written and the registry is not finalized, so
    [`parse`][optsync.api.parse] can still be called afterwards. A missing file is
    created empty, exactly as ``parse`` would.

    Returns:
        SyncResult: ``up_to_date`` tells whether ``parse`` would leave the file alone.

    Raises:
        AlreadyFinalizedError: If ``registry`` was finalized before (file values
            would otherwise override the command line).
    """
    if registry.finalized:
        raise AlreadyFinalizedError("flags have been parsed already")

    ctx = SyncContext(app_name=app_name, registry=registry, environ=environ)
    ctx = _run(ctx, CHECK_PIPELINE)
    return SyncResult.from_context(ctx)

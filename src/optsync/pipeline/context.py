# topmark:header:start
#
#   project      : OptSync
#   file         : context.py
#   file_relpath : src/optsync/pipeline/context.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Mutable per-run state shared by the synchronization steps.

A `SyncContext` is created by [`optsync.api.parse`][optsync.api.parse], threaded
through every step of the pipeline and closed afterwards. It owns the open
config file handle between the reader and the writer so that the file is read
and rewritten through the same descriptor.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, BinaryIO

from optsync.config.logging import get_logger
from optsync.constants import VALUE_NOT_SET
from optsync.core.diagnostics import DiagnosticLog
from optsync.pipeline.status import (
    ComparisonStatus,
    FsStatus,
    ParseStatus,
    RenderStatus,
    WriteStatus,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

    from optsync.config.logging import OptsyncLogger
    from optsync.pipeline.steps.base import BaseStep
    from optsync.registry.registry import OptionRegistry

logger: OptsyncLogger = get_logger(__name__)


@dataclass
class SyncStatus:
    """Per-axis statuses of one synchronization run."""

    fs: FsStatus = FsStatus.PENDING
    parse: ParseStatus = ParseStatus.PENDING
    render: RenderStatus = RenderStatus.PENDING
    comparison: ComparisonStatus = ComparisonStatus.PENDING
    write: WriteStatus = WriteStatus.PENDING


@dataclass
class SyncContext:
    """State of one synchronization run.

    Attributes:
        app_name (str): Application name (drives the path and the file header).
        registry (OptionRegistry): The registry the file is merged into.
        environ (Mapping[str, str] | None): Environment used for path resolution.
        apply_changes (bool): ``False`` selects the dry-run sink.
        path (str | None): Resolved config file path.
        handle (BinaryIO | None): Open read/write handle on the config file.
        original (bytes): File content exactly as read.
        obsolete (dict[str, str]): Entries that did not apply, last value per key wins.
        applied (int): Number of assignments applied to the registry.
        rendered (bytes | None): Canonical file image.
        bytes_written (int): Bytes written by the writer step.
        status (SyncStatus): Per-axis statuses.
        diagnostics (DiagnosticLog): Diagnostics collected along the way.
        steps (list[BaseStep]): Steps invoked so far, in order.
    """

    app_name: str
    registry: OptionRegistry
    environ: Mapping[str, str] | None = None
    apply_changes: bool = True
    path: str | None = None
    handle: BinaryIO | None = None
    original: bytes = b""
    obsolete: dict[str, str] = field(default_factory=lambda: {})
    applied: int = 0
    rendered: bytes | None = None
    bytes_written: int = 0
    status: SyncStatus = field(default_factory=SyncStatus)
    diagnostics: DiagnosticLog = field(default_factory=DiagnosticLog)
    steps: list[BaseStep] = field(default_factory=lambda: [])

    @property
    def would_change(self) -> bool:
        """Whether the rendered image differs from the file content."""
        return self.status.comparison is ComparisonStatus.CHANGED

    def close(self) -> None:
        """Close the config file handle, if open."""
        if self.handle is not None:
            self.handle.close()
            self.handle = None
            logger.trace("Closed %s", self.path)

    def to_dict(self) -> dict[str, Any]:
        """Return a log-friendly summary of the context."""
        return {
            "app_name": self.app_name,
            "path": self.path or VALUE_NOT_SET,
            "apply_changes": self.apply_changes,
            "original_bytes": len(self.original),
            "rendered_bytes": len(self.rendered) if self.rendered is not None else None,
            "applied": self.applied,
            "obsolete": sorted(self.obsolete),
            "status": {
                "fs": self.status.fs.value,
                "parse": self.status.parse.value,
                "render": self.status.render.value,
                "comparison": self.status.comparison.value,
                "write": self.status.write.value,
            },
            "steps": [step.name for step in self.steps],
        }

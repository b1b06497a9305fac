# topmark:header:start
#
#   project      : OptSync
#   file         : diagnostics.py
#   file_relpath : src/optsync/core/diagnostics.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Diagnostics collected during a synchronization run.

Sections:
    * DiagnosticLevel: severity levels with associated terminal colors.
    * Diagnostic: immutable structured diagnostic payload (level + message).
    * DiagnosticLog: mutable per-run collection with helpers for adding diagnostics.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, cast

from yachalk import chalk

from optsync.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Callable

    from optsync.config.logging import OptsyncLogger

logger: OptsyncLogger = get_logger(__name__)


class DiagnosticLevel(Enum):
    """Severity levels for diagnostics collected during synchronization.

    Levels map to terminal colors and are ordered by importance: ERROR > WARNING > INFO.
    """

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"

    @property
    def color(self) -> Callable[[str], str]:
        """Return the `yachalk` color function associated with this severity level."""
        return cast(
            "Callable[[str], str]",
            {
                DiagnosticLevel.INFO: chalk.blue,
                DiagnosticLevel.WARNING: chalk.yellow,
                DiagnosticLevel.ERROR: chalk.red_bright,
            }[self],
        )


@dataclass(frozen=True)
class Diagnostic:
    """Structured diagnostic with a severity level and message."""

    level: DiagnosticLevel
    message: str

    def render(self) -> str:
        """Return the colorized ``[level] message`` line."""
        return self.level.color(f"[{self.level.value}] {self.message}")


@dataclass
class DiagnosticLog:
    """Mutable collection of diagnostics for one synchronization run."""

    items: list[Diagnostic] = field(default_factory=lambda: [])

    def _add(self, diagnostic: Diagnostic) -> None:
        self.items.append(diagnostic)
        logger.trace("Adding [%s]: %r", diagnostic.level.value, diagnostic.message)

    def add_info(self, message: str) -> None:
        """Add an ``info`` diagnostic."""
        self._add(Diagnostic(DiagnosticLevel.INFO, message))

    def add_warning(self, message: str) -> None:
        """Add a ``warning`` diagnostic."""
        self._add(Diagnostic(DiagnosticLevel.WARNING, message))

    def add_error(self, message: str) -> None:
        """Add an ``error`` diagnostic."""
        self._add(Diagnostic(DiagnosticLevel.ERROR, message))

    def has_warning(self) -> bool:
        """Return True if the log contains warning diagnostics."""
        return any(d.level == DiagnosticLevel.WARNING for d in self.items)

    def has_error(self) -> bool:
        """Return True if the log contains error diagnostics."""
        return any(d.level == DiagnosticLevel.ERROR for d in self.items)

    def freeze(self) -> tuple[Diagnostic, ...]:
        """Return an immutable snapshot of the collected diagnostics."""
        return tuple(self.items)

    def __len__(self) -> int:
        return len(self.items)

# topmark:header:start
#
#   project      : OptSync
#   file         : parser.py
#   file_relpath : src/optsync/pipeline/steps/parser.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Line parser step: apply ``key=value`` lines to the option registry.

The format is deliberately permissive:

  * surrounding whitespace is ignored;
  * empty lines and lines starting with ``#`` are skipped;
  * the first ``=`` or ``:`` separates key and value, both trimmed;
  * the value is taken literally (no quotes, no escapes);
  * lines without a separator are skipped silently.

Assignments the registry rejects (unknown key, or a value the option cannot
coerce) are kept as *obsolete entries* so that the renderer can preserve them.
Duplicate obsolete keys keep the last value seen.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from optsync.config.logging import get_logger
from optsync.constants import ASSIGNMENT_SEPARATORS, COMMENT_PREFIX
from optsync.pipeline.status import ParseStatus
from optsync.pipeline.steps.base import BaseStep

if TYPE_CHECKING:
    from collections.abc import Iterator

    from optsync.config.logging import OptsyncLogger
    from optsync.pipeline.context import SyncContext
    from optsync.registry.registry import OptionRegistry, SetResult

logger: OptsyncLogger = get_logger(__name__)

_BOM = "\ufeff"


def split_assignment(line: str) -> tuple[str, str] | None:
    """Split one line into ``(key, value)``.

    Args:
        line (str): A raw line from the config file.

    Returns:
        tuple[str, str] | None: The trimmed key and value, or ``None`` for blank
        lines, comments and lines without a separator.
    """
    stripped: str = line.strip()
    if not stripped or stripped.startswith(COMMENT_PREFIX):
        return None

    positions: list[int] = [i for i in map(stripped.find, ASSIGNMENT_SEPARATORS) if i != -1]
    if not positions:
        return None
    i: int = min(positions)
    return stripped[:i].strip(), stripped[i + 1 :].strip()


def iter_assignments(text: str) -> Iterator[tuple[int, str, str]]:
    """Yield ``(line_number, key, value)`` for every assignment line in ``text``."""
    for lineno, line in enumerate(text.split("\n"), 1):
        pair: tuple[str, str] | None = split_assignment(line)
        if pair is None:
            if line.strip() and not line.strip().startswith(COMMENT_PREFIX):
                logger.debug("Line %d ignored (no '=' or ':'): %r", lineno, line.strip())
            continue
        yield lineno, pair[0], pair[1]


def apply_config(text: str, registry: OptionRegistry) -> tuple[dict[str, str], int]:
    """Apply every assignment in ``text`` to ``registry``.

    Args:
        text (str): Decoded config file content.
        registry (OptionRegistry): The registry receiving the values.

    Returns:
        tuple[dict[str, str], int]: The obsolete entries (key → value, last one wins)
        and the number of applied assignments.
    """
    obsolete: dict[str, str] = {}
    applied: int = 0
    for lineno, key, value in iter_assignments(text.removeprefix(_BOM)):
        result: SetResult = registry.set(key, value)
        if result.applied:
            applied += 1
            continue
        logger.debug("Line %d: %s=%s not applied: %s", lineno, key, value, result.error)
        obsolete[key] = value
    return obsolete, applied


class ParserStep(BaseStep):
    """Parse ``ctx.original`` into the registry and collect obsolete entries.

    Sets:
      - ParseStatus: {APPLIED, OBSOLETE_FOUND}
    """

    def __init__(self) -> None:
        super().__init__(name=self.__class__.__name__)

    def run(self, ctx: SyncContext) -> None:
        # Undecodable bytes must not abort startup; the comparison uses the raw bytes.
        text: str = ctx.original.decode("utf-8", errors="replace")
        ctx.obsolete, ctx.applied = apply_config(text, ctx.registry)
        ctx.status.parse = ParseStatus.OBSOLETE_FOUND if ctx.obsolete else ParseStatus.APPLIED
        logger.debug(
            "Parser: %d applied, %d obsolete (%s)",
            ctx.applied,
            len(ctx.obsolete),
            ", ".join(sorted(ctx.obsolete)),
        )

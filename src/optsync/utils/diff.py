# topmark:header:start
#
#   file         : diff.py
#   file_relpath : src/optsync/utils/diff.py
#   project      : OptSync
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Unified diff helpers for config file rewrites.

The comparer uses these to log what a rewrite changes, which makes an
unexpected regeneration of the config file easy to diagnose.
"""

import difflib
from typing import Sequence

from yachalk import chalk

from optsync.config.logging import get_logger

logger = get_logger(__name__)


def unified_config_diff(old: str, new: str, path: str) -> str:
    """Return a unified diff between the previous and the regenerated file content.

    Args:
        old: The file content as read.
        new: The canonical content.
        path: The file path, used in the diff headers.

    Returns:
        The diff text (empty when both contents are equal).
    """
    return "".join(
        difflib.unified_diff(
            old.splitlines(keepends=True),
            new.splitlines(keepends=True),
            fromfile=f"{path} (current)",
            tofile=f"{path} (updated)",
        )
    )


def render_patch(patch: Sequence[str] | str, show_line_numbers: bool = False) -> str:
    """Render a colorized preview of a unified diff.

    Args:
        patch: A unified diff as **either** a list/sequence of lines **or** a single
            multiline string.
        show_line_numbers: Whether to prefix output with line numbers.

    Returns:
        The formatted, colorized diff preview.
    """
    if isinstance(patch, str):
        lines: list[str] = patch.splitlines(keepends=False)
    else:
        lines = list(patch)

    # Map diff markers to colors and show control characters explicitly.
    def process_line(line: str) -> str:
        content = line.replace("\r", "\\r").replace("\n", "\\n")
        match line[:1]:
            case "-":
                return chalk.bold.red(content)
            case "+":
                return chalk.bold.green(content)
            case "@":
                return chalk.cyan(content)
            case _:
                return chalk.bold.white(content)

    if show_line_numbers is True:
        return chalk.gray(
            "".join(f"{i:04d}|{process_line(line)}\n" for i, line in enumerate(lines, 1))
        )
    return chalk.gray("".join(f"{process_line(line)}\n" for line in lines))

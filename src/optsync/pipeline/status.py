# topmark:header:start
#
#   project      : OptSync
#   file         : status.py
#   file_relpath : src/optsync/pipeline/status.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Status enums for each axis of the synchronization pipeline.

Conventions:
  * All enums inherit from `ColoredStrEnum` (from `optsync.rendering.colored_enum`).
  * Values are human‑readable strings used in logs and diagnostics.
"""

from __future__ import annotations

from yachalk import chalk

from optsync.rendering.colored_enum import ColoredStrEnum


class FsStatus(ColoredStrEnum):
    """Outcome of opening and reading the config file."""

    PENDING = ("pending", chalk.gray)
    OK = ("ok", chalk.green)
    EMPTY = ("empty file", chalk.yellow)
    CREATED = ("created", chalk.blue)


class ParseStatus(ColoredStrEnum):
    """Outcome of applying the file's assignments to the registry."""

    PENDING = ("parse pending", chalk.gray)
    APPLIED = ("all entries applied", chalk.green)
    OBSOLETE_FOUND = ("obsolete entries found", chalk.yellow)


class RenderStatus(ColoredStrEnum):
    """Whether the canonical file image has been rendered."""

    PENDING = ("render pending", chalk.gray)
    RENDERED = ("canonical file rendered", chalk.blue)


class ComparisonStatus(ColoredStrEnum):
    """Result of comparing the original bytes with the rendered ones."""

    PENDING = ("comparison pending", chalk.gray)
    CHANGED = ("changes found", chalk.red)
    UNCHANGED = ("no changes found", chalk.green)


class WriteStatus(ColoredStrEnum):
    """Result of the write decision."""

    PENDING = ("write pending", chalk.gray)
    WRITTEN = ("changes written to file", chalk.green)
    SKIPPED = ("write was skipped", chalk.yellow)
    FAILED = ("write failed", chalk.red_bright)

# topmark:header:start
#
#   project      : OptSync
#   file         : errors.py
#   file_relpath : src/optsync/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions raised by OptSync.

Usage:
    Fatal conditions of a synchronization run raise one of these exceptions.
    They derive from `click.ClickException`, so a Click entry point that lets
    them propagate prints the message and exits with the associated
    [`ExitCode`][optsync.exit_codes.ExitCode].

    Per-line problems in the config file (unknown keys, invalid values) are
    never raised; they end up as obsolete entries instead.
"""

from __future__ import annotations

from typing import IO, Any

import click

from optsync.exit_codes import ExitCode


class OptsyncError(click.ClickException):
    """Base class for all OptSync errors."""

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:  # pragma: no cover - trivial
        """Return the plain error message text.

        Notes:
            - Unlike Click’s default, this method does not add color.
        """
        msg = str(getattr(self, "message", ""))
        return msg

    def show(self, file: IO[Any] | None = None) -> None:  # pragma: no cover - Click prints errors
        """Display the error in bright red on stderr (or ``file``)."""
        click.secho(f"Error: {self.format_message()}", file=file, err=True, fg="bright_red")


class AlreadyFinalizedError(OptsyncError):
    """Synchronization (or finalization) requested after the registry was finalized."""

    exit_code = ExitCode.USAGE_ERROR


class DuplicateOptionError(OptsyncError):
    """An option name was registered twice."""

    exit_code = ExitCode.USAGE_ERROR


class EnvironmentResolutionError(OptsyncError):
    """The config file path could not be derived from the environment."""

    exit_code = ExitCode.CONFIG_ERROR


class ConfigIOError(OptsyncError):
    """Opening, reading or rewriting the config file failed.

    Attributes:
        path (str): The config file path.
        cause (OSError | None): The underlying operating system error.
    """

    exit_code = ExitCode.IO_ERROR

    def __init__(self, message: str, *, path: str, cause: OSError | None = None) -> None:
        super().__init__(message)
        self.path = path
        self.cause = cause

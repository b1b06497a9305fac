# topmark:header:start
#
#   file         : exit_codes.py
#   file_relpath : src/optsync/exit_codes.py
#   project      : OptSync
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Standardized exit codes carried by OptSync errors.

OptSync never exits the process by itself. The codes are attached to the
exceptions in [`optsync.errors`][optsync.errors] so that a Click application
(or any other caller) that lets them propagate terminates with a meaningful
status.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes associated with OptSync failures.

    Attributes:
        SUCCESS (int): Synchronization completed.
        FAILURE (int): Generic failure.
        USAGE_ERROR (int): The API was used in the wrong order (e.g. finalized twice)
            or options were defined inconsistently.
        CONFIG_ERROR (int): The config file location could not be determined.
        IO_ERROR (int): The config file could not be read or rewritten.

    Usage:
        ```python
        from optsync import OptionRegistry, parse
        from optsync.errors import OptsyncError

        try:
            parse("myapp", registry)
        except OptsyncError as exc:
            raise SystemExit(exc.exit_code) from exc
        ```
    """

    SUCCESS = 0
    FAILURE = 1
    USAGE_ERROR = 2
    CONFIG_ERROR = 78  # EX_CONFIG
    IO_ERROR = 74  # EX_IOERR

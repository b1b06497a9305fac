# topmark:header:start
#
#   project      : OptSync
#   file         : constants.py
#   file_relpath : src/optsync/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""OptSync Constants."""

from __future__ import annotations

from typing import Final

# Suffix of both the path override environment variable (``MYAPPINF0``) and
# the dot-file in the user's home directory (``~/.myappinf0``).
CONFIG_SUFFIX: Final[str] = "inf0"

# Environment variable consulted by ``setup_logging()`` when no level is given.
LOG_LEVEL_ENV_VAR: Final[str] = "OPTSYNC_LOG_LEVEL"

# Separators accepted between key and value; the first one found wins.
ASSIGNMENT_SEPARATORS: Final[str] = "=:"

COMMENT_PREFIX: Final[str] = "#"

# The second line is "# " with a trailing space.
CONFIG_HEADER: Final[str] = (
    "# {app_name} configuration\n"
    "# \n"
    "# Empty lines or lines starting with # will be ignored.\n"
    '# All other lines must look like "KEY=VALUE" (without the quotes).\n'
    "# The VALUE must not be enclosed in quotes as well!\n"
)

DEPRECATED_SECTION_HEADER: Final[str] = (
    "# The following options are probably deprecated and not used currently!"
)

UPDATE_WARNING: Final[str] = """\
!!!!!!!!!!
! WARNING: .{app_name}{suffix} was probably updated,
! Check and update {path} as necessary
! and remove the last "deprecated" paragraph to disable this message!
!!!!!!!!!!"""

VALUE_NOT_SET: Final[str] = "<not set>"

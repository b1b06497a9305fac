# topmark:header:start
#
#   project      : OptSync
#   file         : __init__.py
#   file_relpath : src/optsync/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""OptSync package.

OptSync keeps an application's command-line options and a human-editable
``key=value`` config file in sync: file values are merged into the option
registry at startup, the file is regenerated with every option (default and
help text included), stale entries are preserved in a "deprecated" section, and
the command line is parsed last so it always wins.
"""

from __future__ import annotations

from optsync.api import SyncResult, check, parse, render_config
from optsync.errors import (
    AlreadyFinalizedError,
    ConfigIOError,
    DuplicateOptionError,
    EnvironmentResolutionError,
    OptsyncError,
)
from optsync.registry import Option, OptionRegistry, RegistryState

__all__ = [
    "AlreadyFinalizedError",
    "ConfigIOError",
    "DuplicateOptionError",
    "EnvironmentResolutionError",
    "Option",
    "OptionRegistry",
    "OptsyncError",
    "RegistryState",
    "SyncResult",
    "check",
    "parse",
    "render_config",
]

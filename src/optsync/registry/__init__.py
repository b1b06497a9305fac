# topmark:header:start
#
#   project      : OptSync
#   file         : __init__.py
#   file_relpath : src/optsync/registry/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Option registry: typed values, aliases and command-line finalization."""

from __future__ import annotations

from optsync.registry.registry import (
    Option,
    OptionRegistry,
    RegistryState,
    SetResult,
    canonical_options,
)
from optsync.registry.values import (
    BoolValue,
    DurationValue,
    FloatValue,
    IntValue,
    OptionValue,
    StringValue,
    UintValue,
)

__all__ = [
    "BoolValue",
    "DurationValue",
    "FloatValue",
    "IntValue",
    "Option",
    "OptionRegistry",
    "OptionValue",
    "RegistryState",
    "SetResult",
    "StringValue",
    "UintValue",
    "canonical_options",
]

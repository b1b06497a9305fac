# topmark:header:start
#
#   project      : OptSync
#   file         : values.py
#   file_relpath : src/optsync/registry/values.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Typed, string-coercible option values.

Every option in an [`OptionRegistry`][optsync.registry.registry.OptionRegistry]
is backed by an `OptionValue`. A value can be shared by several option names
(aliases such as ``-v`` and ``--verbose``); the value's ``token`` identifies the
underlying storage and is what deduplication keys on, never the option name.

Each variant delegates coercion to a Click parameter type, so the file and the
command line accept exactly the same spellings:

| Variant         | Python type | Click type               | Rendered as        |
| --------------- | ----------- | ------------------------ | ------------------ |
| `StringValue`   | `str`       | `click.STRING`           | verbatim           |
| `IntValue`      | `int`       | `click.INT`              | ``42``             |
| `UintValue`     | `int`       | `click.IntRange(min=0)`  | ``42``             |
| `FloatValue`    | `float`     | `click.FLOAT`            | ``0.5``            |
| `BoolValue`     | `bool`      | `click.BOOL`             | ``true``/``false`` |
| `DurationValue` | `timedelta` | `DurationParamType`      | ``1m30s``          |

Coercion failures are reported as a message returned from `parse()` rather than
an exception: a bad line in the config file is an expected condition.
"""

from __future__ import annotations

import itertools
from datetime import timedelta
from typing import TYPE_CHECKING, ClassVar, Generic, TypeVar, cast

import click

from optsync.registry.types import DURATION, format_duration

if TYPE_CHECKING:
    from collections.abc import Iterator

T = TypeVar("T")

_tokens: Iterator[int] = itertools.count(1)


class OptionValue(Generic[T]):
    """Mutable storage for one option value, shared by all of its aliases.

    Attributes:
        token (int): Process-unique identity of this storage, used for alias grouping.
    """

    kind: ClassVar[str] = "value"
    param_type: ClassVar[click.ParamType] = click.STRING
    is_flag: ClassVar[bool] = False

    def __init__(self, default: T) -> None:
        self._value: T = default
        self.token: int = next(_tokens)

    def get(self) -> T:
        """Return the current value."""
        return self._value

    def set(self, value: T) -> None:
        """Replace the current value with an already typed ``value``."""
        self._value = value

    def parse(self, text: str) -> str | None:
        """Coerce ``text`` and store the result.

        Args:
            text (str): The textual representation, as found in the config file.

        Returns:
            str | None: ``None`` on success, otherwise a human-readable reason; the
            current value is left untouched on failure.
        """
        try:
            converted: T = cast("T", self.param_type.convert(text, None, None))
        except click.BadParameter as exc:
            return exc.format_message()
        self._value = converted
        return None

    def render(self) -> str:
        """Return the textual form written to the config file."""
        return str(self._value)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.render()!r}, token={self.token})"


class StringValue(OptionValue[str]):
    """Free-form text."""

    kind = "string"
    param_type = click.STRING


class IntValue(OptionValue[int]):
    """Signed integer."""

    kind = "int"
    param_type = click.INT


class UintValue(OptionValue[int]):
    """Non-negative integer."""

    kind = "uint"
    param_type = click.IntRange(min=0)


class FloatValue(OptionValue[float]):
    """Floating point number."""

    kind = "float"
    param_type = click.FLOAT

    def render(self) -> str:
        return repr(float(self._value))


class BoolValue(OptionValue[bool]):
    """Boolean switch; accepts ``true/false``, ``1/0``, ``yes/no``, ``on/off``."""

    kind = "bool"
    param_type = click.BOOL
    is_flag = True

    def render(self) -> str:
        return "true" if self._value else "false"


class DurationValue(OptionValue[timedelta]):
    """Time span such as ``1h30m`` or ``250ms``."""

    kind = "duration"
    param_type = DURATION

    def render(self) -> str:
        return format_duration(self._value)

# topmark:header:start
#
#   project      : OptSync
#   file         : colored_enum.py
#   file_relpath : src/optsync/rendering/colored_enum.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Color-aware enum primitive for human-facing status output.

`ColoredStrEnum` keeps `_value_` as the plain `str` and stores the color
function separately (`_color`), so hashing, equality and `repr` behave like a
regular string enum.

Example:
    ```python
    from yachalk import chalk

    class WriteStatus(ColoredStrEnum):
        WRITTEN = ("written", chalk.green)
        FAILED  = ("write failed", chalk.red_bright)

    print(WriteStatus.WRITTEN.value)          # 'written'
    print(WriteStatus.WRITTEN.colored())      # green 'written'
    ```
"""

from __future__ import annotations

from enum import Enum
from typing import Protocol


class Colorizer(Protocol):
    """Callable that decorates a string for display (e.g. a `yachalk.ChalkBuilder`)."""

    def __call__(self, *args: object, sep: str = " ") -> str:
        """Colorize and concatenate the provided arguments."""
        ...


class ColoredStrEnum(str, Enum):
    """Enum whose *value* is a string and that carries an associated colorizer."""

    _value_: str
    _color: Colorizer

    def __new__(cls, text: str, color: Colorizer) -> ColoredStrEnum:
        """Construct a colored enum member.

        Args:
            text (str): The textual value for the enum member (stored in `_value_`).
            color (Colorizer): A callable used to colorize text for display.

        Returns:
            ColoredStrEnum: The newly constructed enum member.
        """
        obj: ColoredStrEnum = str.__new__(cls, text)
        obj._value_ = text
        obj._color = color
        return obj

    @property
    def value(self) -> str:
        """Return the textual value of the enum member."""
        return self._value_

    @property
    def color(self) -> Colorizer:
        """Return the colorizer associated with this member."""
        return self._color

    def colored(self) -> str:
        """Return the textual value decorated by the member's colorizer."""
        return self._color(self._value_)

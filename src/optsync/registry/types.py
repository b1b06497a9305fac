# topmark:header:start
#
#   project      : OptSync
#   file         : types.py
#   file_relpath : src/optsync/registry/types.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Custom Click parameter types used by OptSync option values.

Click ships coercion for strings, integers, floats and booleans. Durations are
added here, written as a sequence of decimal numbers with a unit suffix
(``"1h30m"``, ``"1.5s"``, ``"250ms"``, ``"-2m"``). Accepted units are ``h``,
``m``, ``s``, ``ms``, ``us`` (or ``µs``) and ``ns``; a bare number is read as
seconds.

[`format_duration`][optsync.registry.types.format_duration] renders the
canonical form that the config file stores, and
[`parse_duration`][optsync.registry.types.parse_duration] accepts it back.
"""

from __future__ import annotations

import re
from datetime import timedelta
from fractions import Fraction
from typing import TYPE_CHECKING, Any, Final, NoReturn, Protocol

import click

if TYPE_CHECKING:

    class ParamTypeBase(Protocol):
        """Typed base to avoid subclassing Any when Click lacks stubs."""

        name: str

else:
    # At runtime, subclass the real Click type
    ParamTypeBase = click.ParamType  # type: ignore[assignment]


# Unit multipliers expressed in microseconds (the resolution of timedelta).
_UNITS_US: Final[dict[str, Fraction]] = {
    "ns": Fraction(1, 1000),
    "us": Fraction(1),
    "µs": Fraction(1),
    "ms": Fraction(1_000),
    "s": Fraction(1_000_000),
    "m": Fraction(60_000_000),
    "h": Fraction(3_600_000_000),
}

_NUMBER: Final[str] = r"(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)"
_COMPONENT_RE: Final[re.Pattern[str]] = re.compile(rf"({_NUMBER})(ns|us|µs|ms|s|m|h)")
_DURATION_RE: Final[re.Pattern[str]] = re.compile(rf"(?:{_NUMBER}(?:ns|us|µs|ms|s|m|h))+")
_BARE_NUMBER_RE: Final[re.Pattern[str]] = re.compile(_NUMBER)

_US_PER_MS: Final[int] = 1_000
_US_PER_S: Final[int] = 1_000_000
_US_PER_M: Final[int] = 60 * _US_PER_S
_US_PER_H: Final[int] = 60 * _US_PER_M


def parse_duration(text: str) -> timedelta:
    """Parse a duration string into a `timedelta`.

    Args:
        text (str): Duration such as ``"1h30m"``, ``"250ms"`` or ``"90"`` (seconds).

    Returns:
        timedelta: The parsed duration, truncated to microseconds.

    Raises:
        ValueError: If ``text`` is not a valid duration or exceeds the `timedelta` range.
    """
    s: str = text.strip()
    sign: int = 1
    if s[:1] in ("-", "+"):
        sign = -1 if s[0] == "-" else 1
        s = s[1:]
    if not s:
        raise ValueError(f"invalid duration {text!r}")

    total: Fraction
    if _BARE_NUMBER_RE.fullmatch(s):
        total = Fraction(s) * _UNITS_US["s"]
    elif _DURATION_RE.fullmatch(s):
        total = sum(
            (Fraction(num) * _UNITS_US[unit] for num, unit in _COMPONENT_RE.findall(s)),
            Fraction(0),
        )
    else:
        raise ValueError(f"invalid duration {text!r}")

    try:
        return timedelta(microseconds=sign * int(total))
    except OverflowError as exc:
        raise ValueError(f"invalid duration {text!r}: out of range") from exc


def _decimal(value: int, unit: int) -> str:
    """Render ``value / unit`` as a decimal without trailing zeros."""
    whole, frac = divmod(value, unit)
    if frac == 0:
        return str(whole)
    width: int = len(str(unit)) - 1
    return f"{whole}.{str(frac).rjust(width, '0').rstrip('0')}"


def format_duration(value: timedelta) -> str:
    """Render a `timedelta` in its canonical compact form.

    Examples: ``0s``, ``750us``, ``1.5ms``, ``2.25s``, ``1m30s``, ``1h0m5s``, ``-2m0s``.
    """
    total_us: int = value // timedelta(microseconds=1)
    if total_us == 0:
        return "0s"

    sign: str = "-" if total_us < 0 else ""
    us: int = abs(total_us)

    if us < _US_PER_MS:
        return f"{sign}{us}us"
    if us < _US_PER_S:
        return f"{sign}{_decimal(us, _US_PER_MS)}ms"

    hours, rest = divmod(us, _US_PER_H)
    minutes, rest = divmod(rest, _US_PER_M)
    seconds: str = _decimal(rest, _US_PER_S) + "s"
    if hours:
        return f"{sign}{hours}h{minutes}m{seconds}"
    if minutes:
        return f"{sign}{minutes}m{seconds}"
    return f"{sign}{seconds}"


class DurationParamType(ParamTypeBase):
    """A Click parameter type that converts a duration string to a `timedelta`."""

    name = "duration"

    def _fail_noreturn(
        self,
        message: str,
        param: click.Parameter | None,
        ctx: click.Context | None,
    ) -> NoReturn:
        """Raise a BadParameter with a NoReturn signature (clear to type checkers)."""
        raise click.BadParameter(message, param=param, ctx=ctx)

    def convert(
        self,
        value: Any,
        param: click.Parameter | None,
        ctx: click.Context | None,
    ) -> timedelta:
        """Convert ``value`` to a `timedelta`."""
        if isinstance(value, timedelta):
            return value
        try:
            return parse_duration(str(value))
        except ValueError:
            self._fail_noreturn(
                f"{value!r} is not a valid duration (e.g. '1h30m', '1.5s', '250ms').",
                param,
                ctx,
            )

    def __repr__(self) -> str:
        """Return a string representation."""
        return "DURATION"


DURATION: Final[DurationParamType] = DurationParamType()

# topmark:header:start
#
#   project      : OptSync
#   file         : test_durations.py
#   file_relpath : tests/registry/test_durations.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Duration parsing and canonical rendering."""

from __future__ import annotations

from datetime import timedelta

import click
import pytest

from optsync.registry.types import DURATION, format_duration, parse_duration
from tests.conftest import parametrize


@parametrize(
    "text, expected",
    [
        ("0s", timedelta(0)),
        ("90", timedelta(seconds=90)),
        ("1.5", timedelta(seconds=1.5)),
        ("250ms", timedelta(milliseconds=250)),
        ("750us", timedelta(microseconds=750)),
        ("750µs", timedelta(microseconds=750)),
        ("1500ns", timedelta(microseconds=1)),
        ("1h30m", timedelta(hours=1, minutes=30)),
        ("1h0m5s", timedelta(hours=1, seconds=5)),
        ("2.25s", timedelta(seconds=2.25)),
        ("-2m", timedelta(minutes=-2)),
        ("+3s", timedelta(seconds=3)),
        (" 1m ", timedelta(minutes=1)),
    ],
)
def test_parse_duration(text: str, expected: timedelta) -> None:
    """Accept unit sequences, bare seconds and an optional sign."""
    assert parse_duration(text) == expected


@parametrize("text", ["", "-", "abc", "5x", "1h 30m", "h", "1.2.3s", "99999999999999h", "-1e3s"])
def test_parse_duration_rejects_garbage(text: str) -> None:
    """Anything else is a ValueError."""
    with pytest.raises(ValueError, match="invalid duration"):
        parse_duration(text)


@parametrize(
    "value, expected",
    [
        (timedelta(0), "0s"),
        (timedelta(microseconds=750), "750us"),
        (timedelta(microseconds=1500), "1.5ms"),
        (timedelta(seconds=2.25), "2.25s"),
        (timedelta(seconds=30), "30s"),
        (timedelta(minutes=1, seconds=30), "1m30s"),
        (timedelta(hours=1, seconds=5), "1h0m5s"),
        (timedelta(minutes=-2), "-2m0s"),
    ],
)
def test_format_duration(value: timedelta, expected: str) -> None:
    """Render the largest units first, dropping trailing zero fractions."""
    assert format_duration(value) == expected


def test_rendered_form_parses_back() -> None:
    """The canonical form written to the file is accepted when read again."""
    value = timedelta(hours=26, minutes=3, seconds=4, microseconds=500_000)
    assert parse_duration(format_duration(value)) == value


def test_click_type_converts_and_fails_cleanly() -> None:
    """The Click type returns timedeltas and raises BadParameter on bad input."""
    assert DURATION.convert("1m", None, None) == timedelta(minutes=1)
    assert DURATION.convert(timedelta(seconds=1), None, None) == timedelta(seconds=1)
    with pytest.raises(click.BadParameter, match="not a valid duration"):
        DURATION.convert("soon", None, None)


def test_out_of_range_is_a_bad_parameter() -> None:
    """Durations beyond the `timedelta` range are rejected like any bad value."""
    with pytest.raises(click.BadParameter, match="not a valid duration"):
        DURATION.convert("99999999999999h", None, None)

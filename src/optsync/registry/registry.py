# topmark:header:start
#
#   file         : registry.py
#   file_relpath : src/optsync/registry/registry.py
#   project      : OptSync
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Explicit option registry with a one-way finalization lifecycle.

The registry is the single source of truth for an application's options. It is
constructed explicitly and passed around (there is no process-wide instance),
which keeps repeated runs isolated in tests.

Typical usage:
    ```python
    from optsync import OptionRegistry, parse

    registry = OptionRegistry()
    port = registry.add_int("port", 8080, "Port to run the server on")
    verbose = registry.add_bool("verbose", False, "Enable verbose output")
    registry.alias("v", verbose)

    parse("myapp", registry)  # file first, then the command line
    print(port.get(), verbose.get(), registry.args)
    ```

Lifecycle:
    ``UNFINALIZED`` → ``FINALIZED``. [`finalize`][optsync.registry.registry.OptionRegistry.finalize]
    parses the command line over the registry exactly once; command-line values
    therefore take precedence over anything applied before (defaults, file).
"""

from __future__ import annotations

import os
import re
import sys
from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from typing import TYPE_CHECKING, Final, TypeVar

import click
from click.core import ParameterSource

from optsync.config.logging import get_logger
from optsync.errors import AlreadyFinalizedError, DuplicateOptionError
from optsync.registry.values import (
    BoolValue,
    DurationValue,
    FloatValue,
    IntValue,
    OptionValue,
    StringValue,
    UintValue,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Sequence

    from optsync.config.logging import OptsyncLogger

logger: OptsyncLogger = get_logger(__name__)

V = TypeVar("V", bound=OptionValue)  # type: ignore[type-arg]

# A name must survive the round trip through the config file and the command line.
_INVALID_NAME_RE: Final[re.Pattern[str]] = re.compile(r"^[-#]|[=:\s]")
_BACKQUOTED_RE: Final[re.Pattern[str]] = re.compile(r"`([^`]*)`")


class RegistryState(Enum):
    """Lifecycle of an [`OptionRegistry`][optsync.registry.registry.OptionRegistry]."""

    UNFINALIZED = "unfinalized"
    FINALIZED = "finalized"


@dataclass(frozen=True)
class Option:
    """A named handle on an option value.

    Attributes:
        name (str): The option name (without dashes).
        value (OptionValue): The storage; shared with any aliases.
        default_text (str): Rendered value at registration time.
        usage (str): Help text; may span several lines.
    """

    name: str
    value: OptionValue  # type: ignore[type-arg]
    default_text: str
    usage: str

    @property
    def usage_text(self) -> str:
        """Usage with the first back-quoted word unquoted (``"a `file`"`` → ``"a file"``)."""
        return _BACKQUOTED_RE.sub(r"\1", self.usage, count=1)

    @property
    def cli_name(self) -> str:
        """The command-line spelling: ``-v`` for one-character names, ``--name`` otherwise."""
        return f"-{self.name}" if len(self.name) == 1 else f"--{self.name}"


@dataclass(frozen=True)
class SetResult:
    """Outcome of [`OptionRegistry.set`][optsync.registry.registry.OptionRegistry.set].

    Attributes:
        name (str): The requested option name.
        text (str): The textual value that was offered.
        error (str | None): ``None`` if the value was applied, otherwise why not.
    """

    name: str
    text: str
    error: str | None = None

    @property
    def applied(self) -> bool:
        """Whether the value was stored."""
        return self.error is None


def canonical_options(options: Iterable[Option]) -> dict[int, Option]:
    """Return the canonical representative of each alias group, keyed by value token.

    Within a group the option with the longest name (counted in characters) wins;
    on a tie the first one encountered is kept.
    """
    best: dict[int, Option] = {}
    for option in options:
        current: Option | None = best.get(option.value.token)
        if current is None or len(option.name) > len(current.name):
            best[option.value.token] = option
    return best


class OptionRegistry:
    """Registry of named, typed options plus the command-line finalization step.

    Attributes:
        args (tuple[str, ...]): Positional arguments left over after finalization.
    """

    def __init__(self) -> None:
        self._options: dict[str, Option] = {}
        self._state: RegistryState = RegistryState.UNFINALIZED
        self.args: tuple[str, ...] = ()

    # --- Definition ---------------------------------------------------------

    def define(self, name: str, value: V, usage: str = "") -> V:
        """Register ``value`` under ``name`` and return it.

        Args:
            name (str): Option name, without leading dashes.
            value (V): The storage backing the option.
            usage (str): Help text.

        Returns:
            V: ``value``, for convenient assignment.

        Raises:
            DuplicateOptionError: If ``name`` is already registered.
            ValueError: If ``name`` cannot be written to a config file or command line.
        """
        if not name or _INVALID_NAME_RE.search(name):
            raise ValueError(f"invalid option name {name!r}")
        if name in self._options:
            raise DuplicateOptionError(f"option redefined: {name}")
        self._options[name] = Option(
            name=name, value=value, default_text=value.render(), usage=usage
        )
        logger.trace("Registered %s option %r (default %s)", value.kind, name, value.render())
        return value

    def add_string(self, name: str, default: str = "", usage: str = "") -> StringValue:
        """Define a string option."""
        return self.define(name, StringValue(default), usage)

    def add_int(self, name: str, default: int = 0, usage: str = "") -> IntValue:
        """Define a signed integer option."""
        return self.define(name, IntValue(default), usage)

    def add_uint(self, name: str, default: int = 0, usage: str = "") -> UintValue:
        """Define a non-negative integer option."""
        if default < 0:
            raise ValueError(f"negative default for uint option {name!r}: {default}")
        return self.define(name, UintValue(default), usage)

    def add_float(self, name: str, default: float = 0.0, usage: str = "") -> FloatValue:
        """Define a floating point option."""
        return self.define(name, FloatValue(default), usage)

    def add_bool(self, name: str, default: bool = False, usage: str = "") -> BoolValue:
        """Define a boolean option."""
        return self.define(name, BoolValue(default), usage)

    def add_duration(
        self, name: str, default: timedelta = timedelta(0), usage: str = ""
    ) -> DurationValue:
        """Define a duration option."""
        return self.define(name, DurationValue(default), usage)

    def alias(self, name: str, value: V, usage: str | None = None) -> V:
        """Bind an additional ``name`` to an already registered ``value``.

        Args:
            name (str): The alias name (e.g. ``"v"`` for ``"verbose"``).
            value (V): A value previously returned by one of the definition helpers.
            usage (str | None): Help text; defaults to the usage of the aliased option.

        Returns:
            V: ``value``.

        Raises:
            KeyError: If ``value`` is not registered in this registry.
        """
        bound: list[Option] = [o for o in self._options.values() if o.value is value]
        if not bound:
            raise KeyError(f"cannot alias {name!r}: value is not registered")
        return self.define(name, value, bound[0].usage if usage is None else usage)

    # --- Introspection ------------------------------------------------------

    def iter_options(self) -> Iterator[Option]:
        """Yield all options in natural enumeration order (sorted by name)."""
        for name in sorted(self._options):
            yield self._options[name]

    __iter__ = iter_options

    def lookup(self, name: str) -> Option | None:
        """Return the option registered under ``name``, if any."""
        return self._options.get(name)

    def __getitem__(self, name: str) -> Option:
        return self._options[name]

    def __contains__(self, name: object) -> bool:
        return name in self._options

    def __len__(self) -> int:
        return len(self._options)

    # --- Mutation -----------------------------------------------------------

    def set(self, name: str, text: str) -> SetResult:
        """Set option ``name`` from its textual form.

        Unknown names and values the option cannot coerce are reported in the
        result instead of being raised.

        Args:
            name (str): The option name.
            text (str): The textual value.

        Returns:
            SetResult: Whether the value was applied, and why not.
        """
        option: Option | None = self._options.get(name)
        if option is None:
            return SetResult(name=name, text=text, error=f"no such option: {name}")
        error: str | None = option.value.parse(text)
        if error is not None:
            return SetResult(name=name, text=text, error=error)
        logger.trace("Set %s=%s", name, option.value.render())
        return SetResult(name=name, text=text)

    # --- Lifecycle ----------------------------------------------------------

    @property
    def state(self) -> RegistryState:
        """The current lifecycle state."""
        return self._state

    @property
    def finalized(self) -> bool:
        """Whether the command line has already been parsed into the registry."""
        return self._state is RegistryState.FINALIZED

    def build_command(self, prog_name: str | None = None) -> click.Command:
        """Build the Click command that parses the command line into this registry.

        One Click option is created per alias group, declaring every alias. Boolean
        options get a ``--no-<name>`` switch for each long name.
        """
        params: list[click.Parameter] = []
        groups: dict[int, list[Option]] = {}
        for option in self.iter_options():
            groups.setdefault(option.value.token, []).append(option)

        representatives: dict[int, Option] = canonical_options(self.iter_options())
        for token, members in groups.items():
            first: Option = members[0]
            canonical: Option = representatives[token]
            decls: list[str] = [
                f"{o.cli_name}/--no-{o.name}" if first.value.is_flag and len(o.name) > 1
                else o.cli_name
                for o in members
            ]
            decls.append(f"opt_{token}")
            if first.value.is_flag:
                params.append(
                    click.Option(
                        decls,
                        is_flag=True,
                        help=canonical.usage_text,
                        show_default=canonical.default_text,
                    )
                )
            else:
                params.append(
                    click.Option(
                        decls,
                        type=first.value.param_type,
                        help=canonical.usage_text,
                        show_default=canonical.default_text,
                        metavar=first.value.kind.upper(),
                    )
                )
        params.append(click.Argument(["args"], nargs=-1))

        return click.Command(
            prog_name,
            params=params,
            add_help_option="help" not in self._options,
        )

    def finalize(
        self, args: Sequence[str] | None = None, *, prog_name: str | None = None
    ) -> tuple[str, ...]:
        """Parse command-line ``args`` into the registry (once).

        Only options actually present on the command line are applied, so values
        set earlier (e.g. from the config file) survive unless overridden.

        Args:
            args (Sequence[str] | None): Arguments to parse; defaults to ``sys.argv[1:]``.
            prog_name (str | None): Program name for usage messages; defaults to
                the basename of ``sys.argv[0]``.

        Returns:
            tuple[str, ...]: The positional arguments (also stored in ``self.args``).

        Raises:
            AlreadyFinalizedError: If the registry was finalized before.
        """
        if self.finalized:
            raise AlreadyFinalizedError("command-line arguments have been parsed already")

        argv: list[str] = list(sys.argv[1:] if args is None else args)
        name: str = prog_name or os.path.basename(sys.argv[0]) or "app"
        command: click.Command = self.build_command(name)

        # Click's UsageError / Exit (e.g. --help) propagate: flag syntax and exit
        # codes belong to the command-line layer.
        with command.make_context(name, argv) as ctx:
            for option in canonical_options(self.iter_options()).values():
                param_name: str = f"opt_{option.value.token}"
                if ctx.get_parameter_source(param_name) is ParameterSource.COMMANDLINE:
                    option.value.set(ctx.params[param_name])
                    logger.debug(
                        "Command line sets %s=%s", option.name, option.value.render()
                    )
            self.args = tuple(ctx.params.get("args") or ())

        self._state = RegistryState.FINALIZED
        logger.debug("Registry finalized with %d positional argument(s)", len(self.args))
        return self.args

# topmark:header:start
#
#   project      : OptSync
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pytest configuration for the OptSync test suite.

This file sets up global fixtures and customizes the logging configuration for test runs,
ensuring consistent and verbose logging output during testing.

Notes:
    Every test builds its own [`OptionRegistry`][optsync.registry.registry.OptionRegistry];
    there is no process-wide registry to reset. Config files live under `tmp_path`
    and are selected through an explicit `environ` mapping (``MYAPPINF0``), so the
    developer's home directory is never touched.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import timedelta
from typing import TYPE_CHECKING, Any, TypeVar, cast

import pytest

from optsync.config import logging
from optsync.registry import OptionRegistry

if TYPE_CHECKING:
    from pathlib import Path

F = TypeVar("F", bound=Callable[..., object])

# This defines the type for the decorator function itself:
# It takes a Callable (F) and returns the same Callable (F).
DecoratorType = Callable[[F], F]

APP_NAME = "myapp"
ENV_VAR = "MYAPPINF0"


def as_typed_mark(mark: Any) -> DecoratorType[Any]:
    """Wrap a pytest mark so static type checkers preserve the function type.

    Args:
        mark (Any): A pytest mark decorator such as `pytest.mark.integration`.

    Returns:
        DecoratorType[Any]: A decorator that preserves the wrapped function's type.
    """

    def _decorator(func: F) -> F:
        return cast("F", mark(func))

    return _decorator


mark_integration: DecoratorType[Any] = as_typed_mark(pytest.mark.integration)


def parametrize(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.mark.parametrize`.

    Args:
        *args (Any): Positional arguments forwarded to `pytest.mark.parametrize`.
        **kwargs (Any): Keyword arguments forwarded to `pytest.mark.parametrize`.

    Returns:
        Callable[[F], F]: A decorator that preserves the wrapped function's type.
    """
    mark: pytest.MarkDecorator = pytest.mark.parametrize(*args, **kwargs)
    return as_typed_mark(mark)


def hookimpl(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.hookimpl`.

    Args:
        *args (Any): Positional arguments forwarded to `pytest.hookimpl`.
        **kwargs (Any): Keyword arguments forwarded to `pytest.hookimpl`.

    Returns:
        Callable[[F], F]: A decorator that preserves the wrapped function's type.
    """
    return as_typed_mark(pytest.hookimpl(*args, **kwargs))


def fixture(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.fixture`.

    Args:
        *args (Any): Positional arguments forwarded to `pytest.fixture`.
        **kwargs (Any): Keyword arguments forwarded to `pytest.fixture`.

    Returns:
        Callable[[F], F]: A decorator that preserves the wrapped function's type.
    """
    return as_typed_mark(pytest.fixture(*args, **kwargs))


@pytest.fixture(autouse=True)
def silence_optsync_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure OptSync's runtime log level is not forced via env during tests.

    Args:
        monkeypatch (pytest.MonkeyPatch): Pytest monkeypatch fixture used to manipulate
            environment variables.
    """
    monkeypatch.delenv("OPTSYNC_LOG_LEVEL", raising=False)


@hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Set the logging level to TRACE for all tests.

    Args:
        config (pytest.Config): The pytest configuration object.
    """
    logging.setup_logging(level=logging.TRACE_LEVEL)


@fixture()
def config_path(tmp_path: Path) -> Path:
    """Return the (not yet existing) config file path used by a test."""
    return tmp_path / ".myappinf0"


@fixture()
def environ(config_path: Path) -> dict[str, str]:
    """Return an environment mapping that points ``myapp`` at `config_path`."""
    return {ENV_VAR: str(config_path)}


def make_server_registry() -> OptionRegistry:
    """Return a registry with the options of a small server application.

    Options: ``host`` (string), ``port`` (int), ``timeout`` (duration),
    ``verbose`` (bool, aliased as ``v``), ``workers`` (uint).
    """
    registry = OptionRegistry()
    registry.add_string("host", "", "Host address for the server")
    registry.add_int("port", 8080, "Port to run the server on")
    registry.add_duration("timeout", timedelta(seconds=30), "Request `timeout`")
    verbose = registry.add_bool("verbose", False, "Enable verbose output")
    registry.alias("v", verbose)
    registry.add_uint("workers", 4, "Number of worker processes")
    return registry


@fixture()
def server_registry() -> OptionRegistry:
    """Fresh registry built by `make_server_registry`."""
    return make_server_registry()

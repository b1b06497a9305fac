# topmark:header:start
#
#   project      : OptSync
#   file         : paths.py
#   file_relpath : src/optsync/config/paths.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pure helpers that locate an application's config file.

Key behaviors:
    - ``config_env_var(app_name)``: name of the override variable, e.g.
      ``MYAPPINF0`` for ``myapp``.
    - ``resolve_config_path(app_name, environ)``: the override value verbatim when
      set and non-empty, otherwise ``~/.myappinf0`` in the current user's home.

No file is touched here; opening (and creating) the file is the reader step's job.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING

from optsync.config.logging import get_logger
from optsync.constants import CONFIG_SUFFIX
from optsync.errors import EnvironmentResolutionError

if TYPE_CHECKING:
    from collections.abc import Mapping

    from optsync.config.logging import OptsyncLogger

logger: OptsyncLogger = get_logger(__name__)


def config_env_var(app_name: str) -> str:
    """Return the environment variable that overrides the config path of ``app_name``."""
    return app_name.upper() + CONFIG_SUFFIX.upper()


def default_config_name(app_name: str) -> str:
    """Return the dot-file name used in the home directory, e.g. ``.myappinf0``."""
    return "." + app_name.lower() + CONFIG_SUFFIX


def resolve_config_path(app_name: str, environ: Mapping[str, str] | None = None) -> str:
    """Return the config file path for ``app_name``.

    Args:
        app_name (str): The application name.
        environ (Mapping[str, str] | None): Environment to consult; defaults to ``os.environ``.

    Returns:
        str: The override value verbatim, or the dot-file path in the user's home directory.

    Raises:
        EnvironmentResolutionError: If no override is set and the home directory of the
            current user cannot be determined.
    """
    env: Mapping[str, str] = os.environ if environ is None else environ
    env_name: str = config_env_var(app_name)

    override: str = env.get(env_name, "")
    if override:
        logger.debug("Config path for %s taken from $%s: %s", app_name, env_name, override)
        return override

    try:
        home: Path = Path.home()
    except (RuntimeError, KeyError) as exc:
        raise EnvironmentResolutionError(
            f"{exc}\nYou can set the environment variable {env_name} "
            "to point to your config file as a workaround"
        ) from exc

    path: str = str(home / default_config_name(app_name))
    logger.debug("Config path for %s resolved in home directory: %s", app_name, path)
    return path

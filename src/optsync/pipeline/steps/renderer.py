# topmark:header:start
#
#   project      : OptSync
#   file         : renderer.py
#   file_relpath : src/optsync/pipeline/steps/renderer.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Renderer step: build the canonical config file image.

Layout of the generated file:

```text
# myapp configuration
#
# Empty lines or lines starting with # will be ignored.
# ...

# Port to run the server on
# (default 8080)
port=9000

# Host address for the server
# (default )
host=localhost


# The following options are probably deprecated and not used currently!
old-flag=42
```

Options are visited in the registry's natural order (sorted by name). Aliases
sharing one value are written once, under the longest name. Obsolete entries
are written sorted by key, so the output depends only on the registry contents
and the set of obsolete entries, never on the order of lines in the old file.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from optsync.config.logging import get_logger
from optsync.constants import COMMENT_PREFIX, CONFIG_HEADER, DEPRECATED_SECTION_HEADER
from optsync.pipeline.status import RenderStatus
from optsync.pipeline.steps.base import BaseStep
from optsync.registry.registry import canonical_options

if TYPE_CHECKING:
    from collections.abc import Mapping

    from optsync.config.logging import OptsyncLogger
    from optsync.pipeline.context import SyncContext
    from optsync.registry.registry import Option, OptionRegistry

logger: OptsyncLogger = get_logger(__name__)


def _comment(text: str) -> str:
    """Turn (possibly multi-line) ``text`` into ``#`` comment lines."""
    return "\n".join(
        f"{COMMENT_PREFIX} {line}".rstrip() for line in text.split("\n")
    )


def render_option(option: Option) -> str:
    """Render the block of one option, preceded by a blank line."""
    return (
        f"\n{_comment(option.usage_text)}\n"
        f"{_comment(f'(default {option.default_text})')}\n"
        f"{option.name}={option.value.render()}\n"
    )


def render_obsolete(obsolete: Mapping[str, str]) -> str:
    """Render the trailing deprecated section (empty string if nothing is obsolete)."""
    if not obsolete:
        return ""
    lines: list[str] = [f"\n\n{DEPRECATED_SECTION_HEADER}\n"]
    lines.extend(f"{key}={obsolete[key]}\n" for key in sorted(obsolete))
    return "".join(lines)


def render_config(
    app_name: str,
    registry: OptionRegistry,
    obsolete: Mapping[str, str] | None = None,
) -> str:
    """Render the canonical config file text for ``registry``.

    Args:
        app_name (str): Application name shown in the header.
        registry (OptionRegistry): Options to write, with their current values.
        obsolete (Mapping[str, str] | None): Entries to preserve in the deprecated section.

    Returns:
        str: The full file content.
    """
    parts: list[str] = [CONFIG_HEADER.format(app_name=app_name)]
    representatives: dict[int, Option] = canonical_options(registry.iter_options())
    for option in registry.iter_options():
        if representatives[option.value.token] is not option:
            logger.trace("Skipping alias %r", option.name)
            continue
        parts.append(render_option(option))
    parts.append(render_obsolete(obsolete or {}))
    return "".join(parts)


class RendererStep(BaseStep):
    """Render ``ctx.rendered`` from the registry and the obsolete entries.

    Sets:
      - RenderStatus: {RENDERED}
    """

    def __init__(self) -> None:
        super().__init__(name=self.__class__.__name__)

    def run(self, ctx: SyncContext) -> None:
        text: str = render_config(ctx.app_name, ctx.registry, ctx.obsolete)
        ctx.rendered = text.encode("utf-8")
        ctx.status.render = RenderStatus.RENDERED
        logger.debug("Renderer: %d bytes", len(ctx.rendered))

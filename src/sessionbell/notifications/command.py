"""
CommandRunner — runs the user's hook command for an event.

Placeholders in the configured arguments are filled with event data.
The outcome is logged and never reported back to the caller.
"""

from __future__ import annotations

import logging

from sessionbell.notifications.config import CommandConfig
from sessionbell.notifications.events import EventKind
from sessionbell.notifications.process import run_quiet

logger = logging.getLogger(__name__)


def render_args(args: tuple[str, ...], values: dict[str, str]) -> list[str]:
    """Substitute ``{name}`` placeholders; unknown placeholders are left as is."""
    rendered = []
    for arg in args:
        for name, value in values.items():
            arg = arg.replace("{" + name + "}", value)
        rendered.append(arg)
    return rendered


class CommandRunner:
    async def run(
        self,
        config: CommandConfig,
        kind: EventKind,
        message: str,
        project_name: str | None = None,
    ) -> None:
        if not config.enabled or not config.path:
            return

        argv = [
            config.path,
            *render_args(
                config.args,
                {"event": kind.value, "message": message, "project": project_name or ""},
            ),
        ]
        try:
            code = await run_quiet(*argv)
        except OSError:
            logger.warning("Failed to launch command %s", config.path, exc_info=True)
            return
        if code != 0:
            logger.warning("Command %s exited with code %d", config.path, code)
        else:
            logger.debug("Command %s finished for %s", config.path, kind.value)

"""
Focus check — asks an external script whether the host window has focus.

Exit code 0 means focused. Anything else, including a missing script or
a launch failure, counts as not focused so alerts are never lost.
"""

from __future__ import annotations

import logging
from pathlib import Path

from sessionbell.notifications.process import run_quiet

logger = logging.getLogger(__name__)


async def is_focused(script_path: str | None) -> bool:
    if not script_path:
        return False
    if not Path(script_path).exists():
        logger.debug("Focus script %s does not exist", script_path)
        return False

    try:
        code = await run_quiet(script_path)
    except OSError:
        logger.warning("Failed to run focus script %s", script_path, exc_info=True)
        return False
    return code == 0

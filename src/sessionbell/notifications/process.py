"""
Quiet subprocess helper shared by the focus check, sinks and command runner.
"""

from __future__ import annotations

import asyncio
from asyncio.subprocess import DEVNULL


async def run_quiet(*argv: str) -> int:
    """Run ``argv`` with no stdio attached and return its exit code.

    Raises OSError when the executable cannot be launched.
    """
    proc = await asyncio.create_subprocess_exec(
        *argv,
        stdin=DEVNULL,
        stdout=DEVNULL,
        stderr=DEVNULL,
    )
    return await proc.wait()

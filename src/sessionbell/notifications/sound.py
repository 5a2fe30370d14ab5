"""
Sound playback for notifier events.

The sound file is the configured custom path when it exists, otherwise
the bundled ``sounds/<kind>.wav``. Playback shells out to a platform
audio player; on Linux several players are tried in order and the first
one that exits cleanly wins. Playback failures are silent.
"""

from __future__ import annotations

import logging
import platform
from abc import ABC, abstractmethod
from pathlib import Path

from sessionbell.notifications.events import EventKind
from sessionbell.notifications.process import run_quiet

logger = logging.getLogger(__name__)

SOUNDS_DIR: Path = Path(__file__).resolve().parent.parent / "sounds"

_WINDOWS_PLAY = "& { (New-Object Media.SoundPlayer $args[0]).PlaySync() }"


class SoundSink(ABC):
    @abstractmethod
    async def play(self, kind: EventKind, custom_path: str | None = None) -> None:
        ...


def player_commands(system: str, sound_path: str) -> list[list[str]]:
    """Candidate player invocations for ``system``, in the order to try them."""
    if system == "Darwin":
        return [["afplay", sound_path]]
    if system == "Windows":
        return [["powershell", "-c", _WINDOWS_PLAY, sound_path]]
    if system == "Linux":
        return [
            ["paplay", sound_path],
            ["aplay", sound_path],
            ["mpv", "--no-video", "--no-terminal", sound_path],
            ["ffplay", "-nodisp", "-autoexit", "-loglevel", "quiet", sound_path],
        ]
    return []


class SoundPlayer(SoundSink):
    """Plays event sounds through external audio players."""

    def __init__(self, system: str | None = None, sounds_dir: Path = SOUNDS_DIR) -> None:
        self.system = system or platform.system()
        self.sounds_dir = sounds_dir

    def resolve_path(self, kind: EventKind, custom_path: str | None = None) -> Path | None:
        if custom_path and Path(custom_path).exists():
            return Path(custom_path)
        bundled = self.sounds_dir / f"{kind.value}.wav"
        if bundled.exists():
            return bundled
        return None

    async def play(self, kind: EventKind, custom_path: str | None = None) -> None:
        sound_path = self.resolve_path(kind, custom_path)
        if sound_path is None:
            logger.debug("No sound file for %s", kind.value)
            return

        for argv in player_commands(self.system, str(sound_path)):
            try:
                if await run_quiet(*argv) == 0:
                    return
            except OSError:
                continue
        logger.debug("No audio player could play %s", sound_path)

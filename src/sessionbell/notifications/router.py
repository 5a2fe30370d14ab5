"""
NotificationRouter — gates and fans out the side effects of one event.

For each event kind it decides, independently, whether to show a
notification, play a sound and run the hook command. Notification and
sound run concurrently and are both awaited; the command runs as a
detached task whose outcome is only logged. Nothing raised by a sink or
lookup ever escapes ``dispatch``.
"""

from __future__ import annotations

import asyncio
import logging
import math
from typing import Awaitable, Callable, Optional

from sessionbell.notifications.channel import NotificationSink
from sessionbell.notifications.command import CommandRunner
from sessionbell.notifications.config import NotifierConfig
from sessionbell.notifications.debounce import DEBOUNCE_MS, DebounceGate, now_ms
from sessionbell.notifications.events import EventKind, HostEvent, UnrecognizedEvent
from sessionbell.notifications.focus import is_focused
from sessionbell.notifications.sessions import SessionInspector
from sessionbell.notifications.sound import SoundSink

logger = logging.getLogger(__name__)

FocusCheck = Callable[[Optional[str]], Awaitable[bool]]


class NotificationRouter:
    """Decides which side effects an event gets and runs them."""

    def __init__(
        self,
        config: NotifierConfig,
        notifier: NotificationSink,
        sound: SoundSink,
        *,
        commands: CommandRunner | None = None,
        sessions: SessionInspector | None = None,
        focus_check: FocusCheck = is_focused,
        clock: Callable[[], float] = now_ms,
        notification_gate: DebounceGate | None = None,
        sound_gate: DebounceGate | None = None,
    ) -> None:
        self.config = config
        self.notifier = notifier
        self.sound = sound
        self.commands = commands or CommandRunner()
        self.sessions = sessions
        self.focus_check = focus_check
        self.clock = clock
        self.notification_gate = notification_gate or DebounceGate(DEBOUNCE_MS)
        self.sound_gate = sound_gate or DebounceGate(DEBOUNCE_MS)
        self._background: set[asyncio.Task[None]] = set()

    # -- gating ------------------------------------------------------------

    def _min_duration(self) -> float | None:
        """Configured minimum duration when it is a positive finite number."""
        value = self.config.command.min_duration
        if value is None or not math.isfinite(value) or value <= 0:
            return None
        return value

    def command_configured(self) -> bool:
        return self.config.command.enabled and bool(self.config.command.path)

    def needs_elapsed_time(self) -> bool:
        return self.command_configured() and self._min_duration() is not None

    def should_skip_command(self, elapsed: float | None) -> bool:
        """Skip only when the elapsed time is known and below the minimum."""
        min_duration = self._min_duration()
        if min_duration is None or elapsed is None:
            return False
        return elapsed < min_duration

    def notification_title(self, project_name: str | None) -> str:
        if self.config.show_project_name and project_name:
            return f"{self.config.title} ({project_name})"
        return self.config.title

    async def _elapsed_for(self, session_id: str | None) -> float | None:
        if not session_id or self.sessions is None:
            return None
        return await self.sessions.elapsed_seconds(session_id)

    async def _focused(self) -> bool:
        if not self.config.suppress_when_focused:
            return False
        try:
            return await self.focus_check(self.config.focus_detection_script)
        except Exception:
            logger.exception("Focus check failed")
            return False

    # -- dispatch ----------------------------------------------------------

    async def dispatch(
        self,
        kind: EventKind,
        project_name: str | None = None,
        event: HostEvent | UnrecognizedEvent | None = None,
    ) -> None:
        """Run the gated side effects for one event. Never raises.

        ``event`` is the decoded host event, used to find the session for
        duration gating. Pass None when the host gave no payload.
        """
        try:
            await self._dispatch(kind, project_name, event)
        except Exception:
            logger.exception("Unexpected failure dispatching %s", kind.value)

    async def _dispatch(
        self,
        kind: EventKind,
        project_name: str | None,
        event: HostEvent | UnrecognizedEvent | None,
    ) -> None:
        elapsed = None
        if self.needs_elapsed_time() and event is not None:
            elapsed = await self._elapsed_for(event.session_id)
        focused = await self._focused()
        message = self.config.message_for(kind)

        tasks = []
        if focused:
            logger.debug("Host is focused, suppressing notification and sound for %s", kind.value)
        else:
            if self.config.notification_enabled(kind):
                tasks.append(self._notify(kind, message, project_name))
            if self.config.sound_enabled(kind):
                tasks.append(self._play(kind))

        if self.command_configured():
            if self.should_skip_command(elapsed):
                logger.debug(
                    "Skipping command for %s: %.1fs elapsed, minimum %.1fs",
                    kind.value,
                    elapsed,
                    self.config.command.min_duration,
                )
            else:
                self._spawn_command(kind, message, project_name)

        if tasks:
            await asyncio.gather(*tasks)

    async def _notify(self, kind: EventKind, message: str, project_name: str | None) -> None:
        """Debounce on message text, then hand off to the sink; failures are logged."""
        if not self.notification_gate.should_trigger(message, self.clock()):
            logger.debug("Debounced notification %r", message)
            return
        title = self.notification_title(project_name)
        try:
            await self.notifier.notify(title, message, self.config.timeout)
        except Exception:
            logger.exception("Failed to send %s notification via %s", kind.value, self.notifier.name)

    async def _play(self, kind: EventKind) -> None:
        if not self.sound_gate.should_trigger(kind.value, self.clock()):
            logger.debug("Debounced sound for %s", kind.value)
            return
        try:
            await self.sound.play(kind, self.config.sound_path_for(kind))
        except Exception:
            logger.exception("Failed to play sound for %s", kind.value)

    def _spawn_command(self, kind: EventKind, message: str, project_name: str | None) -> None:
        """Start the hook command detached; its result is never awaited here."""
        task = asyncio.create_task(self._run_command(kind, message, project_name))
        self._background.add(task)
        task.add_done_callback(self._background.discard)

    async def _run_command(self, kind: EventKind, message: str, project_name: str | None) -> None:
        try:
            await self.commands.run(self.config.command, kind, message, project_name)
        except Exception:
            logger.exception("Command for %s failed", kind.value)

    async def aclose(self) -> None:
        """Wait for detached commands to finish."""
        if self._background:
            await asyncio.gather(*list(self._background), return_exceptions=True)

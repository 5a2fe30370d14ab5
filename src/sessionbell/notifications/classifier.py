"""
EventClassifier — maps host events to notifier event kinds.

Raw payloads are decoded once into the host event variants; anything
unrecognized is ignored. Idle sessions are split into root and subagent
completions by looking up the session's parent.
"""

from __future__ import annotations

import logging
from typing import Any, Union

from sessionbell.notifications.events import (
    EventKind,
    HostEvent,
    PermissionAsk,
    PermissionAsked,
    PermissionUpdated,
    SessionError,
    SessionIdle,
    ToolExecuteBefore,
    UnrecognizedEvent,
    decode_event,
)
from sessionbell.notifications.router import NotificationRouter
from sessionbell.notifications.sessions import SessionInspector

logger = logging.getLogger(__name__)

QUESTION_TOOL = "question"


class EventClassifier:
    """Turns host events into router dispatches."""

    def __init__(
        self,
        router: NotificationRouter,
        sessions: SessionInspector | None = None,
        project_name: str | None = None,
    ) -> None:
        self.router = router
        self.sessions = sessions
        self.project_name = project_name

    async def classify(self, event: Union[HostEvent, UnrecognizedEvent]) -> EventKind | None:
        if isinstance(event, (PermissionUpdated, PermissionAsked, PermissionAsk)):
            return EventKind.PERMISSION
        if isinstance(event, SessionIdle):
            return await self._completion_kind(event.session_id)
        if isinstance(event, SessionError):
            return EventKind.ERROR
        if isinstance(event, ToolExecuteBefore) and event.properties.tool == QUESTION_TOOL:
            return EventKind.QUESTION
        return None

    async def _completion_kind(self, session_id: str | None) -> EventKind:
        # Without a session id there is nothing to look up; treat it as a root session.
        if not session_id or self.sessions is None:
            return EventKind.COMPLETE
        if await self.sessions.is_child_session(session_id):
            return EventKind.SUBAGENT_COMPLETE
        return EventKind.COMPLETE

    async def handle(self, raw: Any) -> EventKind | None:
        """Decode, classify and dispatch one raw host event.

        Returns the kind that was dispatched, or None when the event was
        ignored.
        """
        event = decode_event(raw)
        kind = await self.classify(event)
        if kind is None:
            logger.debug("Ignoring host event %r", getattr(event, "type", ""))
            return None

        logger.info("Host event %s -> %s", event.type, kind.value)
        # The permission-ask hook has no payload worth looking up.
        payload = None if isinstance(event, PermissionAsk) else event
        await self.router.dispatch(kind, self.project_name, payload)
        return kind

    async def handle_permission_ask(self) -> None:
        await self.handle({"type": "permission.ask"})

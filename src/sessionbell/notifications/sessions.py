"""
SessionInspector — session lookups that feed the gating decisions.

Both lookups degrade instead of raising: an unknown elapsed time turns
duration gating off, and a failed metadata fetch classifies the session
as a root session.
"""

from __future__ import annotations

import logging
from typing import Callable

from sessionbell.notifications.debounce import now_ms
from sessionbell.notifications.host import HostClient

logger = logging.getLogger(__name__)


class SessionInspector:
    """Answers elapsed-time and parent/child questions about host sessions."""

    def __init__(self, client: HostClient, clock: Callable[[], float] = now_ms) -> None:
        self.client = client
        self.clock = clock

    async def elapsed_seconds(self, session_id: str) -> float | None:
        """Seconds since the latest user message, or None when unknown."""
        try:
            messages = await self.client.get_messages(session_id)
        except Exception:
            logger.warning("Could not fetch messages for session %s", session_id, exc_info=True)
            return None

        latest: float | None = None
        for message in messages:
            if message.info.role != "user":
                continue
            created = message.info.time.created
            if created is None:
                continue
            if latest is None or created > latest:
                latest = created

        if latest is None:
            return None
        return (self.clock() - latest) / 1000

    async def is_child_session(self, session_id: str) -> bool:
        try:
            session = await self.client.get_session(session_id)
        except Exception:
            logger.warning("Could not fetch session %s", session_id, exc_info=True)
            return False
        return session.is_child

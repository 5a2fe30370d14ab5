"""
NotificationSink — abstract base class for desktop notification backends.

One implementation per platform; ``select_sink()`` in the channels
package picks one at startup.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class SinkError(RuntimeError):
    """A sink could not deliver its side effect."""


class NotificationSink(ABC):
    """Base class for notification backends."""

    name: str = "unnamed"

    @abstractmethod
    async def notify(self, title: str, message: str, timeout: float) -> None:
        """Show a notification. Raise on failure; the router isolates it."""
        ...

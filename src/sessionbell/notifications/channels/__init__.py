"""Notification sink implementations and platform selection."""

from __future__ import annotations

import platform

from sessionbell.notifications.channel import NotificationSink
from sessionbell.notifications.channels.console import ConsoleSink
from sessionbell.notifications.channels.desktop import (
    NotifySendSink,
    OsascriptSink,
    WindowsBalloonSink,
)


def select_sink(system: str | None = None) -> NotificationSink:
    """Pick the native sink for ``system`` (defaults to the running OS)."""
    system = system or platform.system()
    if system == "Linux" or system.endswith("BSD"):
        return NotifySendSink()
    if system == "Darwin":
        return OsascriptSink()
    if system == "Windows":
        return WindowsBalloonSink()
    return ConsoleSink()


__all__ = [
    "ConsoleSink",
    "NotifySendSink",
    "OsascriptSink",
    "WindowsBalloonSink",
    "select_sink",
]

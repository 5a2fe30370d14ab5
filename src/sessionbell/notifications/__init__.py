"""
Notification pipeline for SessionBell.

Classifies host lifecycle events and turns them into desktop
notifications, sounds and hook commands, each gated independently by
configuration, focus, debouncing and session duration.
"""

from sessionbell.notifications.channel import NotificationSink, SinkError
from sessionbell.notifications.classifier import EventClassifier
from sessionbell.notifications.config import CommandConfig, EventConfig, NotifierConfig
from sessionbell.notifications.debounce import DebounceGate
from sessionbell.notifications.events import EventKind, decode_event
from sessionbell.notifications.router import NotificationRouter

__all__ = [
    "CommandConfig",
    "DebounceGate",
    "EventClassifier",
    "EventConfig",
    "EventKind",
    "NotificationRouter",
    "NotificationSink",
    "NotifierConfig",
    "SinkError",
    "decode_event",
]

"""
Wiring for the notifier pipeline.

Sinks are selected once here, at startup, and shared by every event the
process handles.
"""

from __future__ import annotations

from rich.console import Console

from sessionbell.notifications.channels import ConsoleSink, select_sink
from sessionbell.notifications.classifier import EventClassifier
from sessionbell.notifications.command import CommandRunner
from sessionbell.notifications.config import NotifierConfig
from sessionbell.notifications.host import HostClient
from sessionbell.notifications.router import NotificationRouter
from sessionbell.notifications.sessions import SessionInspector
from sessionbell.notifications.sound import SoundPlayer


def build_classifier(
    config: NotifierConfig,
    host: HostClient | None,
    *,
    project_name: str | None = None,
    console: Console | None = None,
) -> EventClassifier:
    """Assemble classifier, router and sinks.

    Passing ``console`` replaces the native notification sink with the
    Rich console sink.
    """
    sessions = SessionInspector(host) if host is not None else None
    notifier = ConsoleSink(console) if console is not None else select_sink()
    router = NotificationRouter(
        config,
        notifier,
        SoundPlayer(),
        commands=CommandRunner(),
        sessions=sessions,
    )
    return EventClassifier(router, sessions, project_name=project_name)

"""
Configuration models for the notifier.

All models are frozen: configuration is loaded once at startup and is
read-only for the rest of the process.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from sessionbell.notifications.events import EventKind

DEFAULT_TITLE = "OpenCode"

DEFAULT_MESSAGES: dict[EventKind, str] = {
    EventKind.PERMISSION: "Session needs permission",
    EventKind.COMPLETE: "Session has finished",
    EventKind.SUBAGENT_COMPLETE: "Subagent task completed",
    EventKind.ERROR: "Session encountered an error",
    EventKind.QUESTION: "Session has a question",
}


class EventConfig(BaseModel):
    """Per-kind switches, message text and optional custom sound."""

    model_config = ConfigDict(frozen=True)

    notification: bool = True
    sound: bool = True
    message: str = ""
    sound_path: Optional[str] = None


class CommandConfig(BaseModel):
    """External command run after an event.

    ``args`` may contain ``{event}``, ``{message}`` and ``{project}``.
    ``min_duration`` is in seconds; 0 disables duration gating.
    """

    model_config = ConfigDict(frozen=True)

    enabled: bool = False
    path: str = ""
    args: tuple[str, ...] = ()
    min_duration: float = 0


class EventsConfig(BaseModel):
    """One EventConfig per event kind, keyed by the kind's value."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    permission: EventConfig = EventConfig(message=DEFAULT_MESSAGES[EventKind.PERMISSION])
    complete: EventConfig = EventConfig(message=DEFAULT_MESSAGES[EventKind.COMPLETE])
    subagent_complete: EventConfig = EventConfig(message=DEFAULT_MESSAGES[EventKind.SUBAGENT_COMPLETE])
    error: EventConfig = EventConfig(message=DEFAULT_MESSAGES[EventKind.ERROR])
    question: EventConfig = EventConfig(message=DEFAULT_MESSAGES[EventKind.QUESTION])

    @model_validator(mode="before")
    @classmethod
    def _merge_with_defaults(cls, value: Any) -> Any:
        """Partial per-kind entries are layered over the defaults."""
        if value is None:
            return {}
        if not isinstance(value, dict):
            return value
        merged: dict[str, dict[str, Any]] = {}
        for key, entry in value.items():
            kind = EventKind(key)
            if isinstance(entry, EventConfig):
                entry = entry.model_dump(exclude_unset=True)
            fields = {"message": DEFAULT_MESSAGES[kind]}
            fields.update(entry or {})
            merged[kind.value] = fields
        return merged

    def get(self, kind: EventKind) -> EventConfig:
        return getattr(self, kind.value)


class NotifierConfig(BaseModel):
    """Top-level notifier configuration."""

    model_config = ConfigDict(frozen=True)

    timeout: float = 5  # seconds the desktop notification stays up
    title: str = DEFAULT_TITLE
    show_project_name: bool = True
    suppress_when_focused: bool = False
    focus_detection_script: Optional[str] = None
    command: CommandConfig = Field(default_factory=CommandConfig)
    events: EventsConfig = Field(default_factory=EventsConfig)

    def event(self, kind: EventKind) -> EventConfig:
        return self.events.get(kind)

    def message_for(self, kind: EventKind) -> str:
        return self.event(kind).message or DEFAULT_MESSAGES[kind]

    def notification_enabled(self, kind: EventKind) -> bool:
        return self.event(kind).notification

    def sound_enabled(self, kind: EventKind) -> bool:
        return self.event(kind).sound

    def sound_path_for(self, kind: EventKind) -> str | None:
        return self.event(kind).sound_path or None

"""
Notification events — what the host sends and what we act on.

Defines the closed set of event kinds the notifier reacts to, and the
host event variants decoded once at the classifier boundary. Host
events the notifier does not know decode to ``UnrecognizedEvent``.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator


class EventKind(str, Enum):
    PERMISSION = "permission"
    COMPLETE = "complete"
    SUBAGENT_COMPLETE = "subagent_complete"
    ERROR = "error"
    QUESTION = "question"


# ---------------------------------------------------------------------------
# Host event variants
# ---------------------------------------------------------------------------


class EventProperties(BaseModel):
    """Payload carried by a host event. Unknown fields are kept, not rejected."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    session_id: Optional[str] = Field(default=None, alias="sessionID")

    @field_validator("session_id", mode="before")
    @classmethod
    def _lenient_session_id(cls, value: Any) -> Any:
        return value if isinstance(value, str) else None


class ToolProperties(EventProperties):
    tool: str = ""

    @field_validator("tool", mode="before")
    @classmethod
    def _lenient_tool(cls, value: Any) -> Any:
        return value if isinstance(value, str) else ""


class _HostEvent(BaseModel):
    model_config = ConfigDict(extra="allow")

    properties: EventProperties = Field(default_factory=EventProperties)

    @field_validator("properties", mode="before")
    @classmethod
    def _properties_or_empty(cls, value: Any) -> Any:
        return value if isinstance(value, (dict, BaseModel)) else {}

    @property
    def session_id(self) -> str | None:
        return self.properties.session_id or None


class PermissionUpdated(_HostEvent):
    """Legacy permission request shape."""

    type: Literal["permission.updated"]


class PermissionAsked(_HostEvent):
    type: Literal["permission.asked"]


class PermissionAsk(_HostEvent):
    """Explicit permission-ask hook. Carries no usable payload."""

    type: Literal["permission.ask"]


class SessionIdle(_HostEvent):
    type: Literal["session.idle"]


class SessionError(_HostEvent):
    type: Literal["session.error"]


class ToolExecuteBefore(_HostEvent):
    type: Literal["tool.execute.before"]
    properties: ToolProperties = Field(default_factory=ToolProperties)


class UnrecognizedEvent(BaseModel):
    """Anything else the host emits. Ignored by the classifier."""

    type: str = ""
    raw: Any = None

    @property
    def session_id(self) -> str | None:
        return None


HostEvent = Annotated[
    Union[
        PermissionUpdated,
        PermissionAsked,
        PermissionAsk,
        SessionIdle,
        SessionError,
        ToolExecuteBefore,
    ],
    Field(discriminator="type"),
]

_HOST_EVENT_ADAPTER: TypeAdapter[Any] = TypeAdapter(HostEvent)

KNOWN_EVENT_TYPES = frozenset({
    "permission.updated",
    "permission.asked",
    "permission.ask",
    "session.idle",
    "session.error",
    "tool.execute.before",
})


def decode_event(raw: Any) -> Union[HostEvent, UnrecognizedEvent]:
    """Decode a raw host payload into one of the known variants."""
    if not isinstance(raw, dict):
        return UnrecognizedEvent(raw=raw)
    try:
        return _HOST_EVENT_ADAPTER.validate_python(raw)
    except ValidationError:
        event_type = raw.get("type")
        if isinstance(event_type, str) and event_type in KNOWN_EVENT_TYPES:
            # Known event with a payload we cannot read: keep the event, drop the payload.
            return _HOST_EVENT_ADAPTER.validate_python({"type": event_type})
        return UnrecognizedEvent(type=str(raw.get("type", "")), raw=raw)

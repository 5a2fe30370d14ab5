"""Pytest configuration and fixtures."""

import pytest
from pathlib import Path
import tempfile
import shutil

from sessionbell.notifications.channel import NotificationSink
from sessionbell.notifications.events import EventKind
from sessionbell.notifications.host import HostClient, Message, SessionInfo
from sessionbell.notifications.sound import SoundSink


class RecordingSink(NotificationSink):
    """In-memory notification sink."""

    name = "recording"

    def __init__(self, fail: bool = False):
        self.sent: list[tuple[str, str, float]] = []
        self.fail = fail

    async def notify(self, title: str, message: str, timeout: float) -> None:
        if self.fail:
            raise RuntimeError("notification backend down")
        self.sent.append((title, message, timeout))


class RecordingSound(SoundSink):
    def __init__(self, fail: bool = False):
        self.played: list[tuple[EventKind, str | None]] = []
        self.fail = fail

    async def play(self, kind: EventKind, custom_path: str | None = None) -> None:
        if self.fail:
            raise RuntimeError("no audio device")
        self.played.append((kind, custom_path))


class FakeHost(HostClient):
    """Host client backed by dicts; missing sessions raise like an HTTP 404."""

    def __init__(self, sessions=None, messages=None, fail: bool = False):
        self.sessions: dict[str, dict] = sessions or {}
        self.messages: dict[str, list[dict]] = messages or {}
        self.fail = fail
        self.calls: list[tuple[str, str]] = []

    async def get_session(self, session_id: str) -> SessionInfo:
        self.calls.append(("session", session_id))
        if self.fail or session_id not in self.sessions:
            raise LookupError(session_id)
        return SessionInfo.model_validate(self.sessions[session_id])

    async def get_messages(self, session_id: str) -> list[Message]:
        self.calls.append(("messages", session_id))
        if self.fail:
            raise ConnectionError("host unreachable")
        return [Message.model_validate(m) for m in self.messages.get(session_id, [])]


def user_message(created: float, role: str = "user") -> dict:
    return {"info": {"role": role, "time": {"created": created}}, "parts": []}


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test artifacts."""
    dirpath = tempfile.mkdtemp()
    yield Path(dirpath)
    shutil.rmtree(dirpath, ignore_errors=True)


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def sound():
    return RecordingSound()

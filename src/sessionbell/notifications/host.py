"""
Host client — read access to the coding-agent server.

The notifier needs two lookups (session metadata and message history)
plus, in watch mode, the server's event stream.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from typing import Any, AsyncIterator, Optional

import httpx
from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

DEFAULT_HOST_URL = "http://localhost:4096"


class SessionInfo(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str
    parent_id: Optional[str] = Field(default=None, alias="parentID")
    title: str = ""
    directory: str = ""

    @property
    def is_child(self) -> bool:
        return bool(self.parent_id)


class MessageTime(BaseModel):
    model_config = ConfigDict(extra="ignore")

    created: Optional[float] = None  # epoch milliseconds


class MessageInfo(BaseModel):
    model_config = ConfigDict(extra="ignore")

    role: str = ""
    time: MessageTime = Field(default_factory=MessageTime)


class Message(BaseModel):
    model_config = ConfigDict(extra="ignore")

    info: MessageInfo = Field(default_factory=MessageInfo)


class HostClient(ABC):
    """Read operations the notifier needs from the host."""

    @abstractmethod
    async def get_session(self, session_id: str) -> SessionInfo:
        ...

    @abstractmethod
    async def get_messages(self, session_id: str) -> list[Message]:
        ...

    async def connect(self) -> None:
        """Open underlying connections. No-op by default."""

    async def disconnect(self) -> None:
        """Close underlying connections. No-op by default."""


class HttpHostClient(HostClient):
    """HTTP client for the host server API."""

    def __init__(
        self,
        base_url: str = DEFAULT_HOST_URL,
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    def _new_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self._transport,
        )

    async def connect(self) -> None:
        if self._client is None:
            self._client = self._new_client()

    async def disconnect(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    async def _get_json(self, path: str) -> Any:
        client = self._client or self._new_client()
        try:
            resp = await client.get(path)
            resp.raise_for_status()
            return resp.json()
        finally:
            if not self._client:
                await client.aclose()

    async def get_session(self, session_id: str) -> SessionInfo:
        data = await self._get_json(f"/session/{session_id}")
        return SessionInfo.model_validate(data)

    async def get_messages(self, session_id: str) -> list[Message]:
        data = await self._get_json(f"/session/{session_id}/message")
        return [Message.model_validate(item) for item in data or []]

    async def events(self) -> AsyncIterator[dict[str, Any]]:
        """Yield decoded JSON payloads from the server-sent event feed."""
        client = self._client or self._new_client()
        try:
            async with client.stream("GET", "/event", timeout=None) as resp:
                resp.raise_for_status()
                async for line in resp.aiter_lines():
                    if not line.startswith("data:"):
                        continue
                    payload = line[len("data:"):].strip()
                    if not payload:
                        continue
                    try:
                        yield json.loads(payload)
                    except json.JSONDecodeError:
                        logger.warning("Skipping malformed event payload: %s", payload[:200])
        finally:
            if not self._client:
                await client.aclose()

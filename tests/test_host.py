"""HTTP host client tests against an in-process mock transport."""

import json

import httpx
import pytest

from sessionbell.notifications.host import HttpHostClient


def _transport(routes):
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path not in routes:
            return httpx.Response(404, json={"error": "not found"})
        status, body = routes[request.url.path]
        if isinstance(body, str):
            return httpx.Response(status, text=body, headers={"Content-Type": "text/event-stream"})
        return httpx.Response(status, json=body)

    return httpx.MockTransport(handler)


class TestHttpHostClient:
    @pytest.mark.asyncio
    async def test_get_session(self):
        client = HttpHostClient(
            "http://host:4096/",
            transport=_transport({
                "/session/s1": (200, {"id": "s1", "parentID": "root", "title": "refactor", "version": "1"}),
            }),
        )
        session = await client.get_session("s1")
        assert session.id == "s1"
        assert session.parent_id == "root"
        assert session.is_child is True

    @pytest.mark.asyncio
    async def test_get_messages(self):
        client = HttpHostClient(transport=_transport({
            "/session/s1/message": (200, [
                {"info": {"id": "m1", "role": "user", "time": {"created": 1000}}, "parts": []},
                {"info": {"id": "m2", "role": "assistant", "time": {"created": 2000, "completed": 3000}}},
            ]),
        }))
        await client.connect()
        try:
            messages = await client.get_messages("s1")
        finally:
            await client.disconnect()

        assert [m.info.role for m in messages] == ["user", "assistant"]
        assert messages[0].info.time.created == 1000

    @pytest.mark.asyncio
    async def test_http_error_raises(self):
        client = HttpHostClient(transport=_transport({}))
        with pytest.raises(httpx.HTTPStatusError):
            await client.get_session("missing")

    @pytest.mark.asyncio
    async def test_event_stream(self):
        stream = "\n".join([
            ": keepalive",
            "data: " + json.dumps({"type": "server.connected", "properties": {}}),
            "",
            "data: {not json",
            "",
            "data: " + json.dumps({"type": "session.idle", "properties": {"sessionID": "s1"}}),
            "",
        ])
        client = HttpHostClient(transport=_transport({"/event": (200, stream)}))

        events = [event async for event in client.events()]

        assert [e["type"] for e in events] == ["server.connected", "session.idle"]

"""Tests for wren.server.sender — buffered Response to ASGI messages."""

from typing import Any

from wren.http.response import Response
from wren.server.sender import send_response


async def _send(response: Response) -> list[dict[str, Any]]:
    messages: list[dict[str, Any]] = []

    async def send(message: dict[str, Any]) -> None:
        messages.append(message)

    await send_response(response, send)
    return messages


class TestSendResponse:
    async def test_start_then_body(self) -> None:
        response = Response()
        response.send_json({"ok": True}, status=201)
        start, body = await _send(response)
        assert start["type"] == "http.response.start"
        assert start["status"] == 201
        assert (b"content-type", b"application/json") in start["headers"]
        assert (b"content-length", b"12") in start["headers"]
        assert body == {"type": "http.response.body", "body": b'{"ok": true}'}

    async def test_default_content_type(self) -> None:
        response = Response()
        response.end("plain")
        start, _ = await _send(response)
        assert (b"content-type", b"text/plain; charset=utf-8") in start["headers"]

    async def test_no_content_type_for_empty_body(self) -> None:
        start, body = await _send(Response())
        names = [name for name, _ in start["headers"]]
        assert b"content-type" not in names
        assert (b"content-length", b"0") in start["headers"]
        assert body["body"] == b""

    async def test_user_content_length_replaced(self) -> None:
        response = Response()
        response.write_head(200, {"Content-Length": "999"})
        response.end("abc")
        start, _ = await _send(response)
        lengths = [value for name, value in start["headers"] if name == b"content-length"]
        assert lengths == [b"3"]

    async def test_header_names_lowercased(self) -> None:
        response = Response()
        response.write_head(200, {"X-Request-Id": "abc"})
        start, _ = await _send(response)
        assert (b"x-request-id", b"abc") in start["headers"]

    async def test_204_drops_body(self) -> None:
        response = Response()
        response.write_head(204)
        response.end("ignored")
        start, body = await _send(response)
        assert start["status"] == 204
        assert body["body"] == b""
        assert (b"content-length", b"0") in start["headers"]

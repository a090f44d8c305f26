"""Buffered HTTP response writer.

Every middleware step and handler receives the same ``Response`` and
writes into it. Nothing reaches the wire until the chain has finished,
so the error translator can always replace partial output with a clean
error body.
"""

import json as json_module
from typing import Any

_JSON = "application/json"


class Response:
    """A mutable response buffer.

    Handlers usually call one of the helpers::

        response.send_json({"id": user.id}, status=201)
        response.send_text("pong")

    or drive it by hand, mirroring the node-style API::

        response.write_head(204)
        response.end()
    """

    __slots__ = ("_chunks", "finished", "headers", "status")

    def __init__(
        self,
        body: str | bytes = b"",
        status: int = 200,
        headers: list[tuple[str, str]] | None = None,
    ) -> None:
        self.status = status
        self.headers: list[tuple[str, str]] = list(headers or ())
        self._chunks: list[bytes] = [body.encode("utf-8") if isinstance(body, str) else body]
        self.finished = False

    def __repr__(self) -> str:
        return f"<Response {self.status} {len(self.body_bytes)} bytes>"

    # -- Writing --

    def set_header(self, name: str, value: str) -> None:
        """Set *name*, replacing any previous value (case-insensitive)."""
        lower = name.lower()
        self.headers = [(n, v) for n, v in self.headers if n.lower() != lower]
        self.headers.append((name, value))

    def get_header(self, name: str) -> str | None:
        lower = name.lower()
        for n, v in self.headers:
            if n.lower() == lower:
                return v
        return None

    def write_head(self, status: int, headers: dict[str, str] | None = None) -> None:
        """Set the status code and any headers in one call."""
        self.status = status
        for name, value in (headers or {}).items():
            self.set_header(name, value)

    def write(self, chunk: str | bytes) -> None:
        """Append *chunk* to the body buffer."""
        if self.finished:
            msg = "Cannot write to a response after end()"
            raise RuntimeError(msg)
        self._chunks.append(chunk.encode("utf-8") if isinstance(chunk, str) else chunk)

    def end(self, chunk: str | bytes | None = None) -> None:
        """Write an optional final chunk and mark the response complete."""
        if chunk is not None:
            self.write(chunk)
        self.finished = True

    def send_json(self, payload: Any, status: int = 200) -> None:
        """Replace the body with *payload* serialized as JSON."""
        self.reset()
        self.write_head(status, {"Content-Type": _JSON})
        self.end(json_module.dumps(payload))

    def send_text(self, text: str, status: int = 200) -> None:
        """Replace the body with plain text."""
        self.reset()
        self.write_head(status, {"Content-Type": "text/plain; charset=utf-8"})
        self.end(text)

    def reset(self) -> None:
        """Drop everything written so far."""
        self.status = 200
        self.headers = []
        self._chunks = []
        self.finished = False

    # -- Reading --

    @property
    def content_type(self) -> str:
        return self.get_header("content-type") or "text/plain; charset=utf-8"

    @property
    def body_bytes(self) -> bytes:
        """Body as bytes."""
        return b"".join(self._chunks)

    @property
    def text(self) -> str:
        """Body as string."""
        return self.body_bytes.decode("utf-8")

    def json(self) -> Any:
        """Parse the body as JSON."""
        return json_module.loads(self.body_bytes)

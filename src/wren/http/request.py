"""HTTP request as seen by middleware and handlers.

Metadata is fixed when the request is built from the ASGI scope. Two
slots fill in while the request travels down the chain: ``body`` (set by
the body reader) and ``params`` (set by the router on a parameterized
match). A request belongs to exactly one in-flight task.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from dataclasses import dataclass, field
from typing import Any, Final
from urllib.parse import quote

from wren._internal.asgi import Receive, Scope


class ClientDisconnect(Exception):  # noqa: N818
    """The client went away before the request body was fully received."""


class _Missing:
    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Final = _Missing()
"""Placeholder for ``Request.body`` before the body reader has run."""

# Characters left unescaped when re-quoting an already-decoded ASGI path
_PATH_SAFE = "/:@!$&'()*+,;=-._~"


def _collect_headers(raw: Any) -> dict[str, str]:
    """Lower-case header names; repeated headers are joined with ``", "``."""
    headers: dict[str, str] = {}
    for name_b, value_b in raw:
        name = name_b.decode("latin-1").lower()
        value = value_b.decode("latin-1")
        headers[name] = f"{headers[name]}, {value}" if name in headers else value
    return headers


@dataclass(slots=True)
class Request:
    """An incoming HTTP request.

    ``method`` is always upper case. ``path`` is the raw ASGI path; the
    query string is kept aside in ``query_string`` and never interpreted.
    """

    method: str
    path: str
    headers: dict[str, str] = field(default_factory=dict)
    query_string: bytes = b""
    client: tuple[str, int] | None = None

    # Filled in during dispatch
    params: dict[str, str] = field(default_factory=dict)
    body: Any = MISSING

    # Private: ASGI receive callable for body streaming
    _receive: Receive | None = field(default=None, repr=False, compare=False)

    @property
    def has_body(self) -> bool:
        """True once a body reader has attached a parsed payload."""
        return self.body is not MISSING

    @property
    def content_type(self) -> str | None:
        """The Content-Type header value."""
        return self.headers.get("content-type")

    async def stream(self) -> AsyncGenerator[bytes]:
        """Yield body chunks as the transport delivers them.

        Raises ``ClientDisconnect`` if the client disconnects mid-body.
        """
        if self._receive is None:
            return
        while True:
            message = await self._receive()
            if message["type"] == "http.disconnect":
                raise ClientDisconnect(f"{self.method} {self.path}: client disconnected")
            body = message.get("body", b"")
            if body:
                yield body
            if not message.get("more_body", False):
                break

    @classmethod
    def from_asgi(cls, scope: Scope, receive: Receive) -> Request:
        """Create a Request from an ASGI scope and receive callable.

        Prefers ``raw_path`` so percent-escapes survive until the router
        decodes individual parameter segments. Without it, the already
        decoded ``path`` is quoted again so values are decoded only once.
        """
        client = scope.get("client")
        raw_path = scope.get("raw_path")
        return cls(
            method=scope["method"].upper(),
            path=raw_path.decode("latin-1") if raw_path else quote(scope["path"], safe=_PATH_SAFE),
            headers=_collect_headers(scope.get("headers", ())),
            query_string=scope.get("query_string", b""),
            client=tuple(client) if client else None,
            _receive=receive,
        )

"""Middleware protocol and the ``Next`` continuation type.

A middleware step is any callable matching::

    async def my_step(request: Request, response: Response, next: Next) -> None: ...

No base class required. A step proceeds by awaiting ``next()`` exactly
once, or short-circuits by returning without calling it (typically after
writing a response itself).
"""

from collections.abc import Awaitable, Callable
from typing import Any, Protocol

from wren.http.request import Request
from wren.http.response import Response

# Zero-argument continuation into the rest of the chain
type Next = Callable[[], Awaitable[None]]

# Terminal handler: writes into the response, may raise or return an HTTPError
type Handler = Callable[[Request, Response], Any]


class Middleware(Protocol):
    """Protocol for wren middleware.

    Accepts both functions and callable objects::

        # Function middleware
        async def timing(request: Request, response: Response, next: Next) -> None:
            start = time.monotonic()
            await next()
            response.set_header("X-Response-Time", f"{time.monotonic() - start:.3f}")

        # Class middleware
        class RequireJSON:
            async def __call__(self, request: Request, response: Response, next: Next) -> None:
                ...
    """

    async def __call__(self, request: Request, response: Response, next: Next) -> None: ...

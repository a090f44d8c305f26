"""Middleware — continuation-passing steps, no inheritance required.

A middleware step is any callable matching:
    async def step(request: Request, response: Response, next: Next) -> None

Built-in middleware:
    read_json_body -- Parse the request body as JSON into ``request.body``
"""

from wren.middleware.body import read_json_body
from wren.middleware.compose import compose
from wren.middleware.protocol import Handler, Middleware, Next

__all__ = [
    "Handler",
    "Middleware",
    "Next",
    "compose",
    "read_json_body",
]

"""ASGI request handler — the dispatcher.

The only component that touches raw ASGI scopes. Builds the Request and
Response, runs the composed middleware chain with routing as its final
step, and funnels every escaping error through ``handle_error`` exactly
once before the response is sent.
"""

import logging
from collections.abc import Callable
from typing import Any

from wren._internal.asgi import Receive, Scope, Send
from wren._internal.invoke import invoke
from wren.errors import HTTPError
from wren.http.request import Request
from wren.http.response import Response
from wren.middleware.compose import Composed
from wren.routing.router import Router
from wren.server.errors import handle_error
from wren.server.sender import send_response

logger = logging.getLogger("wren.server")


def make_dispatch(router: Router) -> Callable[[Request, Response], Any]:
    """Build the final handler: resolve the route, then call its handler."""

    async def dispatch(request: Request, response: Response) -> None:
        match = router.resolve(request.method, request.path)
        request.params = match.path_params
        if not match.found:
            logger.debug("No route for %s %s", request.method, request.path)

        result = await invoke(match.route.handler, request, response)
        # Handlers may return an error instead of raising it
        if isinstance(result, HTTPError):
            raise result

    return dispatch


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    chain: Composed,
    dispatch: Callable[[Request, Response], Any],
) -> None:
    """Process a single HTTP request through the full pipeline."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope, receive)
    response = Response()

    try:
        await chain(request, response, dispatch)
    except Exception as exc:
        handle_error(exc, request, response)

    await send_response(response, send)

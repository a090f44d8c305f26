"""JSON body reader middleware.

Reads the whole request body, parses it as JSON, and attaches the result
to ``request.body`` before continuing. An empty body becomes ``{}``.
"""

import json
import logging

from wren.errors import BadRequest
from wren.http.request import Request
from wren.http.response import Response
from wren.middleware.protocol import Next

logger = logging.getLogger("wren.middleware")


async def read_json_body(request: Request, response: Response, next: Next) -> None:
    """Attach the parsed JSON body, or fail with 400 ``Invalid JSON body``.

    Transport errors raised while streaming propagate untouched; in both
    failure cases the chain stops here.
    """
    chunks = [chunk async for chunk in request.stream()]
    raw = b"".join(chunks)

    if not raw:
        request.body = {}
    else:
        try:
            request.body = json.loads(raw)
        except (UnicodeDecodeError, ValueError) as exc:
            logger.debug("Rejecting body of %s %s: %s", request.method, request.path, exc)
            raise BadRequest("Invalid JSON body") from exc

    await next()

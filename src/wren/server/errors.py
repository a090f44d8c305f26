"""Exception translation — the only place errors become HTTP bytes.

Client errors (``HTTPError`` with a 4xx status) are echoed in full; they
were raised on purpose and carry nothing secret. Everything else is
logged in detail and answered with an opaque body.
"""

import json
import logging

from wren.errors import HTTPError
from wren.http.request import Request
from wren.http.response import Response
from wren.server.terminal_errors import log_error

logger = logging.getLogger("wren.server")

INTERNAL_ERROR_BODY = {"message": "Internal Server Error"}


def _dump(payload: object) -> str:
    # Context is caller-supplied; stringify what json cannot encode
    return json.dumps(payload, default=str)


def _context_text(context: object) -> str:
    try:
        return str(context)
    except Exception:
        return "<unserializable context>"


def _write_json(response: Response, status: int, body: str) -> None:
    response.reset()
    response.write_head(status, {"Content-Type": "application/json"})
    response.end(body)


def handle_error(exc: BaseException, request: Request, response: Response) -> None:
    """Translate *exc* into a JSON error response.

    Logs first, then replaces whatever the chain had buffered:

    * ``HTTPError`` 400-499 -> its status, ``{name, statusCode, message, context}``
    * ``HTTPError`` 500-599 -> its status, ``{message}`` only
    * anything else -> 500, ``{"message": "Internal Server Error"}``
    """
    if isinstance(exc, HTTPError) and exc.is_client_error:
        logger.warning(
            "%d %s %s - %s: %s",
            exc.status_code,
            request.method,
            request.path,
            exc.name,
            exc.message,
        )
        try:
            body = _dump(exc.to_dict())
        except Exception:
            body = _dump({**exc.to_dict(), "context": _context_text(exc.context)})
        _write_json(response, exc.status_code, body)
        return

    log_error(exc, request)

    if isinstance(exc, HTTPError):
        message = exc.message or INTERNAL_ERROR_BODY["message"]
        _write_json(response, exc.status_code, _dump({"message": message}))
    else:
        _write_json(response, 500, _dump(INTERNAL_ERROR_BODY))

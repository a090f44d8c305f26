"""Middleware composition with an explicit, guarded cursor.

``compose(steps)`` returns one coroutine function that runs the steps in
order and then the final handler::

    run = compose([read_json_body, timing])
    await run(request, response, dispatch)

Each call gets its own cursor, so one composed chain can serve any
number of concurrent requests.
"""

from collections.abc import Awaitable, Callable, Sequence
from typing import Any

from wren._internal.invoke import invoke
from wren.errors import InvalidContinuation
from wren.http.request import Request
from wren.http.response import Response
from wren.middleware.protocol import Handler, Middleware

type Composed = Callable[[Request, Response, Handler], Awaitable[None]]


def compose(steps: Sequence[Middleware | Callable[..., Any]]) -> Composed:
    """Build a single callable from *steps* plus a terminal handler.

    A step that calls ``next()`` a second time (or a stale continuation
    held from an earlier position) raises ``InvalidContinuation``. The
    composed call re-raises it even if a step caught it on the way out.
    """
    chain = tuple(steps)

    async def run(request: Request, response: Response, final_handler: Handler) -> None:
        cursor = -1
        violation: InvalidContinuation | None = None

        async def dispatch(position: int) -> None:
            nonlocal cursor, violation
            if position <= cursor:
                step = chain[position - 1]
                name = getattr(step, "__name__", type(step).__name__)
                msg = f"next() called more than once by middleware {name!r}"
                violation = InvalidContinuation(msg)
                raise violation
            cursor = position

            if position < len(chain):
                step = chain[position]

                async def next_() -> None:
                    await dispatch(position + 1)

                await invoke(step, request, response, next_)
            else:
                await invoke(final_handler, request, response)

        await dispatch(0)
        # A step that caught the error must not hide it
        if violation is not None:
            raise violation

    return run

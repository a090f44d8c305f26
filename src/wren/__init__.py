"""Wren — a small async HTTP toolkit.

Three pieces do the real work: a route table where exact paths beat
``:param`` patterns, a continuation-passing middleware chain, and one
translator that turns any escaping error into a JSON response.

Basic usage::

    from wren import App, NotFound

    app = App()

    async def get_user(request, response):
        user = users.get(request.params["id"])
        if user is None:
            raise NotFound("User not found", {"id": request.params["id"]})
        response.send_json(user)

    app.include({"(GET)/users/:id": get_user})
    app.run()
"""

__version__ = "0.1.0-dev"
__all__ = [
    "App",
    "AppConfig",
    "BadRequest",
    "ConfigurationError",
    "EntityError",
    "HTTPError",
    "InvalidContinuation",
    "Middleware",
    "Next",
    "NotFound",
    "Request",
    "Response",
    "Router",
    "WrenError",
    "compose",
    "match_path",
    "read_json_body",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import wren`` fast while providing a clean top-level API.
    """
    if name == "App":
        from wren.app import App

        return App

    if name == "AppConfig":
        from wren.config import AppConfig

        return AppConfig

    if name == "Request":
        from wren.http.request import Request

        return Request

    if name == "Response":
        from wren.http.response import Response

        return Response

    if name == "Router":
        from wren.routing.router import Router

        return Router

    if name == "match_path":
        from wren.routing.matcher import match_path

        return match_path

    if name in ("Middleware", "Next", "compose", "read_json_body"):
        from wren import middleware as _mw

        return getattr(_mw, name)

    if name in (
        "BadRequest",
        "ConfigurationError",
        "EntityError",
        "HTTPError",
        "InvalidContinuation",
        "NotFound",
        "WrenError",
    ):
        from wren import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)

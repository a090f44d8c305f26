"""Wren application class.

Mutable during setup (route groups, route decorators, middleware).
Frozen at runtime when app.run() or __call__() is first invoked: the
route table is compiled and the middleware chain is composed exactly
once, and neither can change afterwards.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Mapping
from typing import Any

from wren._internal.asgi import Receive, Scope, Send
from wren.config import AppConfig
from wren.errors import ConfigurationError
from wren.middleware.body import read_json_body
from wren.middleware.compose import Composed, compose
from wren.middleware.protocol import Handler, Middleware
from wren.routing.route import Route, parse_route_key
from wren.routing.router import Router
from wren.server.handler import handle_request, make_dispatch

logger = logging.getLogger("wren.app")


class App:
    """The wren application.

    Routes come from collaborator route groups (mappings of
    ``"(METHOD)/pattern"`` to handler) or from the ``route`` decorator::

        app = App()
        app.include(user_routes)

        @app.route("/health")
        def health(request, response):
            response.send_json({"ok": True})

    Thread safety:
        Setup is single-threaded. The freeze transition uses a Lock +
        double-check so exactly one thread compiles the app even if
        several workers deliver their first request at once.
    """

    __slots__ = (
        "_chain",
        "_dispatch",
        "_freeze_lock",
        "_frozen",
        "_middleware_list",
        "_pending_routes",
        "_router",
        "config",
    )

    def __init__(self, config: AppConfig | None = None) -> None:
        self.config: AppConfig = config or AppConfig()
        self._pending_routes: list[Route] = []
        self._middleware_list: list[Middleware] = []
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()

        # Compiled state, set during _freeze()
        self._router: Router | None = None
        self._chain: Composed | None = None
        self._dispatch: Callable[..., Any] | None = None

    # -- Route registration --

    def include(self, group: Mapping[str, Handler]) -> None:
        """Register a route group: ``{"(GET)/users/:id": get_user, ...}``."""
        self._check_not_frozen()
        for key, handler in group.items():
            method, pattern = parse_route_key(key)
            self._pending_routes.append(Route(method=method, pattern=pattern, handler=handler))

    def route(
        self,
        pattern: str,
        *,
        methods: list[str] | None = None,
    ) -> Callable[[Handler], Handler]:
        """Register a route handler via decorator.

        Args:
            pattern: URL pattern. Use ``:name`` for path parameters.
            methods: HTTP methods. Defaults to ``["GET"]``.
        """

        def decorator(func: Handler) -> Handler:
            self._check_not_frozen()
            for method in methods or ["GET"]:
                self._pending_routes.append(Route(method=method, pattern=pattern, handler=func))
            return func

        return decorator

    # -- Middleware --

    def add_middleware(self, middleware: Middleware | Callable[..., Any]) -> None:
        """Append a step to the chain. Steps run in registration order."""
        self._check_not_frozen()
        self._middleware_list.append(middleware)

    # -- Introspection --

    @property
    def routes(self) -> list[Route]:
        """Compiled routes in registration order (freezes the app)."""
        self._ensure_frozen()
        assert self._router is not None
        return self._router.routes

    # -- Server --

    def run(
        self,
        host: str | None = None,
        port: int | None = None,
        *,
        app_path: str | None = None,
    ) -> None:
        """Freeze the app and serve it with pounce.

        Args:
            host: Override bind host.
            port: Override bind port.
            app_path: ``"module:attribute"`` import string, used for reload.
        """
        self._ensure_frozen()

        from wren.server.serve import run_server

        run_server(
            self,
            host or self.config.host,
            port or self.config.port,
            workers=self.config.workers,
            reload=self.config.debug,
            log_level=self.config.log_level,
            app_path=app_path,
        )

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        self._ensure_frozen()

        assert self._chain is not None
        assert self._dispatch is not None

        await handle_request(scope, receive, send, chain=self._chain, dispatch=self._dispatch)

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol.

        Freezes the app at startup so configuration mistakes (bad route
        keys, duplicates) stop the server before it accepts traffic.
        """
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    self._ensure_frozen()
                except ConfigurationError as exc:
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return

    # -- Internal --

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Compile the app into its frozen runtime state.

        MUST only be called while holding _freeze_lock.
        """
        # 1. Compile route table
        router = Router()
        for route in self._pending_routes:
            router.add(route)
        router.compile()
        self._router = router

        # 2. Compose the middleware chain once; the body reader goes first
        steps: list[Middleware | Callable[..., Any]] = list(self._middleware_list)
        if self.config.parse_json_body:
            steps.insert(0, read_json_body)
        self._chain = compose(steps)
        self._dispatch = make_dispatch(router)

        self._frozen = True
        logger.debug(
            "App frozen: %d route(s), %d middleware step(s)",
            len(router.routes),
            len(steps),
        )

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the app after it has started serving requests. "
                "Register routes and middleware before calling app.run()."
            )
            raise RuntimeError(msg)

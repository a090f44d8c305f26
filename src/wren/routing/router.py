"""Compiled two-tier router.

Exact (literal-only) routes live in a dict keyed by ``(method, path)``
and are always consulted first. Parameterized routes are kept per
method in registration order and scanned only when no exact route
matches, so ``GET /users/me`` beats ``GET /users/:id`` no matter which
was registered first.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import replace
from typing import Any

from wren.errors import ConfigurationError
from wren.http.request import Request
from wren.http.response import Response
from wren.routing.matcher import match_segments, parse_path, split_path
from wren.routing.route import Route, RouteMatch, parse_route_key

type RouteGroup = Mapping[str, Any]


def route_not_found(request: Request, response: Response) -> None:
    """Default handler for requests that match no route."""
    response.send_json({"message": "Route not found"}, status=404)


NOT_FOUND_ROUTE = Route(method="*", pattern="*", handler=route_not_found)


def _exact_key(method: str, parts: Iterable[str]) -> tuple[str, str]:
    return method, "/" + "/".join(parts)


class Router:
    """Route table with exact-match precedence.

    Usage::

        router = Router()
        router.add(Route("GET", "/users/:id", get_user))
        router.add(Route("GET", "/users/me", get_me))
        router.compile()
        match = router.resolve("GET", "/users/me")   # -> get_me

    Or build and compile in one step from route groups::

        router = Router.from_groups({"(GET)/users": list_users}, admin_routes)
    """

    __slots__ = ("_by_key", "_compiled", "_exact", "_parameterized")

    def __init__(self) -> None:
        # Every route keyed by (method, normalized pattern), in registration order
        self._by_key: dict[tuple[str, str], Route] = {}
        self._exact: dict[tuple[str, str], Route] = {}
        self._parameterized: dict[str, list[Route]] = {}
        self._compiled = False

    @classmethod
    def from_groups(cls, *groups: RouteGroup) -> Router:
        """Build and compile a router from ``"(METHOD)/pattern" -> handler`` mappings."""
        router = cls()
        for group in groups:
            for key, handler in group.items():
                method, pattern = parse_route_key(key)
                router.add(Route(method=method, pattern=pattern, handler=handler))
        router.compile()
        return router

    def add(self, route: Route) -> None:
        """Add a route. Must be called before compile()."""
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)

        route = replace(
            route,
            method=route.method.upper(),
            segments=tuple(parse_path(route.pattern)),
        )
        key = _exact_key(route.method, (seg.value for seg in route.segments))
        existing = self._by_key.get(key)
        if existing is not None:
            msg = (
                f"Duplicate route {route.method} {route.pattern!r} "
                f"(already registered as {existing.pattern!r})."
            )
            raise ConfigurationError(msg)

        self._by_key[key] = route
        if route.is_exact:
            self._exact[key] = route
        else:
            self._parameterized.setdefault(route.method, []).append(route)

    def compile(self) -> None:
        """Freeze the router. No more routes can be added."""
        self._compiled = True

    @property
    def compiled(self) -> bool:
        return self._compiled

    @property
    def routes(self) -> list[Route]:
        """All registered routes in registration order."""
        return list(self._by_key.values())

    def resolve(self, method: str, path: str) -> RouteMatch:
        """Resolve *method* and *path* to a route and its parameters.

        Never raises for a miss: unmatched requests get ``NOT_FOUND_ROUTE``
        with ``found=False``.
        """
        method = method.upper()
        parts = split_path(path)

        route = self._exact.get(_exact_key(method, parts))
        if route is not None:
            return RouteMatch(route=route, path_params={})

        for candidate in self._parameterized.get(method, ()):
            params = match_segments(candidate.segments, parts)
            if params is not None:
                return RouteMatch(route=candidate, path_params=params)

        return RouteMatch(route=NOT_FOUND_ROUTE, path_params={}, found=False)

"""Route, RouteMatch, and route-key parsing."""

import re
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from wren.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a route pattern.

    Literal: ``users`` (is_param=False)
    Param:   ``:id``   (is_param=True, param_name="id")
    """

    value: str
    is_param: bool = False
    param_name: str = ""


@dataclass(frozen=True, slots=True)
class Route:
    """A frozen route definition.

    Created during app setup, compiled into the router at freeze time.
    """

    method: str
    pattern: str
    handler: Callable[..., Any]
    segments: tuple[PathSegment, ...] = field(default=(), compare=False, repr=False)

    @property
    def is_exact(self) -> bool:
        """True when the pattern has no parameter segments."""
        return not any(seg.is_param for seg in self.segments)


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of resolving a request against the route table.

    ``found`` is False when the router fell back to its not-found route.
    """

    route: Route
    path_params: dict[str, str]
    found: bool = True


# "(GET)/users/:id" or the legacy "GET:/users"
_PAREN_KEY = re.compile(r"^\((?P<method>[A-Za-z]+)\)(?P<pattern>/.*)$")
_COLON_KEY = re.compile(r"^(?P<method>[A-Za-z]+):(?P<pattern>/.*)$")


def parse_route_key(key: str) -> tuple[str, str]:
    """Split a route-group key into ``(METHOD, pattern)``.

    Raises ``ConfigurationError`` for keys in neither supported form.
    """
    match = _PAREN_KEY.match(key) or _COLON_KEY.match(key)
    if match is None:
        msg = f"Invalid route key {key!r}. Expected '(METHOD)/path', e.g. '(GET)/users/:id'."
        raise ConfigurationError(msg)
    return match["method"].upper(), match["pattern"]

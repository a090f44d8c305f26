"""Path pattern parsing and matching.

Patterns are ``/``-delimited: literal segments match themselves, and a
segment starting with ``:`` binds one non-empty path segment by name::

    match_path("/users/:id", "/users/42")   -> {"id": "42"}
    match_path("/users/:id", "/users")      -> None
    match_path("/users", "/users/")         -> {}
"""

from collections.abc import Sequence
from urllib.parse import unquote

from wren.errors import ConfigurationError
from wren.routing.route import PathSegment


def split_path(path: str) -> list[str]:
    """Split on ``/`` and drop empty segments (leading/trailing/doubled slashes)."""
    return [part for part in path.split("/") if part]


def parse_path(pattern: str) -> list[PathSegment]:
    """Parse a route pattern into segments.

    Examples::

        "/users"     -> [PathSegment("users")]
        "/users/:id" -> [PathSegment("users"), PathSegment(":id", is_param=True, param_name="id")]
    """
    segments: list[PathSegment] = []
    for part in split_path(pattern):
        if part.startswith(":"):
            name = part[1:]
            if not name:
                msg = f"Route pattern {pattern!r} has a parameter segment with no name."
                raise ConfigurationError(msg)
            segments.append(PathSegment(value=part, is_param=True, param_name=name))
        elif (part.startswith("{") and part.endswith("}")) or (
            part.startswith("<") and part.endswith(">")
        ):
            msg = (
                f"Route pattern {pattern!r} uses {part!r}. "
                f"Path parameters are written as :name (e.g. /users/:id)."
            )
            raise ConfigurationError(msg)
        else:
            segments.append(PathSegment(value=part))
    return segments


def match_segments(
    segments: Sequence[PathSegment],
    parts: Sequence[str],
) -> dict[str, str] | None:
    """Match pre-parsed pattern segments against pre-split path parts."""
    if len(segments) != len(parts):
        return None

    params: dict[str, str] = {}
    for segment, part in zip(segments, parts, strict=True):
        if segment.is_param:
            params[segment.param_name] = unquote(part)
        elif segment.value != part:
            return None
    return params


def match_path(pattern: str, path: str) -> dict[str, str] | None:
    """Match a concrete *path* against *pattern*.

    Returns the extracted parameters (empty for literal-only patterns),
    or ``None`` when the path does not match. Pure; no side effects.
    """
    return match_segments(parse_path(pattern), split_path(path))

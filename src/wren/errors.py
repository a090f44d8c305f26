"""Wren exception hierarchy.

Shared across the router, middleware, handlers and the error translator so
every module raises and catches the same types.
"""

import json
from dataclasses import dataclass
from typing import Any


class WrenError(Exception):
    """Base for all wren-specific errors."""


class ConfigurationError(WrenError):
    """Raised when the app or its route table is set up incorrectly.

    Typically surfaces during ``App._freeze()`` at startup.
    """


class InvalidContinuation(WrenError):  # noqa: N818
    """A middleware step called ``next()`` more than once or out of order.

    This is a defect in the step, never a client mistake, so the
    translator always answers it with an opaque 500.
    """


class HTTPError(WrenError):
    """An error that maps directly to an HTTP status code.

    Raised (or returned) by handlers and middleware. The request handler
    catches these and hands them to the error translator, which echoes
    4xx errors verbatim and hides everything else.

    Fields are exposed as read-only properties.
    """

    def __init__(
        self,
        status_code: int,
        message: str = "",
        name: str = "HTTPException",
        context: dict[str, Any] | None = None,
    ) -> None:
        if not 400 <= status_code <= 599:
            msg = f"HTTP error status must be in 400..599, got {status_code}"
            raise ValueError(msg)
        super().__init__(status_code, message)
        self._status_code = status_code
        self._message = message
        self._name = name
        self._context = context if context is not None else {}

    @property
    def status_code(self) -> int:
        return self._status_code

    @property
    def message(self) -> str:
        return self._message

    @property
    def name(self) -> str:
        return self._name

    @property
    def context(self) -> dict[str, Any]:
        return self._context

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(status_code={self._status_code}, "
            f"message={self._message!r}, name={self._name!r})"
        )

    def __str__(self) -> str:
        if self.message:
            return f"{self.status_code}: {self.message}"
        return str(self.status_code)

    @property
    def is_client_error(self) -> bool:
        return self.status_code < 500

    def to_dict(self) -> dict[str, Any]:
        """Serializable shape sent to clients for 4xx errors."""
        return {
            "name": self.name,
            "statusCode": self.status_code,
            "message": self.message,
            "context": self.context,
        }


class BadRequest(HTTPError):  # noqa: N818
    """400 — the request body or parameters are invalid."""

    def __init__(self, message: str = "Bad Request", context: dict[str, Any] | None = None) -> None:
        super().__init__(
            status_code=400,
            message=message,
            name="BadRequestException",
            context=context or {},
        )


class NotFound(HTTPError):  # noqa: N818
    """404 — the requested resource does not exist."""

    def __init__(self, message: str = "Not Found", context: dict[str, Any] | None = None) -> None:
        super().__init__(
            status_code=404,
            message=message,
            name="NotFoundException",
            context=context or {},
        )


@dataclass(frozen=True, slots=True)
class EntityError:
    """A single validation failure on a domain entity.

    Not raised on its own; collected into an ``HTTPError`` context so the
    client sees which field failed and why::

        raise BadRequest("Invalid user data", {"errors": [e.to_dict() for e in errors]})
    """

    entity: str
    message: str
    context: dict[str, Any] | None = None

    @property
    def full_message(self) -> str:
        """One-line description, e.g. ``[User]: Name is required | Context: {...}``."""
        suffix = f" | Context: {json.dumps(self.context)}" if self.context else ""
        return f"[{self.entity}]: {self.message}{suffix}"

    def to_dict(self) -> dict[str, Any]:
        return {"entity": self.entity, "message": self.message, "context": self.context}

"""Users — route groups over an in-memory store.

Demonstrates:
- Merging route groups from separate collaborators with ``app.include``
- ``/users/me`` (exact) winning over ``/users/:id`` (parameterized)
- Raising ``BadRequest`` / ``NotFound`` and letting the translator answer
- Returning an error from a handler instead of raising it
- A short-circuiting middleware step

Run:
    cd examples/users && python app.py
"""

import threading
import uuid
from datetime import UTC, datetime

from wren import App, BadRequest, EntityError, NotFound, Request, Response
from wren.middleware import Next

app = App()

# ---------------------------------------------------------------------------
# Storage
# ---------------------------------------------------------------------------

_users: dict[str, dict[str, str]] = {}
_lock = threading.Lock()


def _validate(name: str, email: str, password: str) -> list[EntityError]:
    errors = []
    if not name.strip():
        errors.append(EntityError("User", "Name is required", {"field": "name"}))
    if "@" not in email:
        errors.append(EntityError("User", "Valid email is required", {"field": "email"}))
    if not password.strip():
        errors.append(EntityError("User", "Password is required", {"field": "password"}))
    return errors


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


def list_users(request: Request, response: Response) -> None:
    with _lock:
        users = list(_users.values())
    response.send_json(users)


async def create_user(request: Request, response: Response) -> None:
    payload = request.body if isinstance(request.body, dict) else {}
    name = str(payload.get("name", ""))
    email = str(payload.get("email", "")).strip().lower()
    password = str(payload.get("password", ""))

    errors = _validate(name, email, password)
    if errors:
        raise BadRequest("Invalid user data", {"errors": [e.to_dict() for e in errors]})

    with _lock:
        if any(u["email"] == email for u in _users.values()):
            raise BadRequest("Email already exists", {"field": "email", "value": email})
        user = {
            "id": str(uuid.uuid4()),
            "name": name.strip(),
            "email": email,
            "createdAt": datetime.now(UTC).isoformat(),
        }
        _users[user["id"]] = user

    response.send_json(user, status=201)


def get_me(request: Request, response: Response) -> None:
    response.send_json({"id": "me", "name": "Current user"})


async def get_user(request: Request, response: Response) -> NotFound | None:
    user_id = request.params["id"]
    with _lock:
        user = _users.get(user_id)
    if user is None:
        # Returned, not raised: the dispatcher treats both the same way
        return NotFound("User not found", {"id": user_id})
    response.send_json(user)
    return None


def delete_user(request: Request, response: Response) -> None:
    user_id = request.params["id"]
    with _lock:
        if _users.pop(user_id, None) is None:
            raise NotFound("User not found", {"id": user_id})
    response.write_head(204)
    response.end()


user_routes = {
    "(GET)/users": list_users,
    "(POST)/users": create_user,
    "(GET)/users/:id": get_user,
    "(GET)/users/me": get_me,
    "(DELETE)/users/:id": delete_user,
}

ops_routes = {
    "(GET)/health": lambda request, response: response.send_json({"status": "ok"}),
}

app.include(user_routes)
app.include(ops_routes)


# ---------------------------------------------------------------------------
# Middleware: maintenance switch (short-circuits when enabled)
# ---------------------------------------------------------------------------

maintenance = {"enabled": False}


async def maintenance_mode(request: Request, response: Response, next: Next) -> None:
    if maintenance["enabled"] and request.path != "/health":
        response.send_json({"message": "Down for maintenance"}, status=503)
        return
    await next()


app.add_middleware(maintenance_mode)


if __name__ == "__main__":
    app.run()

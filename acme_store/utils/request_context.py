"""Request-scoped identifier shared by the middleware, handlers, and logs."""

from __future__ import annotations

from contextvars import ContextVar, Token

__all__ = [
    "REQUEST_ID_HEADER",
    "clear_request_id",
    "get_request_id",
    "set_request_id",
]

REQUEST_ID_HEADER = "X-Request-ID"

# Each request runs in its own task, so the value never leaks between requests.
_REQUEST_ID: ContextVar[str] = ContextVar("request_id", default="")


def set_request_id(request_id: str) -> Token[str]:
    """Store ``request_id`` for the running task; keep the token to undo it."""

    return _REQUEST_ID.set(request_id)


def get_request_id() -> str:
    """Return the active request id, or an empty string outside a request."""

    return _REQUEST_ID.get()


def clear_request_id(token: Token[str] | None = None) -> None:
    if token is not None:
        _REQUEST_ID.reset(token)
    else:
        _REQUEST_ID.set("")

"""Request-scoped identifier shared by middleware, error handlers, and logs."""

from __future__ import annotations

from contextvars import ContextVar, Token

__all__ = [
    "clear_request_id",
    "get_request_id",
    "set_request_id",
]

_request_id: ContextVar[str] = ContextVar("request_id", default="")


def set_request_id(request_id: str) -> Token[str]:
    """Store ``request_id`` for the active task and return the reset token."""

    return _request_id.set(request_id)


def get_request_id() -> str:
    return _request_id.get()


def clear_request_id(token: Token[str]) -> None:
    _request_id.reset(token)

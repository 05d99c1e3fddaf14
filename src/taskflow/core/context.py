"""Per-request correlation id storage."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token

REQUEST_ID_HEADER = "X-Request-ID"
NO_REQUEST_ID = "-"

_current_request_id: ContextVar[str] = ContextVar("taskflow_request_id", default=NO_REQUEST_ID)


def get_request_id() -> str:
    """Return the correlation id bound to the running task, or ``"-"``."""

    return _current_request_id.get()


def bind_request_id(request_id: str) -> Token[str]:
    return _current_request_id.set(request_id)


def reset_request_id(token: Token[str]) -> None:
    _current_request_id.reset(token)


@contextmanager
def request_id_scope(request_id: str | None) -> Iterator[str]:
    """Bind ``request_id`` for the duration of the ``with`` block.

    A falsy id leaves whatever is currently bound in place.
    """

    if not request_id:
        yield get_request_id()
        return
    token = bind_request_id(request_id)
    try:
        yield request_id
    finally:
        reset_request_id(token)


__all__ = [
    "NO_REQUEST_ID",
    "REQUEST_ID_HEADER",
    "bind_request_id",
    "get_request_id",
    "request_id_scope",
    "reset_request_id",
]

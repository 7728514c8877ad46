from __future__ import annotations

from contextvars import ContextVar

_NO_REQUEST = "-"

_request_id: ContextVar[str] = ContextVar("request_id", default=_NO_REQUEST)


def get_request_id() -> str:
    return _request_id.get()


def set_request_id(request_id: str | None) -> None:
    _request_id.set(request_id or _NO_REQUEST)


def clear_request_id() -> None:
    _request_id.set(_NO_REQUEST)

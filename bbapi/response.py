"""JSON response bodies paired with the HTTP status they are sent with."""

from __future__ import annotations

from http import HTTPStatus
from typing import Any


class Meta(dict):
    """Response metadata; ``set`` returns the mapping so calls can be chained."""

    def set(self, key: str, value: Any) -> Meta:
        self[key] = value
        return self


def ok(data: Any, meta: Any = None) -> tuple[int, dict[str, Any]]:
    """A successful response, with metadata when given."""
    body: dict[str, Any] = {"status": int(HTTPStatus.OK), "data": data}
    if meta is not None:
        body["meta"] = meta
    return int(HTTPStatus.OK), body


def error(err: BaseException | str) -> tuple[int, dict[str, Any]]:
    """An internal server error carrying the error's message."""
    status = int(HTTPStatus.INTERNAL_SERVER_ERROR)
    return status, {"status": status, "data": str(err)}


def bad_request(err: BaseException | str) -> tuple[int, dict[str, Any]]:
    """A bad request response carrying the error's message."""
    status = int(HTTPStatus.BAD_REQUEST)
    return status, {"status": status, "data": str(err)}


def not_found() -> tuple[int, dict[str, Any]]:
    """A not-found body, sent with HTTP 200 as the clients expect."""
    return int(HTTPStatus.OK), {"status": int(HTTPStatus.NOT_FOUND), "data": None}
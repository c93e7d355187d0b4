# stayease/middleware/request_id.py
from __future__ import annotations

import uuid
from contextvars import ContextVar
from typing import Iterator
from contextlib import contextmanager

import httpx

request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)

HEADER = "X-Request-ID"


def get_request_id() -> str | None:
    return request_id_ctx.get()


@contextmanager
def request_id_scope(rid: str | None = None) -> Iterator[str]:
    """
    Pins one request id for every call made inside the block,
    so a page load's concurrent requests share a correlation id.
    """
    rid = rid or str(uuid.uuid4())
    token = request_id_ctx.set(rid)
    try:
        yield rid
    finally:
        request_id_ctx.reset(token)


async def stamp_request_id(request: httpx.Request) -> None:
    """
    httpx request hook.

    - Keeps an X-Request-ID already set by the caller
    - Otherwise uses the scoped id, or a fresh UUID4
    """
    if HEADER in request.headers:
        return
    request.headers[HEADER] = get_request_id() or str(uuid.uuid4())

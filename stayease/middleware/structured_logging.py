# stayease/middleware/structured_logging.py
from __future__ import annotations

import json
import logging
import time

import httpx

log = logging.getLogger("stayease.http")

_STARTED = "stayease_started_at"


def _json_log(payload: dict) -> None:
    # one JSON line per exchange
    try:
        log.info(json.dumps(payload, default=str))
    except (TypeError, ValueError):
        log.info(str(payload))


async def mark_request_start(request: httpx.Request) -> None:
    request.extensions[_STARTED] = time.monotonic()


async def log_response(response: httpx.Response) -> None:
    """
    httpx response hook emitting:
      request_id, method, path, query, status_code, latency_ms
    """
    request = response.request
    t0 = request.extensions.get(_STARTED)
    latency_ms = int((time.monotonic() - t0) * 1000) if t0 is not None else None

    _json_log(
        {
            "event": "http_request",
            "request_id": request.headers.get("X-Request-ID"),
            "method": request.method,
            "path": request.url.path,
            "query": request.url.query.decode() if request.url.query else "",
            "status_code": response.status_code,
            "latency_ms": latency_ms,
        }
    )

# stayease/clients/base.py
from __future__ import annotations

from typing import Any, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from ..config import settings
from ..middleware.request_id import stamp_request_id
from ..middleware.structured_logging import log_response, mark_request_start

M = TypeVar("M", bound=BaseModel)

NETWORK_ERROR = "Network error: unable to reach the StayEase API"


class ApiError(Exception):
    """
    Failure of one backend call, carrying a message fit for display.
    status_code is None when no response came back.
    """

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def __str__(self) -> str:
        return self.message


class ApiTransportError(ApiError):
    pass


def error_message(response: httpx.Response, fallback: str) -> str:
    """
    - JSON body with a string "message" -> that message, verbatim
    - JSON body without one             -> "<fallback> (<status>)"
    - anything else                     -> "<status> <raw text or reason phrase>"
    """
    try:
        body = response.json()
    except ValueError:
        text = (response.text or "").strip() or response.reason_phrase
        return f"{response.status_code} {text}".strip()

    if isinstance(body, dict):
        msg = body.get("message")
        if isinstance(msg, str) and msg:
            return msg
    return f"{fallback} ({response.status_code})"


def build_http_client(
    *,
    base_url: Optional[str] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    cookies: Optional[httpx.Cookies] = None,
) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        base_url=(base_url or settings.api_base_url).rstrip("/"),
        timeout=settings.http_timeout_seconds,
        transport=transport,
        cookies=cookies,
        event_hooks={
            "request": [mark_request_start, stamp_request_id],
            "response": [log_response],
        },
    )


class ResourceClient:
    """
    One resource group (listings, reviews, ...) over a shared AsyncClient.
    Every call is fire-once: no retries, no caching.
    """

    def __init__(self, http: httpx.AsyncClient) -> None:
        self.http = http

    async def _raw(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            return await self.http.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            raise ApiTransportError(NETWORK_ERROR) from e

    async def _send(self, method: str, path: str, *, fallback: str, **kwargs: Any) -> httpx.Response:
        r = await self._raw(method, path, **kwargs)
        if r.is_error:
            raise ApiError(error_message(r, fallback), status_code=r.status_code)
        return r

    async def _json(self, method: str, path: str, *, fallback: str, **kwargs: Any) -> Any:
        r = await self._send(method, path, fallback=fallback, **kwargs)
        try:
            return r.json()
        except ValueError as e:
            raise ApiError(f"{fallback}: response was not JSON", status_code=r.status_code) from e

    async def _model(self, model: Type[M], method: str, path: str, *, fallback: str, **kwargs: Any) -> M:
        data = await self._json(method, path, fallback=fallback, **kwargs)
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise ApiError(f"{fallback}: unexpected response shape") from e

    async def _models(self, model: Type[M], method: str, path: str, *, fallback: str, **kwargs: Any) -> list[M]:
        data = await self._json(method, path, fallback=fallback, **kwargs)
        # some endpoints answer 200 with null for "nothing yet"
        if data is None:
            return []
        try:
            return TypeAdapter(list[model]).validate_python(data)
        except ValidationError as e:
            raise ApiError(f"{fallback}: unexpected response shape") from e

from __future__ import annotations

from typing import Any

import httpx
from pydantic import ValidationError

from ..schemas import LoginRequest, LoginResult, RegisterRequest, Role
from .base import ApiError, ResourceClient


class AuthClient(ResourceClient):
    """
    /api/auth signals failure in the body's "message", sometimes with a 200,
    so these calls look at the message before the status.
    """

    async def register(self, *, full_name: str, email: str, password: str, role: Role = Role.TENANT) -> dict[str, Any]:
        payload = RegisterRequest(full_name=full_name, email=email, password=password, role=role)
        r = await self._raw("POST", "/api/auth/register", json=payload.to_wire())
        body = _body(r)
        if body.get("message") == "User already exists":
            raise ApiError("User already exists", status_code=r.status_code)
        if r.is_error:
            raise ApiError(str(body.get("message") or f"Registration failed ({r.status_code})"), status_code=r.status_code)
        return body

    async def login(self, email: str, password: str) -> LoginResult:
        r = await self._raw("POST", "/api/auth/login", json=LoginRequest(email=email, password=password).to_wire())
        body = _body(r)
        if "Invalid" in str(body.get("message") or ""):
            raise ApiError("Invalid email or password", status_code=r.status_code)
        if r.is_error:
            raise ApiError(str(body.get("message") or f"Login failed ({r.status_code})"), status_code=r.status_code)
        try:
            result = LoginResult.model_validate(body)
        except ValidationError as e:
            raise ApiError(str(body.get("message") or "Login failed"), status_code=r.status_code) from e
        # a 200 without userId is a refusal worded some other way
        if result.user_id is None:
            raise ApiError(result.message or "Login failed", status_code=r.status_code)
        return result


def _body(r: httpx.Response) -> dict[str, Any]:
    try:
        data = r.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}

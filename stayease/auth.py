# stayease/auth.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional

import httpx
import jwt  # PyJWT

from .config import settings
from .schemas import LoginResult, Role

log = logging.getLogger("stayease.session")


@dataclass(frozen=True)
class Identity:
    user_id: int
    full_name: str
    email: str
    role: Role
    # True when a session cookie exists but its claims could not be read
    provisional: bool = False

    @property
    def is_owner(self) -> bool:
        return self.role == Role.OWNER

    @property
    def is_tenant(self) -> bool:
        return self.role == Role.TENANT


PLACEHOLDER = Identity(user_id=0, full_name="", email="", role=Role.TENANT, provisional=True)


def identity_from_login(result: LoginResult, *, email: str) -> Identity:
    # the login response has no email; the caller typed it
    if result.user_id is None:
        raise ValueError("login response missing userId")
    return Identity(user_id=int(result.user_id), full_name=result.full_name, email=email, role=result.role)


# -------------------------
# JWT claims (read-only)
# -------------------------
def decode_token_claims(token: str) -> Optional[dict[str, Any]]:
    """
    Reads a JWT's claims without checking the signature.
    Verification belongs to the backend; this only recovers display fields.
    Returns None for anything PyJWT cannot parse.
    """
    try:
        payload = jwt.decode(token or "", options={"verify_signature": False})
    except jwt.PyJWTError:
        return None
    return payload if isinstance(payload, dict) else None


def _role_from_claim(raw: Any) -> Optional[Role]:
    s = str(raw or "").strip().lower()
    if s.startswith("role_"):
        s = s[len("role_"):]
    if s in ("user", "tenant"):
        return Role.TENANT
    if s == "owner":
        return Role.OWNER
    return None


def identity_from_claims(claims: dict[str, Any]) -> Optional[Identity]:
    raw_id = claims.get("userId", claims.get("id", claims.get("sub")))
    try:
        user_id = int(raw_id)
    except (TypeError, ValueError):
        return None

    role = _role_from_claim(claims.get("role"))
    if role is None:
        return None

    sub = str(claims.get("sub") or "")
    email = str(claims.get("email") or (sub if "@" in sub else ""))
    full_name = str(claims.get("fullName") or claims.get("name") or "")
    return Identity(user_id=user_id, full_name=full_name, email=email, role=role)


def _find_cookie(cookies: httpx.Cookies, name: str) -> Optional[str]:
    # Cookies.get() raises CookieConflict when two domains set the same name
    for c in cookies.jar:
        if c.name == name and c.value:
            return c.value
    return None


# -------------------------
# Session store
# -------------------------
class SessionPhase(str, Enum):
    UNINITIALIZED = "uninitialized"
    ANONYMOUS = "anonymous"
    ACTIVE = "active"
    CLEARED = "cleared"


Listener = Callable[[Optional[Identity]], None]


class SessionStore:
    """
    Holds at most one Identity for the life of the process.

    Lifecycle:
      UNINITIALIZED --restore--> ANONYMOUS | ACTIVE
      any           --login----> ACTIVE
      ACTIVE        --logout---> CLEARED

    Only restore/login/logout change the identity. is_authenticated is
    derived from it on every read, never stored.
    """

    def __init__(self, *, cookies: Optional[httpx.Cookies] = None, cookie_name: Optional[str] = None) -> None:
        self.cookies = cookies if cookies is not None else httpx.Cookies()
        self.cookie_name = cookie_name or settings.jwt_cookie_name
        self._identity: Optional[Identity] = None
        self._phase = SessionPhase.UNINITIALIZED
        self._listeners: list[Listener] = []

    @property
    def identity(self) -> Optional[Identity]:
        return self._identity

    @property
    def phase(self) -> SessionPhase:
        return self._phase

    @property
    def is_authenticated(self) -> bool:
        return self._identity is not None

    def restore(self) -> Optional[Identity]:
        if self._phase != SessionPhase.UNINITIALIZED:
            raise RuntimeError(f"restore() called in phase {self._phase.value}")

        token = _find_cookie(self.cookies, self.cookie_name)
        if not token:
            self._set(None, SessionPhase.ANONYMOUS)
            return None

        claims = decode_token_claims(token)
        ident = identity_from_claims(claims) if claims else None
        if ident is None:
            log.warning("session cookie present but claims unreadable; holding provisional identity")
            ident = PLACEHOLDER

        self._set(ident, SessionPhase.ACTIVE)
        return ident

    def login(self, identity: Identity) -> None:
        self._set(identity, SessionPhase.ACTIVE)
        log.info("login", extra={"user_id": identity.user_id, "role": identity.role.value})

    def logout(self) -> None:
        self.cookies.delete(self.cookie_name)
        self._set(None, SessionPhase.CLEARED)
        log.info("logout")

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set(self, identity: Optional[Identity], phase: SessionPhase) -> None:
        self._identity = identity
        self._phase = phase
        for fn in list(self._listeners):
            fn(identity)

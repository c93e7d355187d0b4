# stayease/main.py
from __future__ import annotations

from typing import Optional, Type, TypeVar

import httpx

from .auth import Identity, SessionStore, identity_from_login
from .clients import StayEaseClient
from .config import settings
from .schemas import Role
from .views import GuardedView, HeaderView

V = TypeVar("V", bound=GuardedView)


class StayEaseApp:
    """
    Composition root: one API client, one session, views built on demand.

    The session shares the client's cookie jar, so a login response that
    sets stayease_jwt is what a later restore() would find.
    """

    def __init__(self, client: StayEaseClient, session: SessionStore) -> None:
        self.client = client
        self.session = session

    def view(self, cls: Type[V], **kwargs) -> V:
        return cls(self.client, self.session, **kwargs)

    def header(self, **kwargs) -> HeaderView:
        return HeaderView(self.client, self.session, **kwargs)

    async def sign_in(self, email: str, password: str) -> Identity:
        result = await self.client.auth.login(email, password)
        ident = identity_from_login(result, email=email)
        self.session.login(ident)
        return ident

    async def register(self, *, full_name: str, email: str, password: str, role: Role = Role.TENANT) -> dict:
        return await self.client.auth.register(full_name=full_name, email=email, password=password, role=role)

    def sign_out(self) -> None:
        self.session.logout()

    async def aclose(self) -> None:
        await self.client.aclose()

    async def __aenter__(self) -> "StayEaseApp":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.aclose()


def create_app(
    *,
    base_url: Optional[str] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    restore_session: bool = True,
) -> StayEaseApp:
    client = StayEaseClient(base_url=base_url or settings.api_base_url, transport=transport)
    session = SessionStore(cookies=client.cookies, cookie_name=settings.jwt_cookie_name)
    if restore_session:
        session.restore()
    return StayEaseApp(client, session)

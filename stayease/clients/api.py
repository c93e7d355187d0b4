from __future__ import annotations

from typing import Optional

import httpx

from .appointments import AppointmentsClient
from .auth import AuthClient
from .base import build_http_client
from .dashboard import DashboardClient
from .listings import ListingsClient
from .notifications import NotificationsClient
from .reviews import ReviewsClient


class StayEaseClient:
    """
    All resource groups over one AsyncClient, so they share the cookie jar
    the session store reads the JWT from.

    Use as an async context manager, or call aclose() yourself.
    """

    def __init__(
        self,
        *,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        http: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.http = http or build_http_client(base_url=base_url, transport=transport)

        self.auth = AuthClient(self.http)
        self.listings = ListingsClient(self.http)
        self.appointments = AppointmentsClient(self.http)
        self.reviews = ReviewsClient(self.http)
        self.notifications = NotificationsClient(self.http)
        self.dashboard = DashboardClient(self.http)

    @property
    def cookies(self) -> httpx.Cookies:
        return self.http.cookies

    async def aclose(self) -> None:
        await self.http.aclose()

    async def __aenter__(self) -> "StayEaseClient":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.aclose()

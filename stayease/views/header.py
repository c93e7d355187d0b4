# stayease/views/header.py
from __future__ import annotations

import asyncio
import logging
from typing import Optional

from ..auth import Identity, SessionStore
from ..clients import ApiError, StayEaseClient
from ..config import settings
from ..domain.dashboard_rollups import unread
from ..presenters.notifications import badge_text
from ..schemas import Role

log = logging.getLogger("stayease.views")


class HeaderView:
    """
    Top bar: who is signed in, which nav to show, and the unread bell.
    The unread count is polled; a failed poll keeps the previous count.
    """

    def __init__(self, api: StayEaseClient, session: SessionStore, *, poll_seconds: Optional[float] = None) -> None:
        self.api = api
        self.session = session
        self.poll_seconds = poll_seconds if poll_seconds is not None else settings.notification_poll_seconds
        self.unread_count = 0
        self._unsubscribe = session.subscribe(self._on_session_change)

    def _on_session_change(self, identity: Optional[Identity]) -> None:
        if identity is None:
            self.unread_count = 0

    @property
    def nav(self) -> Optional[str]:
        ident = self.session.identity
        if ident is None:
            return None
        return "owner" if ident.role == Role.OWNER else "user"

    @property
    def notifications_route(self) -> Optional[str]:
        nav = self.nav
        return f"/{nav}/notifications" if nav else None

    @property
    def greeting(self) -> str:
        ident = self.session.identity
        if ident is None:
            return ""
        return f"{ident.full_name} ({ident.role.value})"

    @property
    def badge(self) -> str:
        return badge_text(self.unread_count)

    async def refresh_unread(self) -> int:
        ident = self.session.identity
        if ident is None:
            self.unread_count = 0
            return 0
        try:
            items = await self.api.notifications.get_by_user(ident.user_id)
        except ApiError as e:
            log.warning("unread count refresh failed: %s", e.message, extra={"user_id": ident.user_id})
            return self.unread_count
        self.unread_count = len(unread(items))
        return self.unread_count

    async def poll(self, stop: asyncio.Event) -> None:
        """Refresh every poll_seconds until `stop` is set or the session ends."""
        while not stop.is_set() and self.session.is_authenticated:
            await self.refresh_unread()
            try:
                await asyncio.wait_for(stop.wait(), timeout=self.poll_seconds)
            except asyncio.TimeoutError:
                continue

    def close(self) -> None:
        self._unsubscribe()

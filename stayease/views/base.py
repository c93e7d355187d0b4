# stayease/views/base.py
from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Awaitable, ClassVar, Optional

from ..auth import Identity, SessionStore
from ..clients import ApiError, StayEaseClient
from ..config import settings
from ..middleware.request_id import request_id_scope
from ..schemas import Role
from ..services.debounce import Debouncer

log = logging.getLogger("stayease.views")

SIGN_IN_ROUTE = "/auth"


class ViewState(str, Enum):
    UNINITIALIZED = "uninitialized"
    CHECKING_AUTH = "checking_auth"
    REDIRECTING = "redirecting"
    LOADING_DATA = "loading_data"
    READY = "ready"
    ERROR = "error"


class GuardedView:
    """
    Page-level view model.

    mount():
      no session          -> REDIRECTING to /auth
      wrong role          -> REDIRECTING to role_fallback
      otherwise           -> LOADING_DATA -> READY | ERROR

    Subclasses implement fetch() (all network calls, no state writes) and
    apply() (state writes only). Splitting them lets reload() drop results
    that land after unmount() and keep the last good data when a reload fails.
    """

    name: ClassVar[str] = "view"
    required_role: ClassVar[Optional[Role]] = None
    requires_session: ClassVar[bool] = True
    role_fallback: ClassVar[str] = "/"
    # None -> show the exception's own message
    load_error_message: ClassVar[Optional[str]] = None
    refresh_on_visible: ClassVar[bool] = False

    def __init__(self, api: StayEaseClient, session: SessionStore, *, debounce_seconds: Optional[float] = None) -> None:
        self.api = api
        self.session = session

        self.state = ViewState.UNINITIALIZED
        self.redirect_to: Optional[str] = None
        self.error: Optional[str] = None
        self.loading = False
        self.mounted = False

        self._refresh: Optional[Debouncer] = None
        if self.refresh_on_visible:
            delay = debounce_seconds if debounce_seconds is not None else settings.refresh_debounce_seconds
            self._refresh = Debouncer(delay, self.reload)

    # ---- identity ----

    @property
    def user(self) -> Identity:
        ident = self.session.identity
        if ident is None:
            raise RuntimeError(f"{self.name}: no session identity")
        return ident

    def _authorized(self) -> bool:
        ident = self.session.identity
        if ident is None:
            return not self.requires_session
        return self.required_role is None or ident.role == self.required_role

    def guard(self) -> bool:
        self.state = ViewState.CHECKING_AUTH
        ident = self.session.identity

        if ident is None and self.requires_session:
            return self._redirect(SIGN_IN_ROUTE)
        if ident is not None and self.required_role is not None and ident.role != self.required_role:
            return self._redirect(self.role_fallback)
        return True

    def _redirect(self, route: str) -> bool:
        self.redirect_to = route
        self.state = ViewState.REDIRECTING
        log.info("redirect", extra={"view": self.name})
        return False

    # ---- lifecycle ----

    async def mount(self) -> ViewState:
        self.mounted = True
        if not self.guard():
            return self.state
        await self.reload()
        return self.state

    def unmount(self) -> None:
        self.mounted = False
        if self._refresh is not None:
            self._refresh.cancel()

    async def reload(self) -> None:
        if not self.mounted or self.state == ViewState.REDIRECTING:
            return

        self.state = ViewState.LOADING_DATA
        self.loading = True
        self.error = None
        try:
            with request_id_scope():
                data = await self.fetch()
        except ApiError as e:
            if not self.mounted:
                return
            log.warning("load failed: %s", e.message, extra={"view": self.name})
            self.error = self.load_error_message or e.message
            self.state = ViewState.ERROR
        else:
            if not self.mounted:
                return
            self.apply(data)
            self.state = ViewState.READY
        finally:
            self.loading = False

    def on_visibility_change(self, visible: bool) -> None:
        """Debounced reload when the page comes back to the foreground."""
        if self._refresh is None or not visible or not self.mounted:
            return
        if not self._authorized():
            return
        self._refresh.trigger()

    # ---- mutations ----

    async def _mutate(self, call: Awaitable[Any], *, error_message: Optional[str] = None) -> bool:
        """Runs one mutating call; failures land in the error slot, never raise."""
        try:
            await call
        except ApiError as e:
            log.warning("action failed: %s", e.message, extra={"view": self.name})
            if self.mounted:
                self.error = error_message or e.message
            return False
        return True

    # ---- subclass hooks ----

    async def fetch(self) -> Any:
        raise NotImplementedError

    def apply(self, data: Any) -> None:
        raise NotImplementedError

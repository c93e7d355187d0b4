# stayease/views/owner.py
from __future__ import annotations

import asyncio
from typing import Optional

from ..clients import ApiError
from ..domain import appointment_status
from ..domain.dashboard_rollups import OwnerRollup, filter_by_status, owner_rollup, unread
from ..presenters.appointment_card import AppointmentCard, present_appointment
from ..presenters.forms import CreateListingForm, FormError
from ..presenters.listing_card import ListingCard, present_listing
from ..presenters.notifications import unread_summary
from ..schemas import Appointment, Listing, ListingFilter, Notification, Review, Role
from .base import GuardedView

S = appointment_status.AppointmentStatus


class OwnerDashboardView(GuardedView):
    name = "owner_dashboard"
    required_role = Role.OWNER
    role_fallback = "/user/dashboard"
    load_error_message = "Failed to load dashboard data"
    refresh_on_visible = True

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.listings: list[Listing] = []
        self.appointments: list[Appointment] = []
        self.reviews: list[Review] = []
        self.notifications: list[Notification] = []

    async def fetch(self):
        uid = self.user.user_id
        listings, appointments, notifications = await asyncio.gather(
            self.api.listings.filter(ListingFilter(owner_id=uid)),
            self.api.appointments.get_by_owner(uid),
            self.api.notifications.get_by_user(uid),
        )
        # reviews are per listing, so they wait for the listing ids
        per_listing = await asyncio.gather(*(self.api.reviews.get_by_listing(x.id) for x in listings))
        reviews = [r for batch in per_listing for r in batch]
        return listings, appointments, notifications, reviews

    def apply(self, data) -> None:
        self.listings, self.appointments, self.notifications, self.reviews = data

    @property
    def rollup(self) -> OwnerRollup:
        return owner_rollup(
            listings=self.listings,
            appointments=self.appointments,
            reviews=self.reviews,
            notifications=self.notifications,
        )

    def pending_preview(self, limit: int = 3) -> list[AppointmentCard]:
        return [
            present_appointment(a, show_actions=True)
            for a in filter_by_status(self.appointments, S.PENDING.value)[:limit]
        ]

    def listing_preview(self, limit: int = 3) -> list[ListingCard]:
        return [present_listing(x, show_owner=False) for x in self.listings[:limit]]

    async def change_status(self, appointment_id: int, status: str) -> bool:
        """
        Confirm/decline, then reload everything. Not patched locally: the
        backend may send notifications and change other counts on the page.
        """
        ok = await self._mutate(self.api.appointments.update_status(appointment_id, status))
        if ok:
            await self.reload()
        return ok


class OwnerListingsView(GuardedView):
    name = "owner_listings"
    required_role = Role.OWNER
    role_fallback = "/user/listings"
    load_error_message = "Failed to load listings"

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.listings: list[Listing] = []
        self.form_error: Optional[str] = None

    async def fetch(self):
        return await self.api.listings.filter(ListingFilter(owner_id=self.user.user_id))

    def apply(self, data) -> None:
        self.listings = data

    def cards(self) -> list[ListingCard]:
        return [present_listing(x, show_owner=False) for x in self.listings]

    async def create_listing(self, form: CreateListingForm) -> bool:
        self.form_error = None
        try:
            payload = form.to_payload(self.session.identity)
            await self.api.listings.create(payload)
        except (FormError, ApiError) as e:
            self.form_error = str(e)
            return False

        # reload rather than append: the server assigns id and owner
        await self.reload()
        return True


class OwnerNotificationsView(GuardedView):
    name = "owner_notifications"
    required_role = Role.OWNER
    role_fallback = "/"
    load_error_message = "Failed to load notifications"

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.notifications: list[Notification] = []

    async def fetch(self):
        return await self.api.notifications.get_by_user(self.user.user_id)

    def apply(self, data) -> None:
        self.notifications = data

    @property
    def unread_count(self) -> int:
        return len(unread(self.notifications))

    @property
    def summary(self) -> str:
        return unread_summary(self.unread_count)

    # Notifications patch the local list after the call succeeds instead of
    # reloading. The list is owned by this page alone, and the patch is instant.

    async def mark_as_read(self, notification_id: int) -> bool:
        ok = await self._mutate(
            self.api.notifications.mark_as_read(notification_id),
            error_message="Failed to mark notification as read",
        )
        if ok:
            self.notifications = [
                n.model_copy(update={"is_read": True}) if n.id == notification_id else n for n in self.notifications
            ]
        return ok

    async def mark_all_as_read(self) -> bool:
        ids = [n.id for n in unread(self.notifications)]
        ok = await self._mutate(
            asyncio.gather(*(self.api.notifications.mark_as_read(i) for i in ids)),
            error_message="Failed to mark all as read",
        )
        if ok:
            self.notifications = [n.model_copy(update={"is_read": True}) for n in self.notifications]
        return ok

    async def delete(self, notification_id: int) -> bool:
        ok = await self._mutate(
            self.api.notifications.delete(notification_id),
            error_message="Failed to delete notification",
        )
        if ok:
            self.notifications = [n for n in self.notifications if n.id != notification_id]
        return ok

# stayease/views/tenant.py
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from ..clients import ApiError
from ..config import settings
from ..domain import appointment_status
from ..domain.dashboard_rollups import TenantRollup, filter_by_status, tenant_rollup
from ..domain.review_eligibility import eligible_for_review
from ..presenters.appointment_card import RECEIPT_BLOCKED, AppointmentCard, present_appointment
from ..presenters.forms import BookingForm, FormError, ListingFilterForm, ReviewForm
from ..schemas import Appointment, Listing, Notification, Review, Role
from .base import GuardedView, ViewState

log = logging.getLogger("stayease.views")

S = appointment_status.AppointmentStatus
TABS = ("all", S.PENDING.value, S.CONFIRMED.value, S.CANCELLED.value)


@dataclass(frozen=True)
class Toast:
    title: str
    description: str
    destructive: bool = False


class TenantDashboardView(GuardedView):
    name = "tenant_dashboard"
    required_role = Role.TENANT
    role_fallback = "/owner/dashboard"
    load_error_message = "Failed to load dashboard data"
    refresh_on_visible = True

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.appointments: list[Appointment] = []
        self.reviews: list[Review] = []
        self.notifications: list[Notification] = []

    async def fetch(self):
        uid = self.user.user_id
        return await asyncio.gather(
            self.api.appointments.get_by_user(uid),
            self.api.reviews.get_by_user(uid),
            self.api.notifications.get_by_user(uid),
        )

    def apply(self, data) -> None:
        self.appointments, self.reviews, self.notifications = data

    @property
    def rollup(self) -> TenantRollup:
        return tenant_rollup(appointments=self.appointments, reviews=self.reviews, notifications=self.notifications)

    def upcoming(self, limit: int = 3) -> list[AppointmentCard]:
        return [present_appointment(a) for a in filter_by_status(self.appointments, S.CONFIRMED.value)[:limit]]


class TenantListingsView(GuardedView):
    name = "tenant_listings"
    required_role = Role.TENANT
    role_fallback = "/owner/listings"

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.listings: list[Listing] = []
        self.filtered: list[Listing] = []

    async def fetch(self):
        return await self.api.listings.get_all()

    def apply(self, data) -> None:
        self.listings = data
        self.filtered = list(data)

    async def apply_filter(self, form: ListingFilterForm) -> bool:
        try:
            criteria = form.to_filter()
        except FormError as e:
            self.error = str(e)
            return False

        self.loading = True
        try:
            found = await self.api.listings.filter(criteria)
        except ApiError as e:
            log.warning("filter failed: %s", e.message, extra={"view": self.name})
            if self.mounted:
                self.error = "Failed to filter listings"
                self.loading = False
            return False
        if not self.mounted:
            return False
        self.filtered = found
        self.loading = False
        return True

    def reset(self) -> None:
        # back to the full list from mount time; no refetch
        self.filtered = list(self.listings)


class TenantAppointmentsView(GuardedView):
    name = "tenant_appointments"
    required_role = Role.TENANT
    role_fallback = "/owner/appointments"

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.appointments: list[Appointment] = []
        self.toast: Optional[Toast] = None

    async def fetch(self):
        return await self.api.appointments.get_by_user(self.user.user_id)

    def apply(self, data) -> None:
        self.appointments = data or []

    def tab(self, status: str = "all") -> list[AppointmentCard]:
        if status not in TABS:
            raise ValueError(f"Unknown tab: {status}")
        return [present_appointment(a) for a in filter_by_status(self.appointments, status)]

    def tab_counts(self) -> dict[str, int]:
        return {t: len(filter_by_status(self.appointments, t)) for t in TABS}

    async def download_receipt(self, appointment_id: int, directory: Union[str, Path, None] = None) -> Optional[Path]:
        apt = next((a for a in self.appointments if a.id == appointment_id), None)
        if apt is None or not present_appointment(apt).can_download_receipt:
            self.toast = Toast("Cannot download receipt", RECEIPT_BLOCKED, destructive=True)
            return None

        try:
            path = await self.api.appointments.download_receipt(appointment_id, directory or settings.receipt_dir)
        except ApiError as e:
            self.toast = Toast("Download failed", e.message, destructive=True)
            return None
        self.toast = Toast("Receipt downloaded", "Your appointment receipt has been downloaded successfully")
        return path


class TenantReviewsView(GuardedView):
    name = "tenant_reviews"
    required_role = Role.TENANT
    role_fallback = "/"

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.reviews: list[Review] = []
        self.eligible: list[Appointment] = []
        self.form_error: Optional[str] = None

    async def fetch(self):
        uid = self.user.user_id
        return await asyncio.gather(
            self.api.reviews.get_by_user(uid),
            self.api.appointments.get_by_user(uid),
        )

    def apply(self, data) -> None:
        reviews, appointments = data
        self.reviews = reviews or []
        self.eligible = eligible_for_review(appointments or [], self.reviews)

    @property
    def eligible_listing_ids(self) -> set[int]:
        return {a.listing.id for a in self.eligible if a.listing is not None}

    async def submit_review(self, listing_id: int, form: ReviewForm) -> bool:
        self.form_error = None
        try:
            payload = form.to_payload(self.user, listing_id=listing_id)
            await self.api.reviews.create(payload)
        except (FormError, ApiError) as e:
            self.form_error = str(e)
            return False

        # full reload: the listing has to drop out of the eligible set
        await self.reload()
        return True


class BookAppointmentView(GuardedView):
    name = "book_appointment"
    required_role = Role.TENANT
    role_fallback = "/"
    load_error_message = "Failed to load listing"

    def __init__(self, *args, listing_id: Optional[int] = None, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.listing_id = listing_id
        self.listing: Optional[Listing] = None
        self.success = False
        self.submitting = False

    def guard(self) -> bool:
        if not super().guard():
            return False
        if self.listing_id is None:
            return self._redirect("/user/listings")
        return True

    async def fetch(self):
        # there is no GET /api/listings/{id}
        listings = await self.api.listings.get_all()
        return next((x for x in listings if x.id == self.listing_id), None)

    def apply(self, data) -> None:
        self.listing = data

    async def reload(self) -> None:
        await super().reload()
        if self.state == ViewState.READY and self.listing is None:
            self.error = "Listing not found"
            self.state = ViewState.ERROR

    async def submit(self, form: BookingForm) -> bool:
        if self.listing is None:
            self.error = "Listing not found"
            return False

        self.error = None
        self.submitting = True
        try:
            payload = form.to_payload(self.user, listing_id=self.listing.id)
            await self.api.appointments.create(payload)
        except (FormError, ApiError) as e:
            self.error = str(e) or "Failed to book appointment"
            return False
        finally:
            self.submitting = False

        self.success = True
        self.redirect_to = "/user/appointments"
        return True

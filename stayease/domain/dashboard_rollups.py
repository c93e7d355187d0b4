# stayease/domain/dashboard_rollups.py
from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Sequence

from ..schemas import Appointment, Availability, Listing, Notification, Review
from . import appointment_status

S = appointment_status.AppointmentStatus


def filter_by_status(appointments: Iterable[Appointment], status: str) -> list[Appointment]:
    """Tab filter: "all" returns everything, otherwise match on the canonical status."""
    items = list(appointments)
    if status == "all":
        return items
    return [a for a in items if appointment_status.normalize_status(a.status) == status]


def unread(notifications: Iterable[Notification]) -> list[Notification]:
    return [n for n in notifications if not n.is_read]


def average_rating(reviews: Sequence[Review]) -> float:
    """Arithmetic mean rounded half-up to one decimal; 0.0 when there are no reviews."""
    if not reviews:
        return 0.0
    mean = Decimal(sum(r.rating for r in reviews)) / Decimal(len(reviews))
    return float(mean.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class OwnerRollup:
    total_listings: int
    available_listings: int
    pending_appointments: int
    confirmed_appointments: int
    total_reviews: int
    unread_notifications: int
    average_rating: float

    def as_dict(self) -> dict:
        return {
            "total_listings": self.total_listings,
            "available_listings": self.available_listings,
            "pending_appointments": self.pending_appointments,
            "confirmed_appointments": self.confirmed_appointments,
            "total_reviews": self.total_reviews,
            "unread_notifications": self.unread_notifications,
            "average_rating": self.average_rating,
        }


@dataclass(frozen=True)
class TenantRollup:
    upcoming_appointments: int
    pending_appointments: int
    total_reviews: int
    unread_notifications: int

    def as_dict(self) -> dict:
        return {
            "upcoming_appointments": self.upcoming_appointments,
            "pending_appointments": self.pending_appointments,
            "total_reviews": self.total_reviews,
            "unread_notifications": self.unread_notifications,
        }


def owner_rollup(
    *,
    listings: Sequence[Listing],
    appointments: Sequence[Appointment],
    reviews: Sequence[Review],
    notifications: Sequence[Notification],
) -> OwnerRollup:
    return OwnerRollup(
        total_listings=len(listings),
        available_listings=sum(1 for x in listings if x.availability_status == Availability.AVAILABLE),
        pending_appointments=len(filter_by_status(appointments, S.PENDING.value)),
        confirmed_appointments=len(filter_by_status(appointments, S.CONFIRMED.value)),
        total_reviews=len(reviews),
        unread_notifications=len(unread(notifications)),
        average_rating=average_rating(reviews),
    )


def tenant_rollup(
    *,
    appointments: Sequence[Appointment],
    reviews: Sequence[Review],
    notifications: Sequence[Notification],
) -> TenantRollup:
    # "upcoming" on the tenant dashboard means confirmed, not date-in-future
    return TenantRollup(
        upcoming_appointments=len(filter_by_status(appointments, S.CONFIRMED.value)),
        pending_appointments=len(filter_by_status(appointments, S.PENDING.value)),
        total_reviews=len(reviews),
        unread_notifications=len(unread(notifications)),
    )

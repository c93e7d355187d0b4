# stayease/presenters/appointment_card.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..domain import appointment_status
from ..domain.scheduling import format_clock, format_day, parse_visit_time
from ..schemas import Appointment

S = appointment_status.AppointmentStatus

DATE_TBD = "Date TBD"
RECEIPT_BLOCKED = "Receipt can only be downloaded for accepted appointments"

_VARIANTS = {
    S.CONFIRMED.value: "default",
    S.CANCELLED.value: "destructive",
}


@dataclass(frozen=True)
class AppointmentCard:
    appointment_id: int
    listing_title: str
    location: str
    date_text: str
    time_text: str
    status: str
    label: str
    variant: str
    can_confirm: bool
    can_decline: bool
    can_download_receipt: bool
    visitor_name: Optional[str] = None

    @property
    def when(self) -> str:
        if self.date_text and self.time_text:
            return f"{self.date_text} at {self.time_text}"
        return self.date_text or DATE_TBD

    def as_dict(self) -> dict:
        return {
            "id": self.appointment_id,
            "listing": self.listing_title,
            "location": self.location,
            "when": self.when,
            "status": self.status,
            "label": self.label,
            "variant": self.variant,
            "can_confirm": self.can_confirm,
            "can_decline": self.can_decline,
            "can_download_receipt": self.can_download_receipt,
            "visitor": self.visitor_name,
        }


def present_appointment(apt: Appointment, *, show_actions: bool = False) -> AppointmentCard:
    status = appointment_status.normalize_status(apt.status)
    visit = parse_visit_time(apt.appointment_time, apt.appointment_date)
    pending = status == S.PENDING.value

    return AppointmentCard(
        appointment_id=apt.id,
        listing_title=apt.listing.title if apt.listing else f"Listing #{apt.listing_id}" if apt.listing_id else "",
        location=apt.listing.location if apt.listing else "",
        date_text=format_day(visit.day) if visit.day else "",
        time_text=format_clock(visit.at) if visit.at else "",
        status=status,
        label=appointment_status.status_label(apt.status),
        variant=_VARIANTS.get(status, "secondary"),
        can_confirm=show_actions and pending,
        can_decline=show_actions and pending,
        can_download_receipt=status == S.CONFIRMED.value,
        visitor_name=apt.user.full_name if apt.user else None,
    )

# stayease/domain/review_eligibility.py
from __future__ import annotations

from typing import Iterable

from ..schemas import Appointment, Review
from . import appointment_status


def eligible_for_review(appointments: Iterable[Appointment], reviews: Iterable[Review]) -> list[Appointment]:
    """
    Confirmed visits whose listing the user has not reviewed yet.

    This is the only thing standing between a user and a second review of
    the same listing; the backend does not reject duplicates.
    Appointments without an embedded listing are skipped since the review
    form needs the listing's title.
    """
    reviewed = {r.listing_id for r in reviews if r.listing_id is not None}

    out: list[Appointment] = []
    seen: set[int] = set()
    for apt in appointments:
        if appointment_status.normalize_status(apt.status) != appointment_status.AppointmentStatus.CONFIRMED.value:
            continue
        if apt.listing is None or apt.listing.id in reviewed:
            continue
        # two confirmed visits to one listing still mean one review
        if apt.listing.id in seen:
            continue
        seen.add(apt.listing.id)
        out.append(apt)
    return out

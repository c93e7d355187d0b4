# stayease/presenters/forms.py
from __future__ import annotations

from dataclasses import dataclass

from ..auth import Identity
from ..domain.scheduling import combine_date_time
from ..schemas import (
    AppointmentCreate,
    Availability,
    ListingCreate,
    ListingFilter,
    OwnerRef,
    ReviewCreate,
    Role,
)


class FormError(ValueError):
    """User-correctable input problem; the message is shown next to the form."""


def _parse_int(raw: str, field: str) -> int:
    try:
        return int(str(raw).strip())
    except ValueError:
        raise FormError(f"{field} must be a whole number")


@dataclass
class ListingFilterForm:
    """
    Raw filter bar values. Blank fields and the "all" availability choice
    mean "don't filter on this", so they never reach the request body.
    """

    location: str = ""
    availability_status: str = ""
    floor_number: str = ""

    def to_filter(self) -> ListingFilter:
        f = ListingFilter()
        if self.location.strip():
            f.location = self.location.strip()
        if self.availability_status and self.availability_status != "all":
            try:
                f.availability_status = Availability(self.availability_status)
            except ValueError:
                raise FormError(f"Unknown availability: {self.availability_status}")
        if self.floor_number.strip():
            f.floor_number = _parse_int(self.floor_number, "Floor number")
        return f


@dataclass
class CreateListingForm:
    title: str = ""
    description: str = ""
    location: str = ""
    floor_number: str = ""
    image_url: str = ""
    availability_status: str = Availability.AVAILABLE.value

    def to_payload(self, identity: Identity | None) -> ListingCreate:
        if identity is None or identity.role != Role.OWNER:
            raise FormError("You must be logged in as an owner to create listings")

        for name in ("title", "description", "location", "image_url"):
            if not getattr(self, name).strip():
                raise FormError(f"{name.replace('_', ' ').capitalize()} is required")

        try:
            availability = Availability(self.availability_status)
        except ValueError:
            raise FormError(f"Unknown availability: {self.availability_status}")

        return ListingCreate(
            title=self.title.strip(),
            description=self.description.strip(),
            location=self.location.strip(),
            floor_number=_parse_int(self.floor_number, "Floor number"),
            image_url=self.image_url.strip(),
            availability_status=availability,
            owner=OwnerRef(id=identity.user_id),
        )


@dataclass
class ReviewForm:
    rating: int = 0
    comment: str = ""

    def to_payload(self, identity: Identity, *, listing_id: int) -> ReviewCreate:
        try:
            rating = int(self.rating)
        except (TypeError, ValueError):
            raise FormError("Please select a rating")
        if not 1 <= rating <= 5:
            raise FormError("Please select a rating")
        if not self.comment.strip():
            raise FormError("Please write a comment")
        return ReviewCreate(rating=rating, comment=self.comment.strip(), user_id=identity.user_id, listing_id=listing_id)


@dataclass
class BookingForm:
    appointment_date: str = ""  # YYYY-MM-DD
    appointment_time: str = ""  # HH:MM
    # kept on the form only; the backend's appointment DTO has no notes field
    notes: str = ""

    def to_payload(self, identity: Identity, *, listing_id: int) -> AppointmentCreate:
        try:
            when = combine_date_time(self.appointment_date, self.appointment_time)
        except ValueError:
            raise FormError("Invalid date or time")
        if not when:
            raise FormError("Please choose a date and time")
        return AppointmentCreate(appointment_time=when, user_id=identity.user_id, listing_id=listing_id)

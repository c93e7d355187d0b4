# stayease/schemas.py
from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class Role(str, Enum):
    # the backend calls tenants "user"
    TENANT = "user"
    OWNER = "owner"


class Availability(str, Enum):
    AVAILABLE = "available"
    UNAVAILABLE = "unavailable"


class WireModel(BaseModel):
    """
    Base for everything that crosses the wire.
    The backend speaks camelCase; Python code uses snake_case.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


def _blank_if_null(cls, v):
    # the backend sends null for unset text columns
    return "" if v is None else v


# -------------------- Users / Auth --------------------

class User(WireModel):
    id: int
    full_name: str = ""
    email: str = ""
    role: Role = Role.TENANT

    _null_text = field_validator("full_name", "email", mode="before")(_blank_if_null)


class RegisterRequest(WireModel):
    full_name: str
    email: str
    password: str
    role: Role = Role.TENANT


class LoginRequest(WireModel):
    email: str
    password: str


class LoginResult(WireModel):
    message: str = ""
    user_id: Optional[int] = None
    full_name: str = ""
    role: Role = Role.TENANT


# -------------------- Listings --------------------

class OwnerRef(WireModel):
    id: int


class Listing(WireModel):
    id: int
    title: str
    description: str = ""
    location: str = ""
    floor_number: int = 0
    image_url: str = ""
    availability_status: Availability = Availability.AVAILABLE
    owner: Optional[User] = None

    _null_text = field_validator("title", "description", "location", "image_url", mode="before")(_blank_if_null)

    @field_validator("floor_number", mode="before")
    @classmethod
    def _null_floor(cls, v):
        return 0 if v is None else v

    @field_validator("availability_status", mode="before")
    @classmethod
    def _null_is_unavailable(cls, v):
        # cards only show "Available" for an explicit "available"
        return Availability.UNAVAILABLE if v is None else v


class ListingCreate(WireModel):
    title: str
    description: str
    location: str
    floor_number: int
    image_url: str
    availability_status: Availability = Availability.AVAILABLE
    owner: OwnerRef


class ListingFilter(WireModel):
    owner_id: Optional[int] = None
    location: Optional[str] = None
    availability_status: Optional[Availability] = None
    floor_number: Optional[int] = None


class ListingSummary(WireModel):
    id: int
    title: str
    location: Optional[str] = None


# -------------------- Appointments --------------------

class Appointment(WireModel):
    id: int
    # canonical combined timestamp; older payloads split it across appointment_date
    appointment_time: Optional[str] = None
    status: str
    user: Optional[User] = None
    listing: Optional[Listing] = None
    user_id: Optional[int] = None
    listing_id: Optional[int] = None
    appointment_date: Optional[str] = None


class AppointmentCreate(WireModel):
    appointment_time: str
    user_id: int
    listing_id: int


# -------------------- Reviews --------------------

class Review(WireModel):
    id: int
    rating: int
    comment: str = ""
    created_at: Optional[str] = None
    user_id: Optional[int] = None
    user_name: str = ""
    listing_id: Optional[int] = None
    listing: Optional[ListingSummary] = None

    _null_text = field_validator("comment", "user_name", mode="before")(_blank_if_null)


class ReviewCreate(WireModel):
    rating: int = Field(..., ge=1, le=5)
    comment: str
    user_id: int
    listing_id: int


class ReviewUpdate(WireModel):
    rating: int = Field(..., ge=1, le=5)
    comment: str


# -------------------- Notifications / Dashboard --------------------

class Notification(WireModel):
    id: int
    message: str
    is_read: bool = False
    created_at: Optional[str] = None
    user: Optional[User] = None

    @field_validator("is_read", mode="before")
    @classmethod
    def _null_is_unread(cls, v):
        return bool(v) if v is not None else False


class DashboardStats(WireModel):
    total_appointments: int = 0
    pending_appointments: int = 0
    accepted_appointments: int = 0
    rejected_appointments: int = 0
    total_reviews: int = 0
    average_rating: float = 0.0
    total_listings: int = 0

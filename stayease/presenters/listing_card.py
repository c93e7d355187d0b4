from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..schemas import Availability, Listing

PLACEHOLDER_IMAGE = "/placeholder.svg"


@dataclass(frozen=True)
class ListingCard:
    listing_id: int
    title: str
    description: str
    location: str
    floor_text: str
    image_url: str
    availability_label: str
    variant: str
    owner_name: Optional[str]
    detail_route: str
    book_route: Optional[str]

    def as_dict(self) -> dict:
        return {
            "id": self.listing_id,
            "title": self.title,
            "location": self.location,
            "floor": self.floor_text,
            "image": self.image_url,
            "availability": self.availability_label,
            "owner": self.owner_name,
            "detail": self.detail_route,
            "book": self.book_route,
        }


def present_listing(listing: Listing, *, show_owner: bool = True) -> ListingCard:
    available = listing.availability_status == Availability.AVAILABLE
    return ListingCard(
        listing_id=listing.id,
        title=listing.title,
        description=listing.description,
        location=listing.location,
        floor_text=f"Floor {listing.floor_number}",
        image_url=listing.image_url or PLACEHOLDER_IMAGE,
        availability_label="Available" if available else "Unavailable",
        variant="default" if available else "secondary",
        owner_name=(listing.owner.full_name if listing.owner else None) if show_owner else None,
        detail_route=f"/listings/{listing.id}",
        # only open listings can be booked
        book_route=f"/appointments/book?listingId={listing.id}" if available else None,
    )

from __future__ import annotations

from typing import Optional

from ..domain.dashboard_rollups import average_rating
from ..presenters.listing_card import ListingCard, present_listing
from ..presenters.review_card import ReviewCard, present_review
from ..schemas import Availability, Listing, Review, Role
from .base import GuardedView


class ListingDetailView(GuardedView):
    """Public listing page; anyone may view it, signed in or not."""

    name = "listing_detail"
    requires_session = False
    load_error_message = "Failed to load listing details"

    def __init__(self, *args, listing_id: int, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.listing_id = int(listing_id)
        self.listing: Optional[Listing] = None
        self.reviews: list[Review] = []

    async def fetch(self):
        listings = await self.api.listings.get_all()
        found = next((x for x in listings if x.id == self.listing_id), None)
        if found is None:
            return None, []
        return found, await self.api.reviews.get_by_listing(found.id)

    def apply(self, data) -> None:
        self.listing, self.reviews = data

    @property
    def not_found(self) -> bool:
        return self.listing is None

    @property
    def average_rating(self) -> float:
        return average_rating(self.reviews)

    @property
    def can_schedule(self) -> bool:
        ident = self.session.identity
        return (
            ident is not None
            and ident.role == Role.TENANT
            and self.listing is not None
            and self.listing.availability_status == Availability.AVAILABLE
        )

    @property
    def sign_in_required(self) -> bool:
        return not self.session.is_authenticated

    def card(self) -> Optional[ListingCard]:
        return present_listing(self.listing) if self.listing else None

    def review_cards(self) -> list[ReviewCard]:
        return [present_review(r) for r in self.reviews]

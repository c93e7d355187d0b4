from __future__ import annotations

from ..schemas import Review, ReviewCreate, ReviewUpdate
from .base import ResourceClient


class ReviewsClient(ResourceClient):
    async def get_by_listing(self, listing_id: int) -> list[Review]:
        return await self._models(
            Review, "GET", f"/api/reviews/listing/{int(listing_id)}", fallback="Failed to fetch reviews"
        )

    async def get_by_user(self, user_id: int) -> list[Review]:
        return await self._models(Review, "GET", f"/api/reviews/user/{int(user_id)}", fallback="Failed to fetch reviews")

    async def create(self, data: ReviewCreate) -> Review:
        return await self._model(Review, "POST", "/api/reviews", json=data.to_wire(), fallback="Failed to create review")

    async def update(self, review_id: int, data: ReviewUpdate) -> Review:
        return await self._model(
            Review, "PUT", f"/api/reviews/{int(review_id)}", json=data.to_wire(), fallback="Failed to update review"
        )

    async def delete(self, review_id: int) -> None:
        await self._send("DELETE", f"/api/reviews/{int(review_id)}", fallback="Failed to delete review")

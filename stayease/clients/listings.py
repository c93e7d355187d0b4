from __future__ import annotations

from ..schemas import Listing, ListingCreate, ListingFilter
from .base import ResourceClient


class ListingsClient(ResourceClient):
    async def get_all(self) -> list[Listing]:
        return await self._models(Listing, "GET", "/api/listings", fallback="Failed to fetch listings")

    async def filter(self, filters: ListingFilter) -> list[Listing]:
        """POST /api/listings/filter. Unset criteria are left out of the body, not sent as null."""
        return await self._models(
            Listing,
            "POST",
            "/api/listings/filter",
            json=filters.to_wire(),
            fallback="Failed to filter listings",
        )

    async def create(self, data: ListingCreate) -> Listing:
        return await self._model(Listing, "POST", "/api/listings", json=data.to_wire(), fallback="Failed to create listing")

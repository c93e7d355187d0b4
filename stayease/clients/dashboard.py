from __future__ import annotations

from ..schemas import DashboardStats
from .base import ResourceClient


class DashboardClient(ResourceClient):
    async def user_stats(self, user_id: int) -> DashboardStats:
        return await self._model(
            DashboardStats, "GET", f"/api/dashboard/user/{int(user_id)}", fallback="Failed to fetch user stats"
        )

    async def owner_stats(self, owner_id: int) -> DashboardStats:
        return await self._model(
            DashboardStats, "GET", f"/api/dashboard/owner/{int(owner_id)}", fallback="Failed to fetch owner stats"
        )

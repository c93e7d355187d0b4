from __future__ import annotations

from ..schemas import Notification
from .base import ResourceClient


class NotificationsClient(ResourceClient):
    async def get_by_user(self, user_id: int) -> list[Notification]:
        return await self._models(
            Notification, "GET", f"/api/notifications/{int(user_id)}", fallback="Failed to fetch notifications"
        )

    async def send(self, user_id: int, message: str) -> None:
        # the backend reads both fields from the query string, not the body
        await self._send(
            "POST",
            "/api/notifications/send",
            params={"userId": int(user_id), "message": message},
            fallback="Failed to send notification",
        )

    async def mark_as_read(self, notification_id: int) -> None:
        await self._send(
            "PUT", f"/api/notifications/read/{int(notification_id)}", fallback="Failed to mark notification as read"
        )

    async def delete(self, notification_id: int) -> None:
        await self._send("DELETE", f"/api/notifications/{int(notification_id)}", fallback="Failed to delete notification")

from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

from ..domain import appointment_status
from ..schemas import Appointment, AppointmentCreate
from .base import ResourceClient

log = logging.getLogger("stayease.appointments")


def receipt_filename(appointment_id: int) -> str:
    return f"receipt_{appointment_id}.pdf"


class AppointmentsClient(ResourceClient):
    async def get_all(self) -> list[Appointment]:
        return await self._models(Appointment, "GET", "/api/appointments", fallback="Failed to fetch appointments")

    async def get_by_user(self, user_id: int) -> list[Appointment]:
        return await self._models(
            Appointment, "GET", f"/api/appointments/user/{int(user_id)}", fallback="Failed to fetch appointments"
        )

    async def get_by_owner(self, owner_id: int) -> list[Appointment]:
        return await self._models(
            Appointment, "GET", f"/api/appointments/owner/{int(owner_id)}", fallback="Failed to fetch appointments"
        )

    async def create(self, data: AppointmentCreate) -> Appointment:
        return await self._model(
            Appointment, "POST", "/api/appointments", json=data.to_wire(), fallback="Failed to create appointment"
        )

    async def update_status(self, appointment_id: int, status: str) -> Appointment:
        """
        Accepts either spelling (confirmed/ACCEPTED, cancelled/REJECTED);
        the backend only understands the uppercase enum.
        """
        backend_status = appointment_status.to_backend_status(status)
        return await self._model(
            Appointment,
            "PUT",
            f"/api/appointments/{int(appointment_id)}/status",
            params={"status": backend_status},
            fallback="Failed to update appointment status",
        )

    async def fetch_receipt(self, appointment_id: int) -> bytes:
        r = await self._send(
            "GET", f"/api/appointments/{int(appointment_id)}/receipt", fallback="Failed to download receipt"
        )
        return r.content

    async def download_receipt(self, appointment_id: int, directory: Union[str, Path]) -> Path:
        """Fetch the PDF receipt and save it as receipt_<id>.pdf under directory."""
        content = await self.fetch_receipt(appointment_id)

        target_dir = Path(directory)
        target_dir.mkdir(parents=True, exist_ok=True)
        path = target_dir / receipt_filename(appointment_id)
        path.write_bytes(content)

        log.info("receipt saved", extra={"appointment_id": int(appointment_id)})
        return path

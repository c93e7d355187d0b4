# stayease/domain/appointment_status.py
from __future__ import annotations

import logging
from enum import Enum

log = logging.getLogger("stayease.status")


class AppointmentStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


# Backend sends PENDING/ACCEPTED/REJECTED; older payloads and the
# UI use the lowercase triple. Both collapse here and nowhere else.
_ALIASES: dict[str, AppointmentStatus] = {
    "PENDING": AppointmentStatus.PENDING,
    "pending": AppointmentStatus.PENDING,
    "ACCEPTED": AppointmentStatus.CONFIRMED,
    "confirmed": AppointmentStatus.CONFIRMED,
    "REJECTED": AppointmentStatus.CANCELLED,
    "cancelled": AppointmentStatus.CANCELLED,
}

_BACKEND: dict[AppointmentStatus, str] = {
    AppointmentStatus.PENDING: "PENDING",
    AppointmentStatus.CONFIRMED: "ACCEPTED",
    AppointmentStatus.CANCELLED: "REJECTED",
}

_LABELS: dict[AppointmentStatus, str] = {
    AppointmentStatus.PENDING: "Pending",
    AppointmentStatus.CONFIRMED: "Confirmed",
    AppointmentStatus.CANCELLED: "Cancelled",
}

_warned: set[str] = set()


def normalize_status(value: str) -> str:
    """
    Map any known status spelling to its canonical value.

    Unknown values are returned unchanged. They are a data-contract
    violation, so the first sighting of each one is logged.
    """
    hit = _ALIASES.get(value)
    if hit is not None:
        return hit.value

    if value not in _warned:
        _warned.add(value)
        log.warning("unrecognized appointment status %r passed through unchanged", value)
    return value


def is_canonical(value: str) -> bool:
    return value in {s.value for s in AppointmentStatus}


def to_backend_status(value: str) -> str:
    """
    confirmed -> ACCEPTED, cancelled -> REJECTED, pending -> PENDING.
    Already-backend spellings go through normalize_status first, so they round-trip.
    """
    canonical = normalize_status(value)
    if not is_canonical(canonical):
        raise ValueError(f"Unknown appointment status: {value!r}")
    return _BACKEND[AppointmentStatus(canonical)]


def status_label(value: str) -> str:
    canonical = normalize_status(value)
    if is_canonical(canonical):
        return _LABELS[AppointmentStatus(canonical)]
    return canonical

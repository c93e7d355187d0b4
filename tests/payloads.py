# tests/payloads.py
from __future__ import annotations

from typing import Any, Optional

import jwt

BASE_URL = "http://stayease.test"


def listing_json(listing_id: int, *, owner_id: int = 3, available: bool = True, title: Optional[str] = None) -> dict:
    return {
        "id": listing_id,
        "title": title or f"Flat {listing_id}",
        "description": "Two rooms",
        "location": "Mumbai",
        "floorNumber": 4,
        "imageUrl": "",
        "availabilityStatus": "available" if available else "unavailable",
        "owner": {"id": owner_id, "fullName": "Oscar Owner", "email": "oscar@t.local", "role": "owner"},
    }


def appointment_json(apt_id: int, status: str, *, listing_id: int = 1, time: str = "2025-03-01T14:30:00") -> dict:
    return {
        "id": apt_id,
        "appointmentTime": time,
        "status": status,
        "listing": listing_json(listing_id),
        "user": {"id": 7, "fullName": "Tina Tenant", "email": "tina@t.local", "role": "user"},
    }


def review_json(review_id: int, *, listing_id: int, rating: int, user_id: int = 7) -> dict:
    return {
        "id": review_id,
        "rating": rating,
        "comment": "Nice place",
        "createdAt": "2025-03-02T10:00:00",
        "userId": user_id,
        "userName": "Tina Tenant",
        "listingId": listing_id,
        "listing": {"id": listing_id, "title": f"Flat {listing_id}"},
    }


def notification_json(n_id: int, *, read: bool) -> dict:
    return {"id": n_id, "message": f"Notice {n_id}", "isRead": read, "createdAt": "2025-03-01T09:05:00"}


def make_token(claims: dict[str, Any]) -> str:
    """Signed with a key the client never sees; it only reads the claims."""
    return jwt.encode(claims, "backend-only-secret-key-0123456789abcdef", algorithm="HS256")

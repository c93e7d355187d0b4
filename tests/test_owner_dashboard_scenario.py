# tests/test_owner_dashboard_scenario.py
from __future__ import annotations

import asyncio
import json

import httpx

from payloads import appointment_json, listing_json, notification_json, review_json
from stayease.views import OwnerDashboardView, ViewState


def _seed(backend, appointments: list[dict]) -> None:
    backend.add("POST", "/api/listings/filter", json=[listing_json(1), listing_json(2, available=False)])
    backend.add("GET", "/api/appointments/owner/3", handler=lambda r: httpx.Response(200, json=list(appointments)))
    backend.add("GET", "/api/notifications/3", json=[notification_json(1, read=False), notification_json(2, read=True)])
    backend.add(
        "GET",
        "/api/reviews/listing/1",
        json=[review_json(1, listing_id=1, rating=5), review_json(2, listing_id=1, rating=4), review_json(3, listing_id=1, rating=4)],
    )
    backend.add(
        "GET",
        "/api/reviews/listing/2",
        json=[review_json(4, listing_id=2, rating=3), review_json(5, listing_id=2, rating=5)],
    )


def test_owner_dashboard_rollup(backend, make_app, owner):
    appointments = [appointment_json(1, "PENDING"), appointment_json(2, "ACCEPTED"), appointment_json(3, "ACCEPTED")]
    _seed(backend, appointments)

    async def go():
        async with make_app(owner) as app:
            view = app.view(OwnerDashboardView)
            await view.mount()
            return view

    view = asyncio.run(go())
    assert view.state == ViewState.READY

    stats = view.rollup
    assert stats.total_listings == 2
    assert stats.available_listings == 1
    assert stats.pending_appointments == 1
    assert stats.confirmed_appointments == 2
    assert stats.total_reviews == 5
    assert stats.unread_notifications == 1
    # (5 + 4 + 4 + 3 + 5) / 5
    assert stats.average_rating == 4.2

    body = json.loads(backend.calls("POST", "/api/listings/filter")[0].content)
    assert body == {"ownerId": 3}
    assert [c.appointment_id for c in view.pending_preview()] == [1]
    assert view.pending_preview()[0].can_confirm


def test_page_load_shares_one_request_id(backend, make_app, owner):
    _seed(backend, [])

    async def go():
        async with make_app(owner) as app:
            await app.view(OwnerDashboardView).mount()

    asyncio.run(go())
    ids = {r.headers["X-Request-ID"] for r in backend.requests}
    assert len(ids) == 1


def test_change_status_reloads_the_whole_page(backend, make_app, owner):
    appointments = [appointment_json(1, "PENDING"), appointment_json(2, "ACCEPTED")]
    _seed(backend, appointments)

    def accept(request: httpx.Request) -> httpx.Response:
        appointments[0] = appointment_json(1, request.url.params["status"])
        return httpx.Response(200, json=appointments[0])

    backend.add("PUT", "/api/appointments/1/status", handler=accept)

    async def go():
        async with make_app(owner) as app:
            view = app.view(OwnerDashboardView)
            await view.mount()
            ok = await view.change_status(1, "confirmed")
            return view, ok

    view, ok = asyncio.run(go())
    assert ok
    assert len(backend.calls("GET", "/api/appointments/owner/3")) == 2
    assert view.rollup.pending_appointments == 0
    assert view.rollup.confirmed_appointments == 2


def test_change_status_failure_keeps_data_and_sets_error(backend, make_app, owner):
    _seed(backend, [appointment_json(1, "PENDING")])
    backend.add("PUT", "/api/appointments/1/status", status=400, json={"message": "Appointment already handled"})

    async def go():
        async with make_app(owner) as app:
            view = app.view(OwnerDashboardView)
            await view.mount()
            ok = await view.change_status(1, "cancelled")
            return view, ok

    view, ok = asyncio.run(go())
    assert not ok
    assert view.error == "Appointment already handled"
    assert view.rollup.pending_appointments == 1
    assert len(backend.calls("GET", "/api/appointments/owner/3")) == 1


def test_dashboard_load_failure_uses_page_message(backend, make_app, owner):
    _seed(backend, [])
    backend.add("GET", "/api/notifications/3", status=500, json={"message": "boom"})

    async def go():
        async with make_app(owner) as app:
            view = app.view(OwnerDashboardView)
            await view.mount()
            return view

    view = asyncio.run(go())
    assert view.state == ViewState.ERROR
    assert view.error == "Failed to load dashboard data"

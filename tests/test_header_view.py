# tests/test_header_view.py
from __future__ import annotations

import asyncio

import httpx

from payloads import notification_json


def test_header_for_signed_in_owner(backend, make_app, owner):
    backend.add("GET", "/api/notifications/3", json=[notification_json(i, read=False) for i in range(12)])

    async def go():
        async with make_app(owner) as app:
            header = app.header()
            count = await header.refresh_unread()
            return header, count

    header, count = asyncio.run(go())
    assert count == 12
    assert header.badge == "9+"
    assert header.nav == "owner"
    assert header.notifications_route == "/owner/notifications"
    assert header.greeting == "Oscar Owner (owner)"


def test_header_signed_out(make_app):
    header = make_app().header()
    assert header.nav is None
    assert header.notifications_route is None
    assert header.greeting == ""
    assert header.badge == ""


def test_failed_refresh_keeps_previous_count(backend, make_app, tenant):
    backend.add("GET", "/api/notifications/7", json=[notification_json(1, read=False), notification_json(2, read=True)])

    async def go():
        async with make_app(tenant) as app:
            header = app.header()
            first = await header.refresh_unread()
            backend.add("GET", "/api/notifications/7", status=500, json={"message": "boom"})
            second = await header.refresh_unread()
            return first, second

    assert asyncio.run(go()) == (1, 1)


def test_logout_resets_count(backend, make_app, tenant):
    backend.add("GET", "/api/notifications/7", json=[notification_json(1, read=False)])

    async def go():
        async with make_app(tenant) as app:
            header = app.header()
            await header.refresh_unread()
            app.sign_out()
            return header

    header = asyncio.run(go())
    assert header.unread_count == 0
    assert header.badge == ""


def test_poll_until_stopped(backend, make_app, tenant):
    hits = []

    async def go():
        stop = asyncio.Event()

        def count(request: httpx.Request) -> httpx.Response:
            hits.append(1)
            if len(hits) == 3:
                stop.set()
            return httpx.Response(200, json=[])

        backend.add("GET", "/api/notifications/7", handler=count)
        async with make_app(tenant) as app:
            header = app.header(poll_seconds=0.001)
            await asyncio.wait_for(header.poll(stop), timeout=2)
            header.close()

    asyncio.run(go())
    assert len(hits) == 3

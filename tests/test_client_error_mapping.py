# tests/test_client_error_mapping.py
from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from payloads import BASE_URL, appointment_json, listing_json
from stayease.clients import ApiError, ApiTransportError, StayEaseClient
from stayease.clients.base import NETWORK_ERROR
from stayease.schemas import Availability, ListingCreate, ListingFilter, OwnerRef, Role


def _client(backend) -> StayEaseClient:
    return StayEaseClient(base_url=BASE_URL, transport=backend.transport())


def _new_listing() -> ListingCreate:
    return ListingCreate(
        title="Flat",
        description="Two rooms",
        location="Pune",
        floor_number=2,
        image_url="http://img/x.png",
        owner=OwnerRef(id=3),
    )


def test_backend_message_is_surfaced_verbatim(backend):
    backend.add("POST", "/api/listings", status=404, json={"message": "Listing not found"})
    backend.add("POST", "/api/listings/filter", status=404, json={"message": "Listing not found"})

    async def go():
        async with _client(backend) as api:
            with pytest.raises(ApiError) as create_err:
                await api.listings.create(_new_listing())
            with pytest.raises(ApiError) as filter_err:
                await api.listings.filter(ListingFilter(location="Pune"))
        return create_err.value, filter_err.value

    create_err, filter_err = asyncio.run(go())
    assert create_err.message == "Listing not found"
    assert create_err.status_code == 404
    assert filter_err.message == "Listing not found"


def test_json_error_without_message_uses_fallback_and_status(backend):
    backend.add("GET", "/api/listings", status=500, json={"error": "boom"})

    async def go():
        async with _client(backend) as api:
            await api.listings.get_all()

    with pytest.raises(ApiError) as e:
        asyncio.run(go())
    assert e.value.message == "Failed to fetch listings (500)"


def test_non_json_error_body_keeps_status_code(backend):
    backend.add("GET", "/api/appointments/user/7", status=502, content=b"Bad Gateway from proxy")

    async def go():
        async with _client(backend) as api:
            await api.appointments.get_by_user(7)

    with pytest.raises(ApiError) as e:
        asyncio.run(go())
    assert "502" in e.value.message
    assert "Bad Gateway from proxy" in e.value.message


def test_transport_failure_is_a_distinct_error():
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async def go():
        async with StayEaseClient(base_url=BASE_URL, transport=httpx.MockTransport(refuse)) as api:
            await api.listings.get_all()

    with pytest.raises(ApiTransportError) as e:
        asyncio.run(go())
    assert e.value.message == NETWORK_ERROR
    assert e.value.status_code is None


def test_unexpected_shape_becomes_api_error(backend):
    backend.add("GET", "/api/listings", json=[{"nope": True}])

    async def go():
        async with _client(backend) as api:
            await api.listings.get_all()

    with pytest.raises(ApiError) as e:
        asyncio.run(go())
    assert e.value.message == "Failed to fetch listings: unexpected response shape"


def test_null_list_body_is_empty(backend):
    backend.add("GET", "/api/reviews/user/7", content=b"null")

    async def go():
        async with _client(backend) as api:
            return await api.reviews.get_by_user(7)

    assert asyncio.run(go()) == []


def test_login_invalid_credentials_message(backend):
    backend.add("POST", "/api/auth/login", status=401, json={"message": "Invalid credentials"})

    async def go():
        async with _client(backend) as api:
            await api.auth.login("tina@t.local", "wrong")

    with pytest.raises(ApiError) as e:
        asyncio.run(go())
    assert e.value.message == "Invalid email or password"


def test_login_success_parses_result(backend):
    backend.add(
        "POST",
        "/api/auth/login",
        json={"message": "Login successful", "userId": 7, "fullName": "Tina Tenant", "role": "user"},
    )

    async def go():
        async with _client(backend) as api:
            return await api.auth.login("tina@t.local", "pw")

    result = asyncio.run(go())
    assert result.user_id == 7
    assert result.role == Role.TENANT
    sent = json.loads(backend.calls("POST", "/api/auth/login")[0].content)
    assert sent == {"email": "tina@t.local", "password": "pw"}


def test_register_duplicate_even_with_200(backend):
    backend.add("POST", "/api/auth/register", json={"message": "User already exists"})

    async def go():
        async with _client(backend) as api:
            await api.auth.register(full_name="Tina", email="tina@t.local", password="pw")

    with pytest.raises(ApiError) as e:
        asyncio.run(go())
    assert e.value.message == "User already exists"
    sent = json.loads(backend.calls("POST", "/api/auth/register")[0].content)
    assert sent["fullName"] == "Tina"
    assert sent["role"] == "user"


def test_update_status_sends_backend_enum(backend):
    backend.add("PUT", "/api/appointments/5/status", json=appointment_json(5, "ACCEPTED"))

    async def go():
        async with _client(backend) as api:
            return await api.appointments.update_status(5, "confirmed")

    apt = asyncio.run(go())
    assert apt.status == "ACCEPTED"
    req = backend.calls("PUT", "/api/appointments/5/status")[0]
    assert req.url.params["status"] == "ACCEPTED"


def test_notification_send_uses_query_params(backend):
    backend.add("POST", "/api/notifications/send", json={"message": "sent"})

    async def go():
        async with _client(backend) as api:
            await api.notifications.send(3, "New booking")

    asyncio.run(go())
    req = backend.calls("POST", "/api/notifications/send")[0]
    assert req.url.params["userId"] == "3"
    assert req.url.params["message"] == "New booking"
    assert req.content == b""


def test_filter_body_leaves_out_unset_criteria(backend):
    backend.add("POST", "/api/listings/filter", json=[listing_json(1)])

    async def go():
        async with _client(backend) as api:
            return await api.listings.filter(ListingFilter(availability_status=Availability.AVAILABLE))

    found = asyncio.run(go())
    assert [x.id for x in found] == [1]
    body = json.loads(backend.calls("POST", "/api/listings/filter")[0].content)
    assert body == {"availabilityStatus": "available"}


def test_every_request_carries_a_request_id(backend):
    backend.add("GET", "/api/listings", json=[])
    backend.add("GET", "/api/reviews/listing/1", json=[])

    async def go():
        async with _client(backend) as api:
            await api.listings.get_all()
            await api.reviews.get_by_listing(1)

    asyncio.run(go())
    ids = [r.headers.get("X-Request-ID") for r in backend.requests]
    assert all(ids)
    assert len(set(ids)) == 2


@pytest.mark.parametrize(
    "body,message",
    [
        ({"message": "User not found"}, "User not found"),
        ({"message": "Login successful", "userId": 7, "fullName": "Tina", "role": None}, "Login successful"),
        ({"userId": 7, "role": "admin"}, "Login failed"),
        ({}, "Login failed"),
    ],
)
def test_login_with_unusable_200_body_is_an_api_error(backend, body, message):
    backend.add("POST", "/api/auth/login", json=body)

    async def go():
        async with _client(backend) as api:
            await api.auth.login("tina@t.local", "pw")

    with pytest.raises(ApiError) as e:
        asyncio.run(go())
    assert e.value.message == message
    assert e.value.status_code == 200

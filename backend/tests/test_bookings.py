"""
Tests for booking endpoints: CRUD, the overlap guard, and the date-scoped queries.
"""

from datetime import date

import pytest
from httpx import AsyncClient

FROZEN_TODAY = date(2025, 2, 1)


def _payload(institution, resource, user, **overrides) -> dict:
    data = {
        "institution_id": institution.id,
        "user_id": user.id,
        "resource_id": resource.id,
        "date": "2025-03-10",
        "start_time": "10:00",
        "end_time": "11:00",
    }
    data.update(overrides)
    return data


@pytest.mark.asyncio
async def test_create_booking(client: AsyncClient, auth_headers, institution, resource, test_user):
    response = await client.post(
        "/api/v1/bookings/",
        json=_payload(institution, resource, test_user),
        headers=auth_headers,
    )
    assert response.status_code == 201
    data = response.json()
    assert data["id"]
    assert data["resource_id"] == resource.id
    assert data["date"] == "2025-03-10"
    assert data["start_time"] == "10:00"


@pytest.mark.asyncio
async def test_create_booking_ignores_client_id(client: AsyncClient, auth_headers, institution, resource, test_user):
    """The store assigns identifiers; a client-supplied id is dropped."""
    response = await client.post(
        "/api/v1/bookings/",
        json=_payload(institution, resource, test_user, id="forged-id"),
        headers=auth_headers,
    )
    assert response.status_code == 201
    assert response.json()["id"] != "forged-id"


@pytest.mark.asyncio
async def test_create_booking_unauthenticated(client: AsyncClient, institution, resource, test_user):
    response = await client.post("/api/v1/bookings/", json=_payload(institution, resource, test_user))
    assert response.status_code == 401


@pytest.mark.asyncio
@pytest.mark.parametrize("start,end", [("25:00", "26:00"), ("10:00", "09:00"), ("ten", "11:00")])
async def test_create_booking_invalid_times(
    client: AsyncClient, auth_headers, institution, resource, test_user, start, end
):
    response = await client.post(
        "/api/v1/bookings/",
        json=_payload(institution, resource, test_user, start_time=start, end_time=end),
        headers=auth_headers,
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_overlapping_booking_rejected(
    client: AsyncClient, auth_headers, institution, resource, test_user, make_booking
):
    """A slot intersecting an existing booking on the same resource and day returns 409."""
    await make_booking(date(2025, 3, 10), "10:00", "11:00")

    response = await client.post(
        "/api/v1/bookings/",
        json=_payload(institution, resource, test_user, start_time="10:30", end_time="11:30"),
        headers=auth_headers,
    )
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_back_to_back_booking_allowed(
    client: AsyncClient, auth_headers, institution, resource, test_user, make_booking
):
    await make_booking(date(2025, 3, 10), "10:00", "11:00")

    response = await client.post(
        "/api/v1/bookings/",
        json=_payload(institution, resource, test_user, start_time="11:00", end_time="12:00"),
        headers=auth_headers,
    )
    assert response.status_code == 201


@pytest.mark.asyncio
async def test_same_slot_other_day_allowed(
    client: AsyncClient, auth_headers, institution, resource, test_user, make_booking
):
    await make_booking(date(2025, 3, 10), "10:00", "11:00")

    response = await client.post(
        "/api/v1/bookings/",
        json=_payload(institution, resource, test_user, date="2025-03-11"),
        headers=auth_headers,
    )
    assert response.status_code == 201


@pytest.mark.asyncio
async def test_get_booking(client: AsyncClient, auth_headers, make_booking):
    booking = await make_booking(date(2025, 3, 10))

    response = await client.get(f"/api/v1/bookings/{booking.id}", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["id"] == booking.id


@pytest.mark.asyncio
async def test_get_booking_not_found(client: AsyncClient, auth_headers):
    response = await client.get("/api/v1/bookings/doesnotexist", headers=auth_headers)
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_list_bookings_by_user(client: AsyncClient, auth_headers, test_user, admin_user, make_booking):
    await make_booking(date(2025, 3, 10), "10:00", "11:00")
    await make_booking(date(2025, 3, 11), "10:00", "11:00")
    await make_booking(date(2025, 3, 12), "10:00", "11:00", user_id=admin_user.id)

    response = await client.get(f"/api/v1/bookings/?user_id={test_user.id}", headers=auth_headers)
    assert response.status_code == 200
    assert len(response.json()) == 2


@pytest.mark.asyncio
async def test_update_booking(client: AsyncClient, auth_headers, institution, resource, test_user, make_booking):
    booking = await make_booking(date(2025, 3, 10), "10:00", "11:00")

    response = await client.put(
        f"/api/v1/bookings/{booking.id}",
        json=_payload(institution, resource, test_user, start_time="10:00", end_time="12:00"),
        headers=auth_headers,
    )
    assert response.status_code == 204

    fetched = await client.get(f"/api/v1/bookings/{booking.id}", headers=auth_headers)
    assert fetched.json()["end_time"] == "12:00"


@pytest.mark.asyncio
async def test_update_booking_into_conflict(
    client: AsyncClient, auth_headers, institution, resource, test_user, make_booking
):
    """A booking's own slot does not conflict with itself, but a neighbour's does."""
    await make_booking(date(2025, 3, 10), "12:00", "13:00")
    booking = await make_booking(date(2025, 3, 10), "10:00", "11:00")

    response = await client.put(
        f"/api/v1/bookings/{booking.id}",
        json=_payload(institution, resource, test_user, start_time="10:00", end_time="12:30"),
        headers=auth_headers,
    )
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_update_booking_not_found(client: AsyncClient, auth_headers, institution, resource, test_user):
    response = await client.put(
        "/api/v1/bookings/doesnotexist",
        json=_payload(institution, resource, test_user),
        headers=auth_headers,
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_update_booking_unchanged_is_success(
    client: AsyncClient, auth_headers, institution, resource, test_user, make_booking
):
    booking = await make_booking(date(2025, 3, 10), "10:00", "11:00")

    response = await client.put(
        f"/api/v1/bookings/{booking.id}",
        json=_payload(institution, resource, test_user),
        headers=auth_headers,
    )
    assert response.status_code == 204


@pytest.mark.asyncio
async def test_delete_booking(client: AsyncClient, auth_headers, make_booking):
    booking = await make_booking(date(2025, 3, 10))

    response = await client.delete(f"/api/v1/bookings/{booking.id}", headers=auth_headers)
    assert response.status_code == 204

    again = await client.delete(f"/api/v1/bookings/{booking.id}", headers=auth_headers)
    assert again.status_code == 404


@pytest.mark.asyncio
async def test_pending_bookings_sorted(client: AsyncClient, auth_headers, test_user, make_booking):
    """Pending = from the given day on, ordered by day then start time."""
    await make_booking(date(2025, 3, 11), "09:00", "10:00")
    await make_booking(date(2025, 3, 10), "14:00", "15:00")
    await make_booking(date(2025, 3, 10), "08:30", "09:30")
    await make_booking(date(2025, 3, 9), "08:00", "09:00")

    response = await client.get(
        f"/api/v1/bookings/pending?user_id={test_user.id}&current_date=2025-03-10",
        headers=auth_headers,
    )
    assert response.status_code == 200
    slots = [(b["date"], b["start_time"]) for b in response.json()]
    assert slots == [
        ("2025-03-10", "08:30"),
        ("2025-03-10", "14:00"),
        ("2025-03-11", "09:00"),
    ]


@pytest.mark.asyncio
async def test_pending_bookings_default_to_today(client: AsyncClient, auth_headers, test_user, make_booking):
    """Without current_date the injected clock's day is used."""
    await make_booking(date(2025, 1, 31), "10:00", "11:00")
    await make_booking(FROZEN_TODAY, "10:00", "11:00")

    response = await client.get(f"/api/v1/bookings/pending?user_id={test_user.id}", headers=auth_headers)
    assert response.status_code == 200
    assert [b["date"] for b in response.json()] == [FROZEN_TODAY.isoformat()]


@pytest.mark.asyncio
async def test_resource_bookings_on_date(client: AsyncClient, auth_headers, resource, make_booking):
    """Only bookings on exactly that calendar day are returned."""
    await make_booking(date(2025, 3, 9), "10:00", "11:00")
    await make_booking(date(2025, 3, 10), "10:00", "11:00")
    await make_booking(date(2025, 3, 10), "13:00", "14:00")
    await make_booking(date(2025, 3, 11), "10:00", "11:00")

    response = await client.get(
        f"/api/v1/bookings/resource/{resource.id}?date=2025-03-10",
        headers=auth_headers,
    )
    assert response.status_code == 200
    data = response.json()
    assert len(data) == 2
    assert {b["date"] for b in data} == {"2025-03-10"}


@pytest.mark.asyncio
async def test_statistics_inclusive_range(client: AsyncClient, admin_headers, institution, make_booking):
    await make_booking(date(2025, 2, 28), "10:00", "11:00")
    await make_booking(date(2025, 3, 1), "10:00", "11:00")
    await make_booking(date(2025, 3, 31), "10:00", "11:00")
    await make_booking(date(2025, 4, 1), "10:00", "11:00")

    response = await client.get(
        f"/api/v1/bookings/statistics?institution_id={institution.id}"
        "&start_date=2025-03-01&end_date=2025-03-31",
        headers=admin_headers,
    )
    assert response.status_code == 200
    assert sorted(b["date"] for b in response.json()) == ["2025-03-01", "2025-03-31"]


@pytest.mark.asyncio
async def test_statistics_requires_admin(client: AsyncClient, auth_headers, institution):
    response = await client.get(
        f"/api/v1/bookings/statistics?institution_id={institution.id}"
        "&start_date=2025-03-01&end_date=2025-03-31",
        headers=auth_headers,
    )
    assert response.status_code == 403

from datetime import datetime

from app.models import Appointment, AppointmentStatus, LocationType
from app.models.service import MAX_DURATION_MINS

AVAILABILITY = "/api/v1/bookings/availability"


def slot_starts(resp) -> list[str]:
    return [s["start_time"] for s in resp.json()["data"]["slots"]]


async def test_returns_slots_with_service_details(api, seeded):
    resp = await api.get(AVAILABILITY, params={"date": "2026-03-02", "serviceId": seeded["training_id"]})
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["date"] == "2026-03-02"
    assert data["service"] == {
        "id": seeded["training_id"],
        "name": "Personal Training",
        "duration_mins": 60,
    }
    assert data["slots"] == [
        {"start_time": "2026-03-02T08:00:00Z", "end_time": "2026-03-02T09:00:00Z"},
        {"start_time": "2026-03-02T08:30:00Z", "end_time": "2026-03-02T09:30:00Z"},
        {"start_time": "2026-03-02T09:00:00Z", "end_time": "2026-03-02T10:00:00Z"},
        {"start_time": "2026-03-02T13:00:00Z", "end_time": "2026-03-02T14:00:00Z"},
    ]


async def test_day_without_availability_is_empty_not_an_error(api, seeded):
    resp = await api.get(AVAILABILITY, params={"date": "2026-03-03", "serviceId": seeded["training_id"]})
    assert resp.status_code == 200
    assert resp.json()["data"]["slots"] == []


async def test_past_day_is_empty(api, seeded):
    resp = await api.get(AVAILABILITY, params={"date": "2026-02-23", "serviceId": seeded["training_id"]})
    assert resp.status_code == 200
    assert resp.json()["data"]["slots"] == []


async def test_inactive_service_is_not_found(api, seeded):
    resp = await api.get(AVAILABILITY, params={"date": "2026-03-02", "serviceId": seeded["retired_id"]})
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Service not found or inactive"


async def test_unknown_service_is_not_found(api, seeded):
    resp = await api.get(AVAILABILITY, params={"date": "2026-03-02", "serviceId": 9999})
    assert resp.status_code == 404


async def test_invalid_query_is_a_client_error(api, seeded):
    bad_date = await api.get(AVAILABILITY, params={"date": "not-a-date", "serviceId": seeded["training_id"]})
    missing_service = await api.get(AVAILABILITY, params={"date": "2026-03-02"})
    assert bad_date.status_code == 422
    assert missing_service.status_code == 422


async def test_blocked_time_removes_overlapping_slots(api, seeded):
    resp = await api.post(
        "/api/v1/blocked-times",
        json={
            "start_datetime": "2026-03-02T08:30:00Z",
            "end_datetime": "2026-03-02T09:00:00Z",
            "reason": "Travel between clients",
        },
    )
    assert resp.status_code == 201
    resp = await api.get(AVAILABILITY, params={"date": "2026-03-02", "serviceId": seeded["training_id"]})
    assert slot_starts(resp) == ["2026-03-02T09:00:00Z", "2026-03-02T13:00:00Z"]


async def test_booked_slot_disappears_and_neighbours_stay(api, seeded):
    resp = await api.post(
        "/api/v1/bookings",
        json={
            "client_id": seeded["client_id"],
            "service_id": seeded["stretch_id"],
            "scheduled_at": "2026-03-02T09:00:00Z",
            "location_type": "mobile",
        },
    )
    assert resp.status_code == 201
    resp = await api.get(AVAILABILITY, params={"date": "2026-03-02", "serviceId": seeded["stretch_id"]})
    assert slot_starts(resp) == [
        "2026-03-02T08:00:00Z",
        "2026-03-02T08:30:00Z",
        "2026-03-02T09:30:00Z",
        "2026-03-02T13:00:00Z",
        "2026-03-02T13:30:00Z",
    ]


async def test_day_long_booking_from_previous_day_blocks_morning(api, seeded, session_maker):
    async with session_maker() as s:
        s.add(
            Appointment(
                client_id=seeded["client_id"],
                service_id=seeded["training_id"],
                scheduled_at=datetime(2026, 3, 1, 9, 0),
                duration_mins=MAX_DURATION_MINS,
                status=AppointmentStatus.confirmed,
                location_type=LocationType.mobile,
            )
        )
        await s.commit()
    resp = await api.get(AVAILABILITY, params={"date": "2026-03-02", "serviceId": seeded["training_id"]})
    assert slot_starts(resp) == ["2026-03-02T09:00:00Z", "2026-03-02T13:00:00Z"]

from decimal import Decimal

SERVICES = "/api/v1/services"
AVAILABILITY = "/api/v1/availability"
BLOCKED = "/api/v1/blocked-times"
CLIENTS = "/api/v1/clients"
PACKAGES = "/api/v1/packages"


async def test_service_lifecycle(api, seeded):
    resp = await api.post(
        SERVICES,
        json={"name": "Golf Fitness", "duration_mins": 45, "price": "80.00", "category": "golf"},
    )
    assert resp.status_code == 201
    created = resp.json()
    assert created["is_active"] is True
    assert Decimal(created["price"]) == Decimal("80")

    names = [s["name"] for s in (await api.get(SERVICES)).json()]
    assert names == ["Assisted Stretch", "Golf Fitness", "Personal Training"]

    resp = await api.patch(f"{SERVICES}/{created['id']}", json={"duration_mins": 50})
    assert resp.status_code == 200
    assert resp.json()["duration_mins"] == 50
    assert resp.json()["name"] == "Golf Fitness"

    resp = await api.delete(f"{SERVICES}/{created['id']}")
    assert resp.status_code == 200
    assert resp.json()["is_active"] is False
    assert "Golf Fitness" not in [s["name"] for s in (await api.get(SERVICES)).json()]
    assert (await api.get(f"{SERVICES}/{created['id']}")).status_code == 200


async def test_service_validation(api):
    zero = await api.post(SERVICES, json={"name": "Nothing", "duration_mins": 0, "price": "10.00"})
    fractional_cents = await api.post(SERVICES, json={"name": "Odd", "duration_mins": 30, "price": "10.005"})
    assert zero.status_code == 422
    assert fractional_cents.status_code == 422
    assert (await api.get(f"{SERVICES}/9999")).status_code == 404


async def test_replace_weekly_availability(api, seeded):
    current = (await api.get(AVAILABILITY)).json()
    assert [(w["day_of_week"], w["start_time"]) for w in current] == [(1, "08:00:00"), (1, "13:00:00")]
    keep_id = current[0]["id"]

    resp = await api.put(
        AVAILABILITY,
        json={
            "availability": [
                {"id": str(keep_id), "day_of_week": 1, "start_time": "07:00", "end_time": "09:00"},
                {"id": "new-1", "day_of_week": 2, "start_time": "09:00", "end_time": "12:00"},
            ]
        },
    )
    assert resp.status_code == 200
    windows = resp.json()
    assert [(w["day_of_week"], w["start_time"], w["end_time"]) for w in windows] == [
        (1, "07:00:00", "09:00:00"),
        (2, "09:00:00", "12:00:00"),
    ]
    assert windows[0]["id"] == keep_id

    slots = await api.get(
        "/api/v1/bookings/availability",
        params={"date": "2026-03-02", "serviceId": seeded["training_id"]},
    )
    starts = [s["start_time"] for s in slots.json()["data"]["slots"]]
    assert starts == ["2026-03-02T07:30:00Z", "2026-03-02T08:00:00Z"]


async def test_availability_validation(api, seeded):
    overlapping = await api.put(
        AVAILABILITY,
        json={
            "availability": [
                {"day_of_week": 1, "start_time": "08:00", "end_time": "12:00"},
                {"day_of_week": 1, "start_time": "11:00", "end_time": "13:00"},
            ]
        },
    )
    backwards = await api.put(
        AVAILABILITY,
        json={"availability": [{"day_of_week": 3, "start_time": "12:00", "end_time": "09:00"}]},
    )
    bad_day = await api.put(
        AVAILABILITY,
        json={"availability": [{"day_of_week": 7, "start_time": "08:00", "end_time": "09:00"}]},
    )
    assert overlapping.status_code == 422
    assert backwards.status_code == 422
    assert bad_day.status_code == 422
    assert len((await api.get(AVAILABILITY)).json()) == 2


async def test_blocked_times_crud(api):
    resp = await api.post(
        BLOCKED,
        json={"start_datetime": "2026-03-04T12:00:00Z", "end_datetime": "2026-03-04T18:00:00Z", "reason": "Conference"},
    )
    assert resp.status_code == 201
    blocked_id = resp.json()["id"]

    hits = await api.get(BLOCKED, params={"from": "2026-03-04T00:00:00", "to": "2026-03-05T00:00:00"})
    misses = await api.get(BLOCKED, params={"from": "2026-03-04T18:00:00", "to": "2026-03-05T00:00:00"})
    assert [b["id"] for b in hits.json()] == [blocked_id]
    assert misses.json() == []

    assert (await api.delete(f"{BLOCKED}/{blocked_id}")).status_code == 204
    assert (await api.delete(f"{BLOCKED}/{blocked_id}")).status_code == 404


async def test_blocked_time_must_end_after_start(api):
    resp = await api.post(
        BLOCKED,
        json={"start_datetime": "2026-03-04T12:00:00Z", "end_datetime": "2026-03-04T12:00:00Z"},
    )
    assert resp.status_code == 422


async def test_clients(api):
    resp = await api.post(CLIENTS, json={"email": "sam@example.com", "name": "Sam", "phone": "312-555-0101"})
    assert resp.status_code == 201
    client_id = resp.json()["id"]
    assert (await api.get(f"{CLIENTS}/{client_id}")).json()["email"] == "sam@example.com"

    dup = await api.post(CLIENTS, json={"email": "sam@example.com", "name": "Sam Again"})
    assert dup.status_code == 409
    assert (await api.post(CLIENTS, json={"email": "not-an-email", "name": "X"})).status_code == 422
    assert (await api.get(f"{CLIENTS}/9999")).status_code == 404


async def test_service_patch_rejects_null_for_required_fields(api, seeded):
    url = f"{SERVICES}/{seeded['training_id']}"
    for field in ("name", "duration_mins", "price", "is_active"):
        resp = await api.patch(url, json={field: None})
        assert resp.status_code == 422, field
    resp = await api.patch(url, json={"description": None, "category": None})
    assert resp.status_code == 200
    assert resp.json()["name"] == "Personal Training"


async def test_service_duration_is_capped_at_one_day(api):
    day = await api.post(SERVICES, json={"name": "Retreat", "duration_mins": 1440, "price": "500.00"})
    longer = await api.post(SERVICES, json={"name": "Too Long", "duration_mins": 1441, "price": "500.00"})
    assert day.status_code == 201
    assert longer.status_code == 422
    assert (await api.patch(f"{SERVICES}/{day.json()['id']}", json={"duration_mins": 1441})).status_code == 422


async def test_service_created_at_is_utc(api):
    resp = await api.post(SERVICES, json={"name": "Mobility", "duration_mins": 30, "price": "40.00"})
    assert resp.json()["created_at"].endswith("Z")


async def test_weekly_availability_rejects_repeated_window_id(api, seeded):
    keep_id = (await api.get(AVAILABILITY)).json()[0]["id"]
    resp = await api.put(
        AVAILABILITY,
        json={
            "availability": [
                {"id": keep_id, "day_of_week": 1, "start_time": "08:00", "end_time": "09:00"},
                {"id": str(keep_id), "day_of_week": 2, "start_time": "08:00", "end_time": "09:00"},
            ]
        },
    )
    assert resp.status_code == 422
    assert [w["day_of_week"] for w in (await api.get(AVAILABILITY)).json()] == [1, 1]


async def test_weekly_availability_allows_many_new_windows(api, seeded):
    resp = await api.put(
        AVAILABILITY,
        json={
            "availability": [
                {"day_of_week": 2, "start_time": "08:00", "end_time": "09:00"},
                {"day_of_week": 3, "start_time": "08:00", "end_time": "09:00"},
                {"id": "new-1", "day_of_week": 4, "start_time": "08:00", "end_time": "09:00"},
            ]
        },
    )
    assert resp.status_code == 200
    assert [w["day_of_week"] for w in resp.json()] == [2, 3, 4]


async def test_package_lifecycle(api):
    resp = await api.post(
        PACKAGES,
        json={"name": "Ten Pack", "session_count": 10, "price": "850.00", "validity_days": 180},
    )
    assert resp.status_code == 201
    ten = resp.json()
    assert ten["is_active"] is True
    assert ten["created_at"].endswith("Z")
    assert Decimal(ten["price"]) == Decimal("850")

    five = (
        await api.post(PACKAGES, json={"name": "Five Pack", "session_count": 5, "price": "450.00", "validity_days": 90})
    ).json()
    assert [p["name"] for p in (await api.get(PACKAGES)).json()] == ["Five Pack", "Ten Pack"]

    resp = await api.patch(f"{PACKAGES}/{ten['id']}", json={"price": "800.00"})
    assert resp.status_code == 200
    assert Decimal(resp.json()["price"]) == Decimal("800")
    assert resp.json()["session_count"] == 10

    resp = await api.delete(f"{PACKAGES}/{five['id']}")
    assert resp.status_code == 200
    assert resp.json()["is_active"] is False
    assert [p["name"] for p in (await api.get(PACKAGES)).json()] == ["Ten Pack"]
    everything = await api.get(PACKAGES, params={"include_inactive": "true"})
    assert [p["name"] for p in everything.json()] == ["Five Pack", "Ten Pack"]
    assert (await api.get(f"{PACKAGES}/{five['id']}")).status_code == 200


async def test_package_validation(api):
    no_sessions = await api.post(
        PACKAGES, json={"name": "Empty", "session_count": 0, "price": "10.00", "validity_days": 30}
    )
    no_validity = await api.post(
        PACKAGES, json={"name": "Expired", "session_count": 3, "price": "10.00", "validity_days": 0}
    )
    assert no_sessions.status_code == 422
    assert no_validity.status_code == 422
    assert (await api.get(f"{PACKAGES}/9999")).status_code == 404
    assert (await api.patch(f"{PACKAGES}/9999", json={"name": "Ghost"})).status_code == 404
    assert (await api.delete(f"{PACKAGES}/9999")).status_code == 404

    created = (
        await api.post(PACKAGES, json={"name": "Trio", "session_count": 3, "price": "270.00", "validity_days": 60})
    ).json()
    assert (await api.patch(f"{PACKAGES}/{created['id']}", json={"session_count": None})).status_code == 422


async def test_list_and_search_clients(api, seeded):
    await api.post(CLIENTS, json={"email": "sam@example.com", "name": "Sam Rivera"})
    await api.post(CLIENTS, json={"email": "pat@lakeview.org", "name": "Pat Jones"})

    everyone = (await api.get(CLIENTS)).json()
    assert [c["name"] for c in everyone] == ["Pat Jones", "Sam Rivera", "Jane Client"]

    by_name = (await api.get(CLIENTS, params={"search": "rive"})).json()
    by_email = (await api.get(CLIENTS, params={"search": "lakeview"})).json()
    assert [c["name"] for c in by_name] == ["Sam Rivera"]
    assert [c["name"] for c in by_email] == ["Pat Jones"]
    assert (await api.get(CLIENTS, params={"search": "nobody"})).json() == []


async def test_update_client(api, seeded):
    url = f"{CLIENTS}/{seeded['client_id']}"
    resp = await api.patch(url, json={"name": "Jane Doe", "phone": "312-555-0199"})
    assert resp.status_code == 200
    assert resp.json()["name"] == "Jane Doe"
    assert resp.json()["email"] == "jane@example.com"

    resp = await api.patch(url, json={"phone": None})
    assert resp.status_code == 200
    assert resp.json()["phone"] is None
    assert resp.json()["name"] == "Jane Doe"

    assert (await api.patch(url, json={"name": None})).status_code == 422
    assert (await api.patch(url, json={"name": ""})).status_code == 422
    assert (await api.patch(url, json={"phone": "9" * 21})).status_code == 422
    assert (await api.patch(f"{CLIENTS}/9999", json={"name": "Ghost"})).status_code == 404

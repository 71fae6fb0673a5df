from datetime import timedelta

from helpers import make_appointment
from src.services.schedule import UPCOMING_LIMIT, clinic_now


def test_create_defaults_status_and_blank_optionals(client):
    appt = make_appointment(client, "2026-10-20T10:00:00", email="", notes="")
    assert appt["status"] == "scheduled"
    assert appt["email"] is None
    assert appt["notes"] is None
    assert appt["patientId"] is None
    assert appt["appointmentDate"] == "2026-10-20T10:00:00"


def test_status_is_not_settable_on_create(client):
    appt = make_appointment(client, "2026-10-20T10:00:00", status="completed")
    assert appt["status"] == "scheduled"


def test_weekend_appointment_is_accepted_by_server(client):
    # 2026-10-24 is a Saturday, 2026-10-25 a Sunday
    saturday = make_appointment(client, "2026-10-24T10:00:00")
    sunday = make_appointment(client, "2026-10-25T09:00:00")
    assert client.get(f"/api/appointments/{saturday['id']}").status_code == 200
    assert client.get(f"/api/appointments/{sunday['id']}").status_code == 200


def test_weekend_rule_can_be_enforced(app, client):
    app.config["ENFORCE_WEEKDAY_APPOINTMENTS"] = True
    resp = client.post(
        "/api/appointments",
        json={
            "firstName": "Ion",
            "lastName": "Ionescu",
            "phone": "0733",
            "appointmentDate": "2026-10-24T10:00:00",
            "purpose": "control",
        },
    )
    assert resp.status_code == 400
    assert "weekend" in resp.get_json()["message"].lower()

    weekday = make_appointment(client, "2026-10-23T10:00:00")
    moved = client.put(f"/api/appointments/{weekday['id']}", json={"appointmentDate": "2026-10-25T10:00:00"})
    assert moved.status_code == 400


def test_aware_datetime_is_stored_in_clinic_time(app, client):
    app.config["CLINIC_TIMEZONE"] = "Europe/Bucharest"
    appt = make_appointment(client, "2026-10-20T07:00:00Z")
    # Bucharest is UTC+3 in October (EEST)
    assert appt["appointmentDate"] == "2026-10-20T10:00:00"


def test_invalid_appointment_payload(client):
    resp = client.post("/api/appointments", json={"firstName": "Ion", "appointmentDate": "tomorrow"})
    assert resp.status_code == 400
    assert resp.get_json()["message"] == "Invalid appointment data"


def test_list_by_day_includes_both_ends_of_the_day(client):
    make_appointment(client, "2026-10-19T23:59:00")
    start = make_appointment(client, "2026-10-20T00:00:00")
    late = make_appointment(client, "2026-10-20T23:59:59")
    mid = make_appointment(client, "2026-10-20T12:00:00")
    make_appointment(client, "2026-10-21T00:00:00")

    resp = client.get("/api/appointments?date=2026-10-20")
    assert resp.status_code == 200
    assert [a["id"] for a in resp.get_json()] == [start["id"], mid["id"], late["id"]]
    assert len(client.get("/api/appointments").get_json()) == 5


def test_list_by_day_rejects_malformed_date(client):
    assert client.get("/api/appointments?date=20-10-2026").status_code == 400


def test_month_bucket_boundaries(client):
    make_appointment(client, "2026-01-31T23:30:00")
    first = make_appointment(client, "2026-02-01T00:00:00")
    last = make_appointment(client, "2026-02-28T23:59:59")
    make_appointment(client, "2026-03-01T00:00:00")

    resp = client.get("/api/appointments/month/2026/2")
    assert resp.status_code == 200
    assert [a["id"] for a in resp.get_json()] == [first["id"], last["id"]]


def test_month_out_of_range_is_400(client):
    assert client.get("/api/appointments/month/2026/13").status_code == 400
    assert client.get("/api/appointments/month/2026/0").status_code == 400


def test_upcoming_is_future_only_ascending_and_capped(client):
    now = clinic_now("UTC")
    make_appointment(client, (now - timedelta(days=1)).isoformat(timespec="seconds"))
    for days in range(UPCOMING_LIMIT + 2, 0, -1):
        make_appointment(client, (now + timedelta(days=days)).isoformat(timespec="seconds"))

    upcoming = client.get("/api/appointments/upcoming").get_json()
    assert len(upcoming) == UPCOMING_LIMIT
    dates = [a["appointmentDate"] for a in upcoming]
    assert dates == sorted(dates)
    assert all(d > now.isoformat() for d in dates)


def test_update_status_and_reject_unknown_status(client):
    appt = make_appointment(client, "2026-10-20T10:00:00")

    resp = client.put(f"/api/appointments/{appt['id']}", json={"status": "Confirmed"})
    assert resp.status_code == 200
    assert resp.get_json()["status"] == "confirmed"

    assert client.put(f"/api/appointments/{appt['id']}", json={"status": "lost"}).status_code == 400
    assert client.put("/api/appointments/999", json={"notes": "x"}).status_code == 404


def test_delete_appointment(client):
    appt = make_appointment(client, "2026-10-20T10:00:00")
    assert client.delete(f"/api/appointments/{appt['id']}").status_code == 200
    assert client.get(f"/api/appointments/{appt['id']}").status_code == 404
    assert client.delete(f"/api/appointments/{appt['id']}").status_code == 404


def test_available_slots_skip_booked_and_cancelled_are_free(client):
    make_appointment(client, "2026-10-20T09:00:00")
    cancelled = make_appointment(client, "2026-10-20T09:30:00")
    client.put(f"/api/appointments/{cancelled['id']}", json={"status": "cancelled"})

    body = client.get("/api/appointments/slots?date=2026-10-20").get_json()
    assert body["date"] == "2026-10-20"
    assert "09:00" not in body["slots"]
    assert "09:30" in body["slots"]


def test_no_slots_on_weekends(client):
    assert client.get("/api/appointments/slots?date=2026-10-24").get_json()["slots"] == []

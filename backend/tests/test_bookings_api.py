"""API tests for bookings: pending record, default total, validation, ownership."""
from app.services.bookings import session_total


def _teacher(client, name="Prof. Rajesh Kumar"):
    return next(t for t in client.get("/api/teachers").json() if t["name"] == name)


def _book(client, teacher_id, **overrides):
    body = {
        "teacherId": teacher_id,
        "date": "2026-11-02",
        "time": "17:30",
        "duration": 90,
        "subject": "Spoken English",
    }
    body.update(overrides)
    return client.post("/api/bookings", json=body)


def test_session_total_rounds_up():
    assert session_total(1200, 60) == 1200
    assert session_total(1200, 90) == 1800
    assert session_total(1000, 45) == 750
    assert session_total(1300, 50) == 1084  # 1083.33


def test_booking_requires_session(client):
    teacher = _teacher(client)
    assert _book(client, teacher["id"]).status_code == 401


def test_create_booking_pending_with_default_total(auth_client, user_id):
    teacher = _teacher(auth_client)
    r = _book(auth_client, teacher["id"])
    assert r.status_code == 200, r.text
    b = r.json()
    assert b["status"] == "pending"
    assert b["userId"] == user_id
    assert b["teacherId"] == teacher["id"]
    assert b["duration"] == 90
    assert b["subject"] == "Spoken English"
    assert b["totalAmount"] == 1800
    assert b["sessionDate"].startswith("2026-11-02T17:30")


def test_explicit_total_and_message_as_subject(auth_client):
    teacher = _teacher(auth_client)
    r = _book(auth_client, teacher["id"], subject=None, message="Essay feedback", totalCost=500)
    assert r.status_code == 200, r.text
    assert r.json()["subject"] == "Essay feedback"
    assert r.json()["totalAmount"] == 500


def test_booking_validation(auth_client):
    teacher = _teacher(auth_client)
    assert _book(auth_client, teacher["id"], subject="").status_code == 400
    assert _book(auth_client, teacher["id"], duration=0).status_code == 400
    assert _book(auth_client, teacher["id"], date="next tuesday").status_code == 400


def test_booking_unknown_teacher_is_404(auth_client):
    r = _book(auth_client, 987654)
    assert r.status_code == 404
    assert r.json() == {"message": "Teacher not found"}


def test_same_slot_twice_is_allowed(auth_client):
    teacher = _teacher(auth_client)
    assert _book(auth_client, teacher["id"]).status_code == 200
    assert _book(auth_client, teacher["id"]).status_code == 200
    assert len(auth_client.get("/api/bookings").json()) == 2


def test_list_bookings_scoped_and_newest_first(client, auth_client):
    teacher = _teacher(auth_client)
    first = _book(auth_client, teacher["id"]).json()
    second = _book(auth_client, teacher["id"], subject="Grammar").json()
    assert [b["id"] for b in auth_client.get("/api/bookings").json()] == [second["id"], first["id"]]
    client.post("/api/login", json={"idToken": "good:another-student"})
    assert client.get("/api/bookings").json() == []

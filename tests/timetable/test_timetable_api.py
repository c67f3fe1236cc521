from __future__ import annotations

import pytest

from src.attendease.attendease.container import build_container
from src.attendease.attendease.main import create_app


@pytest.fixture
def app(monkeypatch, timetables_repo):
    monkeypatch.setenv("APP_ENV", "testing")
    return create_app(build_container(timetables_repo=timetables_repo))


@pytest.fixture
def client(app):
    return app.test_client()


def _login(client, role="admin", user_id=1):
    with client.session_transaction() as sess:
        sess["user_id"] = user_id
        sess["role"] = role


PERIOD = {
    "day": "Monday",
    "subject": "Data Structures",
    "faculty": "Dr. Doe",
    "room": "CS-101",
    "timeSlot": "9:00 AM - 10:00 AM",
}


def test_requires_session_role(client):
    res = client.get("/api/timetable/CSE-A/3")
    assert res.status_code == 401
    assert res.get_json()["success"] is False


def test_get_empty_timetable(client):
    _login(client, role="student")
    res = client.get("/api/timetable/CSE-A/3")

    body = res.get_json()
    assert res.status_code == 200
    assert body["data"]["schedule"] == {"monday": [], "tuesday": [], "wednesday": [], "thursday": [], "friday": []}


def test_add_then_conflict(client):
    _login(client)
    ok = client.post("/api/timetable/CSE-A/3/periods", json=PERIOD)
    assert ok.status_code == 200
    assert ok.get_json()["data"]["schedule"]["monday"][0]["startTime"] == "9:00 AM"

    clash = client.post(
        "/api/timetable/CSE-A/3/periods",
        json={**PERIOD, "subject": "Algorithms", "faculty": "Dr. Smith", "room": "CS-102", "timeSlot": "9:30 AM - 10:30 AM"},
    )
    body = clash.get_json()
    assert clash.status_code == 400
    assert body["reason"] == "SLOT_CONFLICT"
    assert body["conflicts"][0]["conflictWith"]["subject"] == "Data Structures"
    assert body["message"].startswith("Schedule conflicts with existing class")


def test_student_cannot_add(client):
    _login(client, role="student")
    res = client.post("/api/timetable/CSE-A/3/periods", json=PERIOD)
    assert res.status_code == 403


def test_check_endpoint_collects_conflicts(client):
    _login(client, role="faculty")
    client.post("/api/timetable/CSE-A/3/periods", json=PERIOD)

    res = client.post("/api/timetable/CSE-A/3/periods/check", json={**PERIOD, "timeSlot": "9:30 AM - 10:30 AM"})

    data = res.get_json()["data"]
    assert res.status_code == 200
    assert data["accepted"] is False
    assert len(data["conflicts"]) == 3


def test_update_and_delete_period(client):
    _login(client, role="faculty")
    client.post("/api/timetable/CSE-A/3/periods", json=PERIOD)

    upd = client.put("/api/timetable/CSE-A/3/periods/monday/0", json={**PERIOD, "timeSlot": "11:00 AM - 12:00 PM"})
    assert upd.status_code == 200
    assert upd.get_json()["data"]["schedule"]["monday"][0]["endTime"] == "12:00 PM"

    missing = client.delete("/api/timetable/CSE-A/3/periods/monday/4")
    assert missing.status_code == 404

    deleted = client.delete("/api/timetable/CSE-A/3/periods/monday/0")
    assert deleted.status_code == 200
    assert deleted.get_json()["data"]["subject"] == "Data Structures"


def test_replace_day_validates_body(client):
    _login(client)
    missing = client.put("/api/timetable/CSE-A/3/days/tuesday", json={"periods": [PERIOD]})
    assert missing.status_code == 404
    assert missing.get_json()["message"] == "Timetable not found"

    client.post("/api/timetable/CSE-A/3/periods", json=PERIOD)
    res = client.put("/api/timetable/CSE-A/3/days/tuesday", json={"periods": "nope"})
    assert res.status_code == 400

    res = client.put(
        "/api/timetable/CSE-A/3/days/tuesday",
        json={"periods": [{**PERIOD, "day": "ignored"}, {"subject": "incomplete"}]},
    )
    assert res.status_code == 200
    assert len(res.get_json()["data"]["schedule"]["tuesday"]) == 1


def test_delete_timetable_admin_only(client):
    _login(client, role="faculty")
    client.post("/api/timetable/CSE-A/3/periods", json=PERIOD)
    assert client.delete("/api/timetable/CSE-A/3").status_code == 403

    _login(client, role="admin")
    assert client.delete("/api/timetable/CSE-A/3").status_code == 200
    assert client.delete("/api/timetable/CSE-A/3").status_code == 404


def test_faculty_timetable(client):
    _login(client)
    client.post("/api/timetable/CSE-A/3/periods", json=PERIOD)
    client.post("/api/timetable/CSE-B/3/periods", json={**PERIOD, "day": "Tuesday", "room": "CS-201"})

    res = client.get("/api/faculty/Dr.%20Doe/timetable?semester=3")

    data = res.get_json()["data"]
    assert [(p["class"], p["day"]) for p in data] == [("CSE-A", "monday"), ("CSE-B", "tuesday")]


def test_invalid_semester_in_url(client):
    _login(client)
    assert client.get("/api/timetable/CSE-A/12").status_code == 400


@pytest.mark.parametrize(
    "times",
    [
        {"startTime": 900, "endTime": 1000},
        {"timeSlot": ["9:00 AM", "10:00 AM"]},
        {"startTime": {"h": 9}, "endTime": "10:00 AM"},
    ],
)
def test_non_string_times_are_bad_requests(client, timetables_repo, times):
    _login(client)
    body = {k: v for k, v in PERIOD.items() if k != "timeSlot"}

    res = client.post("/api/timetable/CSE-A/3/periods", json={**body, **times})

    assert res.status_code == 400
    assert res.get_json()["success"] is False
    assert timetables_repo.get(class_name="CSE-A", semester=3) is None


def test_non_string_day_is_bad_request(client):
    _login(client)
    client.post("/api/timetable/CSE-A/3/periods", json=PERIOD)

    res = client.put("/api/timetable/CSE-A/3/periods/monday/0", json={**PERIOD, "day": 1})

    assert res.status_code == 400

from types import SimpleNamespace

import pytest
from flask import Flask

from conftest import ALICE, COMPANY, DEPT_MANAGER, World
from src.training_events.training_events.approvals.controller import register as register_approvals
from src.training_events.training_events.attendance.controller import register as register_attendance
from src.training_events.training_events.core.constants import message
from src.training_events.training_events.core.enums import ApprovalType


@pytest.fixture
def app_world():
    world = World()
    world.events.add(1, ApprovalType.MANAGER, course_module_id=900)
    container = SimpleNamespace(
        approval_service=world.approvals,
        attendance_service=world.bookings,
        events_repo=world.events,
    )
    app = Flask(__name__)
    app.secret_key = "test-secret"
    register_approvals(app, container)
    register_attendance(app, container)
    return app, world


def _login(client, user_id):
    with client.session_transaction() as sess:
        sess["user_id"] = user_id


def test_requires_login(app_world):
    app, _ = app_world
    resp = app.test_client().get("/approvals")
    assert resp.status_code == 401


def test_request_then_approve_over_http(app_world):
    app, world = app_world
    client = app.test_client()

    _login(client, ALICE)
    resp = client.post(
        "/trainingevent/1/attendance",
        data={"userid": str(ALICE), "companyid": str(COMPANY), "cmid": "900", "requesttype": "1", "booking_notes": "hi"},
    )
    assert resp.status_code == 200
    assert resp.get_json()["result"] is True

    form = client.get(f"/trainingevent/1/attendance?userid={ALICE}").get_json()
    assert form["attendanceid"] > 0
    assert form["removeme_label"] == "removerequest"

    _login(client, DEPT_MANAGER)
    assert client.get("/approvals/pending").get_json()["pending"] is True
    approvals = client.get("/approvals").get_json()["approvals"]
    assert [a["user_id"] for a in approvals] == [ALICE]

    resp = client.post(f"/approvals/{approvals[0]['attendance_id']}/approve")
    assert resp.status_code == 200
    assert resp.get_json()["attendance"]["approved"] is True
    assert client.get("/approvals/pending").get_json()["pending"] is False


def test_approve_without_authority_is_forbidden(app_world):
    app, world = app_world
    rec = world.seed(ALICE, 1, tm_ok=True)
    client = app.test_client()
    _login(client, ALICE)

    resp = client.post(f"/approvals/{rec.attendance_id}/approve")

    assert resp.status_code == 403
    assert resp.get_json()["result"] is False


def test_store_failure_returns_message(app_world):
    app, world = app_world
    world.attendance.fail_inserts = True
    client = app.test_client()
    _login(client, ALICE)

    resp = client.post("/trainingevent/1/attendance", data={"userid": str(ALICE), "requesttype": "1"})

    assert resp.status_code == 400
    assert resp.get_json() == {"result": False, "error": message("updatefailed")}


def test_bad_submission_is_rejected(app_world):
    app, _ = app_world
    client = app.test_client()
    _login(client, ALICE)

    resp = client.post("/trainingevent/1/attendance", data={"userid": "abc"})

    assert resp.status_code == 400

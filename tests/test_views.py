"""Tests for the tab views and form actions."""

import json

import pytest

from conftest import make_entry
from hypertrophy.db import get_db
from hypertrophy.models import store
from hypertrophy.models.partition import Namespace, PartitionId


def _partition(app, partition=None):
    with app.app_context():
        return store.load_partition(partition or PartitionId.anonymous())


def test_health(client):
    assert client.get("/health").get_json() == {"status": "ok"}


def test_index_redirects_to_dashboard(client):
    resp = client.get("/")
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/dashboard")


@pytest.mark.parametrize("tab", ["dashboard", "log", "exercises", "history"])
def test_tabs_render(client, tab):
    assert client.get(f"/{tab}").status_code == 200


def test_unknown_tab_is_404(client):
    assert client.get("/settings").status_code == 404


def test_empty_dashboard_shows_welcome(client):
    html = client.get("/dashboard").get_data(as_text=True)
    assert "Welcome to Hypertrophy App!" in html


def test_add_exercise(app, client):
    resp = client.post("/exercises", data={"name": "  Back Squat "})
    assert resp.status_code == 302
    exercises, _ = _partition(app)
    assert [e["name"] for e in exercises] == ["Back Squat"]
    assert "Back Squat" in client.get("/exercises").get_data(as_text=True)


def test_add_exercise_with_blank_name_is_no_op(app, client):
    client.post("/exercises", data={"name": ""})
    assert _partition(app) == ([], [])


def test_log_session_and_dashboard(app, client):
    client.post("/exercises", data={"name": "Back Squat"})
    exercise_id = _partition(app)[0][0]["id"]

    resp = client.post(
        "/log",
        data={"exercise_id": exercise_id, "weight": "100", "reps": "5", "sets": "3", "difficulty": "5"},
    )
    assert resp.status_code == 302
    assert f"exercise_id={exercise_id}" in resp.headers["Location"]

    _, workouts = _partition(app)
    assert len(workouts) == 1
    assert workouts[0]["difficulty"] == 5

    html = client.get("/dashboard").get_data(as_text=True)
    assert '<strong id="total-volume">1,500</strong>' in html
    assert '<strong id="total-sessions">1</strong>' in html
    assert "RPE 10" in html
    assert "Great consistency!" in html


def test_invalid_log_is_no_op(app, client):
    client.post("/exercises", data={"name": "Back Squat"})
    exercise_id = _partition(app)[0][0]["id"]
    client.post("/log", data={"exercise_id": exercise_id, "weight": "100", "reps": "", "sets": "3"})
    client.post("/log", data={"exercise_id": "does-not-exist", "weight": "100", "reps": "5", "sets": "3"})
    assert _partition(app)[1] == []


def test_progression_arrow_on_dashboard(app, client):
    client.post("/exercises", data={"name": "Bench Press"})
    exercise_id = _partition(app)[0][0]["id"]
    for weight in ("80", "85"):
        client.post("/log", data={"exercise_id": exercise_id, "weight": weight, "reps": "8", "sets": "3"})
    html = client.get("/dashboard").get_data(as_text=True)
    assert "progression-up" in html


def test_delete_exercise_cascades(app, client):
    client.post("/exercises", data={"name": "Back Squat"})
    client.post("/exercises", data={"name": "Bench Press"})
    squat, bench = _partition(app)[0]
    client.post("/log", data={"exercise_id": squat["id"], "weight": "100", "reps": "5", "sets": "3"})
    client.post("/log", data={"exercise_id": bench["id"], "weight": "80", "reps": "8", "sets": "3"})

    client.post(f"/exercises/{squat['id']}/delete")

    exercises, workouts = _partition(app)
    assert exercises == [bench]
    assert [w["exerciseId"] for w in workouts] == [bench["id"]]


def test_delete_workout(app, client):
    client.post("/exercises", data={"name": "Back Squat"})
    exercise_id = _partition(app)[0][0]["id"]
    for reps in ("5", "6"):
        client.post("/log", data={"exercise_id": exercise_id, "weight": "100", "reps": reps, "sets": "3"})
    newest, oldest = _partition(app)[1]

    resp = client.post(f"/history/{oldest['id']}/delete")
    assert resp.headers["Location"].endswith("/history")
    assert _partition(app)[1] == [newest]


def test_entries_with_lift_id_render_with_exercise_name(app, client):
    squat = {"id": "e1", "name": "Back Squat", "createdAt": "2025-01-01T00:00:00.000Z"}
    entries = [
        {**make_entry("w2", None, "2025-01-03T00:00:00.000Z", weight=100), "liftId": "e1"},
        {**make_entry("w1", None, "2025-01-02T00:00:00.000Z", weight=90), "liftId": "e1"},
    ]
    for entry in entries:
        del entry["exerciseId"]
    with app.app_context():
        store.save_partition(PartitionId.anonymous(), [squat], entries)

    dashboard = client.get("/dashboard").get_data(as_text=True)
    assert "Back Squat" in dashboard
    assert "Unknown Lift" not in dashboard
    assert "progression-up" in dashboard

    history = client.get("/history").get_data(as_text=True)
    assert "/progress/exercise/e1/png" in history
    assert "/progress/exercise//png" not in history


def test_malformed_stored_exercises_do_not_break_adding(app, client):
    with app.app_context():
        db = get_db()
        db.execute(
            "INSERT INTO local_storage (key, value) VALUES (?, ?)",
            (PartitionId.anonymous().storage_key(Namespace.EXERCISES), json.dumps([1, 2])),
        )
        db.commit()

    resp = client.post("/exercises", data={"name": "Back Squat"})
    assert resp.status_code == 302
    assert [e["name"] for e in _partition(app)[0]] == ["Back Squat"]


class TestIdentity:
    def test_sign_in_switches_partition(self, app, client, bridge):
        client.post("/exercises", data={"name": "Anonymous Lift"}, follow_redirects=True)
        client.post("/auth/sign-in", data={"user_id": "user_carol"})

        html = client.get("/exercises").get_data(as_text=True)
        assert "Signed in as user_carol" in html
        assert "Anonymous Lift" not in html

        client.post("/auth/sign-out")
        assert "Anonymous Lift" in client.get("/exercises").get_data(as_text=True)

    def test_sign_in_via_identity_header(self, client, bridge):
        client.post("/auth/sign-in", headers={"X-Auth-User": "user_dave"})
        assert "Signed in as user_dave" in client.get("/dashboard").get_data(as_text=True)

    def test_sign_in_without_user_id_stays_anonymous(self, client, bridge):
        client.post("/auth/sign-in", data={"user_id": " "})
        assert "Signed in as" not in client.get("/dashboard").get_data(as_text=True)
        assert bridge.session.calls == []

    def test_sign_in_loads_cloud_data(self, app, client, bridge):
        with app.app_context():
            bridge.push("user_erin", [{"id": "c1", "name": "Cloud Curl", "createdAt": "2025-01-01T00:00:00.000Z"}], [])
        client.post("/auth/sign-in", data={"user_id": "user_erin"})
        assert "Cloud Curl" in client.get("/exercises").get_data(as_text=True)

    def test_sign_in_pushes_local_data_when_cloud_is_empty(self, app, client, bridge):
        client.post("/auth/sign-in", data={"user_id": "user_finn"})
        client.post("/exercises", data={"name": "Hack Squat"})
        client.post("/auth/sign-out")
        client.post("/auth/sign-in", data={"user_id": "user_finn"})

        with app.app_context():
            exercises, _ = bridge.pull("user_finn")
        assert [e["name"] for e in exercises] == ["Hack Squat"]

    def test_sign_in_with_cloud_down_keeps_local(self, app, client, down_bridge):
        with app.app_context():
            store.add_exercise(PartitionId.for_user("user_gus"), "Local Press")
        resp = client.post("/auth/sign-in", data={"user_id": "user_gus"})
        assert resp.status_code == 302
        assert "Local Press" in client.get("/exercises").get_data(as_text=True)

    def test_manual_sync(self, app, client, bridge):
        client.post("/auth/sign-in", data={"user_id": "user_hana"})
        client.post("/exercises", data={"name": "Dips"})
        client.post("/auth/sync")
        with app.app_context():
            exercises, _ = bridge.pull("user_hana")
        assert [e["name"] for e in exercises] == ["Dips"]

    def test_manual_sync_is_no_op_when_anonymous(self, client, bridge):
        client.post("/auth/sync")
        assert bridge.session.calls == []

    def test_cloud_entry_without_weight_is_dropped(self, app, client, bridge):
        lift = {"id": "c1", "name": "Cloud Curl", "createdAt": "2025-01-01T00:00:00.000Z"}
        broken = {k: v for k, v in make_entry("cw1", "c1", "2025-01-02T00:00:00.000Z").items() if k != "weight"}
        with app.app_context():
            bridge.push("user_ivy", [lift], [broken])
        client.post("/auth/sign-in", data={"user_id": "user_ivy"})

        resp = client.get("/dashboard")
        assert resp.status_code == 200
        assert '<strong id="total-sessions">0</strong>' in resp.get_data(as_text=True)
        assert _partition(app, PartitionId.for_user("user_ivy")) == ([lift], [])

    def test_last_sync_is_shown_after_sign_in(self, client, bridge):
        assert 'id="last-sync"' not in client.get("/dashboard").get_data(as_text=True)

        client.post("/auth/sign-in", data={"user_id": "user_jo"})
        assert "Last synced" in client.get("/dashboard").get_data(as_text=True)

        client.post("/auth/sign-out")
        assert "Last synced" not in client.get("/dashboard").get_data(as_text=True)

    def test_last_sync_not_shown_when_cloud_is_down(self, client, down_bridge):
        client.post("/auth/sign-in", data={"user_id": "user_kim"})
        client.post("/auth/sync")
        assert "Last synced" not in client.get("/dashboard").get_data(as_text=True)

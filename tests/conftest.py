"""Pytest configuration and fixtures."""

from urllib.parse import urlsplit

import pytest
import requests

from hypertrophy import create_app
from hypertrophy.models.partition import PartitionId

CLOUD_URL = "http://cloud.test/api"


class FakeResponse:
    """Enough of requests.Response for the sync client."""

    def __init__(self, resp):
        self.status_code = resp.status_code
        self.ok = resp.status_code < 400
        self._resp = resp

    def json(self):
        data = self._resp.get_json(silent=True)
        if data is None:
            raise ValueError("No JSON body")
        return data


class AppSession:
    """Routes SyncBridge calls into the app's own cloud API via the test client."""

    def __init__(self, app):
        self.client = app.test_client()
        self.calls = []

    def post(self, url, json=None, timeout=None):
        self.calls.append(("POST", urlsplit(url).path))
        return FakeResponse(self.client.post(urlsplit(url).path, json=json))

    def get(self, url, params=None, timeout=None):
        self.calls.append(("GET", urlsplit(url).path))
        return FakeResponse(self.client.get(urlsplit(url).path, query_string=params))


class DownSession:
    """Every call fails like an unreachable server."""

    def __init__(self):
        self.calls = []

    def post(self, url, **kwargs):
        self.calls.append(("POST", urlsplit(url).path))
        raise requests.ConnectionError("cloud unreachable")

    def get(self, url, **kwargs):
        self.calls.append(("GET", urlsplit(url).path))
        raise requests.ConnectionError("cloud unreachable")


@pytest.fixture
def app(tmp_path):
    app = create_app({
        "TESTING": True,
        "SECRET_KEY": "test",
        "DATABASE": str(tmp_path / "local.db"),
        "SQLALCHEMY_DATABASE_URI": "sqlite:///" + str(tmp_path / "profiles.db"),
        "SYNC_BASE_URL": CLOUD_URL,
    })
    yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def runner(app):
    return app.test_cli_runner()


@pytest.fixture
def bridge(app):
    """The app's SyncBridge, wired to the in-process cloud API."""
    bridge = app.extensions["sync_bridge"]
    bridge.session = AppSession(app)
    return bridge


@pytest.fixture
def down_bridge(app):
    bridge = app.extensions["sync_bridge"]
    bridge.session = DownSession()
    return bridge


@pytest.fixture
def anon():
    return PartitionId.anonymous()


@pytest.fixture
def alice():
    return PartitionId.for_user("user_alice")


def make_entry(entry_id, exercise_id, date, weight=100, reps=5, sets=3, difficulty=3):
    return {
        "id": entry_id,
        "exerciseId": exercise_id,
        "weight": weight,
        "reps": reps,
        "sets": sets,
        "difficulty": difficulty,
        "date": date,
    }

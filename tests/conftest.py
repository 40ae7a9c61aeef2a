import json
import time

import pytest
import requests

from config import Settings


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=None):
        self.status_code = status_code
        self._payload = payload
        if text is None:
            text = "" if payload is None else json.dumps(payload)
        self.text = text
        self.content = text.encode()

    def json(self):
        return json.loads(self.text)


class FakeSession:
    """Stands in for requests.Session: replays queued responses and records calls."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def request(self, method, url, headers=None, params=None, json=None, timeout=None):
        self.calls.append({"method": method, "url": url, "headers": headers, "params": params,
                           "json": json, "timeout": timeout})
        resp = self.responses.pop(0)
        if isinstance(resp, Exception):
            raise resp
        return resp


@pytest.fixture
def fake_session():
    return FakeSession


@pytest.fixture
def response():
    return FakeResponse


@pytest.fixture
def connection_error():
    return requests.ConnectionError("connection refused")


@pytest.fixture
def settings(tmp_path):
    return Settings(db_path=str(tmp_path / "db" / "calendar.db"), admin_user="admin", admin_password="12345")


@pytest.fixture
def host_tz(monkeypatch):
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset not available")

    def set_tz(name):
        monkeypatch.setenv("TZ", name)
        time.tzset()

    yield set_tz
    monkeypatch.undo()
    time.tzset()

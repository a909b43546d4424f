"""Shared fixtures: an in-memory stand-in for the realtime database REST API."""
import json
import httpx
import pytest
from rtdb_orm import ORM, set_active_orm

BASE_URL = "https://test-db.example.com"


class FakeRealtimeDatabase:
    """Serves GET/PUT/PATCH/DELETE on `<key>.json` documents from a dict."""

    def __init__(self):
        self.data = {}
        self.requests = []
        self.fail_on = set()

    def _respond(self, value, status_code=200) -> httpx.Response:
        return httpx.Response(
            status_code,
            content=json.dumps(value).encode("utf-8"),
            headers={"content-type": "application/json"},
        )

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path.strip("/")
        assert path.endswith(".json"), f"unexpected path {path}"
        key = path[: -len(".json")]
        self.requests.append((request.method, key))

        if (request.method, key) in self.fail_on:
            return self._respond({"error": "boom"}, status_code=500)

        if request.method == "GET":
            return self._respond(self.data.get(key))
        if request.method == "PUT":
            body = json.loads(request.content)
            self.data[key] = body
            return self._respond(body)
        if request.method == "PATCH":
            body = json.loads(request.content)
            current = self.data.get(key) or {}
            current.update(body)
            self.data[key] = current
            return self._respond(body)
        if request.method == "DELETE":
            self.data.pop(key, None)
            return self._respond(None)
        return self._respond({"error": "method not allowed"}, status_code=405)

    def writes(self, key=None):
        return [(m, k) for m, k in self.requests if m != "GET" and (key is None or k == key)]


@pytest.fixture
def fake_db():
    return FakeRealtimeDatabase()


@pytest.fixture
def orm(fake_db):
    connection = ORM(BASE_URL, transport=httpx.MockTransport(fake_db.handler))
    yield connection
    set_active_orm(None)

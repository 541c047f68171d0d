"""
Pytest configuration and fixtures for crocodoc tests.

The Crocodoc service is replaced by an in-memory fake server implementing the
``send`` interface of ``requests.Session``.
"""

import json
import re
import uuid as uuidlib
from urllib.parse import parse_qs, urlsplit

import pytest

from crocodoc import CrocodocAPI, CrocodocConfig

TEST_TOKEN = "testblah1234"

DOCUMENT_TEXT = "The quick brown fox jumps over the lazy dog.\fSecond page."

USER_PATTERN = re.compile(r"^\d+,.+$")


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.content = body.encode("utf-8")


class FakeCrocodocServer:
    """Answers prepared requests the way the Crocodoc API does."""

    def __init__(self, token: str = TEST_TOKEN, param_name: str = "token"):
        self.token = token
        self.param_name = param_name
        self.documents = set()
        self.requests = []
        self.closed = False
        self.routes = {
            "/api/v2/document/upload": ("POST", self._upload),
            "/api/v2/document/status": ("GET", self._status),
            "/api/v2/document/delete": ("POST", self._delete),
            "/api/v2/session/create": ("POST", self._session),
            "/api/v2/download/text": ("GET", self._text),
        }

    def send(self, request, **kwargs):
        parts = urlsplit(request.url)
        if request.method == "GET":
            raw = parts.query
        else:
            raw = request.body or ""
            if isinstance(raw, bytes):
                raw = raw.decode("utf-8")
        params = {k: v[0] for k, v in parse_qs(raw, keep_blank_values=True).items()}
        self.requests.append(
            {"method": request.method, "path": parts.path, "params": params, "kwargs": kwargs}
        )

        if parts.path not in self.routes:
            return self._error(404, "not found")
        method, handler = self.routes[parts.path]
        if request.method != method:
            return self._error(405, "method not allowed")
        if params.get(self.param_name) != self.token:
            return self._error(401, "invalid token")
        return handler(params)

    def close(self):
        self.closed = True

    @property
    def last_request(self):
        return self.requests[-1]

    def _error(self, status_code, message):
        return FakeResponse(status_code, json.dumps({"error": message}))

    def _json(self, data):
        return FakeResponse(200, json.dumps(data))

    def _upload(self, params):
        if not params.get("url"):
            return self._error(400, "missing url")
        doc = str(uuidlib.uuid4())
        self.documents.add(doc)
        return self._json({"uuid": doc})

    def _status(self, params):
        result = []
        for doc in params.get("uuids", "").split(","):
            if doc in self.documents:
                result.append({"uuid": doc, "status": "DONE", "viewable": True})
            else:
                result.append({"error": "invalid uuid"})
        return self._json(result)

    def _delete(self, params):
        doc = params.get("uuid")
        if doc not in self.documents:
            return self._error(400, "invalid uuid")
        self.documents.discard(doc)
        return FakeResponse(200, "true")

    def _session(self, params):
        if params.get("uuid") not in self.documents:
            return self._error(400, "invalid uuid")
        user = params.get("user")
        if user is not None and not USER_PATTERN.match(user):
            return self._error(400, "invalid user")
        return self._json({"session": uuidlib.uuid4().hex})

    def _text(self, params):
        return FakeResponse(200, DOCUMENT_TEXT)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep developer settings out of the tests."""
    for name in (
        "CROCODOC_API_TOKEN",
        "CROCODOC_PARAM_NAME",
        "CROCODOC_BASE_URL",
        "CROCODOC_VIEW_URL",
        "CROCODOC_TIMEOUT",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def config():
    """Client configuration using the test token."""
    return CrocodocConfig(token=TEST_TOKEN)


@pytest.fixture
def server():
    """A fresh fake Crocodoc server."""
    return FakeCrocodocServer()


@pytest.fixture
def api(config, server):
    """A client talking to the fake server."""
    return CrocodocAPI(config, http=server)

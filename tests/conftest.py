"""Pytest configuration - loads .env for the live smoke tests and fakes the HTTP transport."""

import io
import json
import urllib.error
from pathlib import Path
from typing import Any

import pytest
from dotenv import load_dotenv

from dynect_cli.core.types import Credentials

# Load .env from project root
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(env_path)


class FakeResponse:
    """Minimal stand-in for the object urlopen() returns."""

    def __init__(self, body: bytes):
        self._body = body

    def read(self) -> bytes:
        return self._body

    def __enter__(self) -> "FakeResponse":
        return self

    def __exit__(self, *exc: Any) -> bool:
        return False


class FakeTransport:
    """
    Replacement for urllib.request.urlopen.

    Queued replies are returned in order; once the queue is empty every call
    gets ``default``. A reply is a (status, body) pair or an exception to raise.
    Bodies may be dicts (JSON-encoded) or raw strings.
    """

    def __init__(self):
        self.requests: list[Any] = []
        self.replies: list[Any] = []
        self.default: Any = (200, {"status": "success", "data": {}})

    def reply(self, body: Any, status: int = 200) -> None:
        self.replies.append((status, body))

    def fail(self, error: Exception) -> None:
        self.replies.append(error)

    @property
    def last(self) -> Any:
        return self.requests[-1]

    def body_of(self, index: int = -1) -> Any:
        data = self.requests[index].data
        return json.loads(data) if data else None

    def __call__(self, req: Any, timeout: Any = None) -> FakeResponse:
        self.requests.append(req)
        item = self.replies.pop(0) if self.replies else self.default
        if isinstance(item, Exception):
            raise item
        status, body = item
        if body is None:
            raw = b""
        elif isinstance(body, str):
            raw = body.encode("utf-8")
        else:
            raw = json.dumps(body).encode("utf-8")
        if status >= 400:
            raise urllib.error.HTTPError(req.full_url, status, "error", None, io.BytesIO(raw))
        return FakeResponse(raw)


@pytest.fixture
def transport(monkeypatch):
    """Route every request through a FakeTransport."""
    fake = FakeTransport()
    monkeypatch.setattr("urllib.request.urlopen", fake)
    return fake


@pytest.fixture
def credentials():
    return Credentials(customer_name="acme", user_name="ops", password="secret")

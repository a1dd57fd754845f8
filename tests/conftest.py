"""
Shared pytest fixtures for zoom_gateway tests.

- MemoryCredentialStore: in-memory store double with TTL bookkeeping and failure injection
- StubProvider: counting token provider that can block on an Event
- app / client: Flask test app wired with the doubles and a MagicMock Zoom service
"""

import threading
import time
from typing import Dict, Optional, Tuple
from unittest.mock import MagicMock

import pytest

from zoom_gateway import create_app
from zoom_gateway.src.errors import StoreError
from zoom_gateway.src.services.client_credentials import Credential
from zoom_gateway.src.services.credential_store import CredentialStore
from zoom_gateway.src.services.zoom_service import ZoomService


class MemoryCredentialStore(CredentialStore):
    def __init__(self):
        self.data: Dict[str, Tuple[str, int]] = {}
        self.fail_get = False
        self.fail_set = False
        self.fail_delete = False
        self.closed = False
        self.get_calls = 0

    def get(self, key: str) -> Optional[str]:
        self.get_calls += 1
        if self.fail_get:
            raise StoreError("store unreachable")
        entry = self.data.get(key)
        return entry[0] if entry else None

    def set(self, key: str, value: str, ttl: int) -> None:
        if self.fail_set:
            raise StoreError("store unreachable")
        self.data[key] = (value, ttl)

    def delete(self, key: str) -> None:
        if self.fail_delete:
            raise StoreError("store unreachable")
        self.data.pop(key, None)

    def close(self) -> None:
        self.closed = True

    def put(self, key: str, credential: Credential, ttl: int = 3600) -> None:
        self.data[key] = (credential.dumps(), ttl)

    def ttl(self, key: str) -> int:
        return self.data[key][1]

    def token(self, key: str) -> Optional[str]:
        entry = self.data.get(key)
        return Credential.loads(entry[0]).access_token if entry else None


class StubProvider:
    """Returns tokens T1, T2, ... in order; `error` makes every call fail."""

    def __init__(self, lifetime: int = 3600, error: Optional[Exception] = None, gate: Optional[threading.Event] = None):
        self.lifetime = lifetime
        self.error = error
        self.gate = gate
        self.calls = 0
        self._lock = threading.Lock()

    def acquire(self) -> Credential:
        with self._lock:
            self.calls += 1
            n = self.calls
        if self.gate is not None:
            self.gate.wait(5)
        if self.error is not None:
            raise self.error
        return Credential(access_token=f"T{n}", expires_at=time.time() + self.lifetime)


def wait_for(predicate, timeout: float = 5.0) -> None:
    deadline = time.monotonic() + timeout
    while not predicate():
        if time.monotonic() > deadline:
            raise AssertionError("condition not met before timeout")
        time.sleep(0.01)


@pytest.fixture
def store():
    return MemoryCredentialStore()


@pytest.fixture
def provider():
    return StubProvider()


@pytest.fixture
def zoom():
    return MagicMock(spec=ZoomService)


@pytest.fixture
def app(store, provider, zoom):
    app = create_app(config={"TESTING": True}, store=store, provider=provider, zoom=zoom)
    return app


@pytest.fixture
def client(app):
    return app.test_client()

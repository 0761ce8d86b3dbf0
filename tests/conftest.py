"""Shared fixtures for BTTS client tests."""

from __future__ import annotations

import json
from collections.abc import AsyncGenerator
from pathlib import Path
from typing import Any

import httpx
import pytest

from btts.config import Config
from btts.data.api_client import ApiClient
from btts.data.credentials import CredentialStore
from btts.data.db import Database

API_ROOT = "http://backend.test/api"


class MemoryKeyValueStore:
    """Dict-backed stand-in for the SQLite key/value table."""

    def __init__(self) -> None:
        self.values: dict[str, str] = {}

    async def get_value(self, key: str) -> str | None:
        return self.values.get(key)

    async def set_value(self, key: str, value: str) -> None:
        self.values[key] = value

    async def delete_value(self, key: str) -> None:
        self.values.pop(key, None)


class FakeBackend:
    """Serves canned responses keyed by (method, path) and records requests."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._routes: dict[tuple[str, str], tuple[int, bytes]] = {}

    def add_json(self, method: str, path: str, payload: Any, status_code: int = 200) -> None:
        self._routes[(method, f"/api/{path}")] = (status_code, json.dumps(payload).encode())

    def add_bytes(self, method: str, path: str, content: bytes, status_code: int = 200) -> None:
        self._routes[(method, f"/api/{path}")] = (status_code, content)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self._routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"status": "not found"})
        status_code, content = route
        return httpx.Response(status_code, content=content)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> dict[str, Any]:
        return json.loads(self.last_request.content)


@pytest.fixture
def test_config(tmp_path: Path) -> Config:
    """Config pointing at a temporary data directory."""
    return Config(api_root=API_ROOT, data_dir=tmp_path / "data")


@pytest.fixture
async def in_memory_db() -> AsyncGenerator[Database]:
    """SQLite in-memory database for fast unit tests."""
    db = Database(Path(":memory:"))
    await db.__aenter__()
    yield db  # type: ignore[misc]
    await db.__aexit__(None, None, None)


@pytest.fixture
def memory_store() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture
def credentials(memory_store: MemoryKeyValueStore) -> CredentialStore:
    """Credential store with no key configured."""
    return CredentialStore(memory_store)


@pytest.fixture
async def configured_credentials(credentials: CredentialStore) -> CredentialStore:
    """Credential store with a key configured."""
    await credentials.set("secret-key")
    return credentials


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
async def api_client(backend: FakeBackend) -> AsyncGenerator[ApiClient]:
    """ApiClient wired to the fake backend."""
    client = ApiClient(API_ROOT, transport=backend.transport)
    yield client  # type: ignore[misc]
    await client.close()

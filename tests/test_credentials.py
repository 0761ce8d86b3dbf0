"""Tests for the credential store and its SQLite persistence."""

from __future__ import annotations

from pathlib import Path

import pytest

from btts.data.credentials import API_KEY_STORAGE_KEY, CredentialStore
from btts.data.db import Database


class TestDatabase:
    @pytest.mark.asyncio
    async def test_value_roundtrip_and_delete(self, in_memory_db: Database) -> None:
        assert await in_memory_db.get_value("missing") is None
        await in_memory_db.set_value("k", "v1")
        await in_memory_db.set_value("k", "v2")
        assert await in_memory_db.get_value("k") == "v2"
        await in_memory_db.delete_value("k")
        assert await in_memory_db.get_value("k") is None

    @pytest.mark.asyncio
    async def test_schema_version_recorded(self, in_memory_db: Database) -> None:
        assert await in_memory_db.get_value("schema_version") == "1"

    @pytest.mark.asyncio
    async def test_not_connected_raises(self, tmp_path: Path) -> None:
        db = Database(tmp_path / "x.db")
        with pytest.raises(RuntimeError):
            await db.get_value("k")


class TestCredentialStore:
    @pytest.mark.asyncio
    async def test_starts_unconfigured(self, credentials: CredentialStore) -> None:
        assert credentials.get() is None
        assert credentials.is_configured is False

    @pytest.mark.asyncio
    async def test_set_stores_in_memory_and_storage(self, credentials, memory_store) -> None:
        await credentials.set("  key-123  ")
        assert credentials.get() == "key-123"
        assert credentials.is_configured is True
        assert memory_store.values[API_KEY_STORAGE_KEY] == "key-123"

    @pytest.mark.asyncio
    async def test_clear_removes_everywhere(self, credentials, memory_store) -> None:
        await credentials.set("key-123")
        await credentials.clear()
        assert credentials.get() is None
        assert API_KEY_STORAGE_KEY not in memory_store.values

    @pytest.mark.asyncio
    async def test_blank_key_rejected(self, credentials: CredentialStore) -> None:
        with pytest.raises(ValueError):
            await credentials.set("   ")
        assert credentials.get() is None

    @pytest.mark.asyncio
    async def test_listeners_see_every_mutation(self, credentials: CredentialStore) -> None:
        seen: list[str | None] = []
        credentials.subscribe(seen.append)
        await credentials.set("a-key")
        await credentials.set("b-key")
        await credentials.clear()
        assert seen == ["a-key", "b-key", None]

    @pytest.mark.asyncio
    async def test_load_reads_persisted_key(self, memory_store) -> None:
        memory_store.values[API_KEY_STORAGE_KEY] = "persisted"
        store = CredentialStore(memory_store)
        seen: list[str | None] = []
        store.subscribe(seen.append)
        assert await store.load() == "persisted"
        assert store.is_configured is True
        assert seen == ["persisted"]

    @pytest.mark.asyncio
    async def test_key_survives_restart(self, tmp_path: Path) -> None:
        db_path = tmp_path / "client.db"
        async with Database(db_path) as db:
            await CredentialStore(db).set("durable-key")

        async with Database(db_path) as db:
            store = CredentialStore(db)
            assert await store.load() == "durable-key"
            await store.clear()

        async with Database(db_path) as db:
            assert await CredentialStore(db).load() is None

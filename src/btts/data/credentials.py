"""Credential store: the bearer token, its persistence and change listeners."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from btts.data.protocols import CredentialListener, KeyValueStoreProtocol

logger = logging.getLogger(__name__)

API_KEY_STORAGE_KEY = "btts_api_key"


class CredentialStore:
    """Holds the API key in memory and in durable client storage.

    Listeners are notified after every mutation so the transport can swap its
    bearer header and cached per-credential data can be dropped before the
    next request.
    """

    def __init__(self, storage: KeyValueStoreProtocol) -> None:
        self._storage = storage
        self._token: str | None = None
        self._listeners: list[CredentialListener] = []

    async def load(self) -> str | None:
        """Read the persisted token into memory."""
        stored = await self._storage.get_value(API_KEY_STORAGE_KEY)
        self._token = stored or None
        self._notify()
        return self._token

    def get(self) -> str | None:
        return self._token

    @property
    def is_configured(self) -> bool:
        return bool(self._token)

    def subscribe(self, listener: CredentialListener) -> None:
        """Register a callback for credential changes."""
        self._listeners.append(listener)

    async def set(self, token: str) -> None:
        """Store a new token in memory and durable storage."""
        token = token.strip()
        if not token:
            msg = "API key cannot be empty"
            raise ValueError(msg)
        await self._storage.set_value(API_KEY_STORAGE_KEY, token)
        self._token = token
        logger.info("API key configured")
        self._notify()

    async def clear(self) -> None:
        """Remove the token from memory and durable storage."""
        await self._storage.delete_value(API_KEY_STORAGE_KEY)
        self._token = None
        logger.info("API key cleared")
        self._notify()

    def _notify(self) -> None:
        for listener in self._listeners:
            listener(self._token)

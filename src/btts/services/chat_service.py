"""Chat service: single-chat index lookup and in-chat search."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError
from result import Err, Ok, Result

from btts.models.chats import IndexedChat
from btts.models.search import ChatSearchRequest, SearchResponse

if TYPE_CHECKING:
    from btts.data.credentials import CredentialStore
    from btts.data.protocols import BackendApiProtocol

NOT_CONFIGURED = "API key is not configured"


class ChatService:
    """Service for per-chat operations."""

    def __init__(self, credentials: CredentialStore, api: BackendApiProtocol) -> None:
        self._credentials = credentials
        self._api = api

    async def get_chat_index(self, chat_id: int) -> Result[IndexedChat, str]:
        """Look up the index entry of one chat."""
        if not self._credentials.is_configured:
            return Err(NOT_CONFIGURED)
        try:
            index = await self._api.get_chat_index(chat_id)
        except (httpx.HTTPError, ValidationError) as exc:
            return Err(f"Loading chat {chat_id} failed: {exc}")
        if index is None:
            return Err(f"Chat {chat_id} is not indexed")
        return Ok(index)

    async def search_in_chat(
        self,
        chat_id: int,
        query: str,
        users: list[int] | None = None,
        types: list[str] | None = None,
        limit: int = 10,
        offset: int = 0,
    ) -> Result[SearchResponse, str]:
        """Search messages of a single chat."""
        if not self._credentials.is_configured:
            return Err(NOT_CONFIGURED)
        request = ChatSearchRequest(
            query=query.strip(),
            limit=limit,
            offset=offset,
            users=users or None,
            types=types or None,
        )
        try:
            return Ok(await self._api.search_in_chat(chat_id, request))
        except (httpx.HTTPError, ValidationError) as exc:
            return Err(f"Search in chat {chat_id} failed: {exc}")

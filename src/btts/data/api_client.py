"""HTTP client for the message-search backend."""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from types import TracebackType
from typing import Any

import httpx

from btts.models.chats import ChatCatalog, IndexedChat
from btts.models.envelope import decode_chat_catalog, decode_chat_index, decode_search_response
from btts.models.messages import (
    FetchMessagesRequest,
    ForwardMessagesRequest,
    MessageResponse,
    ReplyMessageRequest,
)
from btts.models.search import ChatSearchRequest, MultiChatSearchRequest, SearchResponse

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


class ApiClient:
    """Async client for the backend endpoints.

    Every JSON request carries ``Content-Type: application/json`` and, when a
    credential is configured, ``Authorization: Bearer <key>``. Non-2xx
    responses raise :class:`httpx.HTTPStatusError`; nothing is retried here.
    """

    def __init__(
        self,
        api_root: str,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._credential: str | None = None
        self._client = httpx.AsyncClient(
            base_url=api_root,
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> ApiClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    def set_credential(self, token: str | None) -> None:
        """Reconfigure the bearer credential used by subsequent requests."""
        self._credential = token or None

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self._credential:
            headers["Authorization"] = f"Bearer {self._credential}"
        return headers

    async def _request_json(
        self,
        method: str,
        path: str,
        *,
        json: dict[str, Any] | None = None,
        params: dict[str, str] | None = None,
    ) -> Any:
        logger.debug("%s %s", method, path)
        response = await self._client.request(
            method, path, json=json, params=params, headers=self._headers()
        )
        response.raise_for_status()
        if not response.content:
            return {}
        return response.json()

    # Index catalogue

    async def get_indexed_chats(self) -> ChatCatalog:
        """List indexed chats and whether the credential is a master key."""
        payload = await self._request_json("GET", "indexed")
        return decode_chat_catalog(payload)

    async def get_chat_index(self, chat_id: int) -> IndexedChat | None:
        payload = await self._request_json("GET", f"index/{chat_id}")
        return decode_chat_index(payload)

    # Search

    async def search_in_chat(self, chat_id: int, request: ChatSearchRequest) -> SearchResponse:
        payload = await self._request_json(
            "POST", f"index/{chat_id}/search", json=request.payload()
        )
        return decode_search_response(payload)

    async def search_in_chat_by_get(
        self,
        chat_id: int,
        query: str,
        *,
        offset: int | None = None,
        limit: int | None = None,
        users: list[int] | None = None,
        types: list[str] | None = None,
    ) -> SearchResponse:
        """Query-string variant of :meth:`search_in_chat`."""
        params = {"q": query}
        if offset is not None:
            params["offset"] = str(offset)
        if limit is not None:
            params["limit"] = str(limit)
        if users:
            params["users"] = ",".join(str(user) for user in users)
        if types:
            params["types"] = ",".join(types)
        payload = await self._request_json("GET", f"index/{chat_id}/search", params=params)
        return decode_search_response(payload)

    async def search_multi_chat(self, request: MultiChatSearchRequest) -> SearchResponse:
        payload = await self._request_json("POST", "index/multi-search", json=request.payload())
        return decode_search_response(payload)

    async def fetch_messages(self, chat_id: int, ids: list[int]) -> SearchResponse:
        """Fetch specific messages of a chat by id."""
        body = FetchMessagesRequest(ids=ids).model_dump()
        payload = await self._request_json("POST", f"index/{chat_id}/msgs/fetch", json=body)
        return decode_search_response(payload)

    # Client actions

    async def reply_message(self, request: ReplyMessageRequest) -> MessageResponse:
        payload = await self._request_json("POST", "client/reply", json=request.model_dump())
        return MessageResponse.model_validate(payload)

    async def forward_messages(self, request: ForwardMessagesRequest) -> MessageResponse:
        payload = await self._request_json("POST", "client/forward", json=request.model_dump())
        return MessageResponse.model_validate(payload)

    async def stream_file(self, chat_id: int, message_id: int) -> AsyncGenerator[bytes, None]:
        """Stream the media attached to a message. Sent without credentials."""
        params = {"chat_id": str(chat_id), "message_id": str(message_id)}
        logger.debug("GET client/filestream %s", params)
        async with self._client.stream("GET", "client/filestream", params=params) as response:
            response.raise_for_status()
            async for chunk in response.aiter_bytes():
                yield chunk

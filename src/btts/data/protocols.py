"""Protocol definitions for data access."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from typing import Protocol

from btts.models.chats import ChatCatalog, IndexedChat
from btts.models.messages import ForwardMessagesRequest, MessageResponse, ReplyMessageRequest
from btts.models.search import ChatSearchRequest, MultiChatSearchRequest, SearchResponse


class KeyValueStoreProtocol(Protocol):
    """Durable string key/value storage."""

    async def get_value(self, key: str) -> str | None: ...

    async def set_value(self, key: str, value: str) -> None: ...

    async def delete_value(self, key: str) -> None: ...


class CredentialListener(Protocol):
    """Callback invoked with the new credential (None when cleared)."""

    def __call__(self, token: str | None) -> None: ...


class SearchApiProtocol(Protocol):
    """Backend endpoints consumed by the search session."""

    async def get_indexed_chats(self) -> ChatCatalog: ...

    async def search_multi_chat(self, request: MultiChatSearchRequest) -> SearchResponse: ...


class BackendApiProtocol(SearchApiProtocol, Protocol):
    """Full backend endpoint set."""

    def set_credential(self, token: str | None) -> None: ...

    async def get_chat_index(self, chat_id: int) -> IndexedChat | None: ...

    async def search_in_chat(self, chat_id: int, request: ChatSearchRequest) -> SearchResponse: ...

    async def search_in_chat_by_get(
        self,
        chat_id: int,
        query: str,
        *,
        offset: int | None = None,
        limit: int | None = None,
        users: list[int] | None = None,
        types: list[str] | None = None,
    ) -> SearchResponse: ...

    async def fetch_messages(self, chat_id: int, ids: list[int]) -> SearchResponse: ...

    async def reply_message(self, request: ReplyMessageRequest) -> MessageResponse: ...

    async def forward_messages(self, request: ForwardMessagesRequest) -> MessageResponse: ...

    def stream_file(self, chat_id: int, message_id: int) -> AsyncGenerator[bytes, None]: ...

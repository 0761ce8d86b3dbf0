"""Protocol definitions for services."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Protocol

from result import Result

from btts.models.chats import IndexedChat
from btts.models.messages import MessageResponse
from btts.models.search import ChatFilter, ResultSet, SearchResponse


class SearchSessionProtocol(Protocol):
    """Interface for the stateful multi-chat search."""

    @property
    def query(self) -> str: ...

    @property
    def filters(self) -> ChatFilter: ...

    @property
    def results(self) -> ResultSet: ...

    @property
    def current_page(self) -> int: ...

    @property
    def total_pages(self) -> int: ...

    @property
    def offset(self) -> int: ...

    def set_query(self, text: str) -> None: ...

    def set_chat_filter(self, chat_ids: Iterable[int]) -> None: ...

    def set_user_filter(self, user_ids: Iterable[int]) -> None: ...

    def set_type_filter(self, types: Iterable[str]) -> None: ...

    def set_page_size(self, size: int) -> None: ...

    async def search(self) -> None: ...

    async def go_to_page(self, page: int) -> bool: ...

    async def load_chat_catalog(self, *, force: bool = False) -> None: ...


class ChatServiceProtocol(Protocol):
    """Interface for per-chat operations."""

    async def get_chat_index(self, chat_id: int) -> Result[IndexedChat, str]: ...

    async def search_in_chat(
        self,
        chat_id: int,
        query: str,
        users: list[int] | None = None,
        types: list[str] | None = None,
        limit: int = 10,
        offset: int = 0,
    ) -> Result[SearchResponse, str]: ...


class MessageServiceProtocol(Protocol):
    """Interface for message actions."""

    async def fetch_messages(self, chat_id: int, ids: list[int]) -> Result[SearchResponse, str]: ...

    async def reply(
        self, chat_id: int, message_id: int, text: str
    ) -> Result[MessageResponse, str]: ...

    async def forward(
        self, from_chat_id: int, to_chat_id: int, message_ids: list[int]
    ) -> Result[MessageResponse, str]: ...

    async def download(self, chat_id: int, message_id: int, target: Path) -> Result[int, str]: ...

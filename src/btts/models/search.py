"""Search models: hits, responses, filters and request payloads."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from btts.models.message_types import normalize_message_types, ordered_message_types


class SearchHit(BaseModel):
    """One matched message returned by a search."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    chat_id: int = 0
    message_id: int = Field(default=0, alias="id")
    text: str = Field(default="", alias="message")
    timestamp: int = 0
    type: str = ""
    user_id: int = 0
    chat_title: str | None = None
    user_full_name: str | None = None
    full_text: str = ""
    full_formatted_text: str = ""
    ocred: str | None = None
    aigenerated: str | None = None
    # Pre-highlighted rendition of selected fields; display only.
    formatted: dict[str, Any] | None = Field(default=None, alias="_formatted")


class SearchResponse(BaseModel):
    """The ``results`` payload of the search endpoints."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    hits: tuple[SearchHit, ...] = ()
    estimated_total_hits: int = Field(default=0, alias="estimatedTotalHits")
    limit: int = 10
    offset: int = 0
    processing_time_ms: float = Field(default=0, alias="processingTimeMs")
    semantic_hit_count: int = Field(default=0, alias="semanticHitCount")

    @classmethod
    def empty(cls) -> SearchResponse:
        return cls()


class ResultSet(BaseModel):
    """Last committed search outcome. Replaced wholesale, never patched."""

    model_config = ConfigDict(frozen=True)

    hits: tuple[SearchHit, ...] = ()
    estimated_total: int = 0
    processing_time_ms: float = 0
    semantic_hit_count: int = 0

    @classmethod
    def empty(cls) -> ResultSet:
        return cls()

    @classmethod
    def from_response(cls, response: SearchResponse) -> ResultSet:
        return cls(
            hits=response.hits,
            estimated_total=max(response.estimated_total_hits, 0),
            processing_time_ms=max(response.processing_time_ms, 0),
            semantic_hit_count=max(response.semantic_hit_count, 0),
        )


class ChatFilter(BaseModel):
    """Selected chats, users and message types. An empty set means no filter."""

    model_config = ConfigDict(frozen=True)

    chat_ids: frozenset[int] = frozenset()
    user_ids: frozenset[int] = frozenset()
    types: frozenset[str] = frozenset()

    def with_chat_ids(self, ids: Iterable[int]) -> ChatFilter:
        return self.model_copy(update={"chat_ids": frozenset(int(i) for i in ids)})

    def with_user_ids(self, ids: Iterable[int]) -> ChatFilter:
        return self.model_copy(update={"user_ids": frozenset(int(i) for i in ids)})

    def with_types(self, types: Iterable[str]) -> ChatFilter:
        return self.model_copy(update={"types": normalize_message_types(types)})


class ChatSearchRequest(BaseModel):
    """Body of ``POST index/{chat_id}/search``."""

    query: str
    disable_ocred: bool | None = None
    enable_aigenerated: bool | None = None
    limit: int | None = None
    offset: int | None = None
    users: list[int] | None = None
    types: list[str] | None = None

    def payload(self) -> dict[str, Any]:
        """JSON body with unset optional fields omitted."""
        return self.model_dump(exclude_none=True)


class MultiChatSearchRequest(ChatSearchRequest):
    """Body of ``POST index/multi-search``.

    ``all_chats`` is only honoured by the backend for master credentials;
    otherwise ``chat_ids`` selects the chats to search.
    """

    all_chats: bool | None = None
    chat_ids: list[int] | None = None


def build_multi_search_request(
    query: str,
    filters: ChatFilter,
    *,
    limit: int,
    offset: int,
    master: bool = False,
) -> MultiChatSearchRequest:
    """Build a multi-chat search request from the current query state.

    Filter dimensions with an empty selection are left unset so they are
    omitted from the body; the backend treats an absent field differently
    from an empty list.
    """
    request = MultiChatSearchRequest(query=query.strip(), limit=limit, offset=offset)
    if filters.chat_ids:
        request.chat_ids = sorted(filters.chat_ids)
    elif master:
        request.all_chats = True
    if filters.user_ids:
        request.users = sorted(filters.user_ids)
    if filters.types:
        request.types = ordered_message_types(filters.types)
    return request

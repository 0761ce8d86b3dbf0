"""Pydantic models for the BTTS client."""

from btts.models.chats import ChatCatalog, IndexedChat
from btts.models.envelope import (
    ApiEnvelope,
    decode_chat_catalog,
    decode_chat_index,
    decode_search_response,
)
from btts.models.message_types import (
    ALL_MESSAGE_TYPE_KEYS,
    MESSAGE_TYPES,
    message_type_label,
    normalize_message_types,
    ordered_message_types,
)
from btts.models.messages import (
    FetchMessagesRequest,
    ForwardMessagesRequest,
    MessageResponse,
    ReplyMessageRequest,
)
from btts.models.pagination import page_offset, total_pages
from btts.models.search import (
    ChatFilter,
    ChatSearchRequest,
    MultiChatSearchRequest,
    ResultSet,
    SearchHit,
    SearchResponse,
    build_multi_search_request,
)

__all__ = [
    "ApiEnvelope",
    "ChatCatalog",
    "ChatFilter",
    "ChatSearchRequest",
    "FetchMessagesRequest",
    "ForwardMessagesRequest",
    "IndexedChat",
    "MessageResponse",
    "MultiChatSearchRequest",
    "ReplyMessageRequest",
    "ResultSet",
    "SearchHit",
    "SearchResponse",
    "ALL_MESSAGE_TYPE_KEYS",
    "MESSAGE_TYPES",
    "build_multi_search_request",
    "decode_chat_catalog",
    "decode_chat_index",
    "decode_search_response",
    "message_type_label",
    "normalize_message_types",
    "ordered_message_types",
    "page_offset",
    "total_pages",
]

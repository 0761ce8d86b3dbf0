"""Response envelope decoding and the missing-field default policy.

Every JSON endpoint wraps its payload in ``{"status": ..., <field>: ...}`` where
``<field>`` is ``results``, ``chats`` or ``index``. Backends are allowed to omit
that field. Rather than failing, the client substitutes a default:

* ``results`` -> :meth:`SearchResponse.empty` (no hits, ``limit=10``)
* ``chats``   -> an empty catalogue
* ``index``   -> ``None``
* ``master``  -> ``False``

Inside a hit, a missing ``chat_id`` or ``id`` decodes as ``0``. A payload that
still fails validation raises :class:`pydantic.ValidationError`.

The substitution happens only in this module.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from btts.models.chats import ChatCatalog, IndexedChat
from btts.models.search import SearchResponse

T = TypeVar("T")


class ApiEnvelope(BaseModel, Generic[T]):
    """Wire envelope with every payload field optional."""

    status: str = ""
    results: T | None = None
    chats: T | None = None
    index: T | None = None
    master: bool | None = None


def decode_search_response(payload: Any) -> SearchResponse:
    envelope = ApiEnvelope[SearchResponse].model_validate(payload or {})
    if envelope.results is None:
        return SearchResponse.empty()
    return envelope.results


def decode_chat_catalog(payload: Any) -> ChatCatalog:
    envelope = ApiEnvelope[list[IndexedChat]].model_validate(payload or {})
    return ChatCatalog(chats=tuple(envelope.chats or ()), master=bool(envelope.master))


def decode_chat_index(payload: Any) -> IndexedChat | None:
    envelope = ApiEnvelope[IndexedChat].model_validate(payload or {})
    return envelope.index

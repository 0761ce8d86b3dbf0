"""Tests for wire models, envelope defaults, pagination and the request builder."""

from __future__ import annotations

from btts.models.envelope import decode_chat_catalog, decode_chat_index, decode_search_response
from btts.models.message_types import (
    message_type_label,
    normalize_message_types,
    ordered_message_types,
)
from btts.models.pagination import page_offset, total_pages
from btts.models.search import (
    ChatFilter,
    ResultSet,
    SearchHit,
    SearchResponse,
    build_multi_search_request,
)

RAW_HIT = {
    "chat_id": -1001,
    "id": 42,
    "message": "hello world",
    "timestamp": 1_700_000_000,
    "type": "text",
    "user_id": 7,
    "chat_title": "Group",
    "user_full_name": "Ada L",
    "full_text": "hello world",
    "full_formatted_text": "hello world",
    "_formatted": {"message": "<mark>hello</mark> world"},
}


def test_search_hit_parses_wire_names() -> None:
    hit = SearchHit.model_validate(RAW_HIT)
    assert hit.message_id == 42
    assert hit.text == "hello world"
    assert hit.chat_title == "Group"
    assert hit.formatted == {"message": "<mark>hello</mark> world"}


def test_search_hit_optional_fields_default() -> None:
    hit = SearchHit.model_validate({"chat_id": 1, "id": 2})
    assert hit.text == ""
    assert hit.chat_title is None
    assert hit.user_full_name is None
    assert hit.formatted is None


def test_search_hit_without_ids_defaults_to_zero() -> None:
    response = decode_search_response(
        {"results": {"hits": [{"chat_id": 1, "message": "x"}, {"message": "y"}], "estimatedTotalHits": 2}}
    )
    assert [hit.message_id for hit in response.hits] == [0, 0]
    assert [hit.chat_id for hit in response.hits] == [1, 0]
    assert response.estimated_total_hits == 2


def test_search_hit_formatted_accepts_non_string_values() -> None:
    response = decode_search_response(
        {"results": {"hits": [{"chat_id": 1, "id": 2, "_formatted": {"ocred": None, "id": 2}}]}}
    )
    assert response.hits[0].formatted == {"ocred": None, "id": 2}


def test_decode_search_response_full_payload() -> None:
    response = decode_search_response(
        {
            "status": "ok",
            "results": {
                "hits": [RAW_HIT],
                "estimatedTotalHits": 25,
                "limit": 12,
                "offset": 0,
                "processingTimeMs": 3,
                "semanticHitCount": 2,
            },
        }
    )
    assert len(response.hits) == 1
    assert response.estimated_total_hits == 25
    assert response.processing_time_ms == 3
    assert response.semantic_hit_count == 2


def test_decode_search_response_missing_results_falls_back() -> None:
    response = decode_search_response({"status": "ok"})
    assert response == SearchResponse.empty()
    assert response.hits == ()
    assert response.limit == 10
    assert response.estimated_total_hits == 0


def test_decode_search_response_null_results_and_empty_body() -> None:
    assert decode_search_response({"status": "ok", "results": None}) == SearchResponse.empty()
    assert decode_search_response({}) == SearchResponse.empty()
    assert decode_search_response(None) == SearchResponse.empty()


def test_decode_chat_catalog_with_and_without_master() -> None:
    catalog = decode_chat_catalog(
        {
            "status": "ok",
            "chats": [
                {
                    "chat_id": 1,
                    "title": "One",
                    "type": 2,
                    "username": "one",
                    "public": True,
                    "watching": False,
                    "no_delete": True,
                }
            ],
            "master": True,
        }
    )
    assert catalog.master is True
    assert catalog.chats[0].is_public is True
    assert catalog.chats[0].is_protected is True
    assert catalog.chats[0].is_watching is False

    empty = decode_chat_catalog({"status": "ok"})
    assert empty.chats == ()
    assert empty.master is False


def test_decode_chat_index_missing_is_none() -> None:
    assert decode_chat_index({"status": "ok"}) is None
    index = decode_chat_index({"status": "ok", "index": {"chat_id": 5, "title": "Five"}})
    assert index is not None
    assert index.chat_id == 5


def test_result_set_from_response_copies_all_metrics() -> None:
    response = SearchResponse.model_validate(
        {"hits": [RAW_HIT], "estimatedTotalHits": 9, "processingTimeMs": 1.5, "semanticHitCount": 4}
    )
    results = ResultSet.from_response(response)
    assert results.hits == response.hits
    assert results.estimated_total == 9
    assert results.processing_time_ms == 1.5
    assert results.semantic_hit_count == 4
    assert ResultSet.empty().hits == ()


def test_total_pages_and_offset() -> None:
    assert total_pages(25, 12) == 3
    assert total_pages(24, 12) == 2
    assert total_pages(0, 12) == 0
    assert total_pages(5, 0) == 0
    assert page_offset(1, 12) == 0
    assert page_offset(3, 12) == 24


def test_builder_omits_empty_filter_dimensions() -> None:
    request = build_multi_search_request(
        "  hi  ", ChatFilter().with_user_ids({5}), limit=12, offset=0
    )
    body = request.payload()
    assert body == {"query": "hi", "limit": 12, "offset": 0, "users": [5]}
    assert "chat_ids" not in body
    assert "types" not in body
    assert "all_chats" not in body


def test_builder_includes_all_selected_dimensions() -> None:
    filters = ChatFilter().with_chat_ids([3, 1]).with_user_ids([9]).with_types(["Video", "text"])
    body = build_multi_search_request("q", filters, limit=20, offset=40).payload()
    assert body["chat_ids"] == [1, 3]
    assert body["users"] == [9]
    assert body["types"] == ["text", "video"]
    assert body["offset"] == 40


def test_builder_searches_all_chats_only_for_master_without_chat_selection() -> None:
    master_body = build_multi_search_request("q", ChatFilter(), limit=12, offset=0, master=True)
    assert master_body.payload()["all_chats"] is True

    selected = ChatFilter().with_chat_ids([1])
    scoped = build_multi_search_request("q", selected, limit=12, offset=0, master=True).payload()
    assert "all_chats" not in scoped
    assert scoped["chat_ids"] == [1]


def test_builder_keeps_whitespace_only_query_as_empty_string() -> None:
    body = build_multi_search_request("   ", ChatFilter(), limit=12, offset=0).payload()
    assert body["query"] == ""


def test_message_type_helpers() -> None:
    assert normalize_message_types([" Photo ", "", "TEXT"]) == frozenset({"photo", "text"})
    assert normalize_message_types(None) == frozenset()
    assert ordered_message_types({"story", "sticker", "text"}) == ["text", "story", "sticker"]
    assert message_type_label("voice") == "Voice"
    assert message_type_label("sticker") == "sticker"

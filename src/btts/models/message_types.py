"""Message type catalogue shared by filters, requests and display."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True)
class MessageTypeInfo:
    """Display metadata for one indexed message type."""

    key: str
    label: str


MESSAGE_TYPES: tuple[MessageTypeInfo, ...] = (
    MessageTypeInfo("text", "Text"),
    MessageTypeInfo("photo", "Photo"),
    MessageTypeInfo("video", "Video"),
    MessageTypeInfo("document", "Document"),
    MessageTypeInfo("voice", "Voice"),
    MessageTypeInfo("audio", "Audio"),
    MessageTypeInfo("poll", "Poll"),
    MessageTypeInfo("story", "Story"),
)
ALL_MESSAGE_TYPE_KEYS: tuple[str, ...] = tuple(item.key for item in MESSAGE_TYPES)
LABEL_BY_KEY: dict[str, str] = {item.key: item.label for item in MESSAGE_TYPES}


def normalize_message_types(types: Iterable[str] | None) -> frozenset[str]:
    """Lower-case and strip type names, dropping blanks."""
    if types is None:
        return frozenset()
    return frozenset(t.strip().lower() for t in types if t and t.strip())


def ordered_message_types(types: Iterable[str]) -> list[str]:
    """Return known types in catalogue order, followed by unknown ones sorted."""
    selected = set(types)
    known = [key for key in ALL_MESSAGE_TYPE_KEYS if key in selected]
    unknown = sorted(selected.difference(ALL_MESSAGE_TYPE_KEYS))
    return [*known, *unknown]


def message_type_label(key: str) -> str:
    """Human label for a message type; unknown types are returned unchanged."""
    return LABEL_BY_KEY.get(key, key)

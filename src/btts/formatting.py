"""Plain-text formatting helpers for search hits and CLI output."""

from __future__ import annotations

import re
from collections.abc import Callable
from datetime import UTC, datetime

from btts.models.message_types import message_type_label

_SIZE_UNITS = ("B", "KB", "MB", "GB")


def format_timestamp(timestamp: int, now: datetime | None = None) -> str:
    """Format a Unix timestamp relative to now (e.g. '5m ago', '3d ago').

    Anything a week or older is shown as an absolute date.
    """
    dt = datetime.fromtimestamp(timestamp, tz=UTC)
    current = now or datetime.now(tz=UTC)
    seconds = int((current - dt).total_seconds())

    if seconds < 60:
        return "just now"
    minutes = seconds // 60
    if minutes < 60:
        return f"{minutes}m ago"
    hours = minutes // 60
    if hours < 24:
        return f"{hours}h ago"
    days = hours // 24
    if days < 7:
        return f"{days}d ago"
    return dt.strftime("%Y-%m-%d %H:%M")


def format_message_type(message_type: str) -> str:
    return message_type_label(message_type)


def truncate_text(text: str, max_length: int = 150) -> str:
    """Cut ``text`` to ``max_length`` characters, appending '...' when cut."""
    if len(text) <= max_length:
        return text
    return text[:max_length] + "..."


def highlight_terms(text: str, query: str, marker: Callable[[str], str]) -> str:
    """Wrap case-insensitive occurrences of each query term with ``marker``."""
    terms = [term for term in query.split() if term]
    if not terms:
        return text
    # Longest first so overlapping terms match the widest span.
    alternatives = "|".join(re.escape(term) for term in sorted(terms, key=len, reverse=True))
    pattern = re.compile(f"({alternatives})", re.IGNORECASE)
    return pattern.sub(lambda match: marker(match.group(1)), text)


def format_file_size(num_bytes: int) -> str:
    """Human-readable size, e.g. '1.5 KB'."""
    if num_bytes <= 0:
        return "0 B"
    size = float(num_bytes)
    unit = 0
    while size >= 1024 and unit < len(_SIZE_UNITS) - 1:
        size /= 1024
        unit += 1
    return f"{round(size, 1):g} {_SIZE_UNITS[unit]}"


def validate_api_key(key: str) -> bool:
    """A usable key has more than one non-blank character."""
    return len(key.strip()) > 1


def mask_api_key(key: str) -> str:
    """Show only the last four characters of a key."""
    if len(key) <= 4:
        return "*" * len(key)
    return "*" * (len(key) - 4) + key[-4:]

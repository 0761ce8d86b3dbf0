"""Pagination arithmetic shared by the search session and the CLI."""

from __future__ import annotations

import math


def total_pages(estimated_total: int, page_size: int) -> int:
    """Number of pages needed to show ``estimated_total`` hits."""
    if page_size <= 0 or estimated_total <= 0:
        return 0
    return math.ceil(estimated_total / page_size)


def page_offset(page: int, page_size: int) -> int:
    """Zero-based hit offset of a 1-based page."""
    return (page - 1) * page_size

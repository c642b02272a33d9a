# app/core/pagination.py
from __future__ import annotations

"""
Core pagination helpers.

This module provides:
- `normalize_pagination` to clean up page/limit inputs using defaults
  and clamping.
- `page_count` for the total number of pages of a result set.

These helpers unify offset pagination semantics across the project.
"""

import math
from typing import Optional

from app.config.settings import settings
from app.core.constants import DEFAULT_PAGE
from app.schemas.common.pagination import PaginationParams


def normalize_pagination(
    page: Optional[int],
    limit: Optional[int],
) -> PaginationParams:
    """
    Normalize raw page & limit inputs into a PaginationParams object
    with sane defaults and a clamped max page size.

    Rules:
        - page < 1 or None -> DEFAULT_PAGE
        - limit < 1 or None -> settings.DEFAULT_PAGE_SIZE
        - limit > settings.MAX_PAGE_SIZE -> settings.MAX_PAGE_SIZE
    """
    if page is None or page < 1:
        page = DEFAULT_PAGE

    if limit is None or limit < 1:
        limit = settings.DEFAULT_PAGE_SIZE

    if limit > settings.MAX_PAGE_SIZE:
        limit = settings.MAX_PAGE_SIZE

    return PaginationParams(page=page, limit=limit)


def page_count(total: int, limit: int) -> int:
    """Number of pages needed for `total` items, `limit` per page."""
    if limit < 1:
        return 0
    return math.ceil(total / limit)

# --- File: app/schemas/common/pagination.py ---
"""
Pagination schemas for offset-based list responses.
"""

from __future__ import annotations

from pydantic import Field

from app.schemas.common.base import BaseSchema

__all__ = [
    "PaginationParams",
    "PaginationMeta",
]


class PaginationParams(BaseSchema):
    """Normalized pagination parameters."""

    page: int = Field(
        default=1,
        ge=1,
        description="Page number (1-indexed)",
    )
    limit: int = Field(
        default=10,
        ge=1,
        description="Items per page",
    )


class PaginationMeta(BaseSchema):
    """Pagination metadata returned alongside list results."""

    page: int = Field(..., ge=1, description="Current page number")
    limit: int = Field(..., ge=1, description="Items per page")
    total: int = Field(..., ge=0, description="Total number of matching items")
    pages: int = Field(..., ge=0, description="Total number of pages")

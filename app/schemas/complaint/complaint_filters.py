"""
Complaint list filter parameters.
"""

from typing import Union

from pydantic import Field

from app.schemas.common.base import BaseSchema

__all__ = [
    "ComplaintFilterParams",
]


class ComplaintFilterParams(BaseSchema):
    """
    Equality filters and pagination for the admin complaint list.

    A filter of ``"all"`` (or no value) places no constraint on its field.
    """

    status: Union[str, None] = Field(default=None, description="Filter by status")
    priority: Union[str, None] = Field(default=None, description="Filter by priority")
    category: Union[str, None] = Field(default=None, description="Filter by category")

    page: Union[int, None] = Field(default=None, description="Page number (1-indexed)")
    limit: Union[int, None] = Field(default=None, description="Items per page")

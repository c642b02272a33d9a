"""
Complaint response schemas for API outputs.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field, field_validator

from app.models.base.enums import ComplaintCategory, ComplaintStatus, Priority
from app.schemas.common.base import CamelSchema

__all__ = [
    "ComplaintResponse",
]


class ComplaintResponse(CamelSchema):
    """
    Complaint as returned by the API (camelCase keys).

    Also used as the detached snapshot handed to background notifications.
    """

    id: str = Field(..., description="Complaint identifier")
    title: str
    description: str
    category: ComplaintCategory
    priority: Priority
    status: ComplaintStatus
    date_submitted: datetime = Field(..., description="Submission timestamp (UTC)")
    email: Optional[str] = None
    customer_name: Optional[str] = None
    user_id: Optional[str] = Field(default=None, description="Submitting user")
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("date_submitted", "created_at", "updated_at")
    @classmethod
    def assume_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        # Some backends (SQLite) hand back naive datetimes.
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

"""
Core complaint model.

A complaint is the single domain record of the service: submitted by a
customer, triaged by administrators through status changes, and deleted
permanently when no longer needed.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Enum, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base.base_model import BaseModel
from app.models.base.enums import (
    ComplaintCategory,
    ComplaintStatus,
    Priority,
    enum_values,
)
from app.models.base.mixins import TimestampMixin, utcnow

__all__ = ["Complaint"]

TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 2000
CUSTOMER_NAME_MAX_LENGTH = 100
EMAIL_MAX_LENGTH = 254


def _literal_enum(enum_cls, name: str) -> Enum:
    # Store the human-readable values ("In Progress"), not the member names.
    return Enum(
        enum_cls,
        name=name,
        native_enum=False,
        create_constraint=True,
        validate_strings=True,
        length=20,
        values_callable=enum_values,
    )


class Complaint(BaseModel, TimestampMixin):
    """
    Complaint entity.

    Attributes:
        title: Brief complaint summary
        description: Detailed complaint description
        category: Complaint category
        priority: Complaint priority level
        status: Current lifecycle status (Pending at creation)
        date_submitted: Server time of submission, never changed afterwards
        email: Customer email used for status-change notifications
        customer_name: Optional customer display name
        user_id: Identity-provider subject of the submitting user
    """

    __tablename__ = "complaints"
    __table_args__ = (
        Index("ix_complaints_status", "status"),
        Index("ix_complaints_priority", "priority"),
        Index("ix_complaints_category", "category"),
        Index("ix_complaints_user_id", "user_id"),
        {"comment": "Customer complaints"},
    )

    title: Mapped[str] = mapped_column(
        String(TITLE_MAX_LENGTH),
        nullable=False,
        comment="Brief complaint summary",
    )
    description: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Detailed complaint description",
    )
    category: Mapped[ComplaintCategory] = mapped_column(
        _literal_enum(ComplaintCategory, "complaint_category"),
        nullable=False,
    )
    priority: Mapped[Priority] = mapped_column(
        _literal_enum(Priority, "complaint_priority"),
        nullable=False,
    )
    status: Mapped[ComplaintStatus] = mapped_column(
        _literal_enum(ComplaintStatus, "complaint_status"),
        nullable=False,
        default=ComplaintStatus.PENDING,
    )
    date_submitted: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        comment="Submission timestamp (UTC)",
    )
    email: Mapped[Optional[str]] = mapped_column(
        String(EMAIL_MAX_LENGTH),
        nullable=True,
        comment="Customer email for status updates",
    )
    customer_name: Mapped[Optional[str]] = mapped_column(
        String(CUSTOMER_NAME_MAX_LENGTH),
        nullable=True,
    )
    user_id: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
        comment="Submitting user's identity-provider subject",
    )


# Default listing order is newest first.
Index("ix_complaints_date_submitted", Complaint.date_submitted.desc())

"""
Complaint request schemas.

Request bodies are parsed leniently: field types are checked here, while
the complaint rules (required fields, lengths, enumerated literals, email
shape) are enforced by the record store so every violation is reported
together, in field order.
"""

from typing import Any, Dict, Union

from pydantic import ConfigDict, Field

from app.schemas.common.base import CamelSchema

__all__ = [
    "ComplaintCreate",
    "ComplaintUpdate",
]


class ComplaintCreate(CamelSchema):
    """
    Complaint submission form.

    Server-owned fields (status, submission date, submitter) are not part
    of the form; any such keys in the body are ignored.
    """
    model_config = ConfigDict(extra="ignore")

    title: Union[str, None] = Field(
        default=None,
        description="Brief complaint summary (max 200 characters)",
    )
    description: Union[str, None] = Field(
        default=None,
        description="Detailed complaint description (max 2000 characters)",
    )
    category: Union[str, None] = Field(
        default=None,
        description="Service, Product, Billing, Technical or Other",
    )
    priority: Union[str, None] = Field(
        default=None,
        description="Low, Medium or High",
    )
    email: Union[str, None] = Field(
        default=None,
        description="Customer email for status updates",
    )
    customer_name: Union[str, None] = Field(
        default=None,
        description="Customer display name (max 100 characters)",
    )


class ComplaintUpdate(CamelSchema):
    """
    Partial complaint update.

    Only keys present in the body are applied. Unknown keys are kept so the
    store can reject them by name.
    """
    model_config = ConfigDict(extra="allow")

    title: Union[str, None] = None
    description: Union[str, None] = None
    category: Union[str, None] = None
    priority: Union[str, None] = None
    status: Union[str, None] = None
    email: Union[str, None] = None
    customer_name: Union[str, None] = None

    def to_changes(self) -> Dict[str, Any]:
        """Fields the caller actually sent, keyed by attribute name."""
        changes = self.model_dump(exclude_unset=True)
        changes.update(self.model_extra or {})
        return changes

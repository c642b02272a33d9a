"""
Database enums mirroring the complaint document literals.

Values are the exact strings stored in the database and exchanged over
the API (``"In Progress"``, not ``"IN_PROGRESS"``).
"""

import enum


class UserRole(str, enum.Enum):
    """Role claim carried by the caller's access token."""
    ADMIN = "admin"
    USER = "user"


class ComplaintCategory(str, enum.Enum):
    """Complaint category."""
    SERVICE = "Service"
    PRODUCT = "Product"
    BILLING = "Billing"
    TECHNICAL = "Technical"
    OTHER = "Other"


class Priority(str, enum.Enum):
    """Complaint priority level."""
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class ComplaintStatus(str, enum.Enum):
    """Complaint lifecycle status."""
    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    RESOLVED = "Resolved"
    CLOSED = "Closed"


def enum_values(enum_cls) -> list:
    """Literal values of an enum, in declaration order."""
    return [member.value for member in enum_cls]

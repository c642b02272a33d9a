"""
Complaint notification services.
"""

from app.services.notification.complaint_notifier import (
    ComplaintNotifier,
    NotificationOutcome,
)

__all__ = [
    "ComplaintNotifier",
    "NotificationOutcome",
]

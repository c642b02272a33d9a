"""
Complaint repositories package.

Example:
    from app.repositories.complaint import ComplaintRepository

    repo = ComplaintRepository(session)
    complaint = repo.create_complaint(
        title="Broken heater",
        description="No heat since Monday",
        category="Technical",
        priority="High",
    )
"""

from app.repositories.complaint.complaint_repository import ComplaintRepository
from app.repositories.complaint.complaint_validation import (
    UPDATABLE_FIELDS,
    ComplaintValidator,
)

__all__ = [
    "ComplaintRepository",
    "ComplaintValidator",
    "UPDATABLE_FIELDS",
]

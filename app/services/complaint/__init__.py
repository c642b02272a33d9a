"""
Complaint services.
"""

from app.services.complaint.complaint_service import ComplaintService, run_inline

__all__ = [
    "ComplaintService",
    "run_inline",
]

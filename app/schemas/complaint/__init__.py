"""
Complaint schemas.
"""

from app.schemas.complaint.complaint_base import ComplaintCreate, ComplaintUpdate
from app.schemas.complaint.complaint_filters import ComplaintFilterParams
from app.schemas.complaint.complaint_response import ComplaintResponse

__all__ = [
    "ComplaintCreate",
    "ComplaintUpdate",
    "ComplaintFilterParams",
    "ComplaintResponse",
]

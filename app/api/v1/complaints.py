"""
Complaint endpoints.

Submission needs any authenticated caller; listing, updating and deleting
need an admin. Lookup by id is open.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from app.api import deps
from app.api.responses import envelope
from app.core.security import Principal
from app.schemas.complaint import ComplaintCreate, ComplaintFilterParams, ComplaintUpdate
from app.services.complaint import ComplaintService

router = APIRouter(prefix="/complaints", tags=["Complaints"])


@router.post("", status_code=status.HTTP_201_CREATED)
def submit_complaint(
    payload: ComplaintCreate,
    principal: Optional[Principal] = Depends(deps.get_current_principal),
    service: ComplaintService = Depends(deps.get_complaint_service),
):
    """Submit a complaint; the caller is recorded as its submitter."""
    result = service.submit(payload, principal)
    return envelope(result, success_status=status.HTTP_201_CREATED)


@router.get("")
def list_complaints(
    status_filter: Optional[str] = Query(None, alias="status"),
    priority: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
    page: Optional[int] = Query(None),
    limit: Optional[int] = Query(None),
    principal: Optional[Principal] = Depends(deps.get_current_principal),
    service: ComplaintService = Depends(deps.get_complaint_service),
):
    """Admin list, newest first. Filters accept a literal or "all"."""
    filters = ComplaintFilterParams(
        status=status_filter,
        priority=priority,
        category=category,
        page=page,
        limit=limit,
    )
    return envelope(service.list(filters, principal))


@router.get("/{complaint_id}")
def get_complaint(
    complaint_id: str,
    service: ComplaintService = Depends(deps.get_complaint_service),
):
    return envelope(service.get(complaint_id))


@router.patch("/{complaint_id}")
def update_complaint(
    complaint_id: str,
    payload: ComplaintUpdate,
    principal: Optional[Principal] = Depends(deps.get_current_principal),
    service: ComplaintService = Depends(deps.get_complaint_service),
):
    """Partial update; a status change emails the customer."""
    return envelope(service.update(complaint_id, payload, principal))


@router.delete("/{complaint_id}")
def delete_complaint(
    complaint_id: str,
    principal: Optional[Principal] = Depends(deps.get_current_principal),
    service: ComplaintService = Depends(deps.get_complaint_service),
):
    return envelope(service.delete(complaint_id, principal), include_data=False)

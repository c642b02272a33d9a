"""
Complaint repository: persistence, filtering and offset pagination.

The repository validates documents before they reach the database and
never commits; the calling service owns the transaction.
"""

from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.orm import Session

from app.core.constants import FILTER_ALL
from app.core.exceptions import ResourceNotFoundError, create_validation_error
from app.core.logging import get_logger
from app.models.base.enums import ComplaintCategory, ComplaintStatus, Priority
from app.models.base.mixins import utcnow
from app.models.complaint.complaint import Complaint
from app.repositories.base import BaseRepository
from app.repositories.complaint.complaint_validation import (
    UPDATABLE_FIELDS,
    ComplaintValidator,
    to_enum,
)

logger = get_logger(__name__)

_LIST_ORDER = (Complaint.date_submitted.desc(), Complaint.id.desc())


class ComplaintRepository(BaseRepository[Complaint]):
    """
    Data access for complaints.

    Validation failures raise ``ValidationError`` with the ordered list of
    messages; operations on a missing id raise ``ResourceNotFoundError``.
    """

    def __init__(self, session: Session):
        super().__init__(session, Complaint)

    # ==================== CRUD Operations ====================

    def create_complaint(
        self,
        *,
        title: Optional[str],
        description: Optional[str],
        category: Any,
        priority: Any,
        email: Optional[str] = None,
        customer_name: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> Complaint:
        """
        Validate and persist a new complaint.

        Status always starts at Pending and the submission time is taken
        from the server clock.

        Raises:
            ValidationError: If any field violates the complaint schema
        """
        document = ComplaintValidator.normalize({
            "title": title,
            "description": description,
            "category": category,
            "priority": priority,
            "status": ComplaintStatus.PENDING,
            "email": email,
            "customer_name": customer_name,
        })

        result = ComplaintValidator.validate(document)
        if not result:
            raise create_validation_error(result.errors)

        complaint = self.insert({
            **document,
            "date_submitted": utcnow(),
            "user_id": user_id,
        })
        logger.info(f"Created complaint {complaint.id}", extra={"complaint_id": complaint.id})
        return complaint

    def get_by_id(self, complaint_id: str) -> Optional[Complaint]:
        return self.find_by_id(complaint_id)

    def get_or_raise(self, complaint_id: str) -> Complaint:
        """
        Raises:
            ResourceNotFoundError: If no complaint has this id
        """
        complaint = self.find_by_id(complaint_id)
        if complaint is None:
            raise ResourceNotFoundError("Complaint")
        return complaint

    def update_complaint(self, complaint_id: str, changes: Dict[str, Any]) -> Complaint:
        """
        Merge `changes` into the stored complaint, re-validate and apply.

        Keys outside the updatable set (identifier, submission date,
        submitter, timestamps or anything unknown) are rejected.

        Raises:
            ResourceNotFoundError: If no complaint has this id
            ValidationError: If the merged document is invalid
        """
        complaint = self.get_or_raise(complaint_id)

        rejected = [key for key in changes if key not in UPDATABLE_FIELDS]
        patch = ComplaintValidator.normalize(
            {key: value for key, value in changes.items() if key in UPDATABLE_FIELDS}
        )

        merged = {field: getattr(complaint, field) for field in UPDATABLE_FIELDS}
        merged.update(patch)

        errors = list(ComplaintValidator.validate(merged).errors)
        errors.extend(f"Field '{key}' cannot be updated" for key in rejected)
        if errors:
            raise create_validation_error(errors)

        self.assign(complaint, patch)
        logger.info(
            f"Updated complaint {complaint.id}",
            extra={"complaint_id": complaint.id, "fields": sorted(patch)},
        )
        return complaint

    def delete_complaint(self, complaint_id: str) -> None:
        """
        Permanently remove a complaint.

        Raises:
            ResourceNotFoundError: If no complaint has this id
        """
        complaint = self.get_or_raise(complaint_id)
        self.remove(complaint)
        logger.info(f"Deleted complaint {complaint_id}", extra={"complaint_id": complaint_id})

    # ==================== Query Operations ====================

    def list_complaints(
        self,
        *,
        status: Optional[str] = None,
        priority: Optional[str] = None,
        category: Optional[str] = None,
        page: int = 1,
        limit: int = 10,
    ) -> Tuple[List[Complaint], int]:
        """
        Filtered page of complaints, newest submission first.

        A filter of None or "all" places no constraint on its field. Any
        other value is an equality constraint, so a value that is not one of
        the field's literals matches nothing.

        Returns:
            (items on the requested page, total matching count)
        """
        filters = self._build_filters(status=status, priority=priority, category=category)
        if filters is None:
            return [], 0

        return self.find_page(
            filters,
            order_by=_LIST_ORDER,
            offset=(page - 1) * limit,
            limit=limit,
        )

    @staticmethod
    def _build_filters(**raw: Optional[str]) -> Optional[Dict[str, Any]]:
        """Equality criteria, or None when some value can never match."""
        enum_types = {
            "status": ComplaintStatus,
            "priority": Priority,
            "category": ComplaintCategory,
        }
        filters: Dict[str, Any] = {}

        for field, value in raw.items():
            if value is None or value == "" or value == FILTER_ALL:
                continue
            member = to_enum(enum_types[field], value)
            if member is None:
                logger.debug(f"No complaint has {field} {value!r}")
                return None
            filters[field] = member

        return filters

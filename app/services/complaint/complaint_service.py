"""
Core complaint service: submission, lookup, admin listing, updates and deletion.

Authorization is checked here, before any store access. Notifications are
handed to a dispatcher (FastAPI background tasks in the web app) so the
response never waits on mail delivery; a failed notification is logged and
never affects the stored complaint.

Known limitation: the status-change check reads the prior status and then
writes without locking, so two concurrent updates may both notify or a
notification may be missed; concurrent updates are last-write-wins.
"""

from typing import Any, Callable, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import BaseAppException
from app.core.pagination import normalize_pagination, page_count
from app.core.security import Principal, authorize
from app.models.base.enums import UserRole
from app.models.complaint.complaint import Complaint as ComplaintModel
from app.repositories.complaint.complaint_repository import ComplaintRepository
from app.schemas.common.pagination import PaginationMeta
from app.schemas.complaint import (
    ComplaintCreate,
    ComplaintFilterParams,
    ComplaintResponse,
    ComplaintUpdate,
)
from app.services.base import BaseService, ServiceResult
from app.services.notification import ComplaintNotifier, NotificationOutcome

Dispatch = Callable[..., None]


def run_inline(func: Callable[..., Any], *args: Any) -> None:
    """Dispatcher that runs the task immediately (scripts, tests)."""
    func(*args)


class ComplaintService(BaseService[ComplaintModel, ComplaintRepository]):
    """
    High-level complaint operations.

    Every operation returns a ``ServiceResult``; storage failures are
    rolled back and reported with a generic message.
    """

    def __init__(
        self,
        repository: ComplaintRepository,
        db_session: Session,
        notifier: ComplaintNotifier,
        dispatch: Optional[Dispatch] = None,
    ):
        """
        Args:
            repository: Complaint repository bound to `db_session`
            db_session: Active database session
            notifier: Email notifier
            dispatch: Callable scheduling ``func(*args)`` detached from the
                request; defaults to running inline
        """
        super().__init__(repository, db_session)
        self.notifier = notifier
        self._dispatch = dispatch or run_inline

    # -------------------------------------------------------------------------
    # Access checks
    # -------------------------------------------------------------------------

    @staticmethod
    def _require_caller(principal: Optional[Principal]) -> Optional[ServiceResult]:
        if principal is None:
            return ServiceResult.unauthorized()
        return None

    @staticmethod
    def _require_admin(principal: Optional[Principal]) -> Optional[ServiceResult]:
        if principal is None:
            return ServiceResult.unauthorized()
        if not authorize(principal, UserRole.ADMIN):
            return ServiceResult.forbidden()
        return None

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    def submit(
        self,
        request: ComplaintCreate,
        principal: Optional[Principal],
    ) -> ServiceResult[ComplaintResponse]:
        """
        Record a new complaint for the calling user.

        Status is always Pending and the submission time is the server's,
        whatever the caller sent.
        """
        denied = self._require_caller(principal)
        if denied is not None:
            return denied

        try:
            with self.transaction():
                complaint = self.repository.create_complaint(
                    title=request.title,
                    description=request.description,
                    category=request.category,
                    priority=request.priority,
                    email=request.email,
                    customer_name=request.customer_name,
                    user_id=principal.user_id,
                )
            snapshot = ComplaintResponse.model_validate(complaint)
        except BaseAppException as e:
            return self._result_from_app_exception(e)
        except SQLAlchemyError as e:
            return self._handle_exception(e, "submit complaint")

        self._log_operation("submitted complaint", snapshot.id, {"user": principal.user_id})
        self._schedule(self.notifier.notify_new_complaint, snapshot)

        return ServiceResult.success(snapshot, message="Complaint submitted successfully")

    def get(self, complaint_id: str) -> ServiceResult[ComplaintResponse]:
        try:
            complaint = self.repository.get_by_id(complaint_id)
            if complaint is None:
                return ServiceResult.not_found("Complaint")
            return ServiceResult.success(ComplaintResponse.model_validate(complaint))
        except SQLAlchemyError as e:
            return self._handle_exception(e, "fetch complaint", complaint_id)

    def list(
        self,
        filters: ComplaintFilterParams,
        principal: Optional[Principal],
    ) -> ServiceResult[List[ComplaintResponse]]:
        """
        Admin listing with equality filters and offset pagination.

        Pagination metadata is returned in ``metadata["pagination"]``.
        """
        denied = self._require_admin(principal)
        if denied is not None:
            return denied

        params = normalize_pagination(filters.page, filters.limit)
        try:
            items, total = self.repository.list_complaints(
                status=filters.status,
                priority=filters.priority,
                category=filters.category,
                page=params.page,
                limit=params.limit,
            )
        except BaseAppException as e:
            return self._result_from_app_exception(e)
        except SQLAlchemyError as e:
            return self._handle_exception(e, "fetch complaints")

        pagination = PaginationMeta(
            page=params.page,
            limit=params.limit,
            total=total,
            pages=page_count(total, params.limit),
        )
        return ServiceResult.success(
            [ComplaintResponse.model_validate(item) for item in items],
            metadata={"pagination": pagination},
        )

    def update(
        self,
        complaint_id: str,
        request: ComplaintUpdate,
        principal: Optional[Principal],
    ) -> ServiceResult[ComplaintResponse]:
        """
        Apply a partial update.

        A status-change email is sent only when the body carries ``status``
        and the stored status actually changed.
        """
        denied = self._require_admin(principal)
        if denied is not None:
            return denied

        changes: Dict[str, Any] = request.to_changes()
        try:
            with self.transaction():
                existing = self.repository.get_or_raise(complaint_id)
                previous_status = existing.status
                complaint = self.repository.update_complaint(complaint_id, changes)
            snapshot = ComplaintResponse.model_validate(complaint)
        except BaseAppException as e:
            return self._result_from_app_exception(e)
        except SQLAlchemyError as e:
            return self._handle_exception(e, "update complaint", complaint_id)

        self._log_operation("updated complaint", complaint_id, {"fields": sorted(changes)})

        if "status" in changes and snapshot.status != previous_status:
            self._schedule(self.notifier.notify_status_change, snapshot)

        return ServiceResult.success(snapshot, message="Complaint updated successfully")

    def delete(
        self,
        complaint_id: str,
        principal: Optional[Principal],
    ) -> ServiceResult[None]:
        denied = self._require_admin(principal)
        if denied is not None:
            return denied

        try:
            with self.transaction():
                self.repository.delete_complaint(complaint_id)
        except BaseAppException as e:
            return self._result_from_app_exception(e)
        except SQLAlchemyError as e:
            return self._handle_exception(e, "delete complaint", complaint_id)

        self._log_operation("deleted complaint", complaint_id)
        return ServiceResult.success(None, message="Complaint deleted successfully")

    # -------------------------------------------------------------------------
    # Notifications
    # -------------------------------------------------------------------------

    def _schedule(
        self,
        notify: Callable[[ComplaintResponse], NotificationOutcome],
        snapshot: ComplaintResponse,
    ) -> None:
        self._dispatch(self._notify_safely, notify, snapshot)

    def _notify_safely(
        self,
        notify: Callable[[ComplaintResponse], NotificationOutcome],
        snapshot: ComplaintResponse,
    ) -> None:
        try:
            outcome = notify(snapshot)
        except Exception as e:
            self._logger.error(
                f"Notification for complaint {snapshot.id} raised: {e}",
                exc_info=True,
            )
            return

        if not outcome.success:
            self._logger.error(
                f"Notification for complaint {snapshot.id} failed: {outcome.error}",
                extra={"complaint_id": snapshot.id},
            )

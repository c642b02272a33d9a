"""
Base class for services that own a repository and a unit of work.
"""

from typing import TypeVar, Generic, Iterator, Optional, Dict, Any
from abc import ABC
from contextlib import contextmanager

from sqlalchemy.orm import Session

from app.core.exceptions import BaseAppException
from app.core.logging import get_logger
from app.repositories.base import BaseRepository
from app.services.base.service_result import (
    ServiceResult,
    ServiceError,
    ErrorCode,
    ErrorSeverity,
)


TModel = TypeVar("TModel")
TRepo = TypeVar("TRepo", bound=BaseRepository)

_STATUS_CODES = {
    400: ErrorCode.VALIDATION_ERROR,
    401: ErrorCode.UNAUTHORIZED,
    404: ErrorCode.NOT_FOUND,
    503: ErrorCode.EXTERNAL_SERVICE_ERROR,
}


class BaseService(ABC, Generic[TModel, TRepo]):
    """
    Services commit; repositories only flush.

    Subclasses wrap writes in ``with self.transaction():`` and turn
    exceptions into ``ServiceResult`` failures with
    ``_result_from_app_exception`` (expected, caller-facing) or
    ``_handle_exception`` (unexpected, logged, message hidden).
    """

    def __init__(self, repository: TRepo, db_session: Session):
        self.repository: TRepo = repository
        self.db: Session = db_session
        self._logger = get_logger(type(self).__name__)

    # -------------------------------------------------------------------------
    # Failures
    # -------------------------------------------------------------------------

    def _handle_exception(
        self,
        exception: Exception,
        operation: str,
        entity_ref: Optional[Any] = None,
    ) -> ServiceResult:
        """Log `exception` with its traceback and report only "Failed to <operation>"."""
        self._logger.error(
            f"{operation} failed: {type(exception).__name__}: {exception}",
            exc_info=True,
            extra={"operation": operation, "entity_ref": entity_ref and str(entity_ref)},
        )
        return ServiceResult.internal_error(f"Failed to {operation}")

    def _result_from_app_exception(self, exception: BaseAppException) -> ServiceResult:
        code = _STATUS_CODES.get(exception.status_code, ErrorCode.INTERNAL_ERROR)
        severity = ErrorSeverity.CRITICAL if code is ErrorCode.INTERNAL_ERROR else ErrorSeverity.WARNING
        return ServiceResult.failure(
            ServiceError(code, exception.message, severity, list(exception.details))
        )

    # -------------------------------------------------------------------------
    # Unit of work
    # -------------------------------------------------------------------------

    @contextmanager
    def transaction(self) -> Iterator[Session]:
        """Commit when the block finishes, roll back and re-raise when it fails."""
        try:
            yield self.db
            self.db.commit()
        except Exception:
            self._rollback()
            raise

    def _rollback(self) -> None:
        try:
            self.db.rollback()
        except Exception as e:
            # Keep the original error as the one propagated.
            self._logger.warning(f"Rollback failed: {e}")

    # -------------------------------------------------------------------------
    # Audit trail
    # -------------------------------------------------------------------------

    def _log_operation(
        self,
        operation: str,
        entity_ref: Optional[Any] = None,
        extra: Optional[Dict[str, Any]] = None,
    ) -> None:
        self._logger.info(
            f"{operation} {entity_ref}" if entity_ref is not None else operation,
            extra={"operation": operation, **(extra or {})},
        )

"""
Outcome objects returned by the service layer.

Services never raise for expected failures (bad input, missing record,
missing or insufficient credentials). They return a ``ServiceResult``
whose ``error.code`` the API layer maps to an HTTP status.
"""

from typing import TypeVar, Generic, Optional, Any, Dict, List
from dataclasses import dataclass, field as dc_field
from enum import Enum


class ErrorCode(str, Enum):
    """Failure categories a service can report."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    UNAUTHORIZED = "UNAUTHORIZED"
    INSUFFICIENT_PERMISSIONS = "INSUFFICIENT_PERMISSIONS"
    EXTERNAL_SERVICE_ERROR = "EXTERNAL_SERVICE_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ErrorSeverity(str, Enum):
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


@dataclass(frozen=True)
class ServiceError:
    """What went wrong, in caller-safe words; ``details`` holds per-field messages."""

    code: ErrorCode
    message: str
    severity: ErrorSeverity = ErrorSeverity.ERROR
    details: List[str] = dc_field(default_factory=list)


TData = TypeVar("TData")


@dataclass
class ServiceResult(Generic[TData]):
    """
    Success carries ``data`` (and optionally a ``message`` and ``metadata``
    such as pagination); failure carries ``error``.
    """

    is_success: bool
    data: Optional[TData] = None
    error: Optional[ServiceError] = None
    message: Optional[str] = None
    metadata: Dict[str, Any] = dc_field(default_factory=dict)

    @classmethod
    def success(
        cls,
        data: Optional[TData] = None,
        message: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> "ServiceResult[TData]":
        return cls(is_success=True, data=data, message=message, metadata=dict(metadata or {}))

    @classmethod
    def failure(cls, error: ServiceError) -> "ServiceResult[TData]":
        return cls(is_success=False, error=error, message=error.message)

    @classmethod
    def _fail(
        cls,
        code: ErrorCode,
        message: str,
        severity: ErrorSeverity,
        details: Optional[List[str]] = None,
    ) -> "ServiceResult[TData]":
        return cls.failure(ServiceError(code, message, severity, list(details or [])))

    @classmethod
    def not_found(cls, resource_type: str) -> "ServiceResult[TData]":
        return cls._fail(ErrorCode.NOT_FOUND, f"{resource_type} not found", ErrorSeverity.INFO)

    @classmethod
    def unauthorized(cls, message: str = "Unauthorized") -> "ServiceResult[TData]":
        """No caller identity was presented."""
        return cls._fail(ErrorCode.UNAUTHORIZED, message, ErrorSeverity.WARNING)

    @classmethod
    def forbidden(cls, message: str = "Forbidden") -> "ServiceResult[TData]":
        """The caller is known but lacks the required role."""
        return cls._fail(ErrorCode.INSUFFICIENT_PERMISSIONS, message, ErrorSeverity.WARNING)

    @classmethod
    def internal_error(cls, message: str) -> "ServiceResult[TData]":
        return cls._fail(ErrorCode.INTERNAL_ERROR, message, ErrorSeverity.CRITICAL)

    @property
    def error_code(self) -> Optional[ErrorCode]:
        return self.error.code if self.error else None

    def __bool__(self) -> bool:
        return self.is_success

    def __repr__(self) -> str:
        outcome = "Success" if self.is_success else f"Failure[{self.error_code.value}]"
        return f"ServiceResult({outcome}: {self.message})" if self.message else f"ServiceResult({outcome})"


__all__ = [
    "ErrorCode",
    "ErrorSeverity",
    "ServiceError",
    "ServiceResult",
]

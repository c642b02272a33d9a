"""
Application exceptions.

Each exception knows the HTTP status and error envelope it renders as, so
anything that escapes the service layer can be answered by a single
handler. Repositories raise these; services translate them into
``ServiceResult`` failures.
"""

from typing import Any, ClassVar, Dict, List, Optional
from enum import Enum


class ErrorCode(str, Enum):
    INTERNAL_ERROR = "INTERNAL_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    AUTHENTICATION_FAILED = "AUTHENTICATION_FAILED"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"
    TOKEN_INVALID = "TOKEN_INVALID"
    EMAIL_SERVICE_ERROR = "EMAIL_SERVICE_ERROR"


class BaseAppException(Exception):
    """
    Root of the application's exception tree.

    Subclasses set ``status_code``, ``error_code`` and ``default_message``
    as class attributes; ``details`` carries ordered per-field messages.
    """

    status_code: ClassVar[int] = 500
    error_code: ErrorCode = ErrorCode.INTERNAL_ERROR
    default_message: ClassVar[str] = "Internal server error"

    def __init__(
        self,
        message: Optional[str] = None,
        details: Optional[List[str]] = None,
        error_code: Optional[ErrorCode] = None,
    ):
        self.message = message or self.default_message
        self.details = list(details or [])
        if error_code is not None:
            self.error_code = error_code
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """The ``{"success": false, "error": ..., "details": [...]}`` envelope."""
        body: Dict[str, Any] = {"success": False, "error": self.message}
        if self.details:
            body["details"] = list(self.details)
        return body

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.error_code.value}: {self.message!r})"


class ValidationError(BaseAppException):
    status_code = 400
    error_code = ErrorCode.VALIDATION_ERROR
    default_message = "Validation failed"


class ResourceNotFoundError(BaseAppException):
    status_code = 404
    error_code = ErrorCode.RESOURCE_NOT_FOUND

    def __init__(self, resource_type: str = "Resource"):
        self.resource_type = resource_type
        super().__init__(f"{resource_type} not found")


class AuthenticationError(BaseAppException):
    """The caller's identity could not be established."""

    status_code = 401
    error_code = ErrorCode.AUTHENTICATION_FAILED
    default_message = "Unauthorized"


class TokenExpiredError(AuthenticationError):
    error_code = ErrorCode.TOKEN_EXPIRED
    default_message = "Token has expired"


class InvalidTokenError(AuthenticationError):
    error_code = ErrorCode.TOKEN_INVALID
    default_message = "Invalid token"


class EmailServiceError(BaseAppException):
    """The mail transport refused or dropped a message."""

    status_code = 503
    error_code = ErrorCode.EMAIL_SERVICE_ERROR
    default_message = "Email service error"


def create_validation_error(messages: List[str]) -> ValidationError:
    return ValidationError(details=list(messages))


__all__ = [
    'ErrorCode',
    'BaseAppException',
    'ValidationError',
    'ResourceNotFoundError',
    'AuthenticationError',
    'TokenExpiredError',
    'InvalidTokenError',
    'EmailServiceError',
    'create_validation_error',
]

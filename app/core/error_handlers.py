"""
Exception handlers that render every failure as the JSON error envelope
``{"success": false, "error": ..., "details": [...]}``.
"""

from typing import Any, Dict, List

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.exceptions import BaseAppException
from app.core.logging import get_logger

logger = get_logger(__name__)


def format_validation_errors(errors: List[Dict[str, Any]]) -> List[str]:
    """Flatten request validation errors into ``"<field>: <message>"`` strings."""
    details = []
    for error in errors:
        # Drop the leading "body"/"query"/"path" segment.
        loc = [str(part) for part in error.get("loc", ())][1:]
        field_path = ".".join(loc)
        message = error.get("msg", "Invalid value")
        details.append(f"{field_path}: {message}" if field_path else message)
    return details


async def handle_application_exception(request: Request, exc: BaseAppException) -> JSONResponse:
    logger.warning(
        f"Application exception: {exc.error_code.value} - {exc.message}",
        extra={"path": request.url.path, "method": request.method},
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = format_validation_errors(exc.errors())
    logger.warning(
        f"Request validation failed: {len(details)} error(s)",
        extra={"path": request.url.path, "method": request.method},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"success": False, "error": "Validation failed", "details": details},
    )


async def handle_unexpected_exception(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled exception: {type(exc).__name__}: {exc}",
        extra={"path": request.url.path, "method": request.method},
        exc_info=exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"success": False, "error": "Internal server error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BaseAppException, handle_application_exception)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_exception)

"""
JSON envelopes for service results.

Success: ``{"success": true, "data": ..., "message": ...}`` (list responses
add ``pagination``). Failure: ``{"success": false, "error": ..., "details": [...]}``.
"""

from typing import Any, Dict, Optional

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from app.services.base import ErrorCode, ServiceResult

ERROR_STATUS = {
    ErrorCode.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    ErrorCode.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.INSUFFICIENT_PERMISSIONS: status.HTTP_403_FORBIDDEN,
    ErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.EXTERNAL_SERVICE_ERROR: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorCode.INTERNAL_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def _dump(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    if isinstance(value, list):
        return [_dump(item) for item in value]
    return jsonable_encoder(value)


def error_response(result: ServiceResult) -> JSONResponse:
    error = result.error
    code = error.code if error else ErrorCode.INTERNAL_ERROR
    content: Dict[str, Any] = {
        "success": False,
        "error": error.message if error else "Internal server error",
    }
    if error and error.details:
        content["details"] = list(error.details)
    return JSONResponse(status_code=ERROR_STATUS.get(code, 500), content=content)


def envelope(
    result: ServiceResult,
    success_status: int = status.HTTP_200_OK,
    include_data: bool = True,
) -> JSONResponse:
    """Render a ServiceResult as the API envelope."""
    if not result.is_success:
        return error_response(result)

    content: Dict[str, Any] = {"success": True}
    if include_data:
        content["data"] = _dump(result.data)

    pagination: Optional[BaseModel] = (result.metadata or {}).get("pagination")
    if pagination is not None:
        content["pagination"] = _dump(pagination)

    if result.message:
        content["message"] = result.message

    return JSONResponse(status_code=success_status, content=content)

# app/core/middleware.py
"""
HTTP middleware: request correlation, access logging and response hardening.
"""
from __future__ import annotations

import time
import uuid
from typing import Callable, Dict

import structlog
from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from app.core.constants import HEADER_PROCESS_TIME, HEADER_REQUEST_ID
from app.core.logging import get_logger, request_id as request_id_var, user_id as user_id_var

logger = get_logger(__name__)
access_logger = structlog.get_logger("app.access")

SECURITY_HEADERS: Dict[str, str] = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
}


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Per-request correlation and access log.

    Reuses an incoming X-Request-ID or mints one, exposes it to log records
    for the duration of the request, echoes it back, and reports the
    handling time in X-Process-Time.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        req_id = request.headers.get(HEADER_REQUEST_ID) or uuid.uuid4().hex
        request.state.request_id = req_id

        req_token = request_id_var.set(req_id)
        user_token = user_id_var.set(None)
        started = time.perf_counter()
        try:
            response = await call_next(request)
            elapsed = time.perf_counter() - started

            access_logger.info(
                "request_completed",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                process_time=round(elapsed, 4),
                client_host=request.client.host if request.client else None,
            )
        finally:
            user_id_var.reset(user_token)
            request_id_var.reset(req_token)

        response.headers[HEADER_REQUEST_ID] = req_id
        response.headers[HEADER_PROCESS_TIME] = f"{elapsed:.4f}"
        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response


def register_middlewares(app: FastAPI, include_security: bool = True) -> None:
    """
    Install the HTTP middleware stack.

    Starlette runs the most recently added middleware first, so the request
    context is established before anything else sees the request.
    """
    if include_security:
        app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestContextMiddleware)
    logger.debug("HTTP middleware registered")

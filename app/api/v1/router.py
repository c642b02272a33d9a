"""
API v1 Router - Main Entry Point
Aggregates all v1 API endpoints for the complaint desk.
"""
from fastapi import APIRouter

from app.api.v1 import complaints, health

router = APIRouter(
    responses={
        400: {"description": "Bad Request"},
        401: {"description": "Unauthorized"},
        403: {"description": "Forbidden"},
        404: {"description": "Not Found"},
        500: {"description": "Internal Server Error"},
    }
)

router.include_router(health.router)
router.include_router(complaints.router)

# app/api/deps.py
"""
Dependency callables used by the route modules.

Example usage in a router:
  from fastapi import Depends, APIRouter
  from app.api import deps

  router = APIRouter()

  @router.get("/complaints/{complaint_id}")
  def get_complaint(service = Depends(deps.get_complaint_service)):
      ...
"""

from app.core.dependencies import (
    get_complaint_service,
    get_current_principal,
    get_notifier,
)
from app.db.session import get_db

__all__ = [
    "get_complaint_service",
    "get_current_principal",
    "get_notifier",
    "get_db",
]

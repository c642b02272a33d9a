"""
FastAPI Dependencies

Dependency functions for caller identity, database sessions and the
per-request complaint service.
"""

import threading
from typing import Optional

from fastapi import BackgroundTasks, Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.exceptions import AuthenticationError
from app.core.logging import get_logger, user_id as user_id_var
from app.core.security import Principal, decode_access_token, principal_from_claims
from app.db.session import get_db
from app.repositories.complaint import ComplaintRepository
from app.services.complaint import ComplaintService
from app.services.notification import ComplaintNotifier

logger = get_logger(__name__)

# Missing credentials are not an error here; the service decides.
security = HTTPBearer(auto_error=False)


def get_current_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[Principal]:
    """
    Resolve the caller from the bearer token.

    Returns None when no token is sent or the token cannot be verified, so
    the service can answer Unauthorized.
    """
    if credentials is None:
        return None

    try:
        principal = principal_from_claims(decode_access_token(credentials.credentials))
    except AuthenticationError as e:
        logger.warning(f"Rejected bearer token: {e.message}")
        return None

    user_id_var.set(principal.user_id)
    return principal


_notifier: Optional[ComplaintNotifier] = None
_notifier_lock = threading.Lock()


def get_notifier() -> ComplaintNotifier:
    """Process-wide notifier built from settings on first use."""
    global _notifier
    if _notifier is not None:
        return _notifier

    with _notifier_lock:
        if _notifier is None:
            _notifier = ComplaintNotifier.from_settings()
    return _notifier


def get_complaint_service(
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    notifier: ComplaintNotifier = Depends(get_notifier),
) -> ComplaintService:
    """Complaint service bound to the request's session; notifications run after the response."""
    return ComplaintService(
        repository=ComplaintRepository(db),
        db_session=db,
        notifier=notifier,
        dispatch=background_tasks.add_task,
    )

"""
Access guard.

Callers are identified by a bearer token issued by an external identity
provider. This module verifies the token, turns its claims into a
``Principal`` and answers role checks for the service layer. It never
issues production credentials.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional, Union

from jose import ExpiredSignatureError, JWTError, jwt

from app.config.settings import settings
from app.core.exceptions import InvalidTokenError, TokenExpiredError
from app.core.logging import get_logger
from app.models.base.enums import UserRole

logger = get_logger(__name__)

DEFAULT_ROLE = UserRole.USER.value


@dataclass(frozen=True)
class Principal:
    """
    Represents an authenticated caller in the service layer.

    Attributes:
        user_id: Subject claim of the token
        role: Role claim, "user" when the token carries none
        email: Email claim, if present
    """
    user_id: str
    role: str = DEFAULT_ROLE
    email: Optional[str] = None

    def has_role(self, role: Union[UserRole, str]) -> bool:
        """Check if principal has a specific role."""
        wanted = role.value if isinstance(role, UserRole) else role
        return self.role == wanted

    @property
    def is_admin(self) -> bool:
        return self.has_role(UserRole.ADMIN)


def authorize(principal: Optional[Principal], required_role: Union[UserRole, str]) -> bool:
    """
    Capability check: may this caller act with `required_role`?

    No caller and a caller with another role are both denied; the service
    decides whether that surfaces as Unauthorized or Forbidden.
    """
    if principal is None:
        return False
    return principal.has_role(required_role)


def decode_access_token(token: str) -> Dict[str, Any]:
    """
    Verify and decode a bearer token.

    Raises:
        TokenExpiredError: If the token has expired
        InvalidTokenError: If the signature or structure is invalid
    """
    try:
        return jwt.decode(
            token,
            settings.AUTH_SECRET_KEY,
            algorithms=[settings.AUTH_ALGORITHM],
            options={"verify_aud": False},
        )
    except ExpiredSignatureError:
        raise TokenExpiredError()
    except JWTError as e:
        logger.warning(f"Token verification failed: {str(e)}")
        raise InvalidTokenError()


def principal_from_claims(claims: Dict[str, Any]) -> Principal:
    """
    Build a Principal from decoded claims.

    Raises:
        InvalidTokenError: If the token has no subject
    """
    subject = claims.get("sub") or claims.get("id")
    if not subject:
        raise InvalidTokenError("Token has no subject")

    role = claims.get(settings.AUTH_ROLE_CLAIM) or DEFAULT_ROLE
    return Principal(
        user_id=str(subject),
        role=str(role),
        email=claims.get("email"),
    )


def create_access_token(
    claims: Dict[str, Any],
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Sign a token the way the identity provider does.

    For local development and tests only.
    """
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode = dict(claims)
    to_encode.update({"iat": now, "exp": expire})
    return jwt.encode(to_encode, settings.AUTH_SECRET_KEY, algorithm=settings.AUTH_ALGORITHM)


__all__ = [
    "Principal",
    "authorize",
    "decode_access_token",
    "principal_from_claims",
    "create_access_token",
]

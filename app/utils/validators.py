"""
Validation utilities shared by the record store and the mail helpers
"""

import re
from typing import List, Optional


class ValidationResult:
    """Validation result container"""

    def __init__(self, is_valid: bool = True, errors: Optional[List[str]] = None):
        self.is_valid = is_valid
        self.errors = errors or []

    def add_error(self, error: str):
        """Add validation error"""
        self.is_valid = False
        self.errors.append(error)

    def __bool__(self):
        """Allow boolean evaluation"""
        return self.is_valid

    def __str__(self):
        """String representation"""
        if self.is_valid:
            return "Validation passed"
        return f"Validation failed: {', '.join(self.errors)}"


class EmailValidator:
    """Email validation utilities"""

    # Same address shape the complaint form has always accepted.
    EMAIL_REGEX = re.compile(r'^\w+([.-]?\w+)*@\w+([.-]?\w+)*(\.\w{2,3})+$')

    @staticmethod
    def normalize(email: str) -> str:
        return email.strip().lower()

    @classmethod
    def is_valid(cls, email: Optional[str]) -> bool:
        if not email or not isinstance(email, str):
            return False
        email = cls.normalize(email)
        if len(email) > 254:  # RFC 5321
            return False
        return cls.EMAIL_REGEX.match(email) is not None


def is_valid_email(email: Optional[str]) -> bool:
    """Check an address against the accepted email shape."""
    return EmailValidator.is_valid(email)


def clean_text(value: Optional[str]) -> Optional[str]:
    """Trim a string; blank strings become None."""
    if value is None:
        return None
    value = value.strip()
    return value or None

"""
Document-level validation for complaint records.

The store validates the whole document (on create and after merging a
partial update) and reports every violated rule, in field order, with the
messages shown to the person filling in the complaint form.
"""

from typing import Any, Dict, Optional, Type

from app.models.base.enums import ComplaintCategory, ComplaintStatus, Priority
from app.models.complaint.complaint import (
    CUSTOMER_NAME_MAX_LENGTH,
    DESCRIPTION_MAX_LENGTH,
    TITLE_MAX_LENGTH,
)
from app.utils.validators import EmailValidator, ValidationResult, clean_text

# Attribute names a caller may patch through an update.
UPDATABLE_FIELDS = (
    "title",
    "description",
    "category",
    "priority",
    "status",
    "email",
    "customer_name",
)

_TEXT_FIELDS = ("title", "description", "customer_name")
_ENUM_FIELDS: Dict[str, Type] = {
    "category": ComplaintCategory,
    "priority": Priority,
    "status": ComplaintStatus,
}


def to_enum(enum_cls, value: Any):
    """Return the enum member for `value`, or None when it is not a valid literal."""
    if isinstance(value, enum_cls):
        return value
    if not isinstance(value, str):
        return None
    try:
        return enum_cls(value.strip())
    except ValueError:
        return None


class ComplaintValidator:
    """Normalizes and validates complaint documents keyed by attribute name."""

    @staticmethod
    def normalize(document: Dict[str, Any]) -> Dict[str, Any]:
        """
        Trim text, lower-case email, turn blank optionals into None and map
        enum literals to members. Values that cannot be mapped are kept as
        given so `validate` can report them.
        """
        normalized = dict(document)

        for key in _TEXT_FIELDS:
            if key in normalized and isinstance(normalized[key], str):
                normalized[key] = clean_text(normalized[key])

        if "email" in normalized and isinstance(normalized["email"], str):
            email = clean_text(normalized["email"])
            normalized["email"] = EmailValidator.normalize(email) if email else None

        for key, enum_cls in _ENUM_FIELDS.items():
            if key in normalized:
                member = to_enum(enum_cls, normalized[key])
                if member is not None:
                    normalized[key] = member

        return normalized

    @classmethod
    def validate(cls, document: Dict[str, Any]) -> ValidationResult:
        """Validate a normalized document; messages follow field order."""
        result = ValidationResult()

        cls._check_text(
            result,
            document.get("title"),
            required="Please provide a title for the complaint",
            max_length=TITLE_MAX_LENGTH,
            too_long=f"Title cannot be more than {TITLE_MAX_LENGTH} characters",
        )
        cls._check_text(
            result,
            document.get("description"),
            required="Please provide a description for the complaint",
            max_length=DESCRIPTION_MAX_LENGTH,
            too_long=f"Description cannot be more than {DESCRIPTION_MAX_LENGTH} characters",
        )
        cls._check_enum(
            result,
            ComplaintCategory,
            document.get("category"),
            required="Please select a category",
            invalid="Please select a valid category",
        )
        cls._check_enum(
            result,
            Priority,
            document.get("priority"),
            required="Please select a priority level",
            invalid="Please select a valid priority level",
        )
        cls._check_enum(
            result,
            ComplaintStatus,
            document.get("status"),
            required="Please select a valid status",
            invalid="Please select a valid status",
        )

        email = document.get("email")
        if email is not None and not EmailValidator.is_valid(email):
            result.add_error("Please provide a valid email address")

        customer_name = document.get("customer_name")
        if customer_name is not None and (
            not isinstance(customer_name, str) or len(customer_name) > CUSTOMER_NAME_MAX_LENGTH
        ):
            result.add_error(
                f"Customer name cannot be more than {CUSTOMER_NAME_MAX_LENGTH} characters"
            )

        return result

    @staticmethod
    def _check_text(
        result: ValidationResult,
        value: Any,
        required: str,
        max_length: int,
        too_long: str,
    ) -> None:
        if not isinstance(value, str) or not value:
            result.add_error(required)
        elif len(value) > max_length:
            result.add_error(too_long)

    @staticmethod
    def _check_enum(
        result: ValidationResult,
        enum_cls,
        value: Optional[Any],
        required: str,
        invalid: str,
    ) -> None:
        if value is None or value == "":
            result.add_error(required)
        elif to_enum(enum_cls, value) is None:
            result.add_error(invalid)

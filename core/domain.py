"""
Domain Layer Base Classes.

The domain layer contains pure business logic with no external dependencies.
This makes business rules:
- Easy to test (no mocking needed)
- Reusable across different interfaces
- Clear and self-documenting

Example Usage:
    class DraftValidator(Validator):
        def validate(self, data: dict) -> List[FieldError]:
            # Pure business logic here
            ...
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional
from datetime import datetime


@dataclass
class FieldError:
    """A validation error with field and message."""
    field: str
    message: str
    code: str = "invalid"

    def to_dict(self) -> Dict[str, str]:
        return {"field": self.field, "message": self.message, "code": self.code}


class ValidationError(Exception):
    """
    Raised when staged data fails validation before any I/O happens.

    Attributes:
        errors: The individual field errors (never empty)
    """

    def __init__(self, errors: List[FieldError]):
        self.errors = list(errors)
        fields = ", ".join(error.field for error in self.errors)
        super().__init__(f"Invalid fields: {fields}")

    @property
    def fields(self) -> List[str]:
        return [error.field for error in self.errors]


class Validator(ABC):
    """
    Abstract base class for validators.

    Validators check that data meets business requirements before processing.
    """

    @abstractmethod
    def validate(self, data: Dict[str, Any]) -> List[FieldError]:
        """
        Validate the data and return any errors.

        Args:
            data: The data to validate

        Returns:
            List of FieldError objects (empty if valid)
        """
        pass

    def is_valid(self, data: Dict[str, Any]) -> bool:
        """Check if data is valid."""
        return len(self.validate(data)) == 0

    def check(self, data: Dict[str, Any]):
        """Raise ValidationError if the data is not valid."""
        errors = self.validate(data)
        if errors:
            raise ValidationError(errors)


class RequiredFieldsValidator(Validator):
    """Rejects data where any required field is missing or empty."""

    def __init__(self, required_fields: List[str]):
        self.required_fields = list(required_fields)

    def validate(self, data: Dict[str, Any]) -> List[FieldError]:
        errors = []
        for name in self.required_fields:
            value = data.get(name)
            if value is None or value == "":
                errors.append(FieldError(
                    field=name,
                    message=f"{name.capitalize()} is required",
                    code="required",
                ))
        return errors


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================

def parse_date(date_string: str) -> Optional[datetime]:
    """
    Parse an ISO format date string safely.

    A trailing "Z" is read as UTC. Strings without an offset stay naive.
    Returns None for empty or unparsable input.
    """
    if not date_string:
        return None
    try:
        if date_string.endswith("Z"):
            return datetime.fromisoformat(date_string[:-1] + "+00:00")
        return datetime.fromisoformat(date_string)
    except (ValueError, TypeError):
        return None


def to_timezone(dt: datetime, tz) -> datetime:
    """Convert an aware datetime to `tz`; naive datetimes are returned as-is."""
    if dt.tzinfo is None:
        return dt
    return dt.astimezone(tz)

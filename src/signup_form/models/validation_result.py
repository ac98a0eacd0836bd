"""
Validation result models for signup form fields.

These models carry the outcome of structural and remote validation
for a single field, and the aggregate result for the whole form.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class ErrorKind(str, Enum):
    """Tag for why a field is invalid. Each kind has exactly one message template."""

    REQUIRED = "required"
    MUST_ACCEPT = "mustAccept"
    TAKEN = "taken"
    WEAK_PASSWORD = "weakPassword"
    EMAIL = "email"
    PATTERN = "pattern"
    MAX_LENGTH = "maxLength"
    REMOTE_FAILURE = "remoteFailure"


class Validity(str, Enum):
    """Validity classification of a field."""

    VALID = "valid"
    INVALID = "invalid"
    PENDING = "pending"


class FieldError(BaseModel):
    """A single reason for a field being invalid."""

    kind: ErrorKind = Field(..., description="Error kind tag")
    details: dict[str, Any] = Field(
        default_factory=dict, description="Template parameters for the message"
    )


class FieldValidationError(BaseModel):
    """Validation error for a specific field, with its rendered message."""

    field_name: str = Field(..., description="Name of the field with error")
    error_type: ErrorKind = Field(..., description="Kind of validation error")
    message: str = Field(..., description="Human-readable error message")


class ValidationResult(BaseModel):
    """Result of validating the whole form."""

    is_valid: bool = Field(..., description="Whether every field is valid")
    errors: list[FieldValidationError] = Field(
        default_factory=list, description="List of validation errors"
    )
    pending: list[str] = Field(
        default_factory=list, description="Fields whose remote check has not resolved"
    )

    @property
    def error_count(self) -> int:
        """Get the number of validation errors."""
        return len(self.errors)

    def to_error_dict(self) -> dict[str, list[str]]:
        """Convert errors to a dict mapping field names to error messages."""
        result: dict[str, list[str]] = {}
        for error in self.errors:
            if error.field_name not in result:
                result[error.field_name] = []
            result[error.field_name].append(error.message)
        return result

"""
Data models for the signup form engine.

This module contains:
- Field definitions (static configuration types)
- Validation results and error kinds
- Form state and rendering models
- Models exchanged with the signup service
"""

from signup_form.models.field_definitions import (
    FieldDependency,
    FieldKind,
    FieldSpec,
    Plan,
)
from signup_form.models.form_state import (
    ErrorRegion,
    FieldState,
    FieldView,
    FormSnapshot,
    FormView,
    SubmissionPhase,
)
from signup_form.models.signup_data import (
    Address,
    PasswordStrength,
    SignupData,
)
from signup_form.models.validation_result import (
    ErrorKind,
    FieldError,
    FieldValidationError,
    ValidationResult,
    Validity,
)

__all__ = [
    # Field definitions
    "FieldDependency",
    "FieldKind",
    "FieldSpec",
    "Plan",
    # Validation
    "ErrorKind",
    "FieldError",
    "FieldValidationError",
    "ValidationResult",
    "Validity",
    # Form state
    "ErrorRegion",
    "FieldState",
    "FieldView",
    "FormSnapshot",
    "FormView",
    "SubmissionPhase",
    # Signup service
    "Address",
    "PasswordStrength",
    "SignupData",
]

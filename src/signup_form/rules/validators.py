"""
Synchronous field validation rules.

Every rule is a pure function of the field value (and, for conditional
rules, a sibling value). It returns ``None`` when the value is valid and
a ``FieldError`` describing the problem otherwise.
"""

import re
from typing import Any, Callable

from signup_form.models.field_definitions import Plan
from signup_form.models.validation_result import ErrorKind, FieldError
from signup_form.rules.constants import EMAIL_PATTERN

Validator = Callable[[Any], FieldError | None]


def is_empty(value: Any) -> bool:
    """Whether a value counts as not given. Unchecked checkboxes are empty."""
    if value is None:
        return True
    if isinstance(value, bool):
        return value is False
    if isinstance(value, str):
        return not value.strip()
    return False


def required(value: Any) -> FieldError | None:
    """Fail with ``required`` on empty, whitespace-only or unchecked values."""
    if is_empty(value):
        return FieldError(kind=ErrorKind.REQUIRED)
    return None


def conditional_required(value: Any, plan: Plan | str | None) -> FieldError | None:
    """
    Require a value for every plan except the personal one.

    With the personal plan the field is vacuously valid, whatever it holds.
    """
    if plan is None or Plan(plan) is Plan.PERSONAL:
        return None
    return required(value)


def must_accept(value: Any) -> FieldError | None:
    """Fail with ``mustAccept`` unless the checkbox is checked."""
    if value is not True:
        return FieldError(kind=ErrorKind.MUST_ACCEPT)
    return None


def email_format(value: Any) -> FieldError | None:
    """Check the email address format. Empty values pass."""
    if is_empty(value):
        return None
    if not EMAIL_PATTERN.fullmatch(str(value)):
        return FieldError(kind=ErrorKind.EMAIL)
    return None


def pattern(regex: re.Pattern[str], allowed: str) -> Validator:
    """Create a rule requiring the whole value to match ``regex``."""

    def check(value: Any) -> FieldError | None:
        if is_empty(value):
            return None
        if not regex.fullmatch(str(value)):
            return FieldError(kind=ErrorKind.PATTERN, details={"allowed": allowed})
        return None

    return check


def max_length(limit: int) -> Validator:
    """Create a rule rejecting values longer than ``limit`` characters."""

    def check(value: Any) -> FieldError | None:
        if is_empty(value):
            return None
        if len(str(value)) > limit:
            return FieldError(kind=ErrorKind.MAX_LENGTH, details={"max_length": limit})
        return None

    return check


def first_error(validators: tuple[Validator, ...], value: Any) -> FieldError | None:
    """Run validators in order and return the first error found."""
    for validator in validators:
        error = validator(value)
        if error is not None:
            return error
    return None

"""
Field validation rules for the signup form.

Pure synchronous predicates; remote checks live in
``signup_form.async_validation``.
"""

from signup_form.rules.validators import (
    conditional_required,
    email_format,
    first_error,
    is_empty,
    max_length,
    must_accept,
    pattern,
    required,
)
from signup_form.rules.messages import format_message

__all__ = [
    "format_message",
    "conditional_required",
    "email_format",
    "first_error",
    "is_empty",
    "max_length",
    "must_accept",
    "pattern",
    "required",
]

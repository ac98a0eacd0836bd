"""
Constants for the field validation rules.

This module contains the patterns, limits and message templates used
by the validators and the error association. Centralizing these makes
them easier to maintain and update.
"""

import re

from signup_form.models.validation_result import ErrorKind

# Username: letters, digits and periods
USERNAME_PATTERN = re.compile(r"[a-zA-Z0-9.]+")
USERNAME_ALLOWED = "letters (a-z), numbers (0-9) and periods (.)"

# Same grammar as the HTML living standard for <input type="email">
EMAIL_PATTERN = re.compile(
    r"[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+"
    r"@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*"
)

USERNAME_MAX_LENGTH = 50
EMAIL_MAX_LENGTH = 100
NAME_MAX_LENGTH = 100
ADDRESS_MAX_LENGTH = 100

MESSAGE_TEMPLATES: dict[ErrorKind, str] = {
    ErrorKind.REQUIRED: "{label} must be given.",
    ErrorKind.MUST_ACCEPT: "Please accept the Terms and Services.",
    ErrorKind.TAKEN: "{label} is already taken. Please choose another one.",
    ErrorKind.WEAK_PASSWORD: "Password is too weak.{advice}",
    ErrorKind.EMAIL: "Not a valid email address.",
    ErrorKind.PATTERN: "{label} may only contain {allowed}.",
    ErrorKind.MAX_LENGTH: "{label} must have less than {max_length} characters.",
    ErrorKind.REMOTE_FAILURE: "{label} could not be verified. Please try again later.",
}

# Status text shown after a submission attempt
STATUS_SUCCEEDED = "Sign-up successful!"
STATUS_FAILED = "Sign-up error"

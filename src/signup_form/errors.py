"""Error taxonomy for the signup form engine."""

from enum import Enum

from signup_form.models.validation_result import ErrorKind


class ErrorCategory(str, Enum):
    """Where an error comes from and how far it is surfaced."""

    STRUCTURAL = "structural"
    REMOTE_REJECTION = "remote_rejection"
    REMOTE_FAILURE = "remote_failure"
    SUBMISSION = "submission"


ERROR_CATEGORIES: dict[ErrorKind, ErrorCategory] = {
    ErrorKind.REQUIRED: ErrorCategory.STRUCTURAL,
    ErrorKind.MUST_ACCEPT: ErrorCategory.STRUCTURAL,
    ErrorKind.EMAIL: ErrorCategory.STRUCTURAL,
    ErrorKind.PATTERN: ErrorCategory.STRUCTURAL,
    ErrorKind.MAX_LENGTH: ErrorCategory.STRUCTURAL,
    ErrorKind.TAKEN: ErrorCategory.REMOTE_REJECTION,
    ErrorKind.WEAK_PASSWORD: ErrorCategory.REMOTE_REJECTION,
    ErrorKind.REMOTE_FAILURE: ErrorCategory.REMOTE_FAILURE,
}


def categorize(kind: ErrorKind) -> ErrorCategory:
    """Get the category of a field error kind."""
    return ERROR_CATEGORIES[kind]


class SignupFormError(Exception):
    code = "signup_form_error"

    def __init__(self, message: str, *, operation: str | None = None):
        super().__init__(message)
        self.message = message
        self.operation = operation


class RemoteCheckError(SignupFormError):
    """Raised when a username, email or password check could not be completed."""
    code = "remote_check_failed"


class SubmissionError(SignupFormError):
    """Raised when the final signup call fails."""
    code = "submission_failed"

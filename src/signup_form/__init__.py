"""
signup-form: signup form validation engine.

Decides which fields are required, runs debounced remote checks for
username, email and password, derives form validity, binds accessible
error messages, and gates submission.

Simple Usage:
    from signup_form import HttpRemoteCheckClient, SignupForm

    async with HttpRemoteCheckClient() as client:
        async with SignupForm(client) as form:
            form.input("username", "quickBrownFox")
            form.input("email", "quick.brown.fox@example.org")
            ...
            form.check("tos", True)

            await form.settle()
            await form.submit()
            print(form.status_text)

Rendering:
    view = form.render()
    view.field("username").to_attributes()
    # {"type": "text", "aria-required": "true"}

Tracing:
    from signup_form.tracing import setup_tracing

    # Print a span per remote check and signup to the console
    setup_tracing(console=True, verbose=True)

    # Or write to file
    setup_tracing(console=False, file_path="traces.jsonl")
"""

from signup_form.orchestrator import SignupForm
from signup_form.async_validation import (
    AsyncValidationCoordinator,
    build_remote_checks,
)
from signup_form.error_association import ErrorAssociation, is_error_visible
from signup_form.form_model import FormValidityModel
from signup_form.submission import SubmissionController
from signup_form.remote.client import HttpRemoteCheckClient, RemoteCheckClient
from signup_form.errors import (
    ErrorCategory,
    RemoteCheckError,
    SignupFormError,
    SubmissionError,
)
from signup_form.models import (
    ErrorKind,
    FieldError,
    FieldState,
    FieldView,
    FormSnapshot,
    FormView,
    PasswordStrength,
    Plan,
    SignupData,
    SubmissionPhase,
    ValidationResult,
    Validity,
)
from signup_form.tracing import (
    setup_logging,
    setup_tracing,
    shutdown_tracing,
    disable_tracing,
    enable_tracing,
)

__all__ = [
    # Main interface
    "SignupForm",
    # Components
    "AsyncValidationCoordinator",
    "build_remote_checks",
    "ErrorAssociation",
    "is_error_visible",
    "FormValidityModel",
    "SubmissionController",
    # Remote service
    "HttpRemoteCheckClient",
    "RemoteCheckClient",
    # Errors
    "ErrorCategory",
    "RemoteCheckError",
    "SignupFormError",
    "SubmissionError",
    # Models
    "ErrorKind",
    "FieldError",
    "FieldState",
    "FieldView",
    "FormSnapshot",
    "FormView",
    "PasswordStrength",
    "Plan",
    "SignupData",
    "SubmissionPhase",
    "ValidationResult",
    "Validity",
    # Tracing
    "setup_logging",
    "setup_tracing",
    "shutdown_tracing",
    "disable_tracing",
    "enable_tracing",
]

__version__ = "0.1.0"

"""Human-readable messages for field errors."""

from signup_form.models.validation_result import ErrorKind, FieldError
from signup_form.rules.constants import MESSAGE_TEMPLATES


def _password_advice(error: FieldError) -> str:
    parts = [error.details.get("warning") or ""]
    parts.extend(error.details.get("suggestions") or [])
    advice = " ".join(part.strip() for part in parts if part and part.strip())
    return f" {advice}" if advice else ""


def format_message(label: str, error: FieldError) -> str:
    """Render the message template of an error kind for a field label."""
    template = MESSAGE_TEMPLATES[error.kind]
    params = {"label": label, **error.details}
    if error.kind is ErrorKind.WEAK_PASSWORD:
        params["advice"] = _password_advice(error)
    return template.format(**params)

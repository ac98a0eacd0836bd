"""
Form state and rendering models.

``FieldState`` and ``FormSnapshot`` describe what the validity model knows.
``FieldView`` and ``FormView`` are the rendering boundary handed to a
presentation layer: everything there is derived from a snapshot.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from signup_form.models.validation_result import ErrorKind, FieldError, Validity


class SubmissionPhase(str, Enum):
    """Phase of the latest submission attempt."""

    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class FieldState(BaseModel):
    """Current state of a single field."""

    name: str = Field(..., description="Field identifier")
    value: Any = Field(default="", description="Current value")
    touched: bool = Field(default=False, description="Field lost focus after having it")
    dirty: bool = Field(default=False, description="Value changed from the initial value")
    required: bool = Field(default=False, description="Field currently carries a required rule")
    structural_error: FieldError | None = Field(default=None)
    remote_status: Validity = Field(
        default=Validity.VALID, description="Outcome of the remote check, if any"
    )
    remote_error: FieldError | None = Field(default=None)

    @property
    def validity(self) -> Validity:
        """Combined structural and remote validity."""
        if self.structural_error is not None:
            return Validity.INVALID
        if self.remote_status is Validity.PENDING:
            return Validity.PENDING
        if self.remote_error is not None:
            return Validity.INVALID
        return Validity.VALID

    @property
    def error(self) -> FieldError | None:
        """The error currently attributed to the field."""
        if self.structural_error is not None:
            return self.structural_error
        if self.remote_status is Validity.PENDING:
            return None
        return self.remote_error

    @property
    def invalid(self) -> bool:
        return self.validity is Validity.INVALID

    @property
    def pending(self) -> bool:
        return self.validity is Validity.PENDING


class FormSnapshot(BaseModel):
    """Aggregate of every field plus the submission phase."""

    fields: dict[str, FieldState] = Field(default_factory=dict)
    phase: SubmissionPhase = Field(default=SubmissionPhase.IDLE)

    @property
    def validity(self) -> Validity:
        """Invalid beats pending, pending beats valid."""
        states = list(self.fields.values())
        if any(state.invalid for state in states):
            return Validity.INVALID
        if any(state.pending for state in states):
            return Validity.PENDING
        return Validity.VALID

    @property
    def is_valid(self) -> bool:
        return self.validity is Validity.VALID

    @property
    def can_submit(self) -> bool:
        """Valid, nothing pending, and no submission in flight."""
        return self.is_valid and self.phase is not SubmissionPhase.SUBMITTING

    def values(self) -> dict[str, Any]:
        """Get the current value of every field."""
        return {name: state.value for name, state in self.fields.items()}


class ErrorRegion(BaseModel):
    """The element that renders a field's error messages."""

    id: str = Field(..., description="Element id referenced by aria-errormessage")
    live: bool = Field(default=False, description="Announced to assistive technology")
    messages: list[str] = Field(default_factory=list)

    @property
    def text(self) -> str:
        return " ".join(self.messages)

    def to_attributes(self) -> dict[str, str]:
        attributes = {"id": self.id}
        if self.live:
            attributes["aria-live"] = "polite"
        return attributes


class FieldView(BaseModel):
    """Rendering data for one field."""

    name: str
    value: Any = None
    validity: Validity = Validity.VALID
    error_kind: ErrorKind | None = None
    touched: bool = False
    dirty: bool = False
    input_type: str = "text"
    aria_required: bool = False
    aria_invalid: bool | None = Field(default=None, description="True or absent, never False")
    aria_errormessage: str | None = Field(default=None, description="Error region id or absent")
    error_region: ErrorRegion

    def to_attributes(self) -> dict[str, str]:
        """HTML attributes of the input element. Absent attributes are omitted."""
        attributes = {"type": self.input_type}
        if self.aria_required:
            attributes["aria-required"] = "true"
        if self.aria_invalid:
            attributes["aria-invalid"] = "true"
        if self.aria_errormessage:
            attributes["aria-errormessage"] = self.aria_errormessage
        return attributes


class FormView(BaseModel):
    """Rendering data for the whole form."""

    fields: dict[str, FieldView] = Field(default_factory=dict)
    can_submit: bool = False
    phase: SubmissionPhase = SubmissionPhase.IDLE
    status_text: str = ""
    password_input_type: str = "password"

    def field(self, name: str) -> FieldView:
        return self.fields[name]

    def find_region(self, region_id: str) -> ErrorRegion | None:
        """Look up an error region by id, as a screen reader would."""
        for view in self.fields.values():
            if view.error_region.id == region_id:
                return view.error_region
        return None

"""
Form validity model.

Aggregates the structural rules of every field, the explicit
cross-field dependency edges and the remote check results held by the
``AsyncValidationCoordinator`` into one form-level validity signal.
"""

import logging
from typing import Any, Callable, Iterable

from signup_form.async_validation import AsyncValidationCoordinator
from signup_form.models.field_definitions import FieldDependency, FieldSpec
from signup_form.models.form_state import FieldState, FormSnapshot, SubmissionPhase
from signup_form.models.validation_result import (
    FieldValidationError,
    ValidationResult,
    Validity,
)
from signup_form.rules.messages import format_message
from signup_form.rules.validators import first_error
from signup_form.signup_fields import SIGNUP_DEPENDENCIES, SIGNUP_FIELDS

logger = logging.getLogger("signup-form")


class FormValidityModel:
    """
    State machine over all fields of the form.

    Every mutation (value change, blur, remote result) re-evaluates the
    affected fields synchronously; ``can_submit`` is derived from the
    current state on each read.
    """

    def __init__(
        self,
        fields: Iterable[FieldSpec] = SIGNUP_FIELDS,
        dependencies: Iterable[FieldDependency] = SIGNUP_DEPENDENCIES,
        coordinator: AsyncValidationCoordinator | None = None,
    ):
        """
        Initialize the model with every field at its initial value.

        Args:
            fields: Field configuration.
            dependencies: Cross-field dependency edges.
            coordinator: Remote validation coordinator. Fields it handles
                are checked remotely after each value change.

        Raises:
            ValueError: If a dependency refers to an unknown field.
        """
        self._specs: dict[str, FieldSpec] = {spec.name: spec for spec in fields}
        self._dependencies = tuple(dependencies)
        for dependency in self._dependencies:
            for name in (dependency.field, dependency.depends_on):
                if name not in self._specs:
                    raise ValueError(f"Dependency '{dependency.name}' refers to unknown field '{name}'")

        self._coordinator = coordinator
        if coordinator is not None:
            coordinator.on_change = self._on_remote_result
        self._listeners: list[Callable[[str], None]] = []

        self._states: dict[str, FieldState] = {
            name: FieldState(name=name, value=spec.initial_value)
            for name, spec in self._specs.items()
        }
        for name in self._specs:
            self._evaluate(name)

    @property
    def specs(self) -> dict[str, FieldSpec]:
        return dict(self._specs)

    def spec(self, name: str) -> FieldSpec:
        try:
            return self._specs[name]
        except KeyError:
            raise KeyError(f"Unknown field: {name}") from None

    def subscribe(self, listener: Callable[[str], None]) -> None:
        """Register a callback invoked with the field name after every mutation."""
        self._listeners.append(listener)

    def set_value(self, name: str, value: Any) -> None:
        """
        Apply a new value to a field.

        Runs the field's structural rules, (re)schedules or discards its
        remote check, and re-evaluates every field linked to it through a
        dependency edge, all without waiting for any debounce.

        Raises:
            KeyError: If the field is unknown.
            ValueError: If the field rejects the value. Nothing is changed then.
        """
        spec = self.spec(name)
        if spec.parse is not None:
            value = spec.parse(value)
        state = self._states[name]
        state.value = value
        if value != spec.initial_value:
            state.dirty = True

        self._evaluate(name, remote=True)
        for dependency in self._dependents_of(name):
            self._evaluate(dependency.field)
            logger.debug(f"Re-evaluated '{dependency.field}' through '{dependency.name}'")
        self._notify(name)

    def mark_touched(self, name: str) -> None:
        """Record that the field lost focus."""
        self.spec(name)
        if not self._states[name].touched:
            self._states[name].touched = True
            self._notify(name)

    def field(self, name: str) -> FieldState:
        """Get a copy of a field's state, including its remote check outcome."""
        self.spec(name)
        state = self._states[name]
        if self._coordinator is None or not self._coordinator.handles(name):
            return state.model_copy(deep=True)
        remote_status, remote_error = self._coordinator.status(name)
        return state.model_copy(
            deep=True,
            update={"remote_status": remote_status, "remote_error": remote_error},
        )

    def is_required(self, name: str) -> bool:
        return self._states[name].required

    def validity(self, name: str) -> Validity:
        return self.field(name).validity

    def snapshot(self, phase: SubmissionPhase = SubmissionPhase.IDLE) -> FormSnapshot:
        return FormSnapshot(
            fields={name: self.field(name) for name in self._specs},
            phase=phase,
        )

    @property
    def can_submit(self) -> bool:
        """True iff no field is invalid and no remote check is pending."""
        return self.snapshot().is_valid

    def values(self) -> dict[str, Any]:
        return {name: state.value for name, state in self._states.items()}

    def validation_result(self) -> ValidationResult:
        """Summarize every field error and pending check, visible or not."""
        snapshot = self.snapshot()
        errors = [
            FieldValidationError(
                field_name=name,
                error_type=state.error.kind,
                message=format_message(self._specs[name].label, state.error),
            )
            for name, state in snapshot.fields.items()
            if state.invalid and state.error is not None
        ]
        pending = [name for name, state in snapshot.fields.items() if state.pending]
        return ValidationResult(is_valid=snapshot.is_valid, errors=errors, pending=pending)

    def _dependents_of(self, name: str) -> list[FieldDependency]:
        return [d for d in self._dependencies if d.depends_on == name]

    def _links_of(self, name: str) -> list[FieldDependency]:
        return [d for d in self._dependencies if d.field == name]

    def _evaluate(self, name: str, remote: bool = False) -> None:
        spec = self._specs[name]
        state = self._states[name]
        links = self._links_of(name)

        state.required = spec.required or any(
            link.requires(self._states[link.depends_on].value) for link in links
        )

        error = first_error(spec.validators, state.value)
        for link in links:
            if error is not None:
                break
            error = link.rule(state.value, self._states[link.depends_on].value)
        state.structural_error = error

        if remote and self._coordinator is not None and self._coordinator.handles(name):
            if error is None:
                self._coordinator.schedule(name, state.value)
            else:
                self._coordinator.discard(name)

    def _on_remote_result(self, name: str) -> None:
        self._notify(name)

    def _notify(self, name: str) -> None:
        for listener in self._listeners:
            listener(name)

"""
Accessible error association.

Sets ``aria-invalid`` and ``aria-errormessage`` on a field when it is
invalid and touched or dirty, pointing assistive technology at the
element that holds the field's error messages.

https://w3c.github.io/aria/#aria-invalid
https://w3c.github.io/aria/#aria-errormessage

Bindings are recomputed from a ``FormSnapshot`` every time; nothing
here keeps state of its own.
"""

from typing import Iterable

from signup_form.models.field_definitions import FieldSpec
from signup_form.models.form_state import ErrorRegion, FieldState, FieldView, FormSnapshot
from signup_form.rules.messages import format_message
from signup_form.signup_fields import SIGNUP_FIELDS


def is_error_visible(state: FieldState) -> bool:
    """Whether the link to the errors is established."""
    return state.invalid and (state.touched or state.dirty)


class ErrorAssociation:
    """Maps fields to their error regions and derives the aria bindings."""

    def __init__(self, fields: Iterable[FieldSpec] = SIGNUP_FIELDS):
        self._specs: dict[str, FieldSpec] = {spec.name: spec for spec in fields}

    def region_id(self, name: str) -> str:
        """Id of the element rendering the field's errors, e.g. ``tos-errors``."""
        return self._specs[name].error_region

    def bind(self, state: FieldState, input_type: str | None = None) -> FieldView:
        """Derive the rendering data of one field."""
        spec = self._specs[state.name]
        visible = is_error_visible(state)
        messages = []
        if visible and state.error is not None:
            messages.append(format_message(spec.label, state.error))

        return FieldView(
            name=state.name,
            value=state.value,
            validity=state.validity,
            error_kind=state.error.kind if state.error is not None else None,
            touched=state.touched,
            dirty=state.dirty,
            input_type=input_type or spec.kind.value,
            aria_required=state.required,
            aria_invalid=True if visible else None,
            aria_errormessage=spec.error_region if visible else None,
            error_region=ErrorRegion(id=spec.error_region, live=visible, messages=messages),
        )

    def bind_all(
        self,
        snapshot: FormSnapshot,
        input_types: dict[str, str] | None = None,
    ) -> dict[str, FieldView]:
        """Derive the rendering data of every field in a snapshot."""
        input_types = input_types or {}
        return {
            name: self.bind(state, input_types.get(name))
            for name, state in snapshot.fields.items()
        }

"""
Field definition models for the signup form.

A form is described by a list of ``FieldSpec`` entries plus the
``FieldDependency`` edges that link conditionally validated fields to
the sibling field they depend on.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable


class Plan(str, Enum):
    """Plan selection. Exactly one plan is active at any time."""

    PERSONAL = "personal"
    BUSINESS = "business"
    NON_PROFIT = "non-profit"


class FieldKind(str, Enum):
    """Input widget of a field."""

    TEXT = "text"
    EMAIL = "email"
    PASSWORD = "password"
    CHECKBOX = "checkbox"
    RADIO = "radio"


@dataclass(frozen=True)
class FieldSpec:
    """
    Static description of one form field.

    ``error_region`` is the id of the element that renders this field's
    error messages; it is configuration, never derived from the name.
    ``parse`` converts raw input before it is stored and raises
    ``ValueError`` for values the field can never hold.
    """

    name: str
    label: str
    error_region: str
    kind: FieldKind = FieldKind.TEXT
    required: bool = False
    validators: tuple[Callable[[Any], Any], ...] = ()
    initial_value: Any = ""
    parse: Callable[[Any], Any] | None = None


@dataclass(frozen=True)
class FieldDependency:
    """
    Named reactive link from a field to the sibling it is validated against.

    ``rule`` receives ``(value, sibling_value)`` and returns an error or None.
    ``requires`` tells, from the sibling value alone, whether the link
    currently makes the field required.
    """

    name: str
    field: str
    depends_on: str
    rule: Callable[[Any, Any], Any]
    requires: Callable[[Any], bool]

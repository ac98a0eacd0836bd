"""Field configuration of the signup form."""

from signup_form.models.field_definitions import FieldDependency, FieldKind, FieldSpec, Plan
from signup_form.rules.constants import (
    ADDRESS_MAX_LENGTH,
    EMAIL_MAX_LENGTH,
    NAME_MAX_LENGTH,
    USERNAME_ALLOWED,
    USERNAME_MAX_LENGTH,
    USERNAME_PATTERN,
)
from signup_form.rules.validators import (
    conditional_required,
    email_format,
    max_length,
    must_accept,
    pattern,
    required,
)

SIGNUP_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec(
        name="plan",
        label="Plan",
        error_region="plan-errors",
        kind=FieldKind.RADIO,
        required=True,
        validators=(required,),
        initial_value=Plan.PERSONAL,
        parse=Plan,
    ),
    FieldSpec(
        name="username",
        label="Username",
        error_region="username-errors",
        required=True,
        validators=(
            required,
            pattern(USERNAME_PATTERN, USERNAME_ALLOWED),
            max_length(USERNAME_MAX_LENGTH),
        ),
    ),
    FieldSpec(
        name="email",
        label="Email",
        error_region="email-errors",
        kind=FieldKind.EMAIL,
        required=True,
        validators=(required, email_format, max_length(EMAIL_MAX_LENGTH)),
    ),
    FieldSpec(
        name="password",
        label="Password",
        error_region="password-errors",
        kind=FieldKind.PASSWORD,
        required=True,
        validators=(required,),
    ),
    FieldSpec(
        name="name",
        label="Name",
        error_region="name-errors",
        required=True,
        validators=(required, max_length(NAME_MAX_LENGTH)),
    ),
    # Required or not depends on the plan, see SIGNUP_DEPENDENCIES
    FieldSpec(
        name="addressLine1",
        label="Address line 1",
        error_region="addressLine1-errors",
        validators=(max_length(ADDRESS_MAX_LENGTH),),
    ),
    FieldSpec(
        name="addressLine2",
        label="Address line 2",
        error_region="addressLine2-errors",
        required=True,
        validators=(required, max_length(ADDRESS_MAX_LENGTH)),
    ),
    FieldSpec(
        name="city",
        label="City",
        error_region="city-errors",
        required=True,
        validators=(required, max_length(ADDRESS_MAX_LENGTH)),
    ),
    FieldSpec(
        name="postcode",
        label="Postcode",
        error_region="postcode-errors",
        required=True,
        validators=(required, max_length(ADDRESS_MAX_LENGTH)),
    ),
    FieldSpec(
        name="region",
        label="Region",
        error_region="region-errors",
        validators=(max_length(ADDRESS_MAX_LENGTH),),
    ),
    FieldSpec(
        name="country",
        label="Country",
        error_region="country-errors",
        required=True,
        validators=(required, max_length(ADDRESS_MAX_LENGTH)),
    ),
    FieldSpec(
        name="tos",
        label="Terms and Services",
        error_region="tos-errors",
        kind=FieldKind.CHECKBOX,
        required=True,
        validators=(must_accept,),
        initial_value=False,
    ),
)

SIGNUP_DEPENDENCIES: tuple[FieldDependency, ...] = (
    FieldDependency(
        name="address-required-for-organisations",
        field="addressLine1",
        depends_on="plan",
        rule=conditional_required,
        requires=lambda plan: Plan(plan) is not Plan.PERSONAL,
    ),
)

ERROR_REGION_IDS: dict[str, str] = {spec.name: spec.error_region for spec in SIGNUP_FIELDS}

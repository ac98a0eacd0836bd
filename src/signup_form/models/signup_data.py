"""
Models exchanged with the remote signup service.

Field names follow the service's camelCase wire format through aliases.
"""

from typing import Any

from pydantic import BaseModel, Field

from signup_form.models.field_definitions import Plan


class PasswordStrength(BaseModel):
    """Password strength as scored by the signup service."""

    score: int = Field(..., ge=0, le=4, description="Strength score from 0 (weak) to 4 (strong)")
    warning: str = Field(default="", description="Main problem with the password")
    suggestions: list[str] = Field(
        default_factory=list, description="Ordered hints to improve the password"
    )

    def is_weak(self, threshold: int = 3) -> bool:
        """Whether the score is below the acceptance threshold."""
        return self.score < threshold


class Address(BaseModel):
    """Postal address part of the signup payload."""

    name: str = Field(..., description="Full name")
    address_line1: str = Field(default="", alias="addressLine1")
    address_line2: str = Field(..., alias="addressLine2")
    city: str = Field(...)
    postcode: str = Field(...)
    region: str = Field(default="")
    country: str = Field(...)

    model_config = {"populate_by_name": True}


class SignupData(BaseModel):
    """
    Payload of the final signup call.

    This is a projection of the form values: UI-only state such as
    password visibility or touched/dirty flags never ends up here.
    """

    plan: Plan = Field(..., description="Selected plan")
    username: str = Field(...)
    email: str = Field(...)
    password: str = Field(...)
    tos: bool = Field(..., description="Terms and Services accepted")
    address: Address = Field(...)

    model_config = {"populate_by_name": True}

    @classmethod
    def from_form_values(cls, values: dict[str, Any]) -> "SignupData":
        """Project flat form values onto the signup payload."""
        return cls(
            plan=values["plan"],
            username=values["username"],
            email=values["email"],
            password=values["password"],
            tos=values["tos"],
            address=Address(
                name=values["name"],
                address_line1=values.get("addressLine1") or "",
                address_line2=values["addressLine2"],
                city=values["city"],
                postcode=values["postcode"],
                region=values.get("region") or "",
                country=values["country"],
            ),
        )

    def to_wire(self) -> dict[str, Any]:
        """Export as the JSON body expected by the signup service."""
        return self.model_dump(mode="json", by_alias=True)

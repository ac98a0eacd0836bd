"""Shared fixtures: sample signup data and an in-memory signup service."""

import asyncio
from typing import Any

import pytest

from signup_form.config import SignupFormConfig
from signup_form.models.field_definitions import Plan
from signup_form.models.signup_data import Address, PasswordStrength, SignupData
from signup_form.orchestrator import SignupForm

USERNAME = "quickBrownFox"
PASSWORD = "dog lazy the over jumps fox brown quick the"
EMAIL = "quick.brown.fox@example.org"
NAME = "Mr. Fox"
ADDRESS_LINE1 = ""
ADDRESS_LINE2 = "Under the Tree 1"
CITY = "Farmtown"
POSTCODE = "123456"
REGION = "Upper South"
COUNTRY = "Luxembourg"

SIGNUP_DATA = SignupData(
    plan=Plan.PERSONAL,
    username=USERNAME,
    email=EMAIL,
    password=PASSWORD,
    tos=True,
    address=Address(
        name=NAME,
        address_line1=ADDRESS_LINE1,
        address_line2=ADDRESS_LINE2,
        city=CITY,
        postcode=POSTCODE,
        region=REGION,
        country=COUNTRY,
    ),
)

FORM_VALUES = {
    "username": USERNAME,
    "email": EMAIL,
    "password": PASSWORD,
    "name": NAME,
    "addressLine1": ADDRESS_LINE1,
    "addressLine2": ADDRESS_LINE2,
    "city": CITY,
    "postcode": POSTCODE,
    "region": REGION,
    "country": COUNTRY,
}

STRONG_PASSWORD = PasswordStrength(score=4, warning="", suggestions=[])
WEAK_PASSWORD = PasswordStrength(
    score=2,
    warning="too short",
    suggestions=["try a longer password"],
)

# Short debounce so the scenarios run fast
TEST_DELAY_MS = 10


class FakeSignupService:
    """
    In-memory RemoteCheckClient that records every call.

    Each result may be a plain value, a callable taking the call argument,
    or an exception instance to raise.
    """

    def __init__(
        self,
        username_taken: Any = False,
        email_taken: Any = False,
        password_strength: Any = STRONG_PASSWORD,
        signup_result: Any = None,
    ):
        self.username_taken = username_taken
        self.email_taken = email_taken
        self.password_strength = password_strength
        self.signup_result = signup_result
        self.gate: asyncio.Event | None = None
        self.calls: dict[str, list[Any]] = {
            "is_username_taken": [],
            "is_email_taken": [],
            "get_password_strength": [],
            "signup": [],
        }

    async def is_username_taken(self, username: str) -> bool:
        self.calls["is_username_taken"].append(username)
        return await self._respond(self.username_taken, username)

    async def is_email_taken(self, email: str) -> bool:
        self.calls["is_email_taken"].append(email)
        return await self._respond(self.email_taken, email)

    async def get_password_strength(self, password: str) -> PasswordStrength:
        self.calls["get_password_strength"].append(password)
        return await self._respond(self.password_strength, password)

    async def signup(self, data: SignupData) -> None:
        self.calls["signup"].append(data)
        await self._respond(self.signup_result, data)

    async def _respond(self, result: Any, argument: Any) -> Any:
        if self.gate is not None:
            await self.gate.wait()
        if isinstance(result, BaseException):
            raise result
        if callable(result):
            return result(argument)
        return result


@pytest.fixture
def service() -> FakeSignupService:
    return FakeSignupService()


@pytest.fixture
def test_config() -> SignupFormConfig:
    return SignupFormConfig(async_validation_delay_ms=TEST_DELAY_MS, enable_tracing=False)


@pytest.fixture
def form(service, test_config) -> SignupForm:
    return SignupForm(service, config=test_config)


def fill_form(form: SignupForm, **overrides: Any) -> None:
    """Type every field value and accept the Terms and Services."""
    for name, value in {**FORM_VALUES, **overrides}.items():
        form.input(name, value)
    form.check("tos", True)

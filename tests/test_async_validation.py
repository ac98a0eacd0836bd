"""Tests for the debounced remote validation coordinator."""

import asyncio
import logging

import pytest

from conftest import WEAK_PASSWORD, FakeSignupService
from signup_form.async_validation import AsyncValidationCoordinator, build_remote_checks
from signup_form.errors import RemoteCheckError
from signup_form.models.signup_data import PasswordStrength
from signup_form.models.validation_result import ErrorKind, FieldError, Validity

DELAY = 0.01


class TestRemoteChecks:
    """Tests for wrapping client calls as field checks."""

    @pytest.mark.asyncio
    async def test_taken_username(self):
        """Test a taken username yields the taken kind."""
        checks = build_remote_checks(FakeSignupService(username_taken=True))

        error = await checks["username"]("quickBrownFox")

        assert error == FieldError(kind=ErrorKind.TAKEN)

    @pytest.mark.asyncio
    async def test_free_email(self):
        """Test a free email is valid."""
        checks = build_remote_checks(FakeSignupService())

        assert await checks["email"]("fox@example.org") is None

    @pytest.mark.asyncio
    async def test_weak_password_carries_advice(self):
        """Test a weak score keeps warning and suggestions for the message."""
        checks = build_remote_checks(FakeSignupService(password_strength=WEAK_PASSWORD))

        error = await checks["password"]("short")

        assert error.kind is ErrorKind.WEAK_PASSWORD
        assert error.details["score"] == 2
        assert error.details["warning"] == "too short"
        assert error.details["suggestions"] == ["try a longer password"]

    @pytest.mark.asyncio
    async def test_threshold_is_configurable(self):
        """Test the acceptance threshold comes from the argument."""
        service = FakeSignupService(password_strength=PasswordStrength(score=3))

        strict = build_remote_checks(service, password_strength_threshold=4)
        default = build_remote_checks(service, password_strength_threshold=3)

        assert (await strict["password"]("pw")).kind is ErrorKind.WEAK_PASSWORD
        assert await default["password"]("pw") is None


class TestDebounce:
    """Tests for the debounce window and last-write-wins."""

    @pytest.mark.asyncio
    async def test_field_is_pending_until_resolved(self):
        """Test the field is pending from the value change on."""
        service = FakeSignupService()
        coordinator = AsyncValidationCoordinator(build_remote_checks(service), delay=DELAY)

        coordinator.schedule("username", "fox")

        assert coordinator.status("username") == (Validity.PENDING, None)
        assert coordinator.pending_fields == ["username"]
        assert service.calls["is_username_taken"] == []

        await coordinator.settle()

        assert coordinator.status("username") == (Validity.VALID, None)
        assert coordinator.pending_fields == []

    @pytest.mark.asyncio
    async def test_only_the_latest_value_is_checked(self):
        """Test changes within the window never reach the service."""
        service = FakeSignupService()
        coordinator = AsyncValidationCoordinator(build_remote_checks(service), delay=DELAY)

        for value in ["q", "qu", "qui", "quick"]:
            coordinator.schedule("username", value)
        await coordinator.settle()

        assert service.calls["is_username_taken"] == ["quick"]
        assert coordinator.generation("username") == 4

    @pytest.mark.asyncio
    async def test_fields_are_debounced_independently(self):
        """Test a change to one field does not cancel another field's check."""
        service = FakeSignupService()
        coordinator = AsyncValidationCoordinator(build_remote_checks(service), delay=DELAY)

        coordinator.schedule("username", "fox")
        coordinator.schedule("email", "fox@example.org")
        await coordinator.settle()

        assert service.calls["is_username_taken"] == ["fox"]
        assert service.calls["is_email_taken"] == ["fox@example.org"]

    @pytest.mark.asyncio
    async def test_on_change_is_called_on_resolution(self):
        """Test the callback receives the field name once the result is applied."""
        resolved = []
        coordinator = AsyncValidationCoordinator(
            build_remote_checks(FakeSignupService(email_taken=True)),
            delay=DELAY,
            on_change=resolved.append,
        )

        coordinator.schedule("email", "taken@example.org")
        await coordinator.settle()

        assert resolved == ["email"]
        validity, error = coordinator.status("email")
        assert validity is Validity.INVALID
        assert error.kind is ErrorKind.TAKEN


class TestStaleResults:
    """Tests for suppressing results of superseded values."""

    @pytest.mark.asyncio
    async def test_in_flight_result_is_ignored_after_new_value(self):
        """Test a result that arrives after a newer value was entered is dropped."""
        started = asyncio.Event()

        async def stubborn_check(value):
            if value == "old":
                started.set()
                try:
                    await asyncio.sleep(10)
                except asyncio.CancelledError:
                    # Completes anyway, as a remote call that ignores cancellation would
                    return FieldError(kind=ErrorKind.TAKEN)
            return None

        coordinator = AsyncValidationCoordinator({"username": stubborn_check}, delay=0)

        coordinator.schedule("username", "old")
        await started.wait()
        coordinator.schedule("username", "new")
        await coordinator.settle()
        await asyncio.sleep(0)

        assert coordinator.status("username") == (Validity.VALID, None)

    @pytest.mark.asyncio
    async def test_discard_drops_scheduled_check(self):
        """Test discarding a field resolves it without a remote call."""
        service = FakeSignupService()
        coordinator = AsyncValidationCoordinator(build_remote_checks(service), delay=DELAY)

        coordinator.schedule("username", "fox")
        coordinator.discard("username")
        await coordinator.settle()

        assert service.calls["is_username_taken"] == []
        assert coordinator.status("username") == (Validity.VALID, None)

    @pytest.mark.asyncio
    async def test_cancel_all_keeps_fields_pending(self):
        """Test cancelled checks never resolve their fields."""
        service = FakeSignupService()
        coordinator = AsyncValidationCoordinator(build_remote_checks(service), delay=DELAY)

        coordinator.schedule("username", "fox")
        coordinator.schedule("password", "secret")
        coordinator.cancel_all()
        await coordinator.settle()
        await asyncio.sleep(DELAY * 2)

        assert service.calls["is_username_taken"] == []
        assert service.calls["get_password_strength"] == []
        assert sorted(coordinator.pending_fields) == ["password", "username"]


class TestRemoteFailure:
    """Tests for the fail-closed policy."""

    @pytest.mark.asyncio
    async def test_error_marks_field_invalid(self):
        """Test a raising check yields remoteFailure, never valid."""
        service = FakeSignupService(password_strength=RemoteCheckError("timeout"))
        coordinator = AsyncValidationCoordinator(build_remote_checks(service), delay=DELAY)

        coordinator.schedule("password", "secret")
        await coordinator.settle()

        validity, error = coordinator.status("password")
        assert validity is Validity.INVALID
        assert error.kind is ErrorKind.REMOTE_FAILURE
        assert "timeout" in error.details["reason"]

    @pytest.mark.asyncio
    async def test_unexpected_exception_also_fails_closed(self):
        """Test any exception from the client is contained."""
        service = FakeSignupService(username_taken=RuntimeError("bug"))
        coordinator = AsyncValidationCoordinator(build_remote_checks(service), delay=DELAY)

        coordinator.schedule("username", "fox")
        await coordinator.settle()

        assert coordinator.status("username")[0] is Validity.INVALID

    @pytest.mark.asyncio
    async def test_new_value_recovers_from_failure(self):
        """Test a later successful check clears the failure."""
        service = FakeSignupService(username_taken=RemoteCheckError("down"))
        coordinator = AsyncValidationCoordinator(build_remote_checks(service), delay=DELAY)

        coordinator.schedule("username", "fox")
        await coordinator.settle()
        service.username_taken = False
        coordinator.schedule("username", "fox2")
        await coordinator.settle()

        assert coordinator.status("username") == (Validity.VALID, None)

    @pytest.mark.asyncio
    async def test_log_level_follows_error_category(self, caplog):
        """Test failures are logged as warnings and rejections as info."""
        service = FakeSignupService(username_taken=RemoteCheckError("down"), email_taken=True)
        coordinator = AsyncValidationCoordinator(build_remote_checks(service), delay=DELAY)

        with caplog.at_level(logging.INFO, logger="signup-form"):
            coordinator.schedule("username", "fox")
            coordinator.schedule("email", "fox@example.org")
            await coordinator.settle()

        levels = {
            record.getMessage().split("'")[1]: record.levelno
            for record in caplog.records
            if "resolved" in record.getMessage()
        }
        assert levels == {"username": logging.WARNING, "email": logging.INFO}

"""Tests for the submission controller."""

import asyncio
import logging

import pytest

from conftest import FORM_VALUES, SIGNUP_DATA, FakeSignupService
from signup_form.errors import SubmissionError
from signup_form.form_model import FormValidityModel
from signup_form.models.form_state import SubmissionPhase
from signup_form.submission import SubmissionController


@pytest.fixture
def model() -> FormValidityModel:
    model = FormValidityModel()
    for name, value in FORM_VALUES.items():
        model.set_value(name, value)
    model.set_value("tos", True)
    return model


class TestSubmissionController:
    """Tests for the idle/submitting/succeeded/failed phases."""

    def test_starts_idle(self, model):
        """Test a new controller has no status."""
        controller = SubmissionController(model, FakeSignupService())

        assert controller.phase is SubmissionPhase.IDLE
        assert controller.status_text == ""
        assert controller.can_submit

    def test_payload(self, model):
        """Test the payload is projected from the form values."""
        controller = SubmissionController(model, FakeSignupService())

        assert controller.payload() == SIGNUP_DATA

    @pytest.mark.asyncio
    async def test_success(self, model):
        """Test a successful call ends in succeeded."""
        service = FakeSignupService()
        controller = SubmissionController(model, service)

        assert await controller.submit() is SubmissionPhase.SUCCEEDED
        assert controller.status_text == "Sign-up successful!"
        assert controller.attempts == 1
        assert service.calls["signup"] == [SIGNUP_DATA]

    @pytest.mark.asyncio
    async def test_failure(self, model):
        """Test a failing call ends in failed without raising."""
        controller = SubmissionController(
            model, FakeSignupService(signup_result=SubmissionError("Service down"))
        )

        assert await controller.submit() is SubmissionPhase.FAILED
        assert controller.status_text == "Sign-up error"

    @pytest.mark.asyncio
    async def test_invalid_form_is_not_submitted(self):
        """Test submit is a no-op for an invalid form."""
        service = FakeSignupService()
        controller = SubmissionController(FormValidityModel(), service)

        assert await controller.submit() is SubmissionPhase.IDLE
        assert controller.attempts == 0
        assert service.calls["signup"] == []

    @pytest.mark.asyncio
    async def test_no_double_submit(self, model):
        """Test a second submit while submitting is ignored."""
        service = FakeSignupService()
        service.gate = asyncio.Event()
        controller = SubmissionController(model, service)

        first = asyncio.create_task(controller.submit())
        await asyncio.sleep(0)
        assert controller.phase is SubmissionPhase.SUBMITTING
        assert controller.can_submit is False

        assert await controller.submit() is SubmissionPhase.SUBMITTING

        service.gate.set()
        assert await first is SubmissionPhase.SUCCEEDED
        assert len(service.calls["signup"]) == 1

    @pytest.mark.asyncio
    async def test_failed_form_becomes_invalid(self, model):
        """Test a failed attempt does not allow submitting an invalid form."""
        controller = SubmissionController(
            model, FakeSignupService(signup_result=SubmissionError("Service down"))
        )
        await controller.submit()

        model.set_value("city", "")

        assert controller.can_submit is False
        assert await controller.submit() is SubmissionPhase.FAILED
        assert controller.attempts == 1

    @pytest.mark.asyncio
    async def test_cancelled_submit_can_be_retried(self, model):
        """Test cancelling an in-flight signup restores the previous phase."""
        service = FakeSignupService()
        service.gate = asyncio.Event()
        controller = SubmissionController(model, service)

        attempt = asyncio.create_task(controller.submit())
        await asyncio.sleep(0)
        assert controller.phase is SubmissionPhase.SUBMITTING
        attempt.cancel()
        with pytest.raises(asyncio.CancelledError):
            await attempt

        assert controller.phase is SubmissionPhase.IDLE
        assert controller.can_submit is True

        service.gate.set()
        assert await controller.submit() is SubmissionPhase.SUCCEEDED
        assert controller.attempts == 2

    @pytest.mark.asyncio
    async def test_ignored_submit_logs_the_errors(self, caplog):
        """Test the reasons for an ignored submit are logged."""
        controller = SubmissionController(FormValidityModel(), FakeSignupService())

        with caplog.at_level(logging.INFO, logger="signup-form"):
            await controller.submit()

        assert "Submit ignored" in caplog.text
        assert "Username must be given." in caplog.text

"""
Submission controller.

idle --submit(valid)--> submitting --success--> succeeded
                                   --failure--> failed

Submitting while the form cannot be submitted is a no-op. Succeeded
and failed end an attempt; a later valid submit starts a new one.
"""

import asyncio
import logging

from signup_form.form_model import FormValidityModel
from signup_form.models.form_state import SubmissionPhase
from signup_form.models.signup_data import SignupData
from signup_form.remote.client import RemoteCheckClient
from signup_form.rules.constants import STATUS_FAILED, STATUS_SUCCEEDED
from signup_form.tracing import traced_operation

logger = logging.getLogger("signup-form")


class SubmissionController:
    """Gates submission on form validity and reports the outcome."""

    def __init__(self, model: FormValidityModel, client: RemoteCheckClient):
        self._model = model
        self._client = client
        self.phase = SubmissionPhase.IDLE
        self.attempts = 0

    @property
    def can_submit(self) -> bool:
        return self.phase is not SubmissionPhase.SUBMITTING and self._model.can_submit

    @property
    def status_text(self) -> str:
        if self.phase is SubmissionPhase.SUCCEEDED:
            return STATUS_SUCCEEDED
        if self.phase is SubmissionPhase.FAILED:
            return STATUS_FAILED
        return ""

    def payload(self) -> SignupData:
        """Project the current form values onto the signup payload."""
        return SignupData.from_form_values(self._model.values())

    async def submit(self) -> SubmissionPhase:
        """
        Submit the form if it is valid and nothing is pending.

        Returns:
            The phase after the attempt. Unchanged when nothing was submitted.
        """
        if self.phase is SubmissionPhase.SUBMITTING:
            logger.info("Submit ignored: a submission is already in progress")
            return self.phase
        if not self.can_submit:
            result = self._model.validation_result()
            logger.info(
                f"Submit ignored: {result.error_count} invalid field(s) {result.to_error_dict()}, "
                f"pending: {result.pending}"
            )
            return self.phase

        data = self.payload()
        previous = self.phase
        self.phase = SubmissionPhase.SUBMITTING
        self.attempts += 1

        try:
            async with traced_operation("signup", attempt=self.attempts):
                await self._client.signup(data)
        except asyncio.CancelledError:
            logger.info(f"Signup attempt {self.attempts} cancelled")
            self.phase = previous
            raise
        except Exception as e:
            # Reported as form status only, field states stay as they are
            logger.error(f"Signup failed: {e}")
            self.phase = SubmissionPhase.FAILED
        else:
            logger.info(f"Signup succeeded for user {data.username}")
            self.phase = SubmissionPhase.SUCCEEDED

        return self.phase

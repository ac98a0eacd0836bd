"""
Signup form orchestrator.

This is the main entry point of the engine. It wires the validity
model, the remote validation coordinator, the error association and
the submission controller together, and exposes one method per user
event plus the rendering boundary.
"""

import logging
from typing import Any

from signup_form.async_validation import AsyncValidationCoordinator, build_remote_checks
from signup_form.config import SignupFormConfig, get_config
from signup_form.error_association import ErrorAssociation
from signup_form.form_model import FormValidityModel
from signup_form.models.field_definitions import FieldKind, Plan
from signup_form.models.form_state import FormSnapshot, FormView, SubmissionPhase
from signup_form.remote.client import RemoteCheckClient
from signup_form.signup_fields import SIGNUP_DEPENDENCIES, SIGNUP_FIELDS
from signup_form.submission import SubmissionController
from signup_form.tracing import setup_tracing

logger = logging.getLogger("signup-form")


class SignupForm:
    """
    Signup form driven by user events.

    Usage:
        async with SignupForm(client) as form:
            form.input("username", "quickBrownFox")
            form.blur("username")
            form.select_plan("business")
            await form.settle()          # wait for remote checks
            if form.can_submit:
                await form.submit()
            view = form.render()
            print(view.status_text)

    Value events must be sent from a running event loop, because they
    may schedule remote checks.
    """

    def __init__(
        self,
        client: RemoteCheckClient,
        config: SignupFormConfig | None = None,
        trace_to_console: bool = False,
        trace_verbose: bool = False,
        trace_file: str | None = None,
    ):
        """
        Initialize the form with empty fields and the personal plan.

        Args:
            client: Remote signup service client.
            config: Settings. If None, uses the global configuration.
            trace_to_console: Whether to print traces to console.
            trace_verbose: Whether to print full span details.
            trace_file: Optional file path to write traces to. If None,
                uses config.trace_file.

        Tracing is only (re)configured when console or file output is
        requested; otherwise an earlier ``setup_tracing`` call stays in effect.
        """
        self.config = config or get_config()

        trace_file = trace_file or self.config.trace_file
        if trace_to_console or trace_file:
            setup_tracing(
                enabled=self.config.enable_tracing,
                console=trace_to_console,
                verbose=trace_verbose,
                file_path=trace_file,
            )

        self._coordinator = AsyncValidationCoordinator(
            build_remote_checks(client, self.config.password_strength_threshold),
            delay=self.config.async_validation_delay,
        )
        self._model = FormValidityModel(
            fields=SIGNUP_FIELDS,
            dependencies=SIGNUP_DEPENDENCIES,
            coordinator=self._coordinator,
        )
        self._errors = ErrorAssociation(SIGNUP_FIELDS)
        self._submission = SubmissionController(self._model, client)
        self.show_password = False

    async def __aenter__(self) -> "SignupForm":
        return self

    async def __aexit__(self, *exc_info) -> None:
        self.close()

    @property
    def model(self) -> FormValidityModel:
        return self._model

    @property
    def phase(self) -> SubmissionPhase:
        return self._submission.phase

    @property
    def can_submit(self) -> bool:
        return self._submission.can_submit

    @property
    def status_text(self) -> str:
        return self._submission.status_text

    def input(self, name: str, value: Any) -> None:
        """Handle a keystroke (or paste) changing a field's value."""
        self._model.set_value(name, value)

    def blur(self, name: str) -> None:
        """Handle a field losing focus."""
        self._model.mark_touched(name)

    def check(self, name: str, checked: bool) -> None:
        """Handle a checkbox toggle."""
        if self._model.spec(name).kind is not FieldKind.CHECKBOX:
            raise ValueError(f"Field '{name}' is not a checkbox")
        self._model.set_value(name, bool(checked))

    def select_plan(self, plan: Plan | str) -> None:
        """
        Switch the active plan.

        Raises:
            ValueError: If the plan is unknown.
        """
        self._model.set_value("plan", plan)

    def toggle_password_visibility(self) -> None:
        self.show_password = not self.show_password

    @property
    def password_input_type(self) -> str:
        return "text" if self.show_password else "password"

    async def submit(self) -> SubmissionPhase:
        """Submit the form. A no-op unless ``can_submit`` is true."""
        return await self._submission.submit()

    async def settle(self) -> None:
        """Wait for every debounce window and remote check to finish."""
        await self._coordinator.settle()

    def close(self) -> None:
        """Leave the form: outstanding remote checks no longer affect state."""
        pending = self._coordinator.pending_fields
        if pending:
            logger.debug(f"Closing form with pending checks: {', '.join(pending)}")
        self._coordinator.cancel_all()

    def snapshot(self) -> FormSnapshot:
        return self._model.snapshot(self._submission.phase)

    def render(self) -> FormView:
        """Derive the complete rendering data from the current snapshot."""
        snapshot = self.snapshot()
        return FormView(
            fields=self._errors.bind_all(
                snapshot, input_types={"password": self.password_input_type}
            ),
            can_submit=snapshot.can_submit,
            phase=snapshot.phase,
            status_text=self._submission.status_text,
            password_input_type=self.password_input_type,
        )

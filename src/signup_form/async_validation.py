"""
Debounced, cancelable remote validation.

The coordinator turns remote service calls into per-field validators.
Each value change bumps the field's generation counter, cancels the
previous debounce/call task and starts a new one. A result is applied
only while its generation is still the current one, so a result for a
superseded value can never overwrite the state of a fresher value.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Mapping

from signup_form.config import get_config
from signup_form.errors import ErrorCategory, categorize
from signup_form.models.validation_result import ErrorKind, FieldError, Validity
from signup_form.remote.client import RemoteCheckClient
from signup_form.tracing import traced_operation

logger = logging.getLogger("signup-form")

RemoteCheck = Callable[[str], Awaitable[FieldError | None]]


def build_remote_checks(
    client: RemoteCheckClient,
    password_strength_threshold: int | None = None,
) -> dict[str, RemoteCheck]:
    """
    Wrap the remote client calls as field validators.

    Args:
        client: The remote signup service client.
        password_strength_threshold: Minimum accepted score. If None,
            uses config.password_strength_threshold.

    Returns:
        Mapping of field name to remote check.
    """
    threshold = password_strength_threshold
    if threshold is None:
        threshold = get_config().password_strength_threshold

    async def check_username(username: str) -> FieldError | None:
        if await client.is_username_taken(username):
            return FieldError(kind=ErrorKind.TAKEN)
        return None

    async def check_email(email: str) -> FieldError | None:
        if await client.is_email_taken(email):
            return FieldError(kind=ErrorKind.TAKEN)
        return None

    async def check_password(password: str) -> FieldError | None:
        strength = await client.get_password_strength(password)
        if strength.is_weak(threshold):
            return FieldError(
                kind=ErrorKind.WEAK_PASSWORD,
                details={
                    "score": strength.score,
                    "warning": strength.warning,
                    "suggestions": list(strength.suggestions),
                },
            )
        return None

    return {
        "username": check_username,
        "email": check_email,
        "password": check_password,
    }


class AsyncValidationCoordinator:
    """
    Owns the pending/resolved state of every remotely validated field.

    Usage:
        coordinator = AsyncValidationCoordinator(build_remote_checks(client))
        coordinator.schedule("username", "quickBrownFox")
        await coordinator.settle()
        validity, error = coordinator.status("username")

    Must be used from a running event loop; all state changes happen on it.
    """

    def __init__(
        self,
        checks: Mapping[str, RemoteCheck],
        delay: float | None = None,
        on_change: Callable[[str], None] | None = None,
    ):
        """
        Initialize the coordinator.

        Args:
            checks: Remote check per field name.
            delay: Debounce window in seconds. If None, uses config.async_validation_delay.
            on_change: Called with the field name whenever a result is applied.
        """
        self._checks = dict(checks)
        self.delay = delay if delay is not None else get_config().async_validation_delay
        self.on_change = on_change
        self._generations: dict[str, int] = {name: 0 for name in self._checks}
        self._tasks: dict[str, asyncio.Task] = {}
        self._status: dict[str, Validity] = {name: Validity.VALID for name in self._checks}
        self._errors: dict[str, FieldError | None] = {name: None for name in self._checks}

    def handles(self, field: str) -> bool:
        """Whether the field has a remote check."""
        return field in self._checks

    def status(self, field: str) -> tuple[Validity, FieldError | None]:
        """Get the remote validity and error of a field."""
        return self._status[field], self._errors[field]

    def generation(self, field: str) -> int:
        return self._generations[field]

    @property
    def pending_fields(self) -> list[str]:
        return [name for name, status in self._status.items() if status is Validity.PENDING]

    def schedule(self, field: str, value: str) -> None:
        """
        Start the debounce window for a new value.

        Any earlier window or in-flight call for the field is cancelled and
        its result will be ignored. The field is pending from now on.
        """
        generation = self._supersede(field)
        self._status[field] = Validity.PENDING
        self._errors[field] = None
        self._tasks[field] = asyncio.get_running_loop().create_task(
            self._run(field, value, generation),
            name=f"remote-check-{field}-{generation}",
        )

    def discard(self, field: str) -> None:
        """Drop any scheduled check, e.g. when the value is structurally invalid."""
        self._supersede(field)
        self._status[field] = Validity.VALID
        self._errors[field] = None

    def cancel_all(self) -> None:
        """Cancel every scheduled check. Pending fields stay pending."""
        for field in list(self._tasks):
            self._supersede(field)

    async def settle(self) -> None:
        """Wait until no debounce window or remote call is outstanding."""
        while True:
            tasks = [task for task in self._tasks.values() if not task.done()]
            if not tasks:
                return
            await asyncio.gather(*tasks, return_exceptions=True)

    def _supersede(self, field: str) -> int:
        self._generations[field] += 1
        task = self._tasks.pop(field, None)
        if task is not None and not task.done():
            task.cancel()
        return self._generations[field]

    async def _run(self, field: str, value: str, generation: int) -> None:
        await asyncio.sleep(self.delay)
        if generation != self._generations[field]:
            return

        try:
            async with traced_operation(f"{field}_check", field=field, generation=generation):
                error = await self._checks[field](value)
        except Exception as e:
            # Fail closed: an unverified value must never count as valid
            logger.debug(f"Remote check for '{field}' raised: {e!r}")
            error = FieldError(kind=ErrorKind.REMOTE_FAILURE, details={"reason": str(e)})

        if generation != self._generations[field]:
            logger.debug(f"Ignoring stale result for '{field}' (generation {generation})")
            return

        self._tasks.pop(field, None)
        self._status[field] = Validity.INVALID if error is not None else Validity.VALID
        self._errors[field] = error
        if error is None:
            logger.debug(f"Remote check for '{field}' resolved: valid")
        else:
            category = categorize(error.kind)
            level = logging.WARNING if category is ErrorCategory.REMOTE_FAILURE else logging.INFO
            logger.log(
                level,
                f"Remote check for '{field}' resolved: {error.kind.value} ({category.value}) {error.details}",
            )
        if self.on_change is not None:
            self.on_change(field)

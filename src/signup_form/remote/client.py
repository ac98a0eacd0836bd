"""
Client for the remote signup service.

``RemoteCheckClient`` is the contract the form engine consumes.
``HttpRemoteCheckClient`` implements it over HTTP with httpx.
"""

import logging
from typing import Any, Protocol

import httpx
from pydantic import ValidationError

from signup_form.config import get_config
from signup_form.errors import RemoteCheckError, SubmissionError
from signup_form.models.signup_data import PasswordStrength, SignupData

logger = logging.getLogger("signup-form")


class RemoteCheckClient(Protocol):
    """Remote calls used by the signup form. Each call is awaited once."""

    async def is_username_taken(self, username: str) -> bool: ...

    async def is_email_taken(self, email: str) -> bool: ...

    async def get_password_strength(self, password: str) -> PasswordStrength: ...

    async def signup(self, data: SignupData) -> None: ...


class HttpRemoteCheckClient:
    """
    HTTP implementation of ``RemoteCheckClient``.

    Usage:
        async with HttpRemoteCheckClient("http://localhost:3000") as client:
            taken = await client.is_username_taken("quickBrownFox")

    Every check raises ``RemoteCheckError`` when the call fails for any
    reason (transport error, non-2xx status, malformed body). ``signup``
    raises ``SubmissionError`` instead.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: Signup service URL. If None, uses config.signup_service_url.
            timeout: Request timeout in seconds. If None, uses config.request_timeout.
            http_client: Optional preconfigured httpx client (owned by the caller).
        """
        config = get_config()
        self.base_url = (base_url or config.signup_service_url).rstrip("/")
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=timeout if timeout is not None else config.request_timeout,
        )

    async def __aenter__(self) -> "HttpRemoteCheckClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def is_username_taken(self, username: str) -> bool:
        body = await self._post_check("/username-taken", {"username": username})
        return self._read_flag(body, "usernameTaken", "/username-taken")

    async def is_email_taken(self, email: str) -> bool:
        body = await self._post_check("/email-taken", {"email": email})
        return self._read_flag(body, "emailTaken", "/email-taken")

    async def get_password_strength(self, password: str) -> PasswordStrength:
        body = await self._post_check("/password-strength", {"password": password})
        try:
            return PasswordStrength.model_validate(body)
        except ValidationError as e:
            raise RemoteCheckError(
                f"Malformed password strength response: {e}", operation="/password-strength"
            ) from e

    async def signup(self, data: SignupData) -> None:
        """Register the user. Raises SubmissionError unless the service reports success."""
        url = f"{self.base_url}/signup"
        logger.info(f"POST {url} for user {data.username}")
        try:
            response = await self._client.post(url, json=data.to_wire())
            response.raise_for_status()
            body = response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise SubmissionError(f"Signup request failed: {e}", operation="/signup") from e

        if not isinstance(body, dict) or body.get("success") is not True:
            raise SubmissionError(f"Signup rejected: {body}", operation="/signup")

    async def _post_check(self, path: str, payload: dict[str, Any]) -> Any:
        url = f"{self.base_url}{path}"
        logger.debug(f"POST {url}")
        try:
            response = await self._client.post(url, json=payload)
            response.raise_for_status()
            return response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise RemoteCheckError(f"Request to {path} failed: {e}", operation=path) from e

    @staticmethod
    def _read_flag(body: Any, key: str, path: str) -> bool:
        if not isinstance(body, dict) or not isinstance(body.get(key), bool):
            raise RemoteCheckError(f"Malformed response, expected '{key}': {body}", operation=path)
        return body[key]

"""
Configuration module for the signup form engine.

Handles environment variables and default settings.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


@dataclass
class SignupFormConfig:
    """Configuration settings for the signup form engine."""

    # Remote signup service
    signup_service_url: str = "http://localhost:3000"
    request_timeout: float = 10.0

    # Validation settings
    async_validation_delay_ms: int = 1000  # Wait for the user to stop typing
    password_strength_threshold: int = 3

    # Logging and tracing settings
    log_level: str = "INFO"
    enable_tracing: bool = True
    trace_file: str | None = None

    # Development backend
    dev_server_port: int = 3000

    @property
    def async_validation_delay(self) -> float:
        """Debounce window in seconds."""
        return self.async_validation_delay_ms / 1000

    @classmethod
    def from_env(cls) -> "SignupFormConfig":
        """
        Create configuration from environment variables.

        If an environment variable is not set, uses the class field default value.
        """
        _defaults = cls()

        return cls(
            signup_service_url=os.getenv("SIGNUP_SERVICE_URL", _defaults.signup_service_url),
            request_timeout=float(os.getenv("SIGNUP_REQUEST_TIMEOUT", str(_defaults.request_timeout))),
            async_validation_delay_ms=int(
                os.getenv("SIGNUP_ASYNC_VALIDATION_DELAY_MS", str(_defaults.async_validation_delay_ms))
            ),
            password_strength_threshold=int(
                os.getenv("SIGNUP_PASSWORD_STRENGTH_THRESHOLD", str(_defaults.password_strength_threshold))
            ),
            log_level=os.getenv("SIGNUP_LOG_LEVEL", _defaults.log_level).upper(),
            enable_tracing=os.getenv("SIGNUP_ENABLE_TRACING", str(_defaults.enable_tracing).lower()).lower() == "true",
            trace_file=os.getenv("SIGNUP_TRACE_FILE", _defaults.trace_file),
            dev_server_port=int(os.getenv("SIGNUP_DEV_SERVER_PORT", str(_defaults.dev_server_port))),
        )


config = SignupFormConfig.from_env()


def get_config() -> SignupFormConfig:
    """Get the current configuration."""
    return config


def update_config(**kwargs) -> SignupFormConfig:
    """Update configuration settings."""
    global config
    for key, value in kwargs.items():
        if hasattr(config, key):
            setattr(config, key, value)
    return config

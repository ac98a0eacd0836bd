"""Remote signup service client."""

from signup_form.remote.client import HttpRemoteCheckClient, RemoteCheckClient

__all__ = [
    "HttpRemoteCheckClient",
    "RemoteCheckClient",
]

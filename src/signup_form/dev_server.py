"""
Development signup service.

An in-memory implementation of the signup service endpoints used by
``HttpRemoteCheckClient``, for local development and end-to-end tests:

    POST /username-taken     {"username"}  -> {"usernameTaken": bool}
    POST /email-taken        {"email"}     -> {"emailTaken": bool}
    POST /password-strength  {"password"}  -> {"score", "warning", "suggestions"}
    POST /signup             SignupData    -> {"success": true}
    GET  /health

Usage:
    python run_dev_server.py --port 3000
"""

import json
import logging
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from urllib.parse import urlparse

from pydantic import ValidationError

from signup_form.models.signup_data import PasswordStrength, SignupData

logger = logging.getLogger("signup-form.dev-server")

COMMON_PASSWORDS = {"password", "123456", "12345678", "qwerty", "letmein", "secret", "admin"}


def score_password(password: str) -> PasswordStrength:
    """
    Score a password from 0 to 4 with a rough length and variety heuristic.

    Long passphrases score high even without symbols.
    """
    if not password or password.lower() in COMMON_PASSWORDS:
        return PasswordStrength(
            score=0,
            warning="This is a very common password.",
            suggestions=["Add another word or two. Uncommon words are better."],
        )

    classes = sum(
        [
            any(ch.islower() for ch in password),
            any(ch.isupper() for ch in password),
            any(ch.isdigit() for ch in password),
            any(not ch.isalnum() for ch in password),
        ]
    )
    length = len(password)
    score = min(4, length // 8 + max(0, classes - 1))
    if length < 8:
        score = min(score, 1)

    warning = ""
    suggestions: list[str] = []
    if score < 3:
        warning = "This password is too short." if length < 12 else "This password is too simple."
        suggestions.append("Use a longer keyboard pattern with more turns.")
        if classes < 3:
            suggestions.append("Mix letters, numbers and symbols.")
    return PasswordStrength(score=score, warning=warning, suggestions=suggestions)


class SignupBackend:
    """In-memory user registry. Safe to share between request threads."""

    def __init__(
        self,
        taken_usernames: set[str] | None = None,
        taken_emails: set[str] | None = None,
    ):
        self._lock = threading.Lock()
        self._usernames = {name.lower() for name in (taken_usernames or set())}
        self._emails = {email.lower() for email in (taken_emails or set())}
        self.users: list[SignupData] = []

    def is_username_taken(self, username: str) -> bool:
        with self._lock:
            return username.lower() in self._usernames

    def is_email_taken(self, email: str) -> bool:
        with self._lock:
            return email.lower() in self._emails

    def get_password_strength(self, password: str) -> PasswordStrength:
        return score_password(password)

    def register(self, data: SignupData) -> bool:
        """Register a user. False if the username or email is already taken."""
        with self._lock:
            if data.username.lower() in self._usernames or data.email.lower() in self._emails:
                return False
            self._usernames.add(data.username.lower())
            self._emails.add(data.email.lower())
            self.users.append(data)
        logger.info(f"Registered user {data.username} ({data.plan.value} plan)")
        return True


class SignupRequestHandler(BaseHTTPRequestHandler):
    """HTTP handler for the signup service endpoints."""

    server: "DevSignupServer"

    def do_GET(self):
        """Handle GET requests."""
        path = urlparse(self.path).path
        if path == "/health":
            self.send_json_response({"status": "healthy", "service": "signup-dev-server"})
        else:
            self.send_json_response({"error": "Not Found"}, 404)

    def do_POST(self):
        """Handle POST requests."""
        path = urlparse(self.path).path
        backend = self.server.backend

        try:
            data = self.read_json()
        except ValueError as e:
            self.send_json_response({"error": f"Invalid JSON: {e}"}, 400)
            return

        if path == "/username-taken":
            self.handle_check(data, "username", lambda v: {"usernameTaken": backend.is_username_taken(v)})
        elif path == "/email-taken":
            self.handle_check(data, "email", lambda v: {"emailTaken": backend.is_email_taken(v)})
        elif path == "/password-strength":
            self.handle_check(
                data, "password", lambda v: backend.get_password_strength(v).model_dump()
            )
        elif path == "/signup":
            self.handle_signup(data)
        else:
            self.send_json_response({"error": "Not Found"}, 404)

    def read_json(self):
        content_length = int(self.headers.get("Content-Length", 0))
        return json.loads(self.rfile.read(content_length).decode("utf-8") or "null")

    def handle_check(self, data, key, respond):
        if not isinstance(data, dict) or not isinstance(data.get(key), str):
            self.send_json_response({"error": f"{key} is required"}, 400)
            return
        self.send_json_response(respond(data[key]))

    def handle_signup(self, data):
        try:
            signup = SignupData.model_validate(data)
        except ValidationError as e:
            self.send_json_response({"success": False, "error": str(e)}, 422)
            return
        if not self.server.backend.register(signup):
            self.send_json_response({"success": False, "error": "Username or email taken"}, 409)
            return
        self.send_json_response({"success": True})

    def send_json_response(self, data, status=200):
        """Send JSON response."""
        json_data = json.dumps(data, indent=2).encode("utf-8")

        self.send_response(status)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(json_data)))
        self.send_header("Access-Control-Allow-Origin", "*")
        self.end_headers()
        self.wfile.write(json_data)

    def log_message(self, format, *args):
        logger.debug(format % args)


class DevSignupServer(ThreadingHTTPServer):
    """Threading HTTP server carrying the shared backend."""

    def __init__(self, server_address, backend: SignupBackend | None = None):
        super().__init__(server_address, SignupRequestHandler)
        self.backend = backend or SignupBackend()

    @property
    def url(self) -> str:
        host, port = self.server_address[:2]
        return f"http://{host}:{port}"


def create_dev_server(
    host: str = "127.0.0.1",
    port: int = 3000,
    backend: SignupBackend | None = None,
) -> DevSignupServer:
    """Create (but do not start) a development server. Port 0 picks a free port."""
    return DevSignupServer((host, port), backend)

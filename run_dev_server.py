"""
Development signup service entry point.

Serves the username/email/password checks and the signup endpoint
from memory, so a SignupForm can run against a real HTTP backend.

Usage:
    python run_dev_server.py
    python run_dev_server.py --port 3000 --taken-username admin

    # Use environment variables
    SIGNUP_DEV_SERVER_PORT=3000 python run_dev_server.py
"""

import argparse
import sys

from signup_form.config import get_config
from signup_form.dev_server import SignupBackend, create_dev_server
from signup_form.tracing import setup_logging


def main():
    """Main entry point."""
    config = get_config()

    parser = argparse.ArgumentParser(
        description="Signup form development server",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run_dev_server.py --port 3000
  python run_dev_server.py --taken-username admin --taken-email admin@example.org

Environment Variables:
  SIGNUP_DEV_SERVER_PORT   Port to listen on (default: 3000)
  SIGNUP_LOG_LEVEL         Logging level (default: INFO)
        """,
    )

    parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="Host to bind to (default: 127.0.0.1)",
    )

    parser.add_argument(
        "--port",
        type=int,
        default=config.dev_server_port,
        help=f"Port to listen on (default: {config.dev_server_port})",
    )

    parser.add_argument(
        "--taken-username",
        action="append",
        default=[],
        help="Username to report as taken (repeatable)",
    )

    parser.add_argument(
        "--taken-email",
        action="append",
        default=[],
        help="Email to report as taken (repeatable)",
    )

    args = parser.parse_args()
    setup_logging(config.log_level)

    backend = SignupBackend(
        taken_usernames=set(args.taken_username),
        taken_emails=set(args.taken_email),
    )

    try:
        httpd = create_dev_server(args.host, args.port, backend)
    except OSError as e:
        print(f"Error: {e}")
        sys.exit(1)

    print("=" * 60)
    print("Signup Development Server")
    print("=" * 60)
    print(f"URL: {httpd.url}")
    print(f"Taken usernames: {', '.join(args.taken_username) or '-'}")
    print(f"Taken emails: {', '.join(args.taken_email) or '-'}")
    print("Press Ctrl+C to stop")
    print("=" * 60)

    try:
        httpd.serve_forever()
    except KeyboardInterrupt:
        print("\nServer stopped.")
    finally:
        httpd.server_close()


if __name__ == "__main__":
    main()

#!/usr/bin/env python3
"""
Signup Form Example - fills the form against the development server.

Prerequisites:
    1. Start the development server:
       python run_dev_server.py --taken-username admin

    2. Health check:
       curl http://localhost:3000/health

Usage:
    python examples/signup_example.py
    python examples/signup_example.py --username admin   # username taken
    python examples/signup_example.py --password secret  # weak password
    python examples/signup_example.py --plan business --address-line1 "Tree Trunk 3"
"""

import argparse
import asyncio

from signup_form import HttpRemoteCheckClient, SignupForm
from signup_form.tracing import setup_logging


def print_view(form: SignupForm) -> None:
    view = form.render()
    for name, field in view.fields.items():
        marker = {"valid": "ok", "invalid": "!!", "pending": ".."}[field.validity.value]
        line = f"  [{marker}] {name:<13} {field.to_attributes()}"
        if field.error_region.messages:
            line += f"  -> {field.error_region.text}"
        print(line)
    print(f"  can submit: {view.can_submit}")


async def main():
    """Fill every field, wait for the remote checks, then submit."""
    parser = argparse.ArgumentParser(description="Signup form example")
    parser.add_argument("--url", default="http://localhost:3000")
    parser.add_argument("--username", default="quickBrownFox")
    parser.add_argument("--email", default="quick.brown.fox@example.org")
    parser.add_argument("--password", default="dog lazy the over jumps fox brown quick the")
    parser.add_argument("--plan", default="personal", choices=["personal", "business", "non-profit"])
    parser.add_argument(
        "--address-line1",
        default=None,
        help="Required for business and non-profit plans (default: Tree Trunk 3 for those plans)",
    )
    args = parser.parse_args()
    address_line1 = args.address_line1
    if address_line1 is None:
        address_line1 = "" if args.plan == "personal" else "Tree Trunk 3"

    setup_logging("WARNING")

    print("=" * 60)
    print("Signup Form Example")
    print("=" * 60)
    print(f"Signup service: {args.url}")
    print()

    async with HttpRemoteCheckClient(args.url) as client:
        async with SignupForm(client, trace_to_console=True) as form:
            form.select_plan(args.plan)
            for name, value in {
                "username": args.username,
                "email": args.email,
                "password": args.password,
                "name": "Mr. Fox",
                "addressLine1": address_line1,
                "addressLine2": "Under the Tree 1",
                "city": "Farmtown",
                "postcode": "123456",
                "region": "Upper South",
                "country": "Luxembourg",
            }.items():
                form.input(name, value)
                form.blur(name)
            form.check("tos", True)

            print("While remote checks are pending:")
            print_view(form)

            await form.settle()
            print("\nAfter remote checks:")
            print_view(form)

            await form.submit()
            print(f"\nStatus: {form.status_text or '(not submitted)'}")


if __name__ == "__main__":
    asyncio.run(main())

"""Utility script to mint a development credential for the relay."""

from __future__ import annotations

import argparse
from datetime import timedelta
from typing import Any

from relay.infrastructure.security import create_access_token


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments for token creation."""

    parser = argparse.ArgumentParser(
        description="Issue a signed token accepted by the relay websocket.",
    )
    parser.add_argument("user_id", help="Identifier of the user the token represents")
    parser.add_argument("--role", default="USER", help="Role claim (default: USER)")
    parser.add_argument("--email", default=None, help="Optional email claim")
    parser.add_argument("--full-name", default=None, help="Optional display name claim")
    parser.add_argument(
        "--minutes",
        type=int,
        default=None,
        help="Token lifetime in minutes (default: ACCESS_TOKEN_EXPIRE_MINUTES)",
    )
    return parser.parse_args(argv)


def build_claims(args: argparse.Namespace) -> dict[str, Any]:
    """Return the JWT claims in the layout the relay expects."""

    claims: dict[str, Any] = {"userId": args.user_id, "role": args.role}
    if args.email:
        claims["email"] = args.email
    if args.full_name:
        claims["fullName"] = args.full_name
    return claims


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    expires = timedelta(minutes=args.minutes) if args.minutes else None
    print(create_access_token(build_claims(args), expires))


if __name__ == "__main__":
    main()

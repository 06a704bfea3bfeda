# src/bartercoin/scripts/dev_token.py
"""Mint a bearer token for local development.

Production tokens come from the identity provider; this only helps when the
API runs against a shared ``SECRET_KEY`` on a developer machine.
"""
from __future__ import annotations

import argparse

from bartercoin.core.security import create_access_token


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Print a signed access token for a user id.")
    parser.add_argument("user_id", help="Subject to embed in the token")
    args = parser.parse_args(argv)
    print(create_access_token(args.user_id))


if __name__ == "__main__":
    main()

#!/usr/bin/env python3
"""
Create (or reset the password of) an admin user.

Usage:
  python scripts/create_admin.py --email ops@example.com --password 'S3cret!'
"""
from __future__ import annotations

import argparse
import getpass
import sys

from edge_api.core.security import hash_password
from edge_api.repositories.sql_repository import SQLRepository


def main() -> None:
    ap = argparse.ArgumentParser(description="Create an admin user")
    ap.add_argument("--email", required=True, help="Admin e-mail (login)")
    ap.add_argument("--password", help="Password (prompted when omitted)")
    ap.add_argument("--disable", action="store_true", help="Create/keep the account disabled")
    args = ap.parse_args()

    email = (args.email or "").strip().lower()
    if "@" not in email:
        raise SystemExit("Invalid e-mail")
    password = args.password or getpass.getpass("Password: ")
    if len(password) < 8:
        raise SystemExit("Password must have at least 8 characters")

    repo = SQLRepository()
    existed = repo.get_admin_user(email) is not None
    repo.upsert_admin_user(email, hash_password(password), is_active=not args.disable)
    print(f"OK: admin {'updated' if existed else 'created'}: {email}")


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - CLI usage
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)

#!/usr/bin/env python3
"""
Complete a pending transaction and credit the user's wallet from a shell.

Usage:
  python scripts/complete_transaction.py --transaction-id <id> --user-id <user> --admin ops@example.com
  python scripts/complete_transaction.py --reference <ref> --user-id <user> --admin ops@example.com
"""
from __future__ import annotations

import argparse

from edge_api.core.errors import EdgeError
from edge_api.core.logging_setup import configure_logging
from edge_api.services.transaction_service import TransactionService


def main() -> None:
    ap = argparse.ArgumentParser(description="Complete a pending transaction")
    target = ap.add_mutually_exclusive_group(required=True)
    target.add_argument("--transaction-id", help="Transaction id")
    target.add_argument("--reference", help="Provider reference")
    ap.add_argument("--user-id", required=True, help="Owner of the transaction")
    ap.add_argument("--admin", required=True, help="Acting admin recorded in the ledger and audit log")
    args = ap.parse_args()

    configure_logging()
    try:
        credit = TransactionService().complete(
            transaction_id=args.transaction_id,
            reference=args.reference,
            user_id=args.user_id,
            admin_id=args.admin,
        )
    except EdgeError as exc:
        raise SystemExit(f"Failed: {exc.message}")
    print("OK: transaction completed")
    print(f"  Amount credited:  {credit.amount}")
    print(f"  Previous balance: {credit.previous_balance}")
    print(f"  New balance:      {credit.new_balance}")


if __name__ == "__main__":
    main()

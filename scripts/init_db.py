#!/usr/bin/env python3
"""
Create the database schema and seed default platform settings.

Usage:
  python scripts/init_db.py [--no-seed]
"""
from __future__ import annotations

import argparse

from sqlalchemy.exc import SQLAlchemyError

from edge_api.db import models  # noqa: F401  # registers tables on the metadata
from edge_api.db.session import Base, get_engine
from edge_api.repositories.sql_repository import SQLRepository

DEFAULT_SETTINGS = {
    "cache_status": "Healthy",
    "maintenance_mode": False,
}


def main() -> None:
    ap = argparse.ArgumentParser(description="Create tables")
    ap.add_argument("--no-seed", action="store_true", help="Skip default platform settings")
    args = ap.parse_args()

    Base.metadata.create_all(bind=get_engine())
    print("Database tables created successfully.")
    if args.no_seed:
        return
    repo = SQLRepository()
    existing = {row.key for row in repo.list_settings()}
    missing = {k: v for k, v in DEFAULT_SETTINGS.items() if k not in existing}
    if missing:
        repo.upsert_settings(missing, actor="init_db")
        print(f"Seeded settings: {', '.join(sorted(missing))}")


if __name__ == "__main__":
    try:
        main()
    except SQLAlchemyError as exc:
        raise SystemExit(f"Failed to create tables: {exc}") from exc

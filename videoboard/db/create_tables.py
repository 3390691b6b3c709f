"""
Create (or, with --reset, recreate) the groups/videos tables.

Usage:
  DATABASE_URL=postgresql://... python -m videoboard.db.create_tables [--reset]
"""
from __future__ import annotations

import argparse

from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError

from .session import Base, get_engine
from . import models  # noqa: F401  # ensure models are imported for metadata


def create_all(reset: bool = False) -> list[str]:
    """Create missing tables and return the table names now present."""
    engine = get_engine()
    if reset:
        Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    return sorted(inspect(engine).get_table_names())


if __name__ == "__main__":
    ap = argparse.ArgumentParser(description="Create the videoboard schema")
    ap.add_argument("--reset", action="store_true", help="drop existing tables first (deletes all data)")
    args = ap.parse_args()
    try:
        tables = create_all(reset=args.reset)
    except SQLAlchemyError as exc:
        raise SystemExit(f"Failed to create tables: {exc}") from exc
    print(f"Tables ready: {', '.join(tables)}")

"""Utility script to create (or reset) the configured database schema."""
from __future__ import annotations

import argparse
import logging
import sys

from sqlalchemy.exc import SQLAlchemyError

from ballot_box.core.logging import configure_logging
from ballot_box.core.settings import get_settings
from ballot_box.db.session import build_engine, create_tables, drop_tables

logger = logging.getLogger("ballot_box.scripts.init_db")


def init_db(database_url: str, *, drop: bool = False) -> None:
    """Create the users and votes tables, optionally dropping them first."""
    engine = build_engine(database_url)
    try:
        if drop:
            drop_tables(engine)
            logger.info("Dropped existing tables")
        create_tables(engine)
        logger.info("Database schema ready")
    finally:
        engine.dispose()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create or reset the Ballot Box schema")
    parser.add_argument(
        "--drop-tables",
        action="store_true",
        help="Drop all tables before creating them again.",
    )
    parser.add_argument(
        "--url",
        default=None,
        help="Override database URL (defaults to DATABASE_URL)",
    )
    args = parser.parse_args(argv)

    configure_logging("INFO")
    url = args.url or get_settings().database_url
    try:
        init_db(url, drop=args.drop_tables)
    except SQLAlchemyError as exc:
        logger.error("Schema initialization failed: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

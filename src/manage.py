"""Storefront database management CLI.

Creates and drops the relational schema for the configured provider.
Run with PROTEAN_ENV=production to target PostgreSQL.

Usage:
    python src/manage.py setup-db   # Create all tables
    python src/manage.py drop-db    # Drop all tables
"""

import argparse
import sys

from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def setup_database():
    from storefront.domain import storefront
    from storefront.utils.db import setup_db

    storefront.init()
    logger.info("Creating storefront database schema")
    setup_db(storefront)
    logger.info("Storefront schema ready")


def drop_database():
    from storefront.domain import storefront
    from storefront.utils.db import drop_db

    storefront.init()
    logger.info("Dropping storefront database schema")
    drop_db(storefront)
    logger.info("Storefront schema dropped")


def main():
    parser = argparse.ArgumentParser(description="Storefront database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()

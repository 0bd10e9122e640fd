"""Storefront database management CLI.

Creates or drops the schema of the database named by ``DATABASE_URL``.

Usage:
    storefront-manage setup-db   # Create all tables
    storefront-manage drop-db    # Drop all tables
"""

import argparse
import sys

from protean.exceptions import ConfigurationError


def _prepare_domain():
    from storefront.config import StorefrontSettings
    from storefront.domain import storefront
    from storefront.utils.db import configure_persistence

    settings = StorefrontSettings.from_env()
    if not settings.database_url:
        raise ConfigurationError("DATABASE_URL must be set to manage the database schema")

    configure_persistence(storefront, settings)
    storefront.init()
    return storefront


def setup_database():
    from storefront.utils.db import setup_db

    domain = _prepare_domain()
    print("Creating storefront database schema...")
    setup_db(domain)
    print("Done.")


def drop_database():
    from storefront.utils.db import drop_db

    domain = _prepare_domain()
    print("Dropping storefront database schema...")
    drop_db(domain)
    print("Done.")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Storefront database management")
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    args = parser.parse_args(argv)

    try:
        if args.command == "setup-db":
            setup_database()
        elif args.command == "drop-db":
            drop_database()
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()

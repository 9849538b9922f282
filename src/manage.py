"""CafeHub database management CLI.

Creates and drops the database schema of the cafehub domain for every
SQL-backed provider in its configuration.

Usage:
    PROTEAN_ENV=production python src/manage.py setup-db   # Create all tables
    PROTEAN_ENV=production python src/manage.py drop-db    # Drop all tables
"""

import argparse
import sys


def setup_databases():
    """Create the cafehub database schema."""
    from cafehub.domain import cafehub
    from cafehub.utils.db import setup_db

    print("Initializing cafehub domain...")
    cafehub.init()
    print("Creating cafehub database schema...")
    providers = setup_db(cafehub)
    if providers:
        print(f"  schema ready for providers: {', '.join(providers)}.")
    else:
        print("  no SQL providers configured, nothing to create.")

    print("Done.")


def drop_databases():
    """Drop the cafehub database schema."""
    from cafehub.domain import cafehub
    from cafehub.utils.db import drop_db

    print("Initializing cafehub domain...")
    cafehub.init()
    print("Dropping cafehub database schema...")
    providers = drop_db(cafehub)
    if providers:
        print(f"  schema dropped for providers: {', '.join(providers)}.")
    else:
        print("  no SQL providers configured, nothing to drop.")

    print("Done.")


def main():
    parser = argparse.ArgumentParser(description="CafeHub database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_databases()
    elif args.command == "drop-db":
        drop_databases()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()

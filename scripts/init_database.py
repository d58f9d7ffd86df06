#!/usr/bin/env python3
"""
Initialize the DocVault database tables.

This script creates the owners, documents and owner_documents tables.
It can be run standalone or as part of the deployment process.

Usage:
    python scripts/init_database.py            # create tables
    python scripts/init_database.py status     # tables, row counts, unlinked documents
    python scripts/init_database.py drop       # drop all tables (asks first)

Environment Variables:
    DATABASE_URL - SQLAlchemy async connection string
                   (postgresql+asyncpg://... or sqlite+aiosqlite:///...)
"""

import asyncio
import logging
import sys
from pathlib import Path

# Configure logging for CLI output
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


def _table_names(sync_conn):
    from sqlalchemy import inspect

    return inspect(sync_conn).get_table_names()


async def init_tables():
    """Create all database tables."""
    from docvault.core.db_client import db

    logger.info("=== DocVault Database Initialization ===")

    logger.info("Testing database connection...")
    if not await db.test_connection():
        logger.error("Could not connect to database")
        logger.error("Please check DATABASE_URL")
        sys.exit(1)

    logger.info("Database connection successful!")

    logger.info("Creating tables...")
    try:
        await db.create_tables()
        logger.info("Tables created successfully!")
    except Exception as e:
        logger.error(f"Failed to create tables: {e}")
        sys.exit(1)

    engine = await db.get_engine_async()
    async with engine.connect() as conn:
        tables = await conn.run_sync(_table_names)

    logger.info("Tables:")
    for table_name in sorted(tables):
        logger.info(f"  - {table_name}")

    await db.close_all()
    logger.info("=== Initialization Complete ===")


async def drop_tables():
    """Drop all tables (use with caution!)."""
    from docvault.core.db_client import db

    logger.warning("=== WARNING: Dropping All Tables ===")

    confirm = input("Are you sure you want to drop all tables? (type 'yes' to confirm): ")
    if confirm.lower() != "yes":
        logger.info("Aborted.")
        return

    await db.drop_tables()
    logger.info("All tables dropped.")
    await db.close_all()


async def show_status():
    """Show table row counts and documents missing from every owner list."""
    from sqlalchemy import func, select

    from docvault.core.db_client import db
    from docvault.models.db_models import Base
    from docvault.services.record_store import record_store

    logger.info("=== Database Status ===")

    if not await db.test_connection():
        logger.error("Could not connect to database")
        sys.exit(1)

    engine = await db.get_engine_async()
    logger.info(f"Dialect: {engine.dialect.name}")

    async with engine.connect() as conn:
        existing = set(await conn.run_sync(_table_names))
        missing = [t for t in Base.metadata.sorted_tables if t.name not in existing]
        if missing:
            names = ", ".join(t.name for t in missing)
            logger.info(f"Missing tables: {names}. Run 'init' to create them.")
            await db.close_all()
            return

        for table in Base.metadata.sorted_tables:
            count = await conn.scalar(select(func.count()).select_from(table))
            logger.info(f"  - {table.name}: {count} rows")

    unlinked = await record_store.list_unlinked_documents()
    if unlinked:
        logger.warning(f"{len(unlinked)} document(s) are not in any owner's list:")
        for document in unlinked:
            logger.warning(f"  - {document.id} (owner {document.owner_id}, {document.stored_name})")
    else:
        logger.info("Every document is linked to an owner.")

    await db.close_all()


def main():
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(
        description="Initialize the database for the DocVault API"
    )
    parser.add_argument(
        "command",
        nargs="?",
        default="init",
        choices=["init", "drop", "status"],
        help="Command to run (default: init)"
    )

    args = parser.parse_args()

    if args.command == "init":
        asyncio.run(init_tables())
    elif args.command == "drop":
        asyncio.run(drop_tables())
    elif args.command == "status":
        asyncio.run(show_status())


if __name__ == "__main__":
    main()

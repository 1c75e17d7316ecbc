#!/usr/bin/env python3
"""
Database management script.
Creates and drops the LightBnB tables and checks connectivity.
"""

import asyncio
import argparse
import logging
import sys

from lightbnb.config import Settings, get_settings
from lightbnb.database import Database

logger = logging.getLogger(__name__)


class SchemaManager:
    """Manages the database schema for one configured database."""

    def __init__(self, settings: Settings):
        self.settings = settings

    async def create_tables(self) -> None:
        """Create all tables."""
        async with Database.from_settings(self.settings) as db:
            await db.create_tables()

    async def drop_tables(self) -> None:
        """Drop all tables (never in production)."""
        if self.settings.is_production:
            raise RuntimeError("Cannot drop tables in production environment")

        async with Database.from_settings(self.settings) as db:
            await db.drop_tables()

    async def reset(self) -> None:
        """Drop and recreate all tables."""
        await self.drop_tables()
        await self.create_tables()

    async def check(self) -> bool:
        """Check connectivity and report pool status."""
        async with Database.from_settings(self.settings) as db:
            connected = await db.check_connection()
            if connected:
                for name, value in db.pool_status().items():
                    logger.info(f"  {name}: {value}")
            return connected


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="LightBnB database management")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("create-tables", help="Create all tables")

    drop_parser = subparsers.add_parser("drop-tables", help="Drop all tables (not in production)")
    drop_parser.add_argument("--confirm", action="store_true", help="Confirm dropping tables")

    reset_parser = subparsers.add_parser("reset", help="Drop and recreate all tables (not in production)")
    reset_parser.add_argument("--confirm", action="store_true", help="Confirm database reset")

    subparsers.add_parser("check", help="Check database connectivity")

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    manager = SchemaManager(settings)

    try:
        if args.command == "create-tables":
            asyncio.run(manager.create_tables())

        elif args.command in ("drop-tables", "reset"):
            if not args.confirm:
                print(f"{args.command} requires --confirm flag")
                return 1
            if args.command == "reset":
                asyncio.run(manager.reset())
            else:
                asyncio.run(manager.drop_tables())

        elif args.command == "check":
            if not asyncio.run(manager.check()):
                return 1

    except Exception as e:
        logger.error(f"Command failed: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())

"""Command line entry for the Simple User API.

Usage:
    simple-api [serve]
    simple-api seed [seed|clear|count|reseed|cleanup]
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import Optional, Sequence

import uvicorn

from simple_api.core import seed
from simple_api.core.config import settings
from simple_api.core.database import DatabaseManager

logger = logging.getLogger(__name__)

SEED_COMMANDS = ["seed", "clear", "count", "reseed", "cleanup"]


def configure_logging(level: Optional[str] = None) -> None:
    logging.basicConfig(
        level=level or settings.LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def run_server() -> None:
    from simple_api.api.main import app

    logger.info("Starting server on port %d", settings.PORT)
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())


async def run_seed_command(command: str, database_manager: Optional[DatabaseManager] = None) -> int:
    """Run one seed command and return the count it reports."""

    manager = database_manager or DatabaseManager()
    await manager.initialize()
    db = manager.database
    collection = manager.settings.USERS_COLLECTION

    try:
        if command == "clear":
            logger.info("Clearing all users from database...")
            count = await seed.clear_users(db, collection)
            print(f"Deleted {count} users")
        elif command == "count":
            count = await seed.get_user_count(db, collection)
            print(f"Current user count: {count}")
        elif command == "reseed":
            logger.info("Reseeding database with fresh data...")
            count = await seed.reseed_users(db, collection)
            print(f"Reseeded {count} users")
        elif command == "cleanup":
            logger.info("Removing test users from database...")
            count = await seed.clear_test_users(db, collection)
            print(f"Removed {count} test users")
        else:
            logger.info("Seeding database with mock user data...")
            count = await seed.seed_users(db, collection)
            print(f"Seeded {count} users")
    finally:
        await manager.close()
    return count


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="simple-api", description="Simple User API")
    subparsers = parser.add_subparsers(dest="action")

    subparsers.add_parser("serve", help="Run the HTTP server (default)")

    seed_parser = subparsers.add_parser("seed", help="Manage mock user data")
    seed_parser.add_argument(
        "command",
        nargs="?",
        default="seed",
        choices=SEED_COMMANDS,
        help="Seed command to execute (default: seed)",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    configure_logging()

    if args.action == "seed":
        try:
            asyncio.run(run_seed_command(args.command))
        except KeyboardInterrupt:
            logger.info("Operation cancelled by user.")
            sys.exit(1)
        except Exception as e:
            logger.error("Seed command failed: %s", e)
            sys.exit(1)
        return

    run_server()


if __name__ == "__main__":
    main()

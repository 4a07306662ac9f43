"""
Mock data management for the users collection.

Every operation takes the motor database handle and the collection name, so
the same code can run against an isolated collection in tests.
"""

from __future__ import annotations

import logging
from typing import List, Tuple

from motor.motor_asyncio import AsyncIOMotorDatabase

from simple_api.models import User

logger = logging.getLogger(__name__)

DEFAULT_COLLECTION = "users"

MOCK_USERS: List[Tuple[str, str]] = [
    ("Alice Johnson", "alice.johnson@example.com"),
    ("Bob Smith", "bob.smith@example.com"),
    ("Carol Williams", "carol.williams@example.com"),
    ("David Brown", "david.brown@example.com"),
    ("Eva Davis", "eva.davis@example.com"),
    ("Frank Miller", "frank.miller@example.com"),
    ("Grace Wilson", "grace.wilson@example.com"),
    ("Henry Moore", "henry.moore@example.com"),
]

# Documents left behind by integration runs against a shared database.
TEST_USER_FILTER = {
    "$or": [
        {"email": {"$regex": r".*@test\.com$", "$options": "i"}},
        {"name": {"$regex": ".*Test.*", "$options": "i"}},
        {"name": {"$regex": ".*Integration.*", "$options": "i"}},
        {"name": {"$regex": ".*Concurrent.*", "$options": "i"}},
        {"name": {"$regex": ".*Database.*", "$options": "i"}},
    ]
}


def build_mock_users() -> List[User]:
    return [User.new(name, email) for name, email in MOCK_USERS]


async def seed_users(db: AsyncIOMotorDatabase, collection_name: str = DEFAULT_COLLECTION) -> int:
    """Insert the mock users unless the collection already holds documents.

    Returns the number of inserted users, which is 0 when the collection was
    not empty. Existing data is never topped up.
    """

    collection = db[collection_name]
    existing = await collection.count_documents({})
    if existing > 0:
        logger.info(
            "Collection '%s' already contains %d users. Skipping seed operation.",
            collection_name,
            existing,
        )
        return 0

    result = await collection.insert_many([user.to_document() for user in build_mock_users()])
    inserted = len(result.inserted_ids)
    logger.info("Seeded %d users into collection '%s'", inserted, collection_name)
    return inserted


async def clear_users(db: AsyncIOMotorDatabase, collection_name: str = DEFAULT_COLLECTION) -> int:
    """Delete every document in the collection and return how many went."""

    result = await db[collection_name].delete_many({})
    logger.info("Deleted %d users from collection '%s'", result.deleted_count, collection_name)
    return result.deleted_count


async def get_user_count(db: AsyncIOMotorDatabase, collection_name: str = DEFAULT_COLLECTION) -> int:
    return await db[collection_name].count_documents({})


async def reseed_users(db: AsyncIOMotorDatabase, collection_name: str = DEFAULT_COLLECTION) -> int:
    """Clear the collection, then seed it from scratch."""

    await clear_users(db, collection_name)
    return await seed_users(db, collection_name)


async def clear_test_users(db: AsyncIOMotorDatabase, collection_name: str = DEFAULT_COLLECTION) -> int:
    """Remove users that look like integration test leftovers."""

    result = await db[collection_name].delete_many(TEST_USER_FILTER)
    logger.info("Removed %d test users from collection '%s'", result.deleted_count, collection_name)
    return result.deleted_count

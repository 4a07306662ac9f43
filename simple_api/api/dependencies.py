from __future__ import annotations

from fastapi import Depends, Request
from motor.motor_asyncio import AsyncIOMotorCollection

from simple_api.core.database import DatabaseManager


async def get_db(request: Request) -> DatabaseManager:
    return request.app.state.database_manager


async def get_users_collection(db: DatabaseManager = Depends(get_db)) -> AsyncIOMotorCollection:
    return db.collection()

"""User resource endpoints."""

from __future__ import annotations

import logging
from typing import List

from bson import ObjectId
from bson.errors import BSONError
from fastapi import APIRouter, Depends, status
from motor.motor_asyncio import AsyncIOMotorCollection
from pydantic import ValidationError as PydanticValidationError
from pymongo.errors import PyMongoError

from simple_api.api.dependencies import get_users_collection
from simple_api.core.exceptions import DatabaseError, InvalidIdError, NotFoundError, ValidationError
from simple_api.models import CreateUserRequest, ErrorResponse, User, UserResponse

logger = logging.getLogger(__name__)

# Driver failures and documents the driver cannot encode or decode.
STORAGE_ERRORS = (PyMongoError, BSONError)

router = APIRouter(
    prefix="/users",
    tags=["users"],
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
    },
)


def _validate_create(payload: CreateUserRequest) -> None:
    if not payload.name.strip():
        raise ValidationError("Name is required")
    if not payload.email.strip():
        raise ValidationError("Email is required")


@router.get("", response_model=List[UserResponse])
async def list_users(
    collection: AsyncIOMotorCollection = Depends(get_users_collection),
) -> List[UserResponse]:
    """Return every stored user. A single undecodable record fails the whole listing."""

    users: List[UserResponse] = []
    try:
        async for document in collection.find({}):
            try:
                user = User.from_document(document)
            except PydanticValidationError as exc:
                logger.error("Failed to decode user document %s: %s", document.get("_id"), exc)
                raise DatabaseError("Error processing user data") from exc
            users.append(UserResponse.from_user(user))
    except BSONError as exc:
        logger.exception("Failed to decode stored user data")
        raise DatabaseError("Error processing user data") from exc
    except PyMongoError as exc:
        logger.exception("Failed to list users")
        raise DatabaseError("Failed to fetch users from database") from exc
    return users


@router.get(
    "/{user_id}",
    response_model=UserResponse,
    responses={status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}},
)
async def get_user(
    user_id: str,
    collection: AsyncIOMotorCollection = Depends(get_users_collection),
) -> UserResponse:
    if not ObjectId.is_valid(user_id):
        raise InvalidIdError("Invalid user ID format")

    try:
        document = await collection.find_one({"_id": ObjectId(user_id)})
    except STORAGE_ERRORS as exc:
        logger.exception("Failed to fetch user %s", user_id)
        raise DatabaseError("Failed to fetch user from database") from exc

    if document is None:
        raise NotFoundError("User not found")

    try:
        user = User.from_document(document)
    except PydanticValidationError as exc:
        logger.error("Failed to decode user document %s: %s", user_id, exc)
        raise DatabaseError("Failed to fetch user from database") from exc
    return UserResponse.from_user(user)


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    payload: CreateUserRequest,
    collection: AsyncIOMotorCollection = Depends(get_users_collection),
) -> UserResponse:
    """Insert a user, then read it back so the response reflects the stored form."""

    _validate_create(payload)
    new_user = User.new(payload.name, payload.email)

    try:
        result = await collection.insert_one(new_user.to_document())
    except STORAGE_ERRORS as exc:
        logger.exception("Failed to insert user")
        raise DatabaseError("Failed to create user") from exc

    # No rollback: the inserted document stays if the read-back fails.
    try:
        document = await collection.find_one({"_id": result.inserted_id})
    except STORAGE_ERRORS as exc:
        logger.exception("Failed to read back user %s", result.inserted_id)
        raise DatabaseError("Failed to retrieve created user") from exc

    if document is None:
        logger.error("Inserted user %s not found on read-back", result.inserted_id)
        raise DatabaseError("Failed to retrieve created user")

    try:
        user = User.from_document(document)
    except PydanticValidationError as exc:
        logger.error("Failed to decode created user %s: %s", result.inserted_id, exc)
        raise DatabaseError("Failed to retrieve created user") from exc
    return UserResponse.from_user(user)

from __future__ import annotations

import re
from copy import deepcopy
from types import SimpleNamespace
from typing import Any, Dict, Iterable, List, Optional

import bson
import pytest
from bson import ObjectId
from bson.errors import InvalidBSON
from fastapi.testclient import TestClient
from pymongo.errors import ServerSelectionTimeoutError

from simple_api.api.dependencies import get_users_collection
from simple_api.api.main import create_app
from simple_api.core.config import Settings
from simple_api.core.database import DatabaseManager


def _matches(document: Dict[str, Any], query: Dict[str, Any]) -> bool:
    for key, expected in query.items():
        if key == "$or":
            if not any(_matches(document, clause) for clause in expected):
                return False
            continue
        value = document.get(key)
        if isinstance(expected, dict) and "$regex" in expected:
            flags = re.IGNORECASE if "i" in expected.get("$options", "") else 0
            if not isinstance(value, str) or not re.search(expected["$regex"], value, flags):
                return False
        elif value != expected:
            return False
    return True


class StubCursor:
    def __init__(self, documents: List[Dict[str, Any]], corrupt: bool = False) -> None:
        self._documents = iter(documents)
        self._corrupt = corrupt

    def __aiter__(self) -> "StubCursor":
        return self

    async def __anext__(self) -> Dict[str, Any]:
        if self._corrupt:
            raise InvalidBSON("objsize too large")
        try:
            return next(self._documents)
        except StopIteration:
            raise StopAsyncIteration

    async def to_list(self, length: Optional[int] = None) -> List[Dict[str, Any]]:
        return [document async for document in self]


class StubCollection:
    """In-memory stand-in for the subset of the motor collection API we use."""

    def __init__(self, documents: Iterable[Dict[str, Any]] = (), fail_on: Iterable[str] = ()) -> None:
        self.documents: List[Dict[str, Any]] = []
        self.fail_on = set(fail_on)
        for document in documents:
            self._store(document)

    def _check(self, operation: str) -> None:
        if operation in self.fail_on:
            raise ServerSelectionTimeoutError(f"{operation} unavailable")

    def _store(self, document: Dict[str, Any]) -> ObjectId:
        stored = deepcopy(document)
        stored.setdefault("_id", ObjectId())
        # Motor encodes every document before it goes on the wire.
        bson.encode(stored)
        self.documents.append(stored)
        return stored["_id"]

    def find(self, query: Optional[Dict[str, Any]] = None) -> StubCursor:
        self._check("find")
        return StubCursor(
            [deepcopy(doc) for doc in self.documents if _matches(doc, query or {})],
            corrupt="decode" in self.fail_on,
        )

    async def find_one(self, query: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        self._check("find_one")
        for document in self.documents:
            if _matches(document, query):
                return deepcopy(document)
        return None

    async def insert_one(self, document: Dict[str, Any]) -> SimpleNamespace:
        self._check("insert_one")
        return SimpleNamespace(inserted_id=self._store(document))

    async def insert_many(self, documents: List[Dict[str, Any]]) -> SimpleNamespace:
        self._check("insert_many")
        return SimpleNamespace(inserted_ids=[self._store(document) for document in documents])

    async def delete_many(self, query: Dict[str, Any]) -> SimpleNamespace:
        self._check("delete_many")
        kept = [doc for doc in self.documents if not _matches(doc, query)]
        deleted = len(self.documents) - len(kept)
        self.documents = kept
        return SimpleNamespace(deleted_count=deleted)

    async def count_documents(self, query: Dict[str, Any]) -> int:
        self._check("count_documents")
        return sum(1 for doc in self.documents if _matches(doc, query))


class StubDatabase:
    def __init__(self) -> None:
        self.collections: Dict[str, StubCollection] = {}

    def __getitem__(self, name: str) -> StubCollection:
        return self.collections.setdefault(name, StubCollection())


class StubDatabaseManager(DatabaseManager):
    """Database manager that never leaves the process."""

    def __init__(self, config: Optional[Settings] = None, fail: bool = False) -> None:
        super().__init__(config)
        self.fail = fail
        self.stub_database = StubDatabase()
        self.closed = False

    async def initialize(self) -> None:
        if self.fail:
            raise ServerSelectionTimeoutError("mongodb://unreachable:27017")
        self.database = self.stub_database

    async def close(self) -> None:
        self.closed = True
        self.database = None


@pytest.fixture()
def users_collection() -> StubCollection:
    return StubCollection()


@pytest.fixture()
def stub_database() -> StubDatabase:
    return StubDatabase()


@pytest.fixture()
def make_manager():
    def _make(config: Optional[Settings] = None, fail: bool = False) -> StubDatabaseManager:
        return StubDatabaseManager(config, fail=fail)

    return _make


@pytest.fixture()
def stub_collection_cls():
    return StubCollection


@pytest.fixture()
def make_collection():
    def _make(documents: Iterable[Dict[str, Any]] = (), fail_on: Iterable[str] = ()) -> StubCollection:
        return StubCollection(documents, fail_on)

    return _make


@pytest.fixture()
def make_client():
    """Build a TestClient whose users collection is the given stub."""

    def _make(collection: StubCollection) -> TestClient:
        app = create_app()
        app.dependency_overrides[get_users_collection] = lambda: collection
        return TestClient(app)

    return _make


@pytest.fixture()
def client(make_client, users_collection: StubCollection) -> TestClient:
    return make_client(users_collection)

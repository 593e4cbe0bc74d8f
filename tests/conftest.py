import asyncio

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient
from pymongo.errors import ServerSelectionTimeoutError

from app.api.deps import get_user_store
from app.core.config import Settings
from app.main import create_app
from app.services.user_service import UserStore


class InsertResult:
    def __init__(self, inserted_id):
        self.inserted_id = inserted_id


class FakeCursor:
    def __init__(self, documents):
        self._documents = documents

    async def to_list(self, length=None):
        return list(self._documents)


class FakeUsersCollection:
    """In-memory stand-in for the Motor users collection."""

    def __init__(self):
        self.documents = []
        self.fail_with = None
        self.insert_delay = 0

    async def insert_one(self, document):
        if self.insert_delay:
            await asyncio.sleep(self.insert_delay)
        if self.fail_with:
            raise self.fail_with
        document.setdefault("_id", ObjectId())
        self.documents.append(dict(document))
        return InsertResult(document["_id"])

    def find(self, query=None):
        if self.fail_with:
            raise self.fail_with
        return FakeCursor(self.documents)


@pytest.fixture
def users_collection():
    return FakeUsersCollection()


@pytest.fixture
def unreachable_db():
    return ServerSelectionTimeoutError("localhost:27017: [Errno 111] Connection refused")


@pytest.fixture
def upload_dir(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture
def app(upload_dir, users_collection):
    test_settings = Settings(UPLOAD_DIR=str(upload_dir))
    application = create_app(test_settings)
    application.dependency_overrides[get_user_store] = lambda: UserStore(users_collection)
    return application


@pytest.fixture
def client(app):
    return TestClient(app)

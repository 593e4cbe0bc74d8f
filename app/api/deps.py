"""
app/api/deps.py

Purpose: Request dependencies

- Hands each route the configured FileStore and UserStore
- Tests swap these through app.dependency_overrides
"""

from fastapi import Request

from app.core.config import Settings
from app.core.exceptions import PersistenceError
from app.db.mongo import get_users_collection
from app.services.file_store import FileStore
from app.services.user_service import UserStore


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_file_store(request: Request) -> FileStore:
    return request.app.state.file_store


def get_user_store() -> UserStore:
    try:
        collection = get_users_collection()
    except RuntimeError as e:
        raise PersistenceError(str(e)) from e
    return UserStore(collection)

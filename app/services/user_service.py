"""
app/services/user_service.py

Purpose: User record persistence

- Create user registration records
- List every record in insertion order
- Translate driver failures into PersistenceError
"""

from pymongo.errors import PyMongoError
from typing import List

from app.core.exceptions import PersistenceError
from app.core.logging import get_logger, LogContext
from app.models.user import NewUser, UserRecord

logger = get_logger(__name__)


class UserStore:
    """
    Create-only store of user records backed by a Motor collection.
    """

    def __init__(self, collection):
        self._collection = collection

    async def create(self, user: NewUser) -> UserRecord:
        """
        Persists a new user record.

        Args:
            user: Record to save

        Returns:
            The saved record with its assigned id

        Raises:
            PersistenceError: If the database is unreachable or rejects the write
        """
        with LogContext(email=user.email):
            document = user.to_document()

            try:
                result = await self._collection.insert_one(document)
            except PyMongoError as e:
                logger.error(f"Failed to save user record: {e}")
                raise PersistenceError(f"Could not save user: {e}") from e

            record = UserRecord(id=str(result.inserted_id), **document)
            logger.info("User record created", extra={"user_id": record.id})
            return record

    async def list_all(self) -> List[UserRecord]:
        """
        Returns every stored user record, unfiltered and unpaginated.

        Raises:
            PersistenceError: If the database cannot be read
        """
        try:
            documents = await self._collection.find({}).to_list(length=None)
        except PyMongoError as e:
            logger.error(f"Failed to list user records: {e}")
            raise PersistenceError(f"Could not load users: {e}") from e

        return [UserRecord.from_document(doc) for doc in documents]

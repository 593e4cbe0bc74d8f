"""
app/db/mongo.py

Purpose: MongoDB connection setup

- Initializes Motor client with connection pooling
- Single collection: users (registration records)
- Health checks and startup retry logic
- Proper connection lifecycle management
"""

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo.errors import ConnectionFailure, ServerSelectionTimeoutError
from typing import Optional
import asyncio
from app.core.config import Settings, settings
from app.core.logging import get_logger

logger = get_logger(__name__)

# Global MongoDB client
_client: Optional[AsyncIOMotorClient] = None
_database: Optional[AsyncIOMotorDatabase] = None
_users_collection_name: str = settings.USERS_COLLECTION


async def connect_to_mongo(app_settings: Settings = settings, max_retries: int = 3):
    """
    Creates the Motor client and verifies the server is reachable.
    Called during application startup.

    An unreachable server is logged but not fatal: the client stays
    configured and requests touching the database fail individually.
    """
    global _client, _database, _users_collection_name

    if _client is not None:
        logger.warning("MongoDB client already initialized")
        return

    _client = AsyncIOMotorClient(
        app_settings.MONGODB_URL,
        maxPoolSize=50,
        serverSelectionTimeoutMS=5000,
        connectTimeoutMS=10000,
    )
    _database = _client[app_settings.MONGODB_DB_NAME]
    _users_collection_name = app_settings.USERS_COLLECTION

    retry_delay = 2

    for attempt in range(1, max_retries + 1):
        try:
            logger.info(
                f"Attempting to connect to MongoDB (attempt {attempt}/{max_retries})"
            )
            await _client.admin.command("ping")
            logger.info(
                f"✅ Successfully connected to MongoDB: {app_settings.MONGODB_DB_NAME}"
            )
            return

        except (ConnectionFailure, ServerSelectionTimeoutError) as e:
            logger.error(
                f"Failed to connect to MongoDB (attempt {attempt}/{max_retries}): {e}"
            )

            if attempt < max_retries:
                logger.info(f"Retrying in {retry_delay} seconds...")
                await asyncio.sleep(retry_delay)
                retry_delay *= 2  # Exponential backoff

    logger.critical("MongoDB is unreachable; database requests will fail until it is back")


async def close_mongo_connection():
    """
    Closes the MongoDB connection.
    Called during application shutdown.
    """
    global _client, _database

    if _client:
        logger.info("Closing MongoDB connection")
        _client.close()
        _client = None
        _database = None
        logger.info("MongoDB connection closed")


async def check_database_health() -> bool:
    """
    Checks if the database connection is healthy.

    Returns:
        True if connection is healthy, False otherwise
    """
    try:
        if _client is None:
            logger.error("MongoDB client not initialized")
            return False

        await _client.admin.command("ping")
        return True

    except Exception as e:
        logger.error(f"Database health check failed: {str(e)}")
        return False


def get_users_collection() -> AsyncIOMotorCollection:
    """
    Returns the users collection.

    Document fields:
    - name: str
    - email: str
    - profilePic: str (generated filename)
    - uploadedFiles: list[str] (generated filenames, submission order)
    """
    if _database is None:
        raise RuntimeError(
            "Database not initialized. Call connect_to_mongo() during startup."
        )
    return _database[_users_collection_name]

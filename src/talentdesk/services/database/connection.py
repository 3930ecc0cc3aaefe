"""MongoDB connection management."""

import logging

from beanie import init_beanie
from pymongo import AsyncMongoClient

from src.talentdesk.services.database.models import DOCUMENT_MODELS

logger = logging.getLogger(__name__)

# Global client instance (initialized in main.py lifespan)
_client: AsyncMongoClient | None = None


async def init_database(uri: str, database_name: str) -> AsyncMongoClient:
    """
    Connect to MongoDB and register document models with Beanie.

    The database named in the URI wins; ``database_name`` is used when the
    URI does not name one. ``init_beanie`` also creates the unique indexes
    declared on the models.

    Args:
        uri: MongoDB connection string
        database_name: Fallback database name

    Returns:
        Connected client

    Raises:
        pymongo.errors.PyMongoError: If the server is unreachable
    """
    global _client

    client: AsyncMongoClient = AsyncMongoClient(uri)
    try:
        await client.admin.command("ping")
        database = client.get_default_database(default=database_name)
        await init_beanie(database=database, document_models=DOCUMENT_MODELS)
    except Exception:
        await client.close()
        raise

    _client = client
    logger.info(
        "Connected to MongoDB",
        extra={"database": database.name, "models": [m.__name__ for m in DOCUMENT_MODELS]},
    )
    return client


async def close_database() -> None:
    """Close the MongoDB client if one is open."""
    global _client

    if _client is None:
        return

    await _client.close()
    _client = None
    logger.info("MongoDB connection closed")

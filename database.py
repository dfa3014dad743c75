# database.py
"""
CoachHub MongoDB Connection.

One Motor client per worker process, shared by every Beanie document model
of ``coachhub.models.mongodb``. The connection is opened at startup and, if
that fails, on the first request that reaches a data-access route (see
``LazyDatabaseMiddleware``).
"""

import asyncio
import logging
from typing import Optional
from urllib.parse import urlparse

from beanie import init_beanie
from motor.motor_asyncio import AsyncIOMotorClient

from settings import settings

logger = logging.getLogger(__name__)


def _host_of(database_url: str) -> str:
    """Host part of a connection string, without credentials, for logs."""
    parsed = urlparse(database_url)
    return parsed.hostname or "unknown-host"


class Database:
    """Process-wide MongoDB handle."""

    client: Optional[AsyncIOMotorClient] = None
    _initialized: bool = False
    _lock: Optional[asyncio.Lock] = None

    @classmethod
    def is_connected(cls) -> bool:
        return cls._initialized

    @classmethod
    async def connect_db(cls, database_url: str, database_name: str) -> None:
        """
        Open the client, check it answers, and register the document models.

        Concurrent callers wait for the first one; later calls are no-ops
        until ``close_db``.

        Raises:
            Exception: Whatever the driver raises when the server cannot be
                reached; the client is discarded in that case.
        """
        if cls._lock is None:
            cls._lock = asyncio.Lock()

        async with cls._lock:
            if cls._initialized:
                return

            client = AsyncIOMotorClient(
                database_url,
                serverSelectionTimeoutMS=settings.MONGO_SERVER_SELECTION_TIMEOUT_MS,
                maxPoolSize=settings.MONGO_MAX_POOL_SIZE,
                minPoolSize=settings.MONGO_MIN_POOL_SIZE,
                tz_aware=False,
            )
            try:
                await client.admin.command("ping")

                from coachhub.models.mongodb import DOCUMENT_MODELS

                await init_beanie(database=client[database_name], document_models=DOCUMENT_MODELS)
            except Exception as e:
                client.close()
                logger.error(f"Error connecting to MongoDB at {_host_of(database_url)}: {e}")
                raise

            cls.client = client
            cls._initialized = True
            logger.info(
                f"Connected to MongoDB {_host_of(database_url)}/{database_name} "
                f"({len(DOCUMENT_MODELS)} collections registered)"
            )

    @classmethod
    async def close_db(cls) -> None:
        if cls.client:
            cls.client.close()
            logger.info("MongoDB connection closed")
        cls.client = None
        cls._initialized = False

    @classmethod
    async def ping(cls) -> bool:
        """True when the server answers a ping; never raises."""
        if not cls.client:
            return False
        try:
            await cls.client.admin.command("ping")
            return True
        except Exception as e:
            logger.warning(f"MongoDB ping failed: {e}")
            return False

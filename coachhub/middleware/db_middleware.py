# coachhub/middleware/db_middleware.py
"""
Lazy Database Connection Middleware.

Ensures MongoDB connection is established before processing requests.
"""

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
import logging

from database import Database
from settings import settings

logger = logging.getLogger(__name__)

SKIP_PATHS = {"/health", "/health/detailed", "/health/redis", "/api/imagekit-auth"}


class LazyDatabaseMiddleware(BaseHTTPMiddleware):
    """Middleware to ensure database connection before handling requests."""

    async def dispatch(self, request: Request, call_next):
        """
        Connect to MongoDB on the first request that needs it.

        A failed connection does not fail the request here; the data-access
        functions report the store failure in their own envelope.
        """
        if request.url.path in SKIP_PATHS:
            return await call_next(request)

        if not Database.is_connected():
            try:
                logger.info("Lazy initializing MongoDB connection...")
                await Database.connect_db(
                    database_url=settings.DATABASE_URL,
                    database_name=settings.DATABASE_NAME
                )
            except Exception as e:
                logger.error(f"Failed to initialize database: {e}")

        return await call_next(request)

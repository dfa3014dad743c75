"""CoachHub API - Middleware Package."""

from .auth import JWTBearer, jwt_bearer
from .db_middleware import LazyDatabaseMiddleware

__all__ = ["JWTBearer", "jwt_bearer", "LazyDatabaseMiddleware"]

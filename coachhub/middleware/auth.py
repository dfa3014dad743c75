"""
CoachHub API - Authentication Middleware.

Bearer token extraction for the data-access routes. Authorization itself is
decided by the data-access functions, so a missing or invalid token yields
no session instead of an HTTP error.
"""

from typing import Optional

from fastapi import Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from coachhub.schemas.user import Session
from coachhub.services.session import resolve_session


class JWTBearer(HTTPBearer):
    """
    JWT Bearer session resolution.

    Custom HTTPBearer that turns the identity token into a ``Session``.
    """

    def __init__(self):
        super().__init__(auto_error=False)

    async def __call__(self, request: Request) -> Optional[Session]:
        """
        Resolve the session from the Authorization header.

        Args:
            request: FastAPI request object.

        Returns:
            Optional[Session]: Session if the token is valid, None otherwise.
        """
        credentials: Optional[HTTPAuthorizationCredentials] = await super().__call__(request)

        if not credentials or credentials.scheme.lower() != "bearer":
            return None

        return resolve_session(credentials.credentials)


# Global JWT bearer instance for dependency injection
jwt_bearer = JWTBearer()

"""
CoachHub API - FastAPI Dependencies.

Dependency injection helpers for routes.
"""

from typing import Optional

from fastapi import Depends

from coachhub.middleware.auth import jwt_bearer
from coachhub.schemas.user import Session


async def get_session(
    session: Optional[Session] = Depends(jwt_bearer)
) -> Optional[Session]:
    """
    Get the session of the current request.

    Anonymous requests get None; the data-access function answers them with
    its authorization-failure envelope.

    Usage:
        @router.get("/routines")
        async def routines(session: Optional[Session] = Depends(get_session)):
            return (await list_routines(session)).to_response()
    """
    return session

"""
CoachHub Session Resolution and Authorization.

Turns an identity token into a ``Session`` and provides the single role
gate that every data-access function goes through before touching the
store.
"""

from typing import Any, Dict, Iterable, Optional
import logging

from coachhub.schemas.envelope import Envelope, failure
from coachhub.schemas.user import Role, Session
from coachhub.utils.errors import UNAUTHORIZED
from .auth import verify_token

logger = logging.getLogger(__name__)


def session_from_claims(payload: Dict[str, Any]) -> Optional[Session]:
    """
    Build a session from decoded token claims.

    A missing ``role`` claim means the provider's signup default (athlete);
    an unknown role string invalidates the session.

    Args:
        payload: Decoded JWT claims.

    Returns:
        Session or None if the claims do not describe a usable identity.
    """
    user_id = payload.get("sub")
    if not user_id:
        logger.warning("Token without subject claim")
        return None

    try:
        role = Role(payload.get("role") or Role.ATHLETE.value)
    except ValueError:
        logger.warning(f"Token for {user_id} carries unknown role {payload.get('role')!r}")
        return None

    return Session(
        id=str(user_id),
        role=role,
        onboarding_completed=bool(payload.get("onboarding_completed", False)),
        auth_provider=payload.get("auth_provider"),
    )


def resolve_session(token: Optional[str]) -> Optional[Session]:
    """
    Resolve the authenticated identity for a request.

    Args:
        token: Raw bearer token, if the request carried one.

    Returns:
        Session or None for anonymous / invalid requests.
    """
    if not token:
        return None
    payload = verify_token(token)
    if not payload:
        return None
    return session_from_claims(payload)


def require_role(
    session: Optional[Session],
    allowed: Optional[Iterable[Role]] = None
) -> Optional[Envelope]:
    """
    Authorization gate shared by all data-access functions.

    Args:
        session: Resolved session or None.
        allowed: Roles permitted; None means any authenticated identity.

    Returns:
        The authorization-failure envelope, or None when access is granted.

    Example:
        >>> denied = require_role(session, {Role.COACH})
        >>> if denied:
        ...     return denied
    """
    if session is None:
        return failure(UNAUTHORIZED)
    if allowed is not None and session.role not in set(allowed):
        logger.info(f"Role {session.role.value} denied for user {session.id}")
        return failure(UNAUTHORIZED)
    return None


def can_view_user(session: Session, user_id: str) -> bool:
    """Users read their own data; coaches may read any athlete's."""
    return user_id == session.id or session.role == Role.COACH

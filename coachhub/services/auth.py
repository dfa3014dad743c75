"""
CoachHub API - Identity Token Service.

JWT encoding/decoding for the identity tokens issued by the auth provider.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any
import logging

from jose import jwt, JWTError

from settings import settings

logger = logging.getLogger(__name__)


def create_access_token(
    data: Dict[str, Any],
    expires_delta: Optional[timedelta] = None
) -> str:
    """
    Create a JWT access token.

    The auth provider mints tokens in production; this is used for local
    tooling and tests.

    Args:
        data: Dictionary containing token payload (must include 'sub' key).
        expires_delta: Optional custom expiration time.

    Returns:
        str: Encoded JWT access token.

    Example:
        >>> token = create_access_token({"sub": "user-123", "role": "coach"})
        >>> len(token) > 0
        True
    """
    to_encode = data.copy()

    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(
            minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES
        )

    to_encode.update({
        "exp": expire,
        "iat": datetime.now(timezone.utc)
    })

    return jwt.encode(
        to_encode,
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM
    )


def verify_token(token: str) -> Optional[Dict[str, Any]]:
    """
    Verify and decode a JWT access token.

    Args:
        token: JWT access token to verify.

    Returns:
        Optional[Dict[str, Any]]: Token payload if valid, None otherwise.

    Example:
        >>> token = create_access_token({"sub": "user-123"})
        >>> verify_token(token)["sub"]
        'user-123'
    """
    try:
        return jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM]
        )
    except JWTError as e:
        logger.debug(f"Token verification failed: {e}")
        return None

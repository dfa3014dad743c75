"""
CoachHub Media Upload Credentials.

Signed, short-lived parameters that let a client upload directly to
ImageKit. The signature is ``hex(HMAC-SHA1(private_key, token + expire))``.
"""

import hashlib
import hmac
import secrets
import time
from typing import Any, Dict, Optional

from coachhub.utils.errors import ConfigurationError, IMAGEKIT_NOT_CONFIGURED

UPLOAD_WINDOW_SECONDS = 600


def sign_upload(private_key: str, token: str, expire: int) -> str:
    """HMAC-SHA1 hex digest of ``token + str(expire)`` keyed by ``private_key``."""
    return hmac.new(
        private_key.encode(),
        f"{token}{expire}".encode(),
        hashlib.sha1
    ).hexdigest()


def issue_upload_credentials(private_key: Optional[str]) -> Dict[str, Any]:
    """
    Generate one-time upload credentials.

    Args:
        private_key: ImageKit private key.

    Returns:
        Dict with ``token`` (64 hex chars), ``expire`` (epoch seconds, now + 600)
        and ``signature``.

    Raises:
        ConfigurationError: If no private key is configured.
    """
    if not private_key:
        raise ConfigurationError(IMAGEKIT_NOT_CONFIGURED, detail="IMAGEKIT_PRIVATE_KEY is not set")

    token = secrets.token_hex(32)
    expire = int(time.time()) + UPLOAD_WINDOW_SECONDS

    return {
        "token": token,
        "expire": expire,
        "signature": sign_upload(private_key, token, expire),
    }

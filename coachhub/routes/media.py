# coachhub/routes/media.py
"""
CoachHub API - Media Upload Routes.

Authentication parameters for direct client uploads to ImageKit.
"""

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from settings import settings
from coachhub.services.media import issue_upload_credentials
from coachhub.utils.errors import ConfigurationError, UPLOAD_CREDENTIALS_FAILED

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/imagekit-auth")
async def imagekit_auth():
    """
    Get ``{token, expire, signature}`` for one upload.

    Returns 500 with ``{"error": ...}`` when the private key is not
    configured or signing fails.
    """
    try:
        return issue_upload_credentials(settings.IMAGEKIT_PRIVATE_KEY)
    except ConfigurationError as e:
        logger.error(f"ImageKit credentials unavailable: {e.detail}")
        return JSONResponse(status_code=e.status_code, content={"error": e.message})
    except Exception as e:
        logger.error(f"Error generating ImageKit credentials: {e}")
        return JSONResponse(status_code=500, content={"error": UPLOAD_CREDENTIALS_FAILED})

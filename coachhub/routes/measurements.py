# coachhub/routes/measurements.py
"""CoachHub API - Body Measurement Routes."""

from typing import Optional

from fastapi import APIRouter, Depends

from coachhub.dependencies import get_session
from coachhub.schemas.user import Session
from coachhub.services.measurements import log_body_measurements, get_body_measurements_history

router = APIRouter()


@router.post("")
async def log_measurements(data: dict, session: Optional[Session] = Depends(get_session)):
    """Log a body measurement entry for the caller."""
    return (await log_body_measurements(session, data)).to_response()


@router.get("")
async def measurements_history(
    user_id: Optional[str] = None,
    session: Optional[Session] = Depends(get_session)
):
    """Measurement history, oldest first. Coaches may pass ``user_id``."""
    return (await get_body_measurements_history(session, user_id)).to_response()

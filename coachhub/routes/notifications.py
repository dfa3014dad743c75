# coachhub/routes/notifications.py
"""CoachHub API - Notification Routes."""

from typing import Optional

from fastapi import APIRouter, Depends

from coachhub.dependencies import get_session
from coachhub.schemas.user import Session
from coachhub.services.notifications import list_notifications, mark_notification_read

router = APIRouter()


@router.get("")
async def notifications(session: Optional[Session] = Depends(get_session)):
    """Get the caller's latest notifications."""
    return (await list_notifications(session)).to_response()


@router.post("/{notification_id}/read")
async def mark_read(notification_id: str, session: Optional[Session] = Depends(get_session)):
    return (await mark_notification_read(session, notification_id)).to_response()

"""CoachHub API - Notification Schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class Notification(BaseModel):
    """Notification delivered to a user."""

    id: str
    recipient_id: str
    kind: str
    title: str
    message: str
    athlete_id: Optional[str] = None
    read: bool = False
    created_at: datetime

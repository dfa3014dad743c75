"""CoachHub Notification Service."""

from typing import Any, Dict, List, Optional
import logging

from coachhub.models.mongodb import NotificationDocument
from coachhub.schemas.envelope import Envelope, success, failure
from coachhub.schemas.notification import Notification
from coachhub.schemas.user import Session
from coachhub.utils.errors import UNAUTHORIZED, NOTIFICATIONS_LOAD_FAILED, NOTIFICATION_UPDATE_FAILED
from .cache import cached
from .cache_tags import CacheTag, revalidate_tags
from .mappers import notification_from_document
from .session import require_role

logger = logging.getLogger(__name__)

NOTIFICATIONS_LIMIT = 20

MARK_READ_TAGS = frozenset({CacheTag.NOTIFICATIONS})


@cached(CacheTag.NOTIFICATIONS, CacheTag.COACH_NOTIFICATIONS, CacheTag.ATHLETE_NOTIFICATIONS)
async def _load_notifications(recipient_id: str) -> List[Dict[str, Any]]:
    notifications = await NotificationDocument.find(
        NotificationDocument.recipient_id == recipient_id
    ).sort(-NotificationDocument.created_at).limit(NOTIFICATIONS_LIMIT).to_list()
    return [notification_from_document(n).model_dump(mode="json") for n in notifications]


async def list_notifications(session: Optional[Session]) -> Envelope:
    """The caller's 20 most recent notifications, newest first."""
    denied = require_role(session)
    if denied:
        return denied

    try:
        rows = await _load_notifications(session.id)
        return success(notifications=[Notification.model_validate(row) for row in rows])
    except Exception as e:
        logger.error(f"Error fetching notifications for {session.id}: {e}", exc_info=True)
        return failure(NOTIFICATIONS_LOAD_FAILED)


async def mark_notification_read(session: Optional[Session], notification_id: str) -> Envelope:
    """
    Mark one of the caller's notifications as read.

    Returns:
        Envelope with ``updated`` (False when the notification does not exist).
    """
    denied = require_role(session)
    if denied:
        return denied

    try:
        notification = await NotificationDocument.find_one(
            NotificationDocument.uid == notification_id
        )
        if not notification:
            return success(updated=False)
        if notification.recipient_id != session.id:
            return failure(UNAUTHORIZED)

        notification.read = True
        await notification.save()

        await revalidate_tags(MARK_READ_TAGS)
        return success(updated=True)
    except Exception as e:
        logger.error(f"Error updating notification {notification_id}: {e}", exc_info=True)
        return failure(NOTIFICATION_UPDATE_FAILED)

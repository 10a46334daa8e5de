"""Notification creation for client workflow events."""
from typing import Optional
import structlog
from sqlalchemy.orm import Session

from agency.db.models.notification import Notification, NotificationType

logger = structlog.get_logger()


def notify(
    db: Session,
    user_id: Optional[int],
    notification_type: NotificationType,
    message: str,
    related_client_id: Optional[int] = None,
) -> Optional[Notification]:
    """Queue a notification for ``user_id`` on the session; the caller commits.

    Returns ``None`` when there is nobody to notify.
    """
    if user_id is None:
        return None

    notification = Notification(
        user_id=user_id,
        type=notification_type,
        message=message,
        related_client_id=related_client_id,
        read=False,
    )
    db.add(notification)
    logger.info(
        "Notification queued",
        user_id=user_id,
        type=notification_type.value,
        client_id=related_client_id,
    )
    return notification

"""Notification schemas."""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel
from agency.db.models.notification import NotificationType


class NotificationResponse(BaseModel):
    """Schema for notification response."""
    notification_id: int
    user_id: int
    type: NotificationType
    message: str
    related_client_id: Optional[int] = None
    read: bool
    created_at: datetime

    class Config:
        from_attributes = True


class UnreadCountResponse(BaseModel):
    """Unread badge count."""
    unread: int

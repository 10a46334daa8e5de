"""Notification model."""
from enum import Enum as PyEnum
from sqlalchemy import Column, Integer, String, Boolean, Enum, ForeignKey, Index
from agency.db.base import Base


class NotificationType(str, PyEnum):
    """Notification kinds."""
    STATUS_CHANGE = "status_change"
    NEW_CLIENT = "new_client"
    AGREEMENT_APPROVED = "agreement_approved"
    APPOINTMENT = "appointment"
    TASK = "task"


class Notification(Base):
    """Per-user notification about a client workflow event."""

    __tablename__ = "notifications"

    notification_id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False)
    type = Column(Enum(NotificationType), nullable=False)
    message = Column(String(500), nullable=False)
    related_client_id = Column(Integer, ForeignKey("clients.client_id", ondelete="SET NULL"), nullable=True)
    read = Column(Boolean, default=False, nullable=False)

    __table_args__ = (
        Index('idx_notifications_user', 'user_id'),
    )

    def __repr__(self) -> str:
        return f"<Notification(notification_id={self.notification_id}, user_id={self.user_id}, type='{self.type}')>"

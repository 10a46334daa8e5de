"""Database models package."""
from agency.db.models.user import User, UserRole
from agency.db.models.client import (
    Client,
    PRStatus,
    TransferStatus,
    CreativeStatus,
    TaskStatus,
    AppointmentStatus,
    ResearchFileCategory,
)
from agency.db.models.notification import Notification, NotificationType

__all__ = [
    "User",
    "UserRole",
    "Client",
    "PRStatus",
    "TransferStatus",
    "CreativeStatus",
    "TaskStatus",
    "AppointmentStatus",
    "ResearchFileCategory",
    "Notification",
    "NotificationType",
]

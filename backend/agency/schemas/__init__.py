"""Pydantic schemas package."""
from agency.schemas.user import (
    UserCreate, UserUpdate, UserProfileUpdate, UserResponse, UserDirectoryEntry, UserLogin, Token
)
from agency.schemas.client import (
    ClientRecord, ClientCreate, ClientUpdate, ClientResponse, ClientDetailResponse, ClientListResponse
)
from agency.schemas.navigation import WorkflowSection, NavLink, TabOption, NavigationResponse, StatCard
from agency.schemas.notification import NotificationResponse, UnreadCountResponse

__all__ = [
    "UserCreate", "UserUpdate", "UserProfileUpdate", "UserResponse", "UserDirectoryEntry", "UserLogin", "Token",
    "ClientRecord", "ClientCreate", "ClientUpdate", "ClientResponse", "ClientDetailResponse", "ClientListResponse",
    "WorkflowSection", "NavLink", "TabOption", "NavigationResponse", "StatCard",
    "NotificationResponse", "UnreadCountResponse",
]

"""User schemas."""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, EmailStr
from agency.db.models.user import UserRole


class UserBase(BaseModel):
    """Base user schema."""
    email: EmailStr
    full_name: Optional[str] = None
    role: UserRole = UserRole.MODERATOR
    is_active: bool = True


class UserCreate(UserBase):
    """Schema for creating a user."""
    password: str
    phone: Optional[str] = None
    job_title: Optional[str] = None
    direct_manager_id: Optional[int] = None


class UserUpdate(BaseModel):
    """Schema for updating a user (admin)."""
    email: Optional[EmailStr] = None
    full_name: Optional[str] = None
    role: Optional[UserRole] = None
    is_active: Optional[bool] = None
    password: Optional[str] = None
    phone: Optional[str] = None
    job_title: Optional[str] = None
    direct_manager_id: Optional[int] = None


class UserProfileUpdate(BaseModel):
    """Fields a user may change on their own profile."""
    full_name: Optional[str] = None
    phone: Optional[str] = None
    job_title: Optional[str] = None
    password: Optional[str] = None


class UserResponse(UserBase):
    """Schema for user response."""
    user_id: int
    phone: Optional[str] = None
    job_title: Optional[str] = None
    direct_manager_id: Optional[int] = None
    last_login_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class UserDirectoryEntry(BaseModel):
    """Minimal user listing used by assignment pickers."""
    user_id: int
    full_name: Optional[str] = None
    email: str
    role: UserRole

    class Config:
        from_attributes = True


class UserLogin(BaseModel):
    """Schema for user login."""
    email: EmailStr
    password: str


class Token(BaseModel):
    """Schema for JWT token response, with the tab the dashboard opens on."""
    access_token: str
    token_type: str = "bearer"
    user: UserResponse
    default_tab: str

"""User model with RBAC."""
from enum import Enum as PyEnum
from sqlalchemy import Column, Integer, String, Boolean, DateTime, Enum, ForeignKey
from agency.db.base import Base


class UserRole(str, PyEnum):
    """User roles for RBAC."""
    ADMIN = "admin"
    MODERATOR = "moderator"
    PR = "pr"
    MARKET_RESEARCHER = "market_researcher"
    CREATIVE = "creative"
    CONTENT = "content"


class User(Base):
    """User model for authentication and RBAC."""

    __tablename__ = "users"

    user_id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    full_name = Column(String(255), nullable=True)
    role = Column(Enum(UserRole), default=UserRole.MODERATOR, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    last_login_at = Column(DateTime, nullable=True)

    # Profile
    phone = Column(String(50), nullable=True)
    job_title = Column(String(255), nullable=True)
    # Organisational lookup only, not ownership
    direct_manager_id = Column(Integer, ForeignKey("users.user_id", ondelete="SET NULL"), nullable=True)

    def __repr__(self) -> str:
        return f"<User(user_id={self.user_id}, email='{self.email}', role='{self.role}')>"

"""Who is calling and what their role lets them do.

Every agency endpoint resolves the bearer token to a ``User``. The role
stored on that user decides navigation, client visibility and which
workflow sections can be worked. Tokens carry the role they were issued
for; if an admin has since changed the user's role, the token is refused
so the dashboard is rebuilt for the new role after signing in again.
"""
from typing import List
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session
import structlog

from agency.api.deps.database import get_db
from agency.core.config import settings
from agency.core.security import decode_access_token
from agency.db.models.user import User, UserRole

oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.API_V1_PREFIX}/auth/login")
logger = structlog.get_logger()

MANAGEMENT_ROLES = [UserRole.MODERATOR, UserRole.ADMIN]


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    db: Session = Depends(get_db),
    token: str = Depends(oauth2_scheme)
) -> User:
    """Resolve the bearer token to an agency staff member."""
    payload = decode_access_token(token)
    if payload is None or not payload.get("sub"):
        raise _unauthorized("Could not validate credentials")

    user = db.query(User).filter(User.email == payload["sub"]).first()
    if user is None:
        raise _unauthorized("Could not validate credentials")

    issued_role = payload.get("role")
    if issued_role is not None and issued_role != user.role.value:
        logger.info("Token role outdated", user_id=user.user_id, token_role=issued_role, role=user.role.value)
        raise _unauthorized("Your role has changed, please sign in again")

    return user


async def get_current_active_user(
    current_user: User = Depends(get_current_user)
) -> User:
    """Reject accounts an admin has deactivated."""
    if not current_user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="This account has been deactivated"
        )
    return current_user


def require_role(allowed_roles: List[UserRole]):
    """Dependency factory limiting an endpoint to the given staff roles."""
    allowed = ", ".join(r.value for r in allowed_roles)

    async def role_checker(
        current_user: User = Depends(get_current_active_user)
    ) -> User:
        if current_user.role not in allowed_roles:
            logger.info("Role denied", user_id=current_user.user_id, role=current_user.role.value, allowed=allowed)
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Not available to the {current_user.role.value} role (requires {allowed})"
            )
        return current_user
    return role_checker

"""Staff sign-in and self-registration.

Accounts are agency staff. The role chosen at registration decides which
dashboard the person gets, so the login response also names the tab the
client list opens on.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session
import structlog

from agency.api.deps import get_db, get_current_active_user
from agency.core.security import verify_password, get_password_hash, create_access_token
from agency.core.config import settings
from agency.db.models.user import User
from agency.schemas.user import UserCreate, UserResponse, Token
from agency.services.access_policy import default_tab_for_role

router = APIRouter(prefix="/auth", tags=["Authentication"])
logger = structlog.get_logger()


def _authenticate(db: Session, email: str, password: str) -> Optional[User]:
    user = db.query(User).filter(User.email == email).first()
    if user is None or not verify_password(password, user.password_hash):
        return None
    return user


def issue_token(user: User) -> str:
    """Signed token for ``user``, bound to the role they hold now."""
    return create_access_token(
        data={"sub": user.email, "role": user.role.value},
        expires_delta=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )


@router.post("/login", response_model=Token)
async def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db)
):
    """Sign in with email and password."""
    user = _authenticate(db, form_data.username, form_data.password)
    if user is None:
        logger.info("Login failed", email=form_data.username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="This account has been deactivated"
        )

    user.last_login_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(user)
    logger.info("User logged in", user_id=user.user_id, role=user.role.value)

    return Token(
        access_token=issue_token(user),
        user=UserResponse.model_validate(user),
        default_tab=default_tab_for_role(user.role),
    )


@router.post("/register", response_model=UserResponse)
async def register(
    user_in: UserCreate,
    db: Session = Depends(get_db)
):
    """Create a staff account with the chosen role and profile."""
    if db.query(User).filter(User.email == user_in.email).first():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered"
        )

    if user_in.direct_manager_id is not None:
        manager = db.query(User).filter(
            User.user_id == user_in.direct_manager_id, User.is_active == True
        ).first()
        if manager is None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Manager {user_in.direct_manager_id} is not an active user"
            )

    user = User(
        email=user_in.email,
        password_hash=get_password_hash(user_in.password),
        full_name=user_in.full_name,
        role=user_in.role,
        is_active=user_in.is_active,
        phone=user_in.phone,
        job_title=user_in.job_title,
        direct_manager_id=user_in.direct_manager_id,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("User registered", user_id=user.user_id, role=user.role.value)

    return UserResponse.model_validate(user)


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: User = Depends(get_current_active_user)):
    """Profile of the signed-in staff member."""
    return UserResponse.model_validate(current_user)


@router.post("/logout")
async def logout(current_user: User = Depends(get_current_active_user)):
    """Tokens are stateless; the client discards its copy."""
    logger.info("User logged out", user_id=current_user.user_id)
    return {"message": "Successfully logged out"}

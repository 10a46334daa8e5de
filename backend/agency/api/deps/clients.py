"""Client loading and workflow-section dependencies."""
from typing import List
from fastapi import Depends, HTTPException, status
from sqlalchemy.orm import Session
from agency.api.deps.auth import get_current_active_user
from agency.api.deps.database import get_db
from agency.db.models.client import Client
from agency.db.models.user import User, UserRole
from agency.schemas.client import ClientRecord, ClientResponse
from agency.schemas.navigation import WorkflowSection
from agency.services.access_policy import workable_sections


def get_client_or_404(client_id: int, db: Session) -> Client:
    client = db.query(Client).filter(Client.client_id == client_id).first()
    if not client:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Client not found"
        )
    return client


def load_client_snapshot(db: Session) -> List[ClientResponse]:
    """All clients in registration order, as typed records for the policy services."""
    clients = db.query(Client).order_by(Client.client_id).all()
    return [ClientResponse.model_validate(c) for c in clients]


def get_assignee_or_400(user_id: int, allowed_roles: List[UserRole], db: Session) -> User:
    """Active user with one of ``allowed_roles``, for assignment fields."""
    user = db.query(User).filter(User.user_id == user_id, User.is_active == True).first()
    if not user or user.role not in allowed_roles:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"User {user_id} is not an active {'/'.join(r.value for r in allowed_roles)} user"
        )
    return user


def require_section(section: WorkflowSection):
    """Dependency factory: load the path client and require that the caller may work ``section`` on it."""
    async def section_checker(
        client_id: int,
        db: Session = Depends(get_db),
        current_user: User = Depends(get_current_active_user)
    ) -> Client:
        client = get_client_or_404(client_id, db)
        record = ClientRecord.model_validate(client)
        if section not in workable_sections(record, current_user.role):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"The {section.value} section is not available for this client and role"
            )
        return client
    return section_checker

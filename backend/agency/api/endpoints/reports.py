"""Management report endpoints."""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from agency.api.deps import get_db, require_role, load_client_snapshot, MANAGEMENT_ROLES
from agency.db.models.user import User, UserRole
from agency.services.reports import build_summary

router = APIRouter(prefix="/reports", tags=["Reports"])


@router.get("/summary")
async def get_summary(
    months: int = Query(6, ge=1, le=24),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role(MANAGEMENT_ROLES))
):
    """Status breakdown, service demand, monthly acquisition and PR team performance."""
    users = db.query(User).filter(User.role == UserRole.PR).order_by(User.user_id).all()
    return build_summary(load_client_snapshot(db), users, months=months)

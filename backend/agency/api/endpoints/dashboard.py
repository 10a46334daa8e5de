"""Dashboard navigation and KPI endpoints."""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from agency.api.deps import get_db, get_current_active_user, load_client_snapshot
from agency.core.config import settings
from agency.db.models.user import User
from agency.schemas.navigation import NavigationResponse
from agency.services.access_policy import get_links_for_role, get_tabs_for_role, default_tab_for_role
from agency.services.dashboard_stats import stats_for_role, recent_clients_for

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/navigation", response_model=NavigationResponse)
async def get_navigation(current_user: User = Depends(get_current_active_user)):
    """Sidebar links and client list tabs for the caller's role."""
    return NavigationResponse(
        role=current_user.role.value,
        links=get_links_for_role(current_user.role),
        tabs=get_tabs_for_role(current_user.role),
        default_tab=default_tab_for_role(current_user.role),
    )


@router.get("/stats")
async def get_stats(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """Role-specific stat cards, plus recent registrations for moderators."""
    clients = load_client_snapshot(db)
    stats = stats_for_role(current_user.role, current_user.user_id, clients)
    recent = recent_clients_for(
        current_user.role, current_user.user_id, clients, limit=settings.RECENT_CLIENTS_LIMIT
    )

    return {
        "role": current_user.role.value,
        "stats": [s.model_dump() for s in stats],
        "recent_clients": [c.model_dump(mode="json") for c in recent],
    }

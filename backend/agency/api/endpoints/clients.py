"""Client management endpoints."""
from datetime import datetime
from typing import Literal, Optional
from fastapi import APIRouter, Depends, status, Query
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session
import io
import structlog

from agency.api.deps import (
    get_db, get_current_active_user, require_role, MANAGEMENT_ROLES,
    get_client_or_404, get_assignee_or_400, load_client_snapshot,
)
from agency.db.models.client import Client, PRStatus, TransferStatus, default_service_requests
from agency.db.models.notification import NotificationType
from agency.db.models.user import User, UserRole
from agency.schemas.client import (
    ClientCreate, ClientUpdate, ClientResponse, ClientDetailResponse, ClientListResponse
)
from agency.schemas.navigation import WorkflowSection
from agency.services.access_policy import (
    agreement_visible, default_tab_for_role, filter_clients, workable_sections
)
from agency.services.client_exporter import export_csv, export_excel, export_filename
from agency.services.notifications import notify

router = APIRouter(prefix="/clients", tags=["Clients"])
logger = structlog.get_logger()

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _visible_clients(db: Session, user: User, tab: Optional[str], search: Optional[str]):
    active_tab = tab or default_tab_for_role(user.role)
    clients = filter_clients(load_client_snapshot(db), user.role, user.user_id, active_tab, search)
    return active_tab, clients


def _notify_assigned_pr(db: Session, client: Client) -> None:
    notify(
        db,
        client.assigned_to_pr,
        NotificationType.NEW_CLIENT,
        f"New client assigned to you: {client.name}",
        related_client_id=client.client_id,
    )


@router.get("", response_model=ClientListResponse)
async def list_clients(
    tab: Optional[str] = None,
    search: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """List the clients visible to the caller's role under a tab."""
    active_tab, clients = _visible_clients(db, current_user, tab, search)
    return ClientListResponse(items=clients, total=len(clients), tab=active_tab)


@router.get("/export")
async def export_clients(
    format: Literal["csv", "xlsx"] = Query("csv"),
    tab: Optional[str] = None,
    search: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """Export the caller's filtered client list."""
    _, clients = _visible_clients(db, current_user, tab, search)

    if format == "xlsx":
        content = export_excel(clients)
        media_type = XLSX_MEDIA_TYPE
    else:
        content = export_csv(clients).encode("utf-8")
        media_type = "text/csv"

    filename = export_filename(format)
    return StreamingResponse(
        io.BytesIO(content),
        media_type=media_type,
        headers={"Content-Disposition": f"attachment; filename={filename}"}
    )


@router.get("/{client_id}", response_model=ClientDetailResponse)
async def get_client(
    client_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """Get client by ID with the workflow sections the caller may open."""
    client = ClientResponse.model_validate(get_client_or_404(client_id, db))
    sections = workable_sections(client, current_user.role)
    return ClientDetailResponse(
        **client.model_dump(),
        visible_sections=[s for s in WorkflowSection if s in sections],
        agreement_visible=agreement_visible(client),
    )


@router.post("", response_model=ClientResponse, status_code=status.HTTP_201_CREATED)
async def create_client(
    client_in: ClientCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role(MANAGEMENT_ROLES))
):
    """Register a new client."""
    if client_in.assigned_to_pr is not None:
        get_assignee_or_400(client_in.assigned_to_pr, [UserRole.PR], db)

    client = Client(
        name=client_in.name,
        phone=client_in.phone,
        business_name=client_in.business_name,
        business_field=client_in.business_field,
        basic_info={
            "email": client_in.email,
            "address": client_in.address or "",
            "notes": client_in.notes or "",
        },
        registered_by=current_user.user_id,
        registered_at=datetime.now(),
        assigned_to_pr=client_in.assigned_to_pr,
        pr_status=PRStatus.PENDING,
        transfer_status=TransferStatus.ACTIVE,
        service_requests=default_service_requests(),
    )
    db.add(client)
    db.flush()
    _notify_assigned_pr(db, client)
    db.commit()
    db.refresh(client)
    logger.info("Client registered", client_id=client.client_id, by=current_user.user_id)

    return ClientResponse.model_validate(client)


@router.put("/{client_id}", response_model=ClientResponse)
async def update_client(
    client_id: int,
    client_in: ClientUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role(MANAGEMENT_ROLES))
):
    """Edit registration data, service requests or the assigned PR."""
    client = get_client_or_404(client_id, db)

    update_data = client_in.model_dump(mode="json", exclude_unset=True)
    reassigned = (
        "assigned_to_pr" in update_data
        and update_data["assigned_to_pr"] is not None
        and update_data["assigned_to_pr"] != client.assigned_to_pr
    )
    if reassigned:
        get_assignee_or_400(update_data["assigned_to_pr"], [UserRole.PR], db)

    for field, value in update_data.items():
        setattr(client, field, value)

    if reassigned:
        _notify_assigned_pr(db, client)

    db.commit()
    db.refresh(client)

    return ClientResponse.model_validate(client)

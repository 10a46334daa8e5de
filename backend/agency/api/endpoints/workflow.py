"""Client workflow actions: PR, market research, creative and content.

Every action loads the client through ``require_section``. A caller whose
role cannot work the section on that client gets a 403, and specialist roles
get one until the client is approved.
"""
from datetime import datetime
import uuid
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
import structlog

from agency.api.deps import get_db, get_current_active_user, get_assignee_or_400, get_summarizer, require_section
from agency.db.models.client import Client, TransferStatus, AppointmentStatus
from agency.db.models.notification import NotificationType
from agency.db.models.user import User, UserRole
from agency.schemas.client import (
    ClientResponse,
    Appointment,
    CalendarEntry,
    MarketResearchFile,
    ContentTask,
    FinalAgreement,
    PRStatusUpdate,
    AppointmentCreate,
    AppointmentStatusUpdate,
    AgreementApproval,
    AssignUser,
    ResearchFileCreate,
    ResearchUpdate,
    CreativeUpdate,
    ContentUpdate,
    ContentTaskCreate,
    CalendarEntryCreate,
    CalendarEntryUpdate,
)
from agency.schemas.navigation import WorkflowSection
from agency.services.adapters.base import SummarizerAdapter, SummaryUnavailableError
from agency.services.notifications import notify
from agency.services.research_summary import summarize_research_file

router = APIRouter(prefix="/clients", tags=["Client Workflow"])
logger = structlog.get_logger()

pr_client = require_section(WorkflowSection.PR)
research_client = require_section(WorkflowSection.MARKET_RESEARCH)
creative_client = require_section(WorkflowSection.CREATIVE)
content_client = require_section(WorkflowSection.CONTENT)


def _ensure_active(client: Client) -> None:
    if client.transfer_status != TransferStatus.ACTIVE:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Client is already {client.transfer_status.value}"
        )


def _append(client: Client, attribute: str, item: dict) -> None:
    # JSON columns only detect reassignment
    setattr(client, attribute, list(getattr(client, attribute) or []) + [item])


def _save(db: Session, client: Client) -> ClientResponse:
    db.commit()
    db.refresh(client)
    return ClientResponse.model_validate(client)


# PR

@router.put("/{client_id}/pr/status", response_model=ClientResponse)
async def update_pr_status(
    status_in: PRStatusUpdate,
    client: Client = Depends(pr_client),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """Set the PR pipeline status."""
    previous = client.pr_status
    client.pr_status = status_in.pr_status
    if previous != status_in.pr_status:
        notify(
            db,
            client.registered_by,
            NotificationType.STATUS_CHANGE,
            f"PR status of {client.name} changed to {status_in.pr_status.value}",
            related_client_id=client.client_id,
        )
        logger.info(
            "PR status changed",
            client_id=client.client_id,
            pr_status=status_in.pr_status.value,
            by=current_user.user_id,
        )
    return _save(db, client)


@router.post("/{client_id}/pr/appointments", response_model=ClientResponse, status_code=status.HTTP_201_CREATED)
async def add_appointment(
    appointment_in: AppointmentCreate,
    client: Client = Depends(pr_client),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """Schedule a PR call."""
    when = datetime.combine(
        appointment_in.appointment_date,
        datetime.strptime(appointment_in.time, "%H:%M").time(),
    )
    appointment = Appointment(date=when, time=appointment_in.time, status=AppointmentStatus.SCHEDULED)
    _append(client, "pr_appointments", appointment.model_dump(mode="json"))
    notify(
        db,
        client.assigned_to_pr,
        NotificationType.APPOINTMENT,
        f"Call with {client.name} scheduled for {when:%Y-%m-%d} {appointment_in.time}",
        related_client_id=client.client_id,
    )
    return _save(db, client)


@router.put("/{client_id}/pr/appointments/{index}", response_model=ClientResponse)
async def update_appointment_status(
    index: int,
    status_in: AppointmentStatusUpdate,
    client: Client = Depends(pr_client),
    db: Session = Depends(get_db)
):
    """Mark an appointment completed or cancelled."""
    appointments = [dict(a) for a in client.pr_appointments or []]
    if index < 0 or index >= len(appointments):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Appointment not found"
        )
    appointments[index]["status"] = status_in.status.value
    client.pr_appointments = appointments
    return _save(db, client)


@router.post("/{client_id}/pr/bad-client", response_model=ClientResponse)
async def mark_bad_client(
    client: Client = Depends(pr_client),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """Close an active client as a bad lead."""
    _ensure_active(client)
    client.transfer_status = TransferStatus.BAD_CLIENT
    logger.info("Transfer status changed", client_id=client.client_id, transfer_status="bad_client", by=current_user.user_id)
    return _save(db, client)


@router.post("/{client_id}/pr/approve", response_model=ClientResponse)
async def approve_client(
    approval: AgreementApproval,
    client: Client = Depends(pr_client),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """Approve an active client and record the final agreement."""
    _ensure_active(client)

    now = datetime.now()
    agreement = FinalAgreement(
        approved=True,
        agreement_details=approval.required_execution or "",
        duration=approval.duration,
        start_date=approval.start_date or now,
        approved_by=current_user.user_id,
        approved_at=now,
        agreed_price=approval.agreed_price,
        first_payment=approval.first_payment,
        currency=approval.currency,
        payment_plan=approval.payment_plan,
        payment_method=approval.payment_method,
        required_execution=approval.required_execution,
    )
    client.final_agreement = agreement.model_dump(mode="json")
    client.service_requests = approval.service_requests.model_dump(mode="json")
    client.transfer_status = TransferStatus.APPROVED

    message = f"Agreement approved for {client.name}"
    recipients = [client.registered_by]
    if client.assigned_creative is not None and client.assigned_creative != client.registered_by:
        recipients.append(client.assigned_creative)
    for user_id in recipients:
        notify(db, user_id, NotificationType.AGREEMENT_APPROVED, message, related_client_id=client.client_id)

    logger.info("Transfer status changed", client_id=client.client_id, transfer_status="approved", by=current_user.user_id)
    return _save(db, client)


@router.put("/{client_id}/pr/assigned-creative", response_model=ClientResponse)
async def assign_creative(
    assign_in: AssignUser,
    client: Client = Depends(pr_client),
    db: Session = Depends(get_db)
):
    """Choose the creative responsible for the client."""
    get_assignee_or_400(assign_in.user_id, [UserRole.CREATIVE], db)
    client.assigned_creative = assign_in.user_id
    return _save(db, client)


# Market research

@router.post("/{client_id}/research/files", response_model=ClientResponse, status_code=status.HTTP_201_CREATED)
async def add_research_file(
    file_in: ResearchFileCreate,
    client: Client = Depends(research_client),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """Attach uploaded research file metadata."""
    research_file = MarketResearchFile(
        file_name=file_in.file_name,
        file_url=file_in.file_url,
        category=file_in.category,
        uploaded_at=datetime.now(),
        uploaded_by=current_user.user_id,
    )
    _append(client, "market_research_files", research_file.model_dump(mode="json"))
    return _save(db, client)


@router.post("/{client_id}/research/files/{index}/summary", response_model=ClientResponse)
def summarize_research(
    index: int,
    client: Client = Depends(research_client),
    db: Session = Depends(get_db),
    summarizer: SummarizerAdapter = Depends(get_summarizer)
):
    """Generate the research summary from one uploaded file."""
    files = client.market_research_files or []
    if index < 0 or index >= len(files):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Research file not found"
        )

    research_file = MarketResearchFile.model_validate(files[index])
    try:
        summarize_research_file(summarizer, client, research_file)
    except SummaryUnavailableError as e:
        logger.error("Research summary failed", client_id=client.client_id, file_name=research_file.file_name, error=str(e))
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to generate a summary for this file"
        )
    return _save(db, client)


@router.put("/{client_id}/research", response_model=ClientResponse)
async def update_research(
    research_in: ResearchUpdate,
    client: Client = Depends(research_client),
    db: Session = Depends(get_db)
):
    """Update research status, summary and comments."""
    for field, value in research_in.model_dump(exclude_unset=True).items():
        setattr(client, field, value)
    return _save(db, client)


# Creative

@router.put("/{client_id}/creative", response_model=ClientResponse)
async def update_creative(
    creative_in: CreativeUpdate,
    client: Client = Depends(creative_client),
    db: Session = Depends(get_db)
):
    """Update creative status, notes and the writing responsible."""
    update_data = creative_in.model_dump(exclude_unset=True)
    if update_data.get("writing_responsible") is not None:
        get_assignee_or_400(update_data["writing_responsible"], [UserRole.CREATIVE, UserRole.CONTENT], db)

    for field, value in update_data.items():
        setattr(client, field, value)
    return _save(db, client)


@router.post("/{client_id}/creative/calendar", response_model=ClientResponse, status_code=status.HTTP_201_CREATED)
async def add_calendar_entry(
    entry_in: CalendarEntryCreate,
    client: Client = Depends(creative_client),
    db: Session = Depends(get_db)
):
    """Add an idea to the content calendar."""
    entry = CalendarEntry(id=uuid.uuid4().hex, **entry_in.model_dump())
    _append(client, "content_calendar", entry.model_dump(mode="json"))
    return _save(db, client)


@router.put("/{client_id}/creative/calendar/{entry_id}", response_model=ClientResponse)
async def update_calendar_entry(
    entry_id: str,
    entry_in: CalendarEntryUpdate,
    client: Client = Depends(creative_client),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """Edit a calendar idea or move it through the approval flow."""
    calendar = [dict(e) for e in client.content_calendar or []]
    position = next((i for i, e in enumerate(calendar) if e.get("id") == entry_id), None)
    if position is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Calendar entry not found"
        )

    changes = entry_in.model_dump(mode="json", exclude_unset=True)
    entry = CalendarEntry.model_validate({**calendar[position], **changes})
    calendar[position] = entry.model_dump(mode="json")
    client.content_calendar = calendar

    if "approval_status" in changes:
        logger.info(
            "Calendar entry status changed",
            client_id=client.client_id,
            entry_id=entry_id,
            approval_status=entry.approval_status,
            by=current_user.user_id,
        )
    return _save(db, client)


# Content

@router.put("/{client_id}/content", response_model=ClientResponse)
async def update_content(
    content_in: ContentUpdate,
    client: Client = Depends(content_client),
    db: Session = Depends(get_db)
):
    """Update the content workflow status."""
    client.content_status = content_in.content_status
    return _save(db, client)


@router.post("/{client_id}/content/tasks", response_model=ClientResponse, status_code=status.HTTP_201_CREATED)
async def add_content_task(
    task_in: ContentTaskCreate,
    client: Client = Depends(content_client),
    db: Session = Depends(get_db)
):
    """Add a content production task and notify the assignee."""
    get_assignee_or_400(task_in.assigned_to, [UserRole.CONTENT, UserRole.CREATIVE], db)
    task = ContentTask(title=task_in.title, due_date=task_in.due_date, assigned_to=task_in.assigned_to)
    _append(client, "content_tasks", task.model_dump(mode="json"))
    notify(
        db,
        task_in.assigned_to,
        NotificationType.TASK,
        f"New content task for {client.name}: {task_in.title}",
        related_client_id=client.client_id,
    )
    return _save(db, client)

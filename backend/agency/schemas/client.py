"""Client schemas.

``ClientRecord`` is the typed snapshot consumed by the policy and statistics
services. The embedded models mirror the JSON documents stored on the
``clients`` table.
"""
from datetime import date, datetime
from typing import List, Literal, Optional
from pydantic import BaseModel, EmailStr, Field, field_validator
from agency.db.models.client import (
    PRStatus,
    TransferStatus,
    CreativeStatus,
    TaskStatus,
    AppointmentStatus,
    ResearchFileCategory,
)
from agency.schemas.navigation import WorkflowSection


class BasicInfo(BaseModel):
    """Contact details captured at registration."""
    email: Optional[str] = None
    address: Optional[str] = ""
    notes: Optional[str] = ""


class ServiceRequests(BaseModel):
    """Specialist workflows requested by the client."""
    market_research: bool = False
    content: bool = False
    creative: bool = False
    ai_video: Optional[bool] = None
    ads: Optional[bool] = None


class Appointment(BaseModel):
    """PR call appointment."""
    date: datetime
    time: str
    status: AppointmentStatus = AppointmentStatus.SCHEDULED


CalendarPlatform = Literal[
    "facebook", "instagram", "tiktok", "youtube", "linkedin", "x", "stories", "reels", "shorts"
]
CalendarFormat = Literal["image", "carousel", "reels", "video", "story", "text", "link", "live"]
CalendarGoal = Literal["awareness", "engagement", "traffic", "leads", "sales", "retention"]
ApprovalStatus = Literal["draft", "review", "with_client", "approved", "rejected"]


class CalendarEntryCreate(BaseModel):
    """New content calendar idea."""
    date: datetime
    title: str
    platform: Optional[CalendarPlatform] = None
    format: Optional[CalendarFormat] = None
    post_goal: Optional[CalendarGoal] = None
    content_pillar: Optional[str] = None
    campaign: Optional[str] = None
    target_audience: Optional[str] = None
    caption: Optional[str] = None
    cta: Optional[str] = None
    hashtags: Optional[str] = None
    design_notes: Optional[str] = None
    designer: Optional[int] = None
    writer: Optional[int] = None


class CalendarEntry(CalendarEntryCreate):
    """Stored content calendar entry."""
    id: str
    approval_status: ApprovalStatus = "draft"


class CalendarEntryUpdate(BaseModel):
    """Edit an existing calendar idea; only the submitted fields change."""
    date: Optional[datetime] = None
    title: Optional[str] = Field(None, min_length=1)
    platform: Optional[CalendarPlatform] = None
    format: Optional[CalendarFormat] = None
    post_goal: Optional[CalendarGoal] = None
    content_pillar: Optional[str] = None
    campaign: Optional[str] = None
    target_audience: Optional[str] = None
    caption: Optional[str] = None
    cta: Optional[str] = None
    hashtags: Optional[str] = None
    design_notes: Optional[str] = None
    designer: Optional[int] = None
    writer: Optional[int] = None
    approval_status: Optional[ApprovalStatus] = None

    @field_validator("date", "title", "approval_status")
    @classmethod
    def not_null(cls, v):
        if v is None:
            raise ValueError("may be omitted but not null")
        return v


class MarketResearchFile(BaseModel):
    """Uploaded research file metadata."""
    file_name: str
    file_url: str
    uploaded_at: datetime
    uploaded_by: int
    category: ResearchFileCategory


class ContentTask(BaseModel):
    """Content production task."""
    title: str
    due_date: datetime
    status: TaskStatus = TaskStatus.PENDING
    assigned_to: int


class FinalAgreement(BaseModel):
    """Contract record written when a client is approved."""
    approved: bool
    agreement_details: str = ""
    duration: int  # months
    start_date: datetime
    approved_by: int
    approved_at: datetime
    agreed_price: Optional[float] = None
    first_payment: Optional[float] = None
    currency: Optional[str] = None
    payment_plan: Optional[str] = None
    payment_method: Optional[str] = None
    required_execution: Optional[str] = None


class ClientRecord(BaseModel):
    """Typed client snapshot."""
    client_id: int
    name: str
    phone: str = ""
    business_name: Optional[str] = None
    business_field: Optional[str] = None
    registered_by: Optional[int] = None
    registered_at: Optional[datetime] = None
    basic_info: Optional[BasicInfo] = None
    assigned_to_pr: Optional[int] = None
    pr_status: PRStatus = PRStatus.PENDING
    transfer_status: TransferStatus = TransferStatus.ACTIVE
    service_requests: ServiceRequests = Field(default_factory=ServiceRequests)
    pr_appointments: List[Appointment] = Field(default_factory=list)
    assigned_creative: Optional[int] = None
    research_status: Optional[TaskStatus] = None
    market_research_files: List[MarketResearchFile] = Field(default_factory=list)
    market_research_summary: Optional[str] = None
    researcher_comments: Optional[str] = None
    creative_status: Optional[CreativeStatus] = None
    creative_notes: Optional[str] = None
    content_calendar: List[CalendarEntry] = Field(default_factory=list)
    writing_responsible: Optional[int] = None
    content_status: Optional[TaskStatus] = None
    content_tasks: List[ContentTask] = Field(default_factory=list)
    final_agreement: Optional[FinalAgreement] = None

    class Config:
        from_attributes = True


class ClientResponse(ClientRecord):
    """Schema for client response."""
    created_at: datetime
    updated_at: datetime


class ClientDetailResponse(ClientResponse):
    """Client with the sections the caller may open."""
    visible_sections: List[WorkflowSection] = Field(default_factory=list)
    agreement_visible: bool = False


class ClientListResponse(BaseModel):
    """Filtered client list."""
    items: List[ClientResponse]
    total: int
    tab: Optional[str] = None


class ClientCreate(BaseModel):
    """Schema for registering a client."""
    name: str = Field(..., min_length=2)
    phone: str = Field(..., min_length=10)
    email: EmailStr
    address: Optional[str] = ""
    notes: Optional[str] = ""
    business_name: Optional[str] = None
    business_field: Optional[str] = None
    assigned_to_pr: Optional[int] = None


class ClientUpdate(BaseModel):
    """Schema for editing a client's registration data."""
    name: Optional[str] = Field(None, min_length=2)
    phone: Optional[str] = Field(None, min_length=10)
    business_name: Optional[str] = None
    business_field: Optional[str] = None
    basic_info: Optional[BasicInfo] = None
    assigned_to_pr: Optional[int] = None
    service_requests: Optional[ServiceRequests] = None

    @field_validator("name", "phone", "service_requests")
    @classmethod
    def not_null(cls, v):
        # Omit the field to keep it; the columns are NOT NULL
        if v is None:
            raise ValueError("may be omitted but not null")
        return v


# Workflow action payloads

class PRStatusUpdate(BaseModel):
    """Change the PR status."""
    pr_status: PRStatus


class AppointmentCreate(BaseModel):
    """Schedule a PR call."""
    appointment_date: date
    time: str = Field("10:00", pattern=r"^([0-1]?[0-9]|2[0-3]):[0-5][0-9]$")


class AppointmentStatusUpdate(BaseModel):
    """Change an appointment's status."""
    status: AppointmentStatus


class AgreementApproval(BaseModel):
    """Approve a client and record the final agreement."""
    service_requests: ServiceRequests
    agreed_price: float = Field(..., gt=0)
    duration: int = Field(..., ge=1)
    first_payment: Optional[float] = Field(None, ge=0)
    start_date: Optional[datetime] = None
    required_execution: Optional[str] = None
    currency: Optional[str] = None
    payment_plan: Optional[str] = None
    payment_method: Optional[str] = None


class AssignUser(BaseModel):
    """Assign a user to a client role slot."""
    user_id: int


class ResearchFileCreate(BaseModel):
    """Register an uploaded research file."""
    file_name: str
    file_url: str
    category: ResearchFileCategory


class ResearchUpdate(BaseModel):
    """Market research progress."""
    research_status: Optional[TaskStatus] = None
    market_research_summary: Optional[str] = None
    researcher_comments: Optional[str] = None


class CreativeUpdate(BaseModel):
    """Creative progress."""
    creative_status: Optional[CreativeStatus] = None
    creative_notes: Optional[str] = None
    writing_responsible: Optional[int] = None


class ContentUpdate(BaseModel):
    """Content progress."""
    content_status: TaskStatus


class ContentTaskCreate(BaseModel):
    """New content task."""
    title: str
    due_date: datetime
    assigned_to: int

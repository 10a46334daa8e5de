"""Client model for the agency workflow pipeline."""
from datetime import datetime
from enum import Enum as PyEnum
from sqlalchemy import Column, Integer, String, DateTime, Enum, Text, ForeignKey, JSON, Index
from agency.db.base import Base


class PRStatus(str, PyEnum):
    """PR pipeline status."""
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    UNDER_REVIEW = "under_review"
    COMPLETED = "completed"


class TransferStatus(str, PyEnum):
    """Handoff state of a client out of the PR pipeline."""
    ACTIVE = "active"
    BAD_CLIENT = "bad_client"
    APPROVED = "approved"
    CONVERTED = "converted"  # legacy value, never set by any action


class CreativeStatus(str, PyEnum):
    """Creative workflow status."""
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class TaskStatus(str, PyEnum):
    """Status shared by the research and content workflows."""
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class AppointmentStatus(str, PyEnum):
    """PR appointment status."""
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class ResearchFileCategory(str, PyEnum):
    """Audience of an uploaded market research file."""
    CREATIVE = "creative"
    COPYWRITER = "copywriter"
    MEDIA_BUYER = "media_buyer"
    MANAGER = "manager"
    CLIENT = "client"


def default_service_requests() -> dict:
    return {"market_research": False, "content": False, "creative": False}


class Client(Base):
    """Client model - central workflow record.

    Embedded documents (basic info, service requests, appointments, calendar,
    research files, content tasks, final agreement) are stored as JSON and
    validated through the pydantic schemas in ``agency.schemas.client``.
    Lists are replaced on write, never mutated in place.
    """

    __tablename__ = "clients"

    client_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False, index=True)
    phone = Column(String(50), nullable=False)
    business_name = Column(String(255), nullable=True)
    business_field = Column(String(255), nullable=True)

    # Registration (local wall-clock time)
    registered_by = Column(Integer, ForeignKey("users.user_id", ondelete="SET NULL"), nullable=True)
    registered_at = Column(DateTime, default=datetime.now, nullable=False)
    basic_info = Column(JSON, nullable=True)

    # PR
    assigned_to_pr = Column(Integer, ForeignKey("users.user_id", ondelete="SET NULL"), nullable=True)
    pr_status = Column(Enum(PRStatus), default=PRStatus.PENDING, nullable=False)
    transfer_status = Column(Enum(TransferStatus), default=TransferStatus.ACTIVE, nullable=False)
    pr_appointments = Column(JSON, default=list, nullable=False)
    service_requests = Column(JSON, default=default_service_requests, nullable=False)
    assigned_creative = Column(Integer, ForeignKey("users.user_id", ondelete="SET NULL"), nullable=True)

    # Market research
    research_status = Column(Enum(TaskStatus), nullable=True)
    market_research_files = Column(JSON, default=list, nullable=False)
    market_research_summary = Column(Text, nullable=True)
    researcher_comments = Column(Text, nullable=True)

    # Creative
    creative_status = Column(Enum(CreativeStatus), nullable=True)
    creative_notes = Column(Text, nullable=True)
    content_calendar = Column(JSON, default=list, nullable=False)
    writing_responsible = Column(Integer, ForeignKey("users.user_id", ondelete="SET NULL"), nullable=True)

    # Content
    content_status = Column(Enum(TaskStatus), nullable=True)
    content_tasks = Column(JSON, default=list, nullable=False)

    # Final agreement
    final_agreement = Column(JSON, nullable=True)

    __table_args__ = (
        Index('idx_clients_registered_by', 'registered_by'),
        Index('idx_clients_assigned_to_pr', 'assigned_to_pr'),
        Index('idx_clients_transfer_status', 'transfer_status'),
    )

    def __repr__(self) -> str:
        return f"<Client(client_id={self.client_id}, name='{self.name}', transfer_status='{self.transfer_status}')>"

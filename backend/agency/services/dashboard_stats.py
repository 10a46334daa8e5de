"""Dashboard statistic cards per role."""
from datetime import datetime
from typing import Any, Iterable, List, Optional

from agency.db.models.client import PRStatus, TaskStatus, TransferStatus
from agency.db.models.user import UserRole
from agency.schemas.navigation import StatCard
from agency.services.access_policy import (
    RoleLike,
    as_snapshot,
    coerce_role,
    field,
    is_today,
    service_requested,
    to_local_datetime,
)

# Not derived from data; shown as a labelled placeholder.
AVERAGE_COMPLETION_PLACEHOLDER = "3 days"

# role -> (service request flag, status field)
_SPECIALIST_WORK = {
    UserRole.MARKET_RESEARCHER: ("market_research", "research_status"),
    UserRole.CREATIVE: ("creative", "creative_status"),
    UserRole.CONTENT: ("content", "content_status"),
}

_OPEN_STATUSES = (TaskStatus.PENDING, TaskStatus.IN_PROGRESS)


def _moderator_stats(user_id: Any, clients: list, now: Optional[datetime]) -> List[StatCard]:
    own = [c for c in clients if field(c, "registered_by") == user_id]
    return [
        StatCard(
            key="registered_today",
            label="Today's clients",
            value=sum(1 for c in own if is_today(field(c, "registered_at"), now)),
        ),
        StatCard(
            key="active",
            label="Active clients",
            value=sum(1 for c in own if field(c, "transfer_status") == TransferStatus.ACTIVE),
        ),
        StatCard(
            key="pending_review",
            label="Pending review",
            value=sum(
                1 for c in own
                if field(c, "pr_status") in (PRStatus.PENDING, PRStatus.UNDER_REVIEW)
            ),
        ),
        StatCard(key="total", label="Total clients", value=len(own)),
    ]


def _pr_stats(user_id: Any, clients: list, now: Optional[datetime]) -> List[StatCard]:
    own = [c for c in clients if field(c, "assigned_to_pr") == user_id]
    todays_appointments = sum(
        1
        for c in own
        for appointment in field(c, "pr_appointments") or []
        if is_today(field(appointment, "date"), now)
    )
    return [
        StatCard(key="appointments_today", label="Today's tasks", value=todays_appointments),
        StatCard(
            key="in_progress",
            label="Clients in progress",
            value=sum(1 for c in own if field(c, "pr_status") == PRStatus.IN_PROGRESS),
        ),
        StatCard(
            key="approved",
            label="Approved clients",
            value=sum(1 for c in own if field(c, "transfer_status") == TransferStatus.APPROVED),
        ),
        StatCard(key="total", label="Total clients", value=len(own)),
    ]


def _specialist_stats(role: Optional[UserRole], clients: list) -> List[StatCard]:
    work = _SPECIALIST_WORK.get(role)
    if work is None:
        assigned, status_field = [], None
    else:
        service, status_field = work
        assigned = [c for c in clients if service_requested(c, service)]

    return [
        StatCard(
            key="open_tasks",
            label="Pending tasks",
            value=sum(1 for c in assigned if field(c, status_field) in _OPEN_STATUSES),
        ),
        StatCard(
            key="completed_tasks",
            label="Completed tasks",
            value=sum(1 for c in assigned if field(c, status_field) == TaskStatus.COMPLETED),
        ),
        StatCard(key="total_tasks", label="Total tasks", value=len(assigned)),
        StatCard(
            key="average_completion_time",
            label="Average completion time",
            value=AVERAGE_COMPLETION_PLACEHOLDER,
            is_placeholder=True,
        ),
    ]


def stats_for_role(
    role: RoleLike,
    user_id: Any,
    clients: Optional[Iterable[Any]],
    now: Optional[datetime] = None,
) -> List[StatCard]:
    """Four dashboard cards for ``role``, computed over a client snapshot.

    "Today" is the local calendar day of ``now`` (default: wall clock).
    """
    snapshot = as_snapshot(clients)
    resolved = coerce_role(role)

    if resolved == UserRole.MODERATOR:
        return _moderator_stats(user_id, snapshot, now)
    if resolved == UserRole.PR:
        return _pr_stats(user_id, snapshot, now)
    return _specialist_stats(resolved, snapshot)


def recent_clients_for(
    role: RoleLike,
    user_id: Any,
    clients: Optional[Iterable[Any]],
    limit: int = 5,
) -> list:
    """Newest registrations of a moderator; empty for every other role."""
    if coerce_role(role) != UserRole.MODERATOR:
        return []
    own = [c for c in as_snapshot(clients) if field(c, "registered_by") == user_id]
    own.sort(key=lambda c: to_local_datetime(field(c, "registered_at")) or datetime.min, reverse=True)
    return own[:limit]

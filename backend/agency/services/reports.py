"""Report aggregates over a client snapshot."""
from collections import Counter
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from agency.db.models.client import TransferStatus
from agency.db.models.user import UserRole
from agency.services.access_policy import as_snapshot, field, service_requested, to_local_datetime

REPORTED_SERVICES = ["market_research", "creative", "content", "ai_video", "ads"]


def transfer_status_breakdown(clients: Iterable[Any]) -> List[Dict[str, Any]]:
    snapshot = as_snapshot(clients)
    return [
        {"name": status.value, "value": sum(1 for c in snapshot if field(c, "transfer_status") == status)}
        for status in TransferStatus
    ]


def service_request_breakdown(clients: Iterable[Any]) -> List[Dict[str, Any]]:
    snapshot = as_snapshot(clients)
    return [
        {"name": service, "value": sum(1 for c in snapshot if service_requested(c, service))}
        for service in REPORTED_SERVICES
    ]


def client_acquisition_by_month(
    clients: Iterable[Any],
    months: int = 6,
    now: Optional[datetime] = None,
) -> List[Dict[str, Any]]:
    """Registrations per calendar month, oldest first, ending with the current month."""
    current = to_local_datetime(now) if now is not None else datetime.now()
    year, month = current.year, current.month
    keys = []
    for _ in range(months):
        keys.append(f"{year:04d}-{month:02d}")
        month -= 1
        if month == 0:
            year, month = year - 1, 12
    keys.reverse()

    counts = Counter()
    for c in as_snapshot(clients):
        registered = to_local_datetime(field(c, "registered_at"))
        if registered is not None:
            counts[registered.strftime("%Y-%m")] += 1
    return [{"month": key, "count": counts.get(key, 0)} for key in keys]


def pr_team_performance(clients: Iterable[Any], users: Iterable[Any]) -> List[Dict[str, Any]]:
    """Assigned and approved client counts for every PR user."""
    snapshot = as_snapshot(clients)
    rows = []
    for user in as_snapshot(users):
        if field(user, "role") != UserRole.PR:
            continue
        user_id = field(user, "user_id")
        assigned = [c for c in snapshot if field(c, "assigned_to_pr") == user_id]
        rows.append({
            "user_id": user_id,
            "name": field(user, "full_name") or field(user, "email"),
            "tasks": len(assigned),
            "approved": sum(1 for c in assigned if field(c, "transfer_status") == TransferStatus.APPROVED),
        })
    rows.sort(key=lambda r: r["tasks"], reverse=True)
    return rows


def build_summary(
    clients: Iterable[Any],
    users: Iterable[Any],
    months: int = 6,
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    snapshot = as_snapshot(clients)
    return {
        "total_clients": len(snapshot),
        "clients_by_status": transfer_status_breakdown(snapshot),
        "service_requests": service_request_breakdown(snapshot),
        "client_acquisition": client_acquisition_by_month(snapshot, months=months, now=now),
        "team_performance": pr_team_performance(snapshot, users),
    }

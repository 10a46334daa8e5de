"""Role-based access policy.

Pure functions that decide what a role may see:

- navigation links and client-list tabs per role
- which clients appear under a role, tab and search term
- which workflow sections of a client detail view render for a role

Nothing here touches the database. Callers pass a snapshot of clients
(``ClientRecord`` models, or plain dicts with the same keys) together with
the current role and user id, and get a new derived value back. Unknown
roles degrade to a safe default instead of raising.
"""
from datetime import date, datetime, timedelta
from typing import Any, Iterable, List, Optional, Set, Tuple, Union

from agency.db.models.client import AppointmentStatus, CreativeStatus, PRStatus, TransferStatus
from agency.db.models.user import UserRole
from agency.schemas.navigation import NavLink, TabOption, WorkflowSection

RoleLike = Union[UserRole, str, None]

# Tab values
TAB_MY_CLIENTS = "my-clients"
TAB_ALL = "all"
TAB_ACTIVE = "active"
TAB_APPROVED = "approved"
TAB_BAD_CLIENTS = "bad-clients"
TAB_TODAY_CALLS = "today-calls"
TAB_NOT_STARTED = "not-started"
TAB_MY_TASKS = "my-tasks"

_ROLE_TABS = {
    UserRole.MODERATOR: [
        (TAB_MY_CLIENTS, "My clients"),
        (TAB_ALL, "All clients"),
    ],
    UserRole.PR: [
        (TAB_MY_CLIENTS, "My clients"),
        (TAB_APPROVED, "Approved"),
        (TAB_BAD_CLIENTS, "Bad clients"),
        (TAB_TODAY_CALLS, "Today's calls"),
        (TAB_NOT_STARTED, "Not started"),
    ],
}
_DEFAULT_TABS = [(TAB_MY_TASKS, "My tasks")]

_DASHBOARD_LINK = ("/dashboard", "Dashboard", "layout-dashboard")

# Admin has no entry: user management is reached outside the role sidebar.
_ROLE_LINKS = {
    UserRole.MODERATOR: [
        _DASHBOARD_LINK,
        (f"/clients?tab={TAB_MY_CLIENTS}", "Clients", "users"),
        ("/notifications", "Notifications", "bell"),
        ("/reports", "Reports", "bar-chart"),
    ],
    UserRole.PR: [
        _DASHBOARD_LINK,
        (f"/clients?tab={TAB_MY_CLIENTS}", "My clients", "users"),
        (f"/clients?tab={TAB_APPROVED}", "Approved clients", "badge-check"),
        (f"/clients?tab={TAB_BAD_CLIENTS}", "Bad clients", "user-x"),
        (f"/clients?tab={TAB_TODAY_CALLS}", "Today's calls", "phone"),
        (f"/clients?tab={TAB_NOT_STARTED}", "Not started yet", "file-clock"),
    ],
    UserRole.MARKET_RESEARCHER: [
        _DASHBOARD_LINK,
        (f"/clients?tab={TAB_MY_TASKS}", "Research tasks", "briefcase"),
    ],
    UserRole.CREATIVE: [
        _DASHBOARD_LINK,
        (f"/clients?tab={TAB_MY_TASKS}", "Creative tasks", "lightbulb"),
    ],
    UserRole.CONTENT: [
        _DASHBOARD_LINK,
        (f"/clients?tab={TAB_MY_TASKS}", "Content tasks", "file-text"),
    ],
}


def coerce_role(role: RoleLike) -> Optional[UserRole]:
    """Map a role value onto ``UserRole``; unknown values give ``None``."""
    if isinstance(role, UserRole):
        return role
    try:
        return UserRole(role)
    except (ValueError, TypeError):
        return None


def get_tabs_for_role(role: RoleLike) -> List[TabOption]:
    entries = _ROLE_TABS.get(coerce_role(role), _DEFAULT_TABS)
    return [TabOption(value=value, label=label) for value, label in entries]


def default_tab_for_role(role: RoleLike) -> str:
    """First tab of the role, used when no tab is requested."""
    return get_tabs_for_role(role)[0].value


def get_links_for_role(role: RoleLike) -> List[NavLink]:
    entries = _ROLE_LINKS.get(coerce_role(role), [])
    return [NavLink(path=path, label=label, icon=icon) for path, label, icon in entries]


# Snapshot helpers

def as_snapshot(clients: Any) -> list:
    """Return ``clients`` as a list, or an empty list when it is missing or not iterable."""
    if clients is None or isinstance(clients, (str, bytes, dict)):
        return []
    try:
        return list(clients)
    except TypeError:
        return []


def field(obj: Any, name: str, default: Any = None) -> Any:
    """Read ``name`` from a model or a dict."""
    if obj is None:
        return default
    if isinstance(obj, dict):
        return obj.get(name, default)
    return getattr(obj, name, default)


def to_local_datetime(value: Any) -> Optional[datetime]:
    """Normalise a stored timestamp to a naive local datetime."""
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone().replace(tzinfo=None)
        return value
    if isinstance(value, date):
        return datetime.combine(value, datetime.min.time())
    if isinstance(value, str):
        try:
            return to_local_datetime(datetime.fromisoformat(value))
        except ValueError:
            return None
    return None


def today_bounds(now: Optional[datetime] = None) -> Tuple[datetime, datetime]:
    """Local midnight of ``now`` and the following midnight."""
    current = to_local_datetime(now) if now is not None else datetime.now()
    start = current.replace(hour=0, minute=0, second=0, microsecond=0)
    return start, start + timedelta(days=1)


def is_today(value: Any, now: Optional[datetime] = None) -> bool:
    when = to_local_datetime(value)
    if when is None:
        return False
    start, end = today_bounds(now)
    return start <= when < end


def service_requested(client: Any, service: str) -> bool:
    return bool(field(field(client, "service_requests"), service, False))


def has_call_today(client: Any, now: Optional[datetime] = None) -> bool:
    """True when the client has a scheduled appointment on the current day."""
    for appointment in field(client, "pr_appointments") or []:
        if field(appointment, "status") == AppointmentStatus.SCHEDULED and is_today(field(appointment, "date"), now):
            return True
    return False


def matches_search(client: Any, search_term: str) -> bool:
    """Case-insensitive match on name and email, plain substring on phone."""
    term = search_term.lower()
    name = (field(client, "name") or "").lower()
    phone = field(client, "phone") or ""
    email = field(field(client, "basic_info"), "email") or ""
    return term in name or term in phone or term in email.lower()


def _in_tab(client: Any, role: UserRole, user_id: Any, tab: Optional[str], now: Optional[datetime]) -> bool:
    transfer_status = field(client, "transfer_status")

    if role == UserRole.ADMIN:
        if tab == TAB_ACTIVE:
            return transfer_status == TransferStatus.ACTIVE
        if tab == TAB_APPROVED:
            return transfer_status == TransferStatus.APPROVED
        return True

    if role == UserRole.MODERATOR:
        if tab == TAB_MY_CLIENTS:
            return field(client, "registered_by") == user_id
        return True

    if role == UserRole.PR:
        if field(client, "assigned_to_pr") != user_id:
            return False
        if tab == TAB_APPROVED:
            return transfer_status == TransferStatus.APPROVED
        if tab == TAB_BAD_CLIENTS:
            return transfer_status == TransferStatus.BAD_CLIENT
        if tab == TAB_TODAY_CALLS:
            return has_call_today(client, now)
        if tab == TAB_NOT_STARTED:
            return field(client, "pr_status") == PRStatus.PENDING
        return True

    approved = transfer_status == TransferStatus.APPROVED
    if role == UserRole.MARKET_RESEARCHER:
        return approved and service_requested(client, "market_research")
    if role == UserRole.CREATIVE:
        return approved and service_requested(client, "creative")
    if role == UserRole.CONTENT:
        return (
            approved
            and service_requested(client, "content")
            and field(client, "creative_status") == CreativeStatus.COMPLETED
        )
    return True


def filter_clients(
    clients: Optional[Iterable[Any]],
    role: RoleLike,
    user_id: Any,
    active_tab: Optional[str] = None,
    search_term: Optional[str] = None,
    now: Optional[datetime] = None,
) -> list:
    """Clients visible to ``role`` under ``active_tab``, refined by ``search_term``.

    The relative order of the input is preserved. An unknown role returns the
    snapshot unfiltered by role; a missing snapshot returns an empty list.
    """
    snapshot = as_snapshot(clients)
    resolved = coerce_role(role)

    if resolved is None:
        filtered = snapshot
    else:
        filtered = [c for c in snapshot if _in_tab(c, resolved, user_id, active_tab, now)]

    if search_term:
        filtered = [c for c in filtered if matches_search(c, search_term)]

    return filtered


def visible_sections(client: Any, role: RoleLike) -> Set[WorkflowSection]:
    """Workflow sections of ``client`` that render for ``role``."""
    resolved = coerce_role(role)
    sections = set()

    if resolved in (UserRole.PR, UserRole.MODERATOR):
        sections.add(WorkflowSection.PR)

    if service_requested(client, "market_research") and resolved in (
        UserRole.MARKET_RESEARCHER, UserRole.MODERATOR, UserRole.CREATIVE, UserRole.CONTENT
    ):
        sections.add(WorkflowSection.MARKET_RESEARCH)

    if service_requested(client, "creative") and resolved in (
        UserRole.CREATIVE, UserRole.MODERATOR, UserRole.CONTENT
    ):
        sections.add(WorkflowSection.CREATIVE)

    if (
        service_requested(client, "content")
        and field(client, "creative_status") == CreativeStatus.COMPLETED
        and resolved in (UserRole.CONTENT, UserRole.MODERATOR)
    ):
        sections.add(WorkflowSection.CONTENT)

    return sections


def agreement_visible(client: Any) -> bool:
    """The final agreement view exists once the client is approved."""
    return field(client, "transfer_status") == TransferStatus.APPROVED


# Specialist teams only pick a client up once PR has approved it.
APPROVAL_GATED_ROLES = (UserRole.MARKET_RESEARCHER, UserRole.CREATIVE, UserRole.CONTENT)


def workable_sections(client: Any, role: RoleLike) -> Set[WorkflowSection]:
    """Sections ``role`` may open and act on.

    Same as :func:`visible_sections`, except that specialist roles get nothing
    until the client's transfer status is ``approved``. Moderators and PR are
    not gated.
    """
    if coerce_role(role) in APPROVAL_GATED_ROLES and not agreement_visible(client):
        return set()
    return visible_sections(client, role)

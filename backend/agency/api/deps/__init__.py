"""API dependencies package."""
from agency.api.deps.auth import get_current_user, get_current_active_user, require_role, MANAGEMENT_ROLES
from agency.api.deps.clients import get_client_or_404, get_assignee_or_400, load_client_snapshot, require_section
from agency.api.deps.database import get_db
from agency.api.deps.summarizer import get_summarizer

__all__ = [
    "get_current_user", "get_current_active_user", "require_role", "MANAGEMENT_ROLES",
    "get_client_or_404", "get_assignee_or_400", "load_client_snapshot", "require_section",
    "get_db", "get_summarizer",
]

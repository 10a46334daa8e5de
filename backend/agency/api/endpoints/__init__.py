"""API endpoints package."""
from agency.api.endpoints import auth, users, clients, workflow, notifications, dashboard, reports

__all__ = ["auth", "users", "clients", "workflow", "notifications", "dashboard", "reports"]

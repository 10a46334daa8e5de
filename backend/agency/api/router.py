"""API router configuration."""
from fastapi import APIRouter
from agency.api.endpoints import (
    auth, users, clients, workflow, notifications, dashboard, reports
)

api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(clients.router)
api_router.include_router(workflow.router)
api_router.include_router(notifications.router)
api_router.include_router(dashboard.router)
api_router.include_router(reports.router)

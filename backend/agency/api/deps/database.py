"""Database session dependency."""
from agency.db.base import get_db

__all__ = ["get_db"]

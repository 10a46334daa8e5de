"""Engine, session factory and declarative base for the agency database.

Users, clients and notifications share one relational database. A client's
workflow documents (appointments, calendar, research files, tasks, final
agreement) are JSON columns on its row. SQLite is the local default; set
``DATABASE_URL`` or ``DB_TYPE=mysql`` for a server.
"""
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Iterator
from sqlalchemy import create_engine, Column, DateTime
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
import structlog

from agency.core.config import settings

logger = structlog.get_logger()


def utc_now() -> datetime:
    """Naive UTC timestamp for the bookkeeping columns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Base(DeclarativeBase):
    """Declarative base; every agency table records row creation and last change."""

    created_at = Column(DateTime, default=utc_now, nullable=False)
    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now, nullable=False)


def engine_options(url: str) -> dict:
    """Connection options for the configured backend."""
    if url.startswith("sqlite"):
        # requests are served from a thread pool
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True, "pool_recycle": 300}


engine = create_engine(settings.database_url, echo=False, **engine_options(settings.database_url))
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Iterator[Session]:
    """Request-scoped session. Work left uncommitted by a failed request is rolled back."""
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


@contextmanager
def session_scope() -> Iterator[Session]:
    """Session for scripts such as the seed: commit on success, roll back on error."""
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        logger.exception("Database script failed")
        raise
    finally:
        db.close()

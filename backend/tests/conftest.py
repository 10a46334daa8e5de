"""Pytest configuration and fixtures."""
import os
from datetime import datetime
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Set before importing the app: no file database, no outbound AI calls
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["AI_PROVIDER"] = "mock"

from agency.main import app
from agency.db.base import Base, get_db
from agency.core.security import get_password_hash, create_access_token
from agency.db.models.user import User, UserRole
from agency.db.models.client import Client, PRStatus, TransferStatus

# Use SQLite for testing
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

TEST_PASSWORD = "testpassword"
# PBKDF2 is slow, hash once per session
TEST_PASSWORD_HASH = get_password_hash(TEST_PASSWORD)


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database session for each test."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session):
    """Create a test client with database override."""
    app.dependency_overrides[get_db] = lambda: db_session
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def _create_user(db_session, email, full_name, role, is_active=True):
    user = User(
        email=email,
        password_hash=TEST_PASSWORD_HASH,
        full_name=full_name,
        role=role,
        is_active=is_active
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


def _headers(user):
    token = create_access_token(data={"sub": user.email})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_user(db_session):
    """Create an admin user for testing."""
    return _create_user(db_session, "admin@test.com", "Admin User", UserRole.ADMIN)


@pytest.fixture
def moderator_user(db_session):
    """Create a moderator user for testing."""
    return _create_user(db_session, "moderator@test.com", "Moderator User", UserRole.MODERATOR)


@pytest.fixture
def pr_user(db_session):
    """Create a PR user for testing."""
    return _create_user(db_session, "pr@test.com", "PR User", UserRole.PR)


@pytest.fixture
def other_pr_user(db_session):
    """Create a second PR user for testing."""
    return _create_user(db_session, "pr2@test.com", "Second PR", UserRole.PR)


@pytest.fixture
def researcher_user(db_session):
    """Create a market researcher for testing."""
    return _create_user(db_session, "research@test.com", "Research User", UserRole.MARKET_RESEARCHER)


@pytest.fixture
def creative_user(db_session):
    """Create a creative user for testing."""
    return _create_user(db_session, "creative@test.com", "Creative User", UserRole.CREATIVE)


@pytest.fixture
def content_user(db_session):
    """Create a content user for testing."""
    return _create_user(db_session, "content@test.com", "Content User", UserRole.CONTENT)


@pytest.fixture
def admin_token(admin_user):
    """Create an admin JWT token."""
    return create_access_token(data={"sub": admin_user.email})


@pytest.fixture
def auth_headers(admin_token):
    """Create authorization headers with admin token."""
    return {"Authorization": f"Bearer {admin_token}"}


@pytest.fixture
def moderator_headers(moderator_user):
    return _headers(moderator_user)


@pytest.fixture
def pr_headers(pr_user):
    return _headers(pr_user)


@pytest.fixture
def other_pr_headers(other_pr_user):
    return _headers(other_pr_user)


@pytest.fixture
def researcher_headers(researcher_user):
    return _headers(researcher_user)


@pytest.fixture
def creative_headers(creative_user):
    return _headers(creative_user)


@pytest.fixture
def content_headers(content_user):
    return _headers(content_user)


@pytest.fixture
def make_client(db_session):
    """Factory inserting a client row directly."""
    def _make(name="Test Client", phone="01000000000", email="client@example.com", **fields):
        values = {
            "registered_at": datetime.now(),
            "pr_status": PRStatus.PENDING,
            "transfer_status": TransferStatus.ACTIVE,
            "service_requests": {"market_research": False, "content": False, "creative": False},
            "pr_appointments": [],
        }
        values.update(fields)
        record = Client(
            name=name,
            phone=phone,
            basic_info={"email": email, "address": "", "notes": ""},
            **values
        )
        db_session.add(record)
        db_session.commit()
        db_session.refresh(record)
        return record
    return _make

"""Unit tests for the development seed and scripted sessions."""
import pytest
from agency.db.base import Base, engine, session_scope, utc_now
from agency.db.models import Client, User, UserRole
from agency.db.seed import SEED_USERS, run_seed


@pytest.fixture
def app_database():
    """The application's own engine, emptied after the test."""
    yield
    Base.metadata.drop_all(bind=engine)


class TestSeed:

    def test_seed_is_idempotent(self, app_database):
        run_seed()
        run_seed()

        with session_scope() as db:
            assert db.query(User).count() == len(SEED_USERS)
            assert {u.role for u in db.query(User).all()} == set(UserRole)
            clients = db.query(Client).order_by(Client.client_id).all()
            assert [c.name for c in clients] == ["Nile Bakery", "Delta Motors", "Cairo Dental Clinic"]
            moderator = db.query(User).filter(User.role == UserRole.MODERATOR).first()
            assert all(c.registered_by == moderator.user_id for c in clients)

    def test_session_scope_rolls_back_on_error(self, app_database):
        Base.metadata.create_all(bind=engine)
        with pytest.raises(RuntimeError):
            with session_scope() as db:
                db.add(User(email="temp@agency.com", password_hash="x", full_name="Temp", role=UserRole.PR))
                db.flush()
                raise RuntimeError("abort")

        with session_scope() as db:
            assert db.query(User).count() == 0


def test_utc_now_is_naive_utc():
    stamp = utc_now()
    assert stamp.tzinfo is None

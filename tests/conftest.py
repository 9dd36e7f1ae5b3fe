from pathlib import Path

from dotenv import load_dotenv

env_file = Path(__file__).parent.parent / ".env.test"
load_dotenv(env_file)

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import create_engine, event  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.core import redis as redis_module  # noqa: E402
from app.core.security import create_access_token  # noqa: E402
from app.db.base import Base  # noqa: E402
from app.db.session import get_db  # noqa: E402
from app.main import app  # noqa: E402
from tests.utils.factories import create_user_factory  # noqa: E402


@pytest.fixture
def memory_engine():
    """In-memory SQLite engine shared by the test and the app under test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def db_session(memory_engine):
    session_factory = sessionmaker(bind=memory_engine, autocommit=False, autoflush=False)
    session = session_factory()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
async def test_app(db_session):
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    redis_module.redis_client = None

    yield app

    app.dependency_overrides.clear()


@pytest.fixture
async def test_client(test_app):
    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        yield client


@pytest.fixture
def test_student(db_session):
    return create_user_factory(
        db_session, email="ada@example.com", name="Ada Lovelace", role="student"
    )


@pytest.fixture
def test_instructor(db_session):
    return create_user_factory(
        db_session, email="grace@example.com", name="Grace Hopper", role="instructor"
    )


@pytest.fixture
def other_instructor(db_session):
    return create_user_factory(db_session, email="other@example.com", role="instructor")


@pytest.fixture
def test_admin(db_session):
    return create_user_factory(db_session, email="admin@example.com", role="admin")


def _token_for(user) -> str:
    return create_access_token({"sub": str(user.id), "email": user.email, "role": user.role})


@pytest.fixture
def test_student_token(test_student):
    return _token_for(test_student)


@pytest.fixture
def test_instructor_token(test_instructor):
    return _token_for(test_instructor)


@pytest.fixture
def other_instructor_token(other_instructor):
    return _token_for(other_instructor)


@pytest.fixture
def test_admin_token(test_admin):
    return _token_for(test_admin)

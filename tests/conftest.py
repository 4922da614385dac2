from datetime import date

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool
from starlette.testclient import TestClient

from allowance.api.deps import get_db
from allowance.db.base import Base
from allowance.main import app
from allowance.models.activity_list import ActivityList, ListStatus
from allowance.models.member import Member
from allowance.services import activity_service, list_service, member_service, user_service


def years_ago(years: int) -> date:
    today = date.today()
    return date(today.year - years, 1, 1)


@pytest.fixture
def engine():
    """In-memory SQLite shared by the test and the app through a single connection."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


@pytest.fixture
def db(session_factory) -> Session:
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory) -> TestClient:
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(client: TestClient, db: Session) -> dict:
    user_service.create_user(db, email="parent@example.com", password="secret123")
    response = client.post(
        "/v1/auth/token",
        data={"username": "parent@example.com", "password": "secret123"},
    )
    token = response.json()["data"]["access_token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def member(db: Session) -> Member:
    return member_service.create_member(db, name="Alice", birth_date=years_ago(10), allowance_value=50.0)


@pytest.fixture
def open_list(db: Session, member: Member) -> ActivityList:
    return list_service.create_list(db, family_member_name=member.name, status=ListStatus.OPEN)


@pytest.fixture
def closed_list(db: Session, member: Member) -> ActivityList:
    return list_service.create_list(db, family_member_name=member.name, status=ListStatus.CLOSED)


@pytest.fixture
def dishes(db: Session):
    return activity_service.create_activity(db, description="Dishes")

"""
Shared test fixtures

Every test gets a fresh in-memory SQLite database loaded with the
reference catalog (ticket types, pricing rules, fleet, network,
passengers).
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from seed_data import load_reference_data
from src import models  # noqa: F401
from src.auth import CallerRole, create_access_token
from src.database import Base, get_db
from src.main import app


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    """Session over a database holding the reference catalog"""
    session = session_factory()
    load_reference_data(session)
    session.commit()
    yield session
    session.close()


@pytest.fixture
def client(db, session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def auth_headers(role: CallerRole, subject: str = "staff") -> dict:
    token = create_access_token(subject, role)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers():
    return auth_headers(CallerRole.ADMIN, "admin")


@pytest.fixture
def operator_headers():
    return auth_headers(CallerRole.OPERATOR, "driver-7")


@pytest.fixture
def analyst_headers():
    return auth_headers(CallerRole.ANALYST, "analyst")


@pytest.fixture
def customer_headers():
    """Customer token for passenger 1"""
    return auth_headers(CallerRole.CUSTOMER, "1")

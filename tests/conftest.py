"""
Pytest configuration and fixtures for testing.

This file provides reusable test fixtures for:
- Database setup/teardown
- FastAPI test client
- Seed data (companies c1-c3, jobs j1-j3, users u1 and a1)
- Bearer tokens for a regular user and an admin
"""

import os

# Settings are read at import time; point them at throwaway values first
os.environ.setdefault("DATABASE_URL_OVERRIDE", "sqlite:///:memory:")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("JSON_LOGS", "false")

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from jobly.core.database import Base, get_db, init_db
from jobly.core.security import create_access_token, get_password_hash
from jobly.models.company import Company
from jobly.models.job import Job
from jobly.models.user import User
from main import app


# Use in-memory SQLite for testing (fast, isolated)
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session():
    """
    Create a fresh database for each test.
    All tables are dropped after the test completes.
    """
    init_db(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    """
    FastAPI test client with overridden database dependency.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def seed(db_session):
    """
    Companies c1-c3, one job each, a regular user u1 and an admin a1.

    Returns the seeded job ids keyed by title.
    """
    db_session.add_all([
        Company(handle="c1", name="C1", num_employees=1, description="Desc1", logo_url="http://c1.img"),
        Company(handle="c2", name="C2", num_employees=2, description="Desc2", logo_url="http://c2.img"),
        Company(handle="c3", name="C3", num_employees=3, description="Desc3", logo_url="http://c3.img"),
    ])
    db_session.flush()

    jobs = [
        Job(title="j1", salary=1, equity=Decimal("0.1"), company_handle="c1"),
        Job(title="j2", salary=2, equity=Decimal("0"), company_handle="c2"),
        Job(title="j3", salary=3, equity=Decimal("0.3"), company_handle="c3"),
    ]
    db_session.add_all(jobs)

    db_session.add_all([
        User(
            username="u1",
            password=get_password_hash("password1"),
            first_name="U1F",
            last_name="U1L",
            email="user1@user.com",
            is_admin=False,
        ),
        User(
            username="a1",
            password=get_password_hash("password2"),
            first_name="A1F",
            last_name="A1L",
            email="admin1@user.com",
            is_admin=True,
        ),
    ])
    db_session.commit()

    return {job.title: job.id for job in jobs}


@pytest.fixture
def u1_token():
    return create_access_token("u1", is_admin=False)


@pytest.fixture
def a1_token():
    return create_access_token("a1", is_admin=True)


@pytest.fixture
def u1_headers(u1_token):
    return {"Authorization": f"Bearer {u1_token}"}


@pytest.fixture
def a1_headers(a1_token):
    return {"Authorization": f"Bearer {a1_token}"}

"""
Pytest configuration and fixtures for the onboarding backend tests.

Provides test database isolation and common test utilities.
"""
import sys
import os
import pathlib

# Tests build their own schema; keep the lifespan away from real databases
os.environ.setdefault("RUN_MIGRATIONS_ON_STARTUP", "false")
os.environ.setdefault("ENV", "dev")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Use in-memory SQLite for tests to ensure complete isolation
TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")

test_engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False} if "sqlite" in TEST_DATABASE_URL else {},
    poolclass=StaticPool if "sqlite" in TEST_DATABASE_URL else None,
    echo=False  # Set to True for SQL debugging
)

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

PHONE = "+5511999990000"


@pytest.fixture(scope="session", autouse=True)
def setup_test_db():
    """Create and tear down the test schema once per test session."""
    from app.db import Base
    from app import models  # noqa: F401 - register models

    Base.metadata.drop_all(bind=test_engine)
    Base.metadata.create_all(bind=test_engine)
    yield
    Base.metadata.drop_all(bind=test_engine)


@pytest.fixture(scope="function")
def db():
    """
    Provide a clean database session for each test.

    Everything runs inside an outer transaction that is rolled back after
    the test, so commits made by the store never leak between tests.
    """
    connection = test_engine.connect()
    transaction = connection.begin()
    session = TestingSessionLocal(bind=connection)

    try:
        yield session
    finally:
        session.close()
        transaction.rollback()
        connection.close()


def override_get_db(db_session):
    """Dependency override for get_db that yields the test session."""
    def _override():
        yield db_session
    return _override


@pytest.fixture(scope="function")
def client(setup_test_db, db):
    """FastAPI TestClient with get_db overridden to the test session."""
    from fastapi.testclient import TestClient
    from app.main import app
    from app.db import get_db

    app.dependency_overrides[get_db] = override_get_db(db)
    try:
        with TestClient(app, raise_server_exceptions=False) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.clear()


@pytest.fixture(params=["sql", "memory"])
def store(request, db):
    """Run service tests against both store implementations."""
    from app.repositories import SqlCredentialStore, InMemoryCredentialStore

    if request.param == "sql":
        return SqlCredentialStore(db)
    return InMemoryCredentialStore()


@pytest.fixture
def phone():
    return PHONE

"""Pytest configuration and fixtures."""

import os
from datetime import UTC, datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker

from src.api.dependencies import get_meal_service, get_now
from src.database import Base, get_db
from src.main import app
from src.services.meal_service import MealService

# Fixed clock for every request made through the test client
NOW = datetime(2026, 3, 10, 12, 0, tzinfo=UTC)

# Use test database - PostgreSQL in Docker, SQLite locally
if os.getenv("DATABASE_URL"):
    # Running in Docker - use PostgreSQL test database
    SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL").replace(
        "/smart_pantry", "/smart_pantry_test"
    )
else:
    # Running locally - use SQLite
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@event.listens_for(engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    if engine.dialect.name == "sqlite":
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        # For PostgreSQL, create the test database
        from sqlalchemy_utils import create_database, database_exists

        # Create test database if it doesn't exist
        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

    Base.metadata.create_all(bind=engine)
    yield
    # Don't drop database - just leave it for next run (each test cleans up after itself)


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture
def now():
    """The pinned clock used by the client."""
    return NOW


@pytest.fixture(scope="function")
def client(db):
    """Create a test client with database, clock and LLM overrides."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_now] = lambda: NOW
    # Heuristic suggestions only, regardless of the local environment
    app.dependency_overrides[get_meal_service] = lambda: MealService(db, llm_enabled=False)
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def user(client):
    """Create a user through the API and return its JSON."""
    response = client.post(
        "/api/users",
        json={"email": "test@example.com", "name": "Test User", "reminderWindowDays": 3},
    )
    assert response.status_code == 201
    return response.json()["data"]


@pytest.fixture
def user_id(user):
    return user["userId"]


@pytest.fixture
def create_pantry_item(client, user_id):
    """Factory posting a pantry item for the default user."""

    def _create(**fields):
        payload = {"userId": user_id, "name": "Milk", **fields}
        response = client.post("/api/pantry", json=payload)
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _create


@pytest.fixture
def grocery_list(client, user_id):
    """Create an empty grocery list for the default user."""
    response = client.post("/api/grocery-lists", json={"userId": user_id, "title": "Weekly"})
    assert response.status_code == 201
    return response.json()["data"]

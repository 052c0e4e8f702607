"""
Pytest configuration and fixtures for the salon API tests.

Environment is set before the app is imported so Settings picks it up.
API tests run against an InMemoryRecordStore; store tests run against both
backends (SQLite in memory for the SQL one).
"""
import os
import tempfile

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("ADMIN_EMAIL", "owner@swasthik.com")
os.environ.setdefault("ADMIN_PASSWORD", "owner-pass-123")
os.environ.setdefault("RECEPTION_EMAIL", "desk@swasthik.com")
os.environ.setdefault("RECEPTION_PASSWORD", "desk-pass-123")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="salon-uploads-"))


import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import settings
from app.core.jwt import create_access_token
from app.database import Base
from app.main import app
from app.store import get_store
from app.store.memory import InMemoryRecordStore
from app.store.sql import SqlRecordStore

test_engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture(scope="function")
def db():
    """Fresh SQLite schema per test."""
    Base.metadata.create_all(bind=test_engine)
    session = TestingSessionLocal()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def store():
    return InMemoryRecordStore()


@pytest.fixture(params=["memory", "sql"])
def any_store(request, db):
    if request.param == "memory":
        return InMemoryRecordStore()
    return SqlRecordStore(db)


@pytest.fixture
def client(store):
    app.dependency_overrides[get_store] = lambda: store

    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def admin_headers():
    token = create_access_token({"sub": settings.ADMIN_EMAIL})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def reception_headers():
    token = create_access_token({"sub": settings.RECEPTION_EMAIL})
    return {"Authorization": f"Bearer {token}"}

# tests/conftest.py
"""Shared fixtures: a throwaway SQLite database per test and an API client bound to it."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

# Must be set before spotfinder.config is imported anywhere
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret-0123456789-abcdefghijklmnop"
os.environ["JWT_ALGORITHM"] = "HS256"

import pytest
from datetime import timedelta
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from spotfinder.database import create_tables, get_db
from spotfinder.main import app
from spotfinder.services.auth_service import create_access_token


@pytest.fixture
def engine(tmp_path):
    # File-backed so several threads can hold their own connections
    eng = create_engine(
        f"sqlite:///{tmp_path / 'spotfinder_test.db'}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )
    create_tables(bind=eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
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
def auth_header():
    def make(subject_id="user-1", email="user1@example.com", expires_in=None):
        token = create_access_token(subject_id, email, expires_in=expires_in)
        return {"Authorization": f"Bearer {token}"}
    return make


@pytest.fixture
def expired_header():
    token = create_access_token("user-1", "user1@example.com", expires_in=timedelta(minutes=-5))
    return {"Authorization": f"Bearer {token}"}

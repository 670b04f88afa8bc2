"""Shared fixtures and utilities for tests."""

import os

# Settings are read once at import time, so the environment has to be in
# place before anything from jobboard is imported.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["PASSWORD_HASH_ROUNDS"] = "4"
os.environ["SEED_ADMIN"] = "false"
os.environ["JWT_SECRET_KEY"] = "test-jwt-secret-key-min-32-chars-long"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
from fastapi.testclient import TestClient

from jobboard.core.auth import hash_password, token_for
from jobboard.db.database import drop_db, init_db
from jobboard.db.store import JobBoardStore
from jobboard.main import app
from jobboard.schemas.schemas import JobCreate, JobType, UserCreate, UserRole


@pytest.fixture(autouse=True)
def fresh_db():
    """Every test starts from empty tables."""
    drop_db()
    init_db()
    yield


@pytest.fixture
def store():
    return JobBoardStore()


@pytest.fixture
def client():
    """Create test client."""
    return TestClient(app)


@pytest.fixture
def make_user(store):
    """Factory creating users straight through the store."""
    counter = {"n": 0}

    def _make_user(role=UserRole.jobseeker, approved=True, **fields):
        counter["n"] += 1
        n = counter["n"]
        data = UserCreate(
            username=fields.pop("username", f"{role.value}{n}"),
            password=fields.pop("password", "secret123"),
            email=fields.pop("email", f"{role.value}{n}@jobportal.com"),
            name=fields.pop("name", f"{role.value.title()} {n}"),
            role=role,
            **fields,
        )
        return store.create_user(data, password_hash=hash_password(data.password), is_approved=approved)

    return _make_user


@pytest.fixture
def make_job(store):
    def _make_job(poster, **fields):
        data = JobCreate(
            title=fields.pop("title", "Backend Engineer"),
            company=fields.pop("company", poster.company or "Acme"),
            description=fields.pop("description", "Build and run APIs"),
            location=fields.pop("location", "Remote"),
            type=fields.pop("type", JobType.full_time),
            posted_by=poster.id,
            **fields,
        )
        return store.create_job(data)

    return _make_job


@pytest.fixture
def admin(make_user):
    return make_user(UserRole.admin, username="admin")


@pytest.fixture
def employer(make_user):
    return make_user(UserRole.employer, company="Acme")


@pytest.fixture
def seeker(make_user):
    return make_user(UserRole.jobseeker)


@pytest.fixture
def auth_headers():
    """Bearer headers for a stored user."""
    def _auth_headers(user):
        return {"Authorization": f"Bearer {token_for(user)}"}

    return _auth_headers

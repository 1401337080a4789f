"""
Shared fixtures: a throwaway SQLite database per test, service objects wired
the same way the FastAPI dependencies wire them, and a TestClient whose
database/lock dependencies point at that database.
"""

import os
import time

os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-for-rating-backend")
os.environ.setdefault("JWT_ENABLED", "true")
os.environ.setdefault("REDIS_ENABLED", "false")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("APP_LOG_LEVEL", "warning")

import jwt
import pytest
from fastapi.testclient import TestClient

from resource_backend.api.services.aggregate_service import AggregateService
from resource_backend.api.services.rating_service import RatingService
from resource_backend.config import settings
from resource_backend.core.dependencies import get_db, get_lock_manager
from resource_backend.core.locks import ResourceLockManager
from resource_backend.database import Database
from resource_backend.database.crud.resource_crud import ResourceCRUD
from resource_backend.main import app
from resource_backend.utils.uuid_gen import gen

OWNER_ID = "owner-1"


@pytest.fixture
def database(tmp_path):
    db = Database(f"sqlite:///{tmp_path / 'ratings.db'}")
    db.create_database()
    yield db
    db.drop_database()
    db.close()


@pytest.fixture
def session(database):
    s = database.new_session()
    yield s
    s.close()


@pytest.fixture
def lock_manager():
    return ResourceLockManager(timeout_seconds=5)


@pytest.fixture
def aggregate_service(session, lock_manager):
    return AggregateService(db=session, lock_manager=lock_manager)


@pytest.fixture
def rating_service(session, aggregate_service):
    return RatingService(db=session, aggregate_service=aggregate_service)


@pytest.fixture
def make_resource(session):
    """Create an active resource owned by `owner` and return its id."""
    crud = ResourceCRUD(session)

    def _make(owner=OWNER_ID, title="Polity notes", exam_category="UPSC", section="Notes"):
        resource = crud.create_resource(
            resource_id=gen(),
            title=title,
            description=f"{title} description",
            exam_category=exam_category,
            section=section,
            file_url=f"https://blob.example.com/{gen()}.pdf",
            file_name="notes.pdf",
            file_size=1024,
            file_type="pdf",
            uploaded_by=owner,
            tags=["notes"],
        )
        return resource.resource_id

    return _make


@pytest.fixture
def client(database, lock_manager):
    def _get_db():
        s = database.new_session()
        try:
            yield s
        finally:
            s.close()

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_lock_manager] = lambda: lock_manager
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def make_token(user_id, role="user", expires_in=3600):
    now = int(time.time())
    payload = {"user_id": user_id, "role": role, "iat": now, "exp": now + expires_in}
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


@pytest.fixture
def auth_headers():
    def _headers(user_id, role="user"):
        return {"Authorization": f"Bearer {make_token(user_id, role)}"}

    return _headers

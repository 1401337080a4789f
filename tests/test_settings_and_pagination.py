"""
Settings parsing and pagination helpers.
"""

from resource_backend.config import Settings
from resource_backend.utils.pagination import build_pagination, get_skip


def test_database_url_override(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite:///./local.db")

    assert Settings().database_url == "sqlite:///./local.db"


def test_database_url_from_parts(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.setenv("DATABASE_HOST", "db.internal")
    monkeypatch.setenv("DATABASE_PORT", "5433")
    monkeypatch.setenv("DATABASE_NAME", "resources")
    monkeypatch.setenv("DATABASE_USERNAME", "app")
    monkeypatch.setenv("DATABASE_PASSWORD", "pw")

    assert Settings(_env_file=None).database_url == "postgresql://app:pw@db.internal:5433/resources"


def test_comma_separated_lists(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", "http://a.test, http://b.test")
    monkeypatch.setenv("JWT_EXCLUDE_PATHS", "/health, /docs,")

    settings = Settings(_env_file=None)

    assert settings.get_cors_origins() == ["http://a.test", "http://b.test"]
    assert settings.get_jwt_exclude_paths() == ["/health", "/docs"]


def test_get_skip():
    assert get_skip(1, 10) == 0
    assert get_skip(3, 10) == 20


def test_build_pagination_middle_page():
    assert build_pagination(page=2, limit=10, total=25, returned=10) == {
        "current_page": 2,
        "total_pages": 3,
        "total": 25,
        "has_next": True,
        "has_prev": True,
    }


def test_build_pagination_empty():
    info = build_pagination(page=1, limit=10, total=0, returned=0)

    assert info["total_pages"] == 0
    assert info["has_next"] is False
    assert info["has_prev"] is False

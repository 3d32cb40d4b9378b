"""
Tests unitarios para Settings.
"""
import pytest
from pydantic import ValidationError

from sponsor_register.core.config import Settings, get_cors_origins


def test_database_url_is_switched_to_asyncpg():
    settings = Settings(_env_file=None, DATABASE_URL="postgres://user:pass@db:5432/sponsors")
    assert settings.effective_database_url == "postgresql+asyncpg://user:pass@db:5432/sponsors"


def test_database_url_built_from_components():
    settings = Settings(_env_file=None, DATABASE_URL="", DATABASE_HOST="db", DATABASE_NAME="reg")
    assert settings.effective_database_url.startswith("postgresql+asyncpg://")
    assert settings.effective_database_url.endswith("@db:5432/reg")


def test_sqlite_url_is_kept():
    settings = Settings(_env_file=None, DATABASE_URL="sqlite+aiosqlite:///./dev.db")
    assert settings.effective_database_url == "sqlite+aiosqlite:///./dev.db"


def test_page_size_must_be_positive():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, MAX_PAGE_SIZE=0)


def test_cors_origins_parsing():
    assert get_cors_origins("*") == ["*"]
    assert get_cors_origins('["http://a", "http://b"]') == ["http://a", "http://b"]
    assert get_cors_origins("http://a, http://b") == ["http://a", "http://b"]

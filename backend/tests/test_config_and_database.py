"""
Tests for settings loading and engine helpers.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError
from sqlalchemy import select

from app.core.config import Settings
from app.core.database import make_engine, normalize_database_url, session_scope
from app.core.exceptions import StoreUnavailable
from app.models import Setting


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "  postgresql://u:p@db:5432/workflows  ")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    loaded = Settings()

    assert loaded.DATABASE_URL == "postgresql://u:p@db:5432/workflows"
    assert loaded.LOG_LEVEL == "DEBUG"


def test_settings_reject_unknown_log_level(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "chatty")
    with pytest.raises(ValidationError):
        Settings()


@pytest.mark.parametrize(
    "url, expected",
    [
        ("postgresql://u:p@h/db", "postgresql+psycopg://u:p@h/db"),
        ("postgresql+psycopg://u:p@h/db", "postgresql+psycopg://u:p@h/db"),
        ("sqlite:///./instance.db", "sqlite:///./instance.db"),
    ],
)
def test_normalize_database_url(url, expected):
    assert normalize_database_url(url) == expected


def test_make_engine_requires_url():
    with pytest.raises(StoreUnavailable, match="not configured"):
        make_engine("   ")


def test_session_scope_commits(session_factory):
    with session_scope(session_factory) as db:
        db.add(Setting(key="ui.banners.dismissed", value="[]"))

    with session_factory() as db:
        assert db.scalar(select(Setting.value).where(Setting.key == "ui.banners.dismissed")) == "[]"


def test_session_scope_rolls_back_on_error(session_factory):
    with pytest.raises(ValueError):
        with session_scope(session_factory) as db:
            db.add(Setting(key="ui.banners.dismissed", value="[]"))
            db.flush()
            raise ValueError("boom")

    with session_factory() as db:
        assert db.get(Setting, "ui.banners.dismissed") is None

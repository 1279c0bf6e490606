"""
Shared fixtures: a fresh SQLite store with the full schema for every test.
"""

from __future__ import annotations

import pytest

from app.core.database import init_db, make_engine, make_session_factory
from app.services.user_management import UserManagementReset


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite:///{tmp_path / 'instance.db'}"


@pytest.fixture
def engine(database_url):
    engine = make_engine(database_url, echo=False)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return make_session_factory(engine)


@pytest.fixture
def session(session_factory):
    """Session used to arrange state; helpers in db_factories commit through it."""
    db = session_factory()
    yield db
    db.close()


@pytest.fixture
def fresh_session(session_factory):
    """
    Open a new session for assertions.

    Avoids reading stale objects cached in the arranging session's identity map.
    """
    opened = []

    def _open():
        db = session_factory()
        opened.append(db)
        return db

    yield _open
    for db in opened:
        db.close()


@pytest.fixture
def reset(session_factory):
    """Run the user-management reset against the test store."""

    def _run():
        return UserManagementReset(session_factory).run()

    return _run

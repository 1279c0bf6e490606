"""
database.py — Database Session & Connection Management

Purpose:
- Create and provide access to the relational store holding the instance data.
- Manage SQLAlchemy Engine + Session lifecycle.
- Expose `session_scope()`, a context manager that wraps one unit of work in a
  single transaction (commit on success, rollback on any exception).
- Create missing tables for fresh instances and tests (`init_db`).

Key Characteristics:
- Synchronous SQLAlchemy engine.
- No Alembic migrations — schema evolution is out of scope for this package.
- `postgresql://` URLs are routed to the psycopg (v3) driver.

This module does NOT:
- Define ORM models (see app/models/*).
- Perform any queries or business logic.
"""

from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from app.core.config import settings
from app.core.exceptions import StoreUnavailable
from app.core.logging import get_logger

logger = get_logger(__name__)

# -----------------------------------------------------------------------------
# SQLAlchemy Engine
# -----------------------------------------------------------------------------


def normalize_database_url(db_url: str) -> str:
    """
    Route plain `postgresql://` URLs to the psycopg (v3) driver.

    Example:
        normalize_database_url("postgresql://u:p@h/db") → "postgresql+psycopg://u:p@h/db"
    """
    if db_url.startswith("postgresql://") and "+" not in db_url.split("://")[0]:
        return db_url.replace("postgresql://", "postgresql+psycopg://", 1)
    return db_url


def make_engine(db_url: Optional[str] = None, echo: Optional[bool] = None) -> Engine:
    """
    Build an engine for the given URL (defaults to settings.DATABASE_URL).

    Raises:
        StoreUnavailable: If no database URL is configured.
    """
    db_url = db_url if db_url is not None else settings.DATABASE_URL
    if not db_url or not db_url.strip():
        raise StoreUnavailable(
            "Database is not configured. Please set the DATABASE_URL environment variable "
            "or pass --database-url."
        )

    return create_engine(
        normalize_database_url(db_url.strip()),
        echo=settings.DB_ECHO if echo is None else echo,
        pool_pre_ping=True,  # Ensures connections are valid before use
    )


def make_session_factory(engine: Engine) -> sessionmaker:
    """Session factory bound to `engine`."""
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
    )


def init_db(engine: Engine) -> None:
    """
    Create any missing tables on `engine`.

    Existing tables are left untouched.
    """
    # Imported here so every model registers itself on Base.metadata first.
    from app.models import Base

    Base.metadata.create_all(bind=engine)
    logger.info("Schema ensured on %s", engine.url.render_as_string(hide_password=True))


# -----------------------------------------------------------------------------
# Unit of Work
# -----------------------------------------------------------------------------

@contextmanager
def session_scope(session_factory: sessionmaker) -> Iterator[Session]:
    """
    Provide a transactional scope around a series of operations.

    Usage:
        with session_scope(SessionLocal) as session:
            UserRepository(session).count()

    Responsibility:
    - Open session → yield → commit if the block completed.
    - Roll back if the block raised, then re-raise.
    - Always close the session.
    """
    session = session_factory()
    try:
        yield session
        session.commit()
    except BaseException:
        session.rollback()
        raise
    finally:
        session.close()

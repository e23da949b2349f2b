"""Database connection and session management.

This module handles the database connection using SQLAlchemy. Route handlers
never open connections themselves: they receive a request-scoped session from
``get_db``, which always releases it.

``DATABASE_URL`` is required. Without it the session factory is unbound, so
every statement raises ``UnboundExecutionError`` and storage routes answer
with a server error, while grading without persistence keeps working.
"""

from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from config import DATABASE_URL, DB_CONNECT_TIMEOUT
from core.exceptions import ConfigurationError
from models.base import Base
# Import models to ensure they are registered with Base.metadata
import models  # noqa: F401


def create_db_engine(url: Optional[str]) -> Optional[Engine]:
    """Build the engine for ``url``, or None when no URL is configured."""
    if not url:
        return None
    if url.startswith("sqlite"):
        return create_engine(url, connect_args={"check_same_thread": False})
    return create_engine(
        url,
        connect_args={"connect_timeout": DB_CONNECT_TIMEOUT},
        pool_pre_ping=True,
    )


engine = create_db_engine(DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(bind: Optional[Engine] = None) -> None:
    """Create all tables if they do not exist yet.

    Raises:
        ConfigurationError: If no engine is given and DATABASE_URL is unset.
    """
    bind = bind or engine
    if bind is None:
        raise ConfigurationError("DATABASE_URL is not set")
    Base.metadata.create_all(bind=bind)


def get_db():
    """Dependency for getting a database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

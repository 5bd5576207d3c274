"""
Database configuration with lazy initialization.

The engine is created on first access so that importing the app (tests,
migrations, tooling) never opens a connection by itself.
"""
import logging

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import QueuePool

from .core.config import settings
from .core.env import is_production_env

logger = logging.getLogger(__name__)

# Global engine instance (lazily initialized)
_engine = None
_SessionLocal = None

Base = declarative_base()


def _safe_url(url: str) -> str:
    return url[:30] + "..." if len(url) > 30 else url


def get_engine():
    """Get or create the database engine."""
    global _engine
    if _engine is None:
        database_url = settings.database_url
        if is_production_env() and database_url.startswith("sqlite"):
            error_msg = (
                "CRITICAL: SQLite database is not supported in production. "
                "Please use PostgreSQL (e.g., RDS, managed Postgres)."
            )
            logger.error(f"[DB] {error_msg}")
            raise ValueError(error_msg)

        logger.info(f"[DB] Creating database engine for: {_safe_url(database_url)}")
        if database_url.startswith("sqlite"):
            # SQLite: minimal pooling for dev
            _engine = create_engine(
                database_url,
                poolclass=QueuePool,
                pool_size=5,
                max_overflow=0,
                connect_args={"check_same_thread": False},
            )
        else:
            _engine = create_engine(
                database_url,
                poolclass=QueuePool,
                pool_size=20,
                max_overflow=10,
                pool_pre_ping=True,
                pool_recycle=3600,
            )
    return _engine


def get_session_local():
    """Get or create the SessionLocal class."""
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=get_engine())
    return _SessionLocal


def get_db():
    """
    Dependency that provides a database session.
    Used by FastAPI's dependency injection.
    """
    session_class = get_session_local()
    db = session_class()
    try:
        yield db
    finally:
        db.close()

"""
SQLite database engine and session management for the show sync system.

This module provides:
- Engine construction with NullPool and SQLite tuning (WAL, busy timeout, FKs)
- Session factories that are passed explicitly to every component
- `session_scope`, a transactional scope that commits or rolls back and always
  closes the session
- A lazily built default session factory for entry points and CLIs
"""

import os
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Optional

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import ArgumentError, OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import NullPool

from .models import Base
from src.logger import setup_logging, log_function


db_logger = setup_logging(logger_name="database")


def validate_database_url(url: Optional[str]) -> tuple[bool, str]:
    """Validate the database URL format and return (is_valid, path_or_error)."""
    if not url:
        return False, "DATABASE_URL is not set"
    try:
        parsed = make_url(url)
    except ArgumentError as e:
        return False, f"Invalid database URL format: {e}"

    if parsed.get_backend_name() != "sqlite":
        return False, f"Only SQLite databases are supported, got: {parsed.drivername}"

    if not parsed.database or parsed.database == ":memory:":
        return False, "Database file path is empty"

    return True, parsed.database


def optimize_sqlite_connection(dbapi_connection, connection_record):
    """Apply SQLite-specific settings when a connection is created."""
    cursor = dbapi_connection.cursor()

    # WAL lets guest reconciliation threads read while another one writes
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA busy_timeout=30000")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.execute("PRAGMA synchronous=NORMAL")

    cursor.close()


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    """
    Create a SQLAlchemy engine for a SQLite database file.

    The parent directory of the database file is created if needed.

    Raises:
        ValueError: If the URL is not a usable SQLite file URL
    """
    is_valid, db_info = validate_database_url(database_url)
    if not is_valid:
        db_logger.error(f"Database configuration error: {db_info}")
        raise ValueError(f"Database configuration error: {db_info}")

    Path(db_info).parent.mkdir(parents=True, exist_ok=True)

    engine = create_engine(
        database_url,
        poolclass=NullPool,  # One connection per session, safe across threads
        echo=echo,
        connect_args={
            "check_same_thread": False,
            "timeout": 30,
        },
    )
    event.listen(engine, "connect", optimize_sqlite_connection)

    db_logger.info(f"Database engine created for {db_info}")
    return engine


def create_session_factory(engine: Engine) -> sessionmaker:
    """Create the session factory handed to reconcilers and handlers."""
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@contextmanager
def session_scope(session_factory: sessionmaker) -> Generator[Session, None, None]:
    """
    Transactional scope around a series of operations.

    Commits when the block exits normally, rolls back and re-raises on any
    exception, and always closes the session.

    Usage:
        with session_scope(session_factory) as session:
            session.add(Show(...))
    """
    session = session_factory()
    try:
        yield session
        session.commit()

    except OperationalError as e:
        db_logger.error(f"Database operational error: {e}")
        session.rollback()

        error_msg = str(e.orig) if getattr(e, "orig", None) is not None else str(e)
        if "no such table" in error_msg.lower():
            raise OperationalError(
                "Database table does not exist. Please run database migrations first.",
                None,
                e.orig,
            ) from e
        raise

    except SQLAlchemyError as e:
        db_logger.error(f"Database error: {e}")
        session.rollback()
        raise

    except Exception:
        session.rollback()
        raise

    finally:
        session.close()


@log_function(logger_name="database")
def init_database(engine: Engine) -> None:
    """
    Create all tables defined in models.

    This does not run Alembic migrations; use `alembic upgrade head` for that.
    """
    Base.metadata.create_all(bind=engine)
    db_logger.info("Database tables created successfully")


def check_database_connection(session_factory: sessionmaker) -> bool:
    """Return True if a trivial query succeeds."""
    try:
        with session_scope(session_factory) as session:
            session.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError as e:
        db_logger.error(f"Database connection test failed: {e}")
        return False


def get_database_info(engine: Engine) -> dict:
    """Return the database path, pool class and file size."""
    db_path = engine.url.database
    info = {
        "database_path": db_path,
        "engine_pool_class": engine.pool.__class__.__name__,
        "file_exists": bool(db_path) and os.path.exists(db_path),
    }
    if info["file_exists"]:
        file_stats = os.stat(db_path)
        info["file_size_bytes"] = file_stats.st_size
        info["file_size_mb"] = round(file_stats.st_size / (1024 * 1024), 2)
    return info


_session_factory: Optional[sessionmaker] = None


def get_session_factory() -> sessionmaker:
    """
    Get or create the default session factory from DATABASE_URL.

    Only entry points use this; library functions take a session factory argument.
    """
    global _session_factory
    if _session_factory is None:
        from src.config import get_config

        engine = create_db_engine(get_config().database_url)
        _session_factory = create_session_factory(engine)
    return _session_factory

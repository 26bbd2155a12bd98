"""
Database package for the show sync system.

Structure:
- models.py: SQLAlchemy ORM models (Show, Guest, ShowGuest, SocialLink,
  Transcript, AiShowNote and its children)
- database.py: Engine construction, session factories and `session_scope`
- queries.py: Read helpers (show by number, latest show)

Components never reach for a global session: they receive a session factory
(`sessionmaker`) and open a `session_scope` per transaction. Entry points get
the default factory from `get_session_factory()`.
"""

from .models import (
    Base,
    TimestampMixin,
    ShowType,
    Show,
    Guest,
    ShowGuest,
    SocialLink,
    Transcript,
    TranscriptUtterance,
    AiShowNote,
    AiSummaryEntry,
    AiTweet,
    AiTopic,
    AiLink,
)
from .database import (
    create_db_engine,
    create_session_factory,
    session_scope,
    init_database,
    check_database_connection,
    get_database_info,
    get_session_factory,
    validate_database_url,
)
from .queries import get_show_by_number, get_latest_show, ordinal

__all__ = [
    # Models
    "Base",
    "TimestampMixin",
    "ShowType",
    "Show",
    "Guest",
    "ShowGuest",
    "SocialLink",
    "Transcript",
    "TranscriptUtterance",
    "AiShowNote",
    "AiSummaryEntry",
    "AiTweet",
    "AiTopic",
    "AiLink",
    # Database utilities
    "create_db_engine",
    "create_session_factory",
    "session_scope",
    "init_database",
    "check_database_connection",
    "get_database_info",
    "get_session_factory",
    "validate_database_url",
    # Queries
    "get_show_by_number",
    "get_latest_show",
    "ordinal",
]

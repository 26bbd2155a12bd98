"""
Configuration settings for the show sync project.

Values come from the environment (a local .env file is loaded first):
    DATABASE_URL      SQLite URL, e.g. sqlite:///data/shows.db
    SHOWS_DIR         Folder holding the "<number> - <slug>.md" show files
    LOG_DIR           Folder for log files
    SYNC_MAX_WORKERS  Thread pool size used for guest reconciliation
    OPENAI_API_KEY    Key for AI show-note generation
    OPENAI_MODEL      Model used for AI show-note generation
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv


DEFAULT_DATABASE_URL = "sqlite:///data/shows.db"


@dataclass
class SyncConfig:
    """Runtime configuration for sync and AI note generation"""

    database_url: str = DEFAULT_DATABASE_URL
    shows_dir: str = "shows"
    log_dir: str = "logs"
    max_workers: int = 4

    openai_api_key: Optional[str] = None
    openai_model: str = "gpt-4o-mini"

    @classmethod
    def from_env(cls) -> "SyncConfig":
        load_dotenv()
        max_workers = os.getenv("SYNC_MAX_WORKERS", "4")
        try:
            workers = max(1, int(max_workers))
        except ValueError:
            raise ValueError(f"SYNC_MAX_WORKERS must be an integer, got: {max_workers}")

        return cls(
            database_url=os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL),
            shows_dir=os.getenv("SHOWS_DIR", "shows"),
            log_dir=os.getenv("LOG_DIR", "logs"),
            max_workers=workers,
            openai_api_key=os.getenv("OPENAI_API_KEY"),
            openai_model=os.getenv("OPENAI_MODEL", "gpt-4o-mini"),
        )


_config: Optional[SyncConfig] = None


def get_config() -> SyncConfig:
    """Get or create the process configuration."""
    global _config
    if _config is None:
        _config = SyncConfig.from_env()
    return _config

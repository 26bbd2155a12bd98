"""Shared fixtures: a file-backed SQLite database and a folder of show files."""

import os
import tempfile
from pathlib import Path
from typing import Any, Callable, Optional

import pytest
import yaml

# Keep log files out of the working tree; must run before src modules import
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="show-sync-logs-"))

from src.db import (  # noqa: E402
    Show,
    Transcript,
    TranscriptUtterance,
    create_db_engine,
    create_session_factory,
    init_database,
    session_scope,
)


@pytest.fixture
def database_url(tmp_path: Path) -> str:
    return f"sqlite:///{tmp_path / 'db' / 'shows.db'}"


@pytest.fixture
def engine(database_url: str):
    engine = create_db_engine(database_url)
    init_database(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture
def shows_dir(tmp_path: Path) -> Path:
    folder = tmp_path / "shows"
    folder.mkdir()
    return folder


def render_show(
    title: Optional[str] = "Hasty Treat - CSS Nesting",
    date: Any = "2023-10-30",
    url: Optional[str] = None,
    guest: Any = None,
    body: str = "## Show Notes\n\n00:00 Welcome",
    **extra: Any,
) -> str:
    """Render a show-notes markdown document with YAML front matter."""
    front: dict[str, Any] = {}
    if title is not None:
        front["title"] = title
    if date is not None:
        front["date"] = date
    if url is not None:
        front["url"] = url
    if guest is not None:
        front["guest"] = guest
    front.update(extra)
    return f"---\n{yaml.safe_dump(front, sort_keys=False)}---\n\n{body}\n"


@pytest.fixture
def write_show(shows_dir: Path) -> Callable[..., Path]:
    """Write a show file into shows_dir: write_show("1 - intro.md", title=...)."""

    def _write(md_file: str, **kwargs: Any) -> Path:
        path = shows_dir / md_file
        path.write_text(render_show(**kwargs), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def add_transcript(session_factory):
    """Attach a transcript to an existing show: add_transcript(712, [(0, "Wes", "Hi")])."""

    def _add(number: int, utterances: list[tuple[float, str, str]]) -> None:
        with session_scope(session_factory) as session:
            show = session.query(Show).filter_by(number=number).one()
            session.add(
                Transcript(
                    show_id=show.id,
                    utterances=[
                        TranscriptUtterance(start=start, speaker=speaker, text=text)
                        for start, speaker, text in utterances
                    ],
                )
            )

    return _add

"""
Persistence of AI show notes.

Notes are never edited: regeneration deletes the show's AiShowNote (its
summary, tweets, topics and links go with it) and creates a new one.
"""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload, sessionmaker

from src.db import (
    AiLink,
    AiShowNote,
    AiSummaryEntry,
    AiTopic,
    AiTweet,
    Show,
    Transcript,
    session_scope,
)
from .errors import AiNotesError
from .models import AiNoteResult, ShowContext, build_show_context


logger = logging.getLogger("ai_notes")


def delete_ai_notes(session: Session, show_number: int) -> int:
    """Delete every AiShowNote of a show. Returns the number deleted."""
    notes = (
        session.execute(
            select(AiShowNote).join(AiShowNote.show).where(Show.number == show_number)
        )
        .scalars()
        .all()
    )
    for note in notes:
        session.delete(note)
    session.flush()
    return len(notes)


def save_ai_notes(
    session_factory: sessionmaker, show_number: int, result: AiNoteResult
) -> str:
    """
    Store generated notes for a show.

    Returns:
        id of the created AiShowNote

    Raises:
        AiNotesError: If the show does not exist
    """
    with session_scope(session_factory) as session:
        show = session.execute(
            select(Show).where(Show.number == show_number)
        ).scalar_one_or_none()
        if show is None:
            raise AiNotesError(f"Show #{show_number} not found", status_code=404)

        note = AiShowNote(
            show_id=show.id,
            title=result.title,
            description=result.description,
            summary=[
                AiSummaryEntry(time=s.time, text=s.text, description=s.description)
                for s in result.summary
            ],
            tweets=[AiTweet(content=tweet) for tweet in result.tweets],
            topics=[AiTopic(name=topic) for topic in result.topics],
            links=[
                AiLink(name=link.name, url=link.url, timestamp=link.timestamp)
                for link in result.links
            ],
        )
        session.add(note)
        session.flush()
        logger.info(f"Saved AI notes for show #{show_number}")
        return note.id


def load_show_context(session_factory: sessionmaker, show_number: int) -> ShowContext:
    """
    Load a show with its transcript.

    Raises:
        AiNotesError: If there is no such show or it has no transcript
    """
    with session_scope(session_factory) as session:
        show = session.execute(
            select(Show)
            .options(selectinload(Show.transcript).selectinload(Transcript.utterances))
            .where(Show.number == show_number)
        ).scalar_one_or_none()
        if show is None or show.transcript is None:
            raise AiNotesError("No show, or no transcript for this show")
        return build_show_context(show)


def find_next_show_without_notes(session_factory: sessionmaker) -> Optional[ShowContext]:
    """Highest numbered show that has a transcript but no AI notes."""
    with session_scope(session_factory) as session:
        show = session.execute(
            select(Show)
            .join(Show.transcript)
            .outerjoin(Show.ai_show_note)
            .where(AiShowNote.id.is_(None))
            .options(selectinload(Show.transcript).selectinload(Transcript.utterances))
            .order_by(Show.number.desc())
            .limit(1)
        ).scalar_one_or_none()
        if show is None:
            return None
        return build_show_context(show)

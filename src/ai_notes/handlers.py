"""
AI show-note requests.

request_ai_notes      regenerate notes for one show (manual request)
generate_next_ai_notes  notes for the newest show that has a transcript but no notes (cron)
"""

import time
from typing import Any

from sqlalchemy.orm import sessionmaker

from src.db import session_scope
from src.logger import setup_logging, log_function
from .errors import AiNotesError
from .generator import NoteGenerator
from .store import (
    delete_ai_notes,
    find_next_show_without_notes,
    load_show_context,
    save_ai_notes,
)


logger = setup_logging(logger_name="ai_notes")


def parse_show_number(value: Any) -> int:
    """
    Validate a requested show number.

    Raises:
        AiNotesError: If the value is not a positive integer
    """
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError):
        raise AiNotesError("Invalid Show Number") from None
    if number <= 0:
        raise AiNotesError("Invalid Show Number")
    return number


@log_function(logger_name="ai_notes", log_args=True)
def request_ai_notes(
    session_factory: sessionmaker, show_number: Any, generator: NoteGenerator
) -> dict[str, str]:
    """
    Replace the AI notes of a show with freshly generated ones.

    Existing notes are deleted before generation starts.

    Raises:
        AiNotesError: If the number is invalid or the show has no transcript
    """
    number = parse_show_number(show_number)
    show = load_show_context(session_factory, number)

    with session_scope(session_factory) as session:
        deleted = delete_ai_notes(session, number)
    if deleted:
        logger.info(f"Deleted {deleted} existing AI notes for show #{number}")

    result = generator(show)
    logger.info(f"Saving AI Notes to DB for Show {number}")
    save_ai_notes(session_factory, number, result)
    return {"message": "AI Notes Created"}


@log_function(logger_name="ai_notes")
def generate_next_ai_notes(
    session_factory: sessionmaker, generator: NoteGenerator
) -> dict[str, str]:
    """Generate notes for the newest show with a transcript and no AI notes."""
    start = time.time()
    show = find_next_show_without_notes(session_factory)
    if show is None:
        return {"message": "No shows without AI Show notes found."}

    logger.info(
        f"Found a show that needs AI show notes: show {show.number} - {show.title}"
    )
    result = generator(show)
    save_ai_notes(session_factory, show.number, result)

    minutes, seconds = divmod(time.time() - start, 60)
    message = (
        f"AI notes ran for Show #{show.number} {show.title}. "
        f"Took {int(minutes)}m {seconds:.1f}s"
    )
    logger.info(message)
    return {"message": message}

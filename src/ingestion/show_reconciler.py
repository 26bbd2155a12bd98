"""
Show upsert.

A show is keyed by its episode number. Its type comes from the weekday it was
published: Monday shows are Hasty Treats, Wednesday shows are Tasty Treats,
Friday shows are Supper Clubs, and everything else is a Special.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from src.db import Show, ShowType, session_scope
from .errors import ShowPersistError
from .frontmatter_parser import ParsedShowNotes
from .slug import slugify


logger = logging.getLogger("sync_shows")

# Keyed by datetime.weekday(): Monday == 0
DAYS_OF_WEEK_TYPES = {
    0: ShowType.HASTY,
    2: ShowType.TASTY,
    4: ShowType.SUPPER,
}


@dataclass(frozen=True)
class ShowRef:
    """Identity of a persisted show, handed to guest reconciliation."""

    id: str
    number: int


def show_type_for_day(day_index: Optional[int]) -> ShowType:
    return DAYS_OF_WEEK_TYPES.get(day_index, ShowType.SPECIAL)


def show_type_for_date(date: Optional[datetime]) -> ShowType:
    """ShowType for a show date; SPECIAL when there is no date."""
    if date is None:
        return ShowType.SPECIAL
    return show_type_for_day(date.weekday())


def upsert_show(
    session_factory: sessionmaker,
    parsed: ParsedShowNotes,
    hash: str,
    number: int,
    md_file: str,
) -> ShowRef:
    """
    Create or update the show with episode `number`.

    Args:
        session_factory: Session factory of the target database
        parsed: Parsed front matter and body of the show file
        hash: Fingerprint of the raw file
        number: Episode number from the filename
        md_file: Source filename

    Returns:
        ShowRef of the persisted show

    Raises:
        ShowPersistError: If the date is unusable or the database rejects the write
    """
    if parsed.date is None:
        raise ShowPersistError(
            f"Show #{number} has an invalid or missing date: {parsed.raw_date!r}",
            number=number,
        )

    fields = {
        "title": parsed.title,
        "slug": slugify(parsed.title),
        "date": parsed.date,
        "url": parsed.url,
        "show_notes": parsed.content,
        "hash": hash,
        "md_file": md_file,
        "show_type": show_type_for_date(parsed.date),
    }

    try:
        with session_scope(session_factory) as session:
            show = session.execute(
                select(Show).where(Show.number == number)
            ).scalar_one_or_none()
            if show is None:
                show = Show(number=number, **fields)
                session.add(show)
            else:
                for key, value in fields.items():
                    setattr(show, key, value)
            session.flush()
            show_ref = ShowRef(id=show.id, number=show.number)
    except SQLAlchemyError as e:
        raise ShowPersistError(
            f"Error importing show #{number}: {e}", number=number
        ) from e

    logger.debug(f"Upserted show #{number} ({fields['show_type'].value})")
    return show_ref

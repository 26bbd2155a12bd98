"""Read queries over shows."""

from datetime import datetime
from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from .models import Guest, Show, ShowGuest


def get_show_by_number(session: Session, number: int) -> Optional[Show]:
    return session.execute(
        select(Show).where(Show.number == number)
    ).scalar_one_or_none()


def ordinal(day: int) -> str:
    """1 -> '1st', 22 -> '22nd', 13 -> '13th'."""
    if 10 <= day % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")
    return f"{day}{suffix}"


def format_display_date(date: datetime) -> str:
    """Format a show date as 'October 30th, 2023'."""
    return f"{date.strftime('%B')} {ordinal(date.day)}, {date.year}"


def get_latest_show(session: Session) -> Optional[dict[str, Any]]:
    """
    Fetch the highest numbered show with its guests.

    Returns:
        A dict of the show columns plus `guests` (name and github of each guest),
        `notesFile`, `displayNumber` and `displayDate`. None if there are no shows.
    """
    show = session.execute(
        select(Show)
        .options(selectinload(Show.guests).selectinload(ShowGuest.guest))
        .order_by(Show.number.desc())
        .limit(1)
    ).scalar_one_or_none()
    if show is None:
        return None

    guests: list[Guest] = [show_guest.guest for show_guest in show.guests]
    return {
        "id": show.id,
        "number": show.number,
        "slug": show.slug,
        "title": show.title,
        "date": show.date,
        "url": show.url,
        "show_notes": show.show_notes,
        "show_type": show.show_type.value,
        "guests": [{"name": g.name, "github": g.github} for g in guests],
        "notesFile": show.md_file,
        "displayNumber": str(show.number),
        "displayDate": format_display_date(show.date),
    }

"""
Guest reconciliation.

For every guest of a show:
  1. derive the name slug,
  2. upsert the Guest by slug (own transaction),
  3. create the ShowGuest link if missing (second, separate transaction),
  4. upsert the guest's social links.

Guests of one show are reconciled concurrently on a thread pool. Each task
returns a GuestResult; a failing guest is logged and reported in its result,
it never aborts its siblings or the sync pass.
"""

import logging
import threading
from datetime import date
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import sessionmaker

from src.db import Guest, ShowGuest, SocialLink, session_scope
from .errors import GuestReconcileError
from .frontmatter_parser import ParsedGuest
from .show_reconciler import ShowRef
from .slug import slugify


logger = logging.getLogger("sync_shows")

# Front matter keys stored in their own Guest column
GUEST_COLUMNS = ("twitter", "github", "url", "of")


@dataclass(frozen=True)
class GuestResult:
    """Outcome of reconciling one guest of a show."""

    guest: ParsedGuest
    name_slug: Optional[str] = None
    guest_id: Optional[str] = None
    linked: bool = False
    social_links: int = 0
    error: Optional[GuestReconcileError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class SlugLocks:
    """One lock per guest slug, so guests whose names collide upsert one at a time."""

    def __init__(self) -> None:
        self._locks: dict[str, threading.Lock] = {}
        self._guard = threading.Lock()

    def __call__(self, name_slug: str) -> threading.Lock:
        with self._guard:
            return self._locks.setdefault(name_slug, threading.Lock())


def _json_safe(value: Any) -> Any:
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, dict):
        return {str(k): _json_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_json_safe(v) for v in value]
    return value


def split_guest_attributes(
    attributes: dict[str, Any],
) -> tuple[dict[str, Any], dict[str, Any]]:
    """Split front matter attributes into (column values, extra attributes)."""
    columns = {}
    extra = {}
    for key, value in attributes.items():
        if key in GUEST_COLUMNS:
            columns[key] = str(value) if value is not None else None
        else:
            extra[key] = _json_safe(value)
    return columns, extra


def _apply_guest_fields(
    guest: Guest, name: str, columns: dict[str, Any], extra: dict[str, Any]
) -> None:
    guest.name = name
    for key, value in columns.items():
        setattr(guest, key, value)
    if extra:
        guest.attributes = {**(guest.attributes or {}), **extra}


def upsert_guest(
    session_factory: sessionmaker,
    name: str,
    name_slug: str,
    attributes: dict[str, Any],
) -> str:
    """
    Create or update the guest with `name_slug` and return its id.

    Only attributes present in the front matter are written; `name_slug` is
    never changed once assigned. If another writer inserts the same slug first,
    the unique constraint rejects our insert and the winning row is updated.
    """
    columns, extra = split_guest_attributes(attributes)

    try:
        with session_scope(session_factory) as session:
            guest = session.execute(
                select(Guest).where(Guest.name_slug == name_slug)
            ).scalar_one_or_none()
            if guest is None:
                guest = Guest(name=name, name_slug=name_slug)
                session.add(guest)
            _apply_guest_fields(guest, name, columns, extra)
            session.flush()
            return guest.id
    except IntegrityError:
        logger.warning(f"Guest '{name_slug}' was created concurrently, updating it")

    with session_scope(session_factory) as session:
        guest = session.execute(
            select(Guest).where(Guest.name_slug == name_slug)
        ).scalar_one()
        _apply_guest_fields(guest, name, columns, extra)
        session.flush()
        return guest.id


def _show_guest_exists(session, show_id: str, guest_id: str) -> bool:
    return (
        session.execute(
            select(ShowGuest.id).where(
                ShowGuest.show_id == show_id, ShowGuest.guest_id == guest_id
            )
        ).first()
        is not None
    )


def link_show_guest(session_factory: sessionmaker, show_id: str, guest_id: str) -> bool:
    """
    Create the ShowGuest row for (show, guest) unless it exists.

    Returns:
        True if a row was created, False if the pair was already linked

    Raises:
        IntegrityError: If the insert is rejected for any other reason than an
            existing link (e.g. an unknown show or guest id)
    """
    try:
        with session_scope(session_factory) as session:
            if _show_guest_exists(session, show_id, guest_id):
                return False
            session.add(ShowGuest(show_id=show_id, guest_id=guest_id))
            return True
    except IntegrityError:
        with session_scope(session_factory) as session:
            if not _show_guest_exists(session, show_id, guest_id):
                raise
        return False


def upsert_social_links(
    session_factory: sessionmaker, guest_id: str, links: Sequence[str]
) -> int:
    """Upsert social links of a guest by (link, guest). Returns the number of links."""
    unique_links = list(dict.fromkeys(links))
    if not unique_links:
        return 0

    with session_scope(session_factory) as session:
        for link in unique_links:
            social_link = session.execute(
                select(SocialLink).where(
                    SocialLink.link == link, SocialLink.guest_id == guest_id
                )
            ).scalar_one_or_none()
            if social_link is None:
                session.add(SocialLink(link=link, guest_id=guest_id))
            else:
                social_link.link = link
    return len(unique_links)


def reconcile_guest(
    session_factory: sessionmaker,
    show: ShowRef,
    guest: ParsedGuest,
    locks: Optional[SlugLocks] = None,
) -> GuestResult:
    """
    Reconcile one guest of a show. Never raises: failures are logged and
    returned in GuestResult.error.
    """
    locks = locks or SlugLocks()
    name_slug = None
    try:
        if guest.name is None or not guest.name.strip():
            raise ValueError("Guest has no name")
        name_slug = slugify(guest.name)
        if not name_slug:
            raise ValueError(f"Guest name {guest.name!r} does not produce a slug")

        with locks(name_slug):
            guest_id = upsert_guest(
                session_factory, guest.name, name_slug, guest.attributes
            )
            linked = link_show_guest(session_factory, show.id, guest_id)
            social_links = upsert_social_links(
                session_factory, guest_id, guest.social
            )

    except Exception as e:
        error = GuestReconcileError(
            f"Error importing guest for show #{show.number}: {e}",
            show_number=show.number,
            guest=guest,
        )
        error.__cause__ = e
        logger.error(
            f"Error Importing Guests: show #{show.number}, guest={guest!r}: "
            f"{type(e).__name__}: {e}",
            exc_info=True,
        )
        return GuestResult(guest=guest, name_slug=name_slug, error=error)

    return GuestResult(
        guest=guest,
        name_slug=name_slug,
        guest_id=guest_id,
        linked=linked,
        social_links=social_links,
    )


def reconcile_guests(
    session_factory: sessionmaker,
    show: ShowRef,
    guests: Sequence[ParsedGuest],
    max_workers: int = 4,
) -> list[GuestResult]:
    """
    Reconcile all guests of a show concurrently.

    Args:
        session_factory: Session factory of the target database
        show: The show the guests belong to (already persisted)
        guests: Normalized guests from the front matter
        max_workers: Thread pool size

    Returns:
        One GuestResult per guest, in input order
    """
    if not guests:
        return []

    locks = SlugLocks()
    workers = max(1, min(max_workers, len(guests)))
    if workers == 1:
        return [reconcile_guest(session_factory, show, g, locks) for g in guests]

    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="guest") as executor:
        futures = [
            executor.submit(reconcile_guest, session_factory, show, guest, locks)
            for guest in guests
        ]
        return [future.result() for future in futures]

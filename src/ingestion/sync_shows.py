#!/usr/bin/env python3
"""
Show Notes to Database Sync

Reads every "<number> - <slug>.md" file of the shows folder and upserts the
show, its guests, show/guest links and guest social links.

Two passes are available:
    import_or_update_all_shows          reconcile every file
    import_or_update_all_changed_shows  skip files whose hash matches the stored show

Files are processed one at a time in directory-listing order. A load, parse or
show persistence failure stops the pass and surfaces as ImportFailedError;
files synced before the failure stay committed. Guest failures are logged and
counted but do not stop the pass.

Usage:
    uv run -m src.ingestion                  # Full sync
    uv run -m src.ingestion --changed-only   # Only new or modified files
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from sqlalchemy import select
from sqlalchemy.orm import sessionmaker

from src.config import get_config
from src.db import Show, session_scope, get_session_factory
from src.logger import setup_logging, log_function
from .change_detector import ChangeStatus, classify_change
from .errors import ImportFailedError
from .frontmatter_parser import parse_show_notes
from .guest_reconciler import GuestResult, reconcile_guests
from .loader import ShowFile, list_markdown_files, load_show_file
from .show_reconciler import ShowRef, upsert_show


logger = setup_logging(logger_name="sync_shows")


@dataclass
class FileSyncResult:
    """Outcome of syncing one show file."""

    show: ShowRef
    md_file: str
    guests: list[GuestResult] = field(default_factory=list)

    @property
    def failed_guests(self) -> list[GuestResult]:
        return [result for result in self.guests if not result.ok]


@dataclass
class SyncSummary:
    """Completion signal of a sync pass."""

    message: str = "Import All Shows"
    processed: int = 0
    skipped: int = 0
    guest_errors: int = 0
    results: list[FileSyncResult] = field(default_factory=list)


def sync_show_file(
    session_factory: sessionmaker,
    show_file: ShowFile,
    max_workers: int = 4,
) -> FileSyncResult:
    """
    Parse one show file, upsert its show and reconcile its guests.

    Raises:
        ParseError: If the front matter is unusable
        ShowPersistError: If the show cannot be saved
    """
    parsed = parse_show_notes(show_file.content)
    show = upsert_show(
        session_factory,
        parsed,
        hash=show_file.hash,
        number=show_file.number,
        md_file=show_file.md_file,
    )
    guests = reconcile_guests(session_factory, show, parsed.guests, max_workers)

    result = FileSyncResult(show=show, md_file=show_file.md_file, guests=guests)
    if result.failed_guests:
        logger.warning(
            f"Episode # {show.number} imported with "
            f"{len(result.failed_guests)}/{len(guests)} guest errors"
        )
    else:
        logger.info(f"Episode # {show.number} imported successfully")
    return result


def get_stored_hash(session_factory: sessionmaker, number: int) -> Optional[str]:
    """Hash of the stored show with this episode number, None if there is none."""
    with session_scope(session_factory) as session:
        return session.execute(
            select(Show.hash).where(Show.number == number)
        ).scalar_one_or_none()


def _run_sync(
    session_factory: sessionmaker,
    shows_dir: Union[str, Path],
    max_workers: int,
    changed_only: bool,
) -> SyncSummary:
    summary = SyncSummary()
    try:
        for md_file in list_markdown_files(shows_dir):
            show_file = load_show_file(shows_dir, md_file)

            if changed_only:
                status = classify_change(
                    get_stored_hash(session_factory, show_file.number), show_file.hash
                )
                if status is ChangeStatus.UNCHANGED:
                    logger.debug(f"Episode # {show_file.number} unchanged, skipping")
                    summary.skipped += 1
                    continue

            result = sync_show_file(session_factory, show_file, max_workers)
            summary.processed += 1
            summary.guest_errors += len(result.failed_guests)
            summary.results.append(result)

    except Exception as e:
        logger.error(f"Pod Sync Error: {type(e).__name__}: {e}", exc_info=True)
        raise ImportFailedError("Error Importing Shows") from e

    logger.info(
        f"Pod Sync Complete: {summary.processed} processed, {summary.skipped} skipped, "
        f"{summary.guest_errors} guest errors"
    )
    return summary


@log_function(logger_name="sync_shows", log_args=True)
def import_or_update_all_shows(
    session_factory: sessionmaker,
    shows_dir: Union[str, Path],
    max_workers: int = 4,
) -> SyncSummary:
    """
    Reconcile every show file of `shows_dir`, whatever its hash.

    Raises:
        ImportFailedError: If any file fails to load, parse or save
    """
    return _run_sync(session_factory, shows_dir, max_workers, changed_only=False)


@log_function(logger_name="sync_shows", log_args=True)
def import_or_update_all_changed_shows(
    session_factory: sessionmaker,
    shows_dir: Union[str, Path],
    max_workers: int = 4,
) -> SyncSummary:
    """
    Reconcile show files that are new or whose hash differs from the stored show.

    Unchanged files cause no writes at all.

    Raises:
        ImportFailedError: If any file fails to load, parse or save
    """
    return _run_sync(session_factory, shows_dir, max_workers, changed_only=True)


def sync_all(
    session_factory: Optional[sessionmaker] = None,
    shows_dir: Optional[Union[str, Path]] = None,
) -> SyncSummary:
    """Full sync with configured defaults (DATABASE_URL, SHOWS_DIR, SYNC_MAX_WORKERS)."""
    config = get_config()
    return import_or_update_all_shows(
        session_factory or get_session_factory(),
        shows_dir or config.shows_dir,
        max_workers=config.max_workers,
    )


def sync_changed(
    session_factory: Optional[sessionmaker] = None,
    shows_dir: Optional[Union[str, Path]] = None,
) -> SyncSummary:
    """Changed-only sync with configured defaults."""
    config = get_config()
    return import_or_update_all_changed_shows(
        session_factory or get_session_factory(),
        shows_dir or config.shows_dir,
        max_workers=config.max_workers,
    )

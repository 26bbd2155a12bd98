#!/usr/bin/env python3
"""
Main entry point for the ingestion package.

    uv run -m src.ingestion                       # Full sync of SHOWS_DIR
    uv run -m src.ingestion --changed-only        # Skip unchanged files
    uv run -m src.ingestion --shows-dir ./shows   # Custom folder
    uv run -m src.ingestion --init-db             # Create tables first
"""

import argparse
import sys
from typing import Optional

from src.config import get_config
from src.db import get_session_factory, init_database
from src.logger import setup_logging
from src.ingestion.errors import ImportFailedError
from src.ingestion.sync_shows import (
    import_or_update_all_changed_shows,
    import_or_update_all_shows,
)


def main(argv: Optional[list[str]] = None) -> int:
    """
    Sync show-notes markdown files into the database.

    Returns 0 on success, 1 when the pass failed or guests failed to import,
    and 130 when interrupted by the user.
    """
    config = get_config()
    parser = argparse.ArgumentParser(
        description="Sync podcast show notes from markdown files to database",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  uv run -m src.ingestion                       # Reconcile every show file
  uv run -m src.ingestion --changed-only        # Only new or modified files
  uv run -m src.ingestion --shows-dir ./shows   # Custom shows folder
        """,
    )
    parser.add_argument(
        "--changed-only",
        action="store_true",
        help="Skip files whose content hash matches the stored show",
    )
    parser.add_argument(
        "--shows-dir",
        type=str,
        default=config.shows_dir,
        help=f"Folder of show markdown files (default: {config.shows_dir})",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=config.max_workers,
        help=f"Concurrent guest reconciliations per show (default: {config.max_workers})",
    )
    parser.add_argument(
        "--init-db", action="store_true", help="Create database tables before syncing"
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Detailed console output"
    )
    args = parser.parse_args(argv)

    logger = setup_logging(logger_name="sync_shows", verbose=args.verbose)
    logger.info("Starting show sync")

    try:
        session_factory = get_session_factory()
        if args.init_db:
            init_database(session_factory.kw["bind"])

        sync = (
            import_or_update_all_changed_shows
            if args.changed_only
            else import_or_update_all_shows
        )
        summary = sync(session_factory, args.shows_dir, max_workers=args.workers)

        print(
            f"\nCompleted: {summary.processed} processed, {summary.skipped} skipped, "
            f"{summary.guest_errors} guest errors"
        )
        if summary.guest_errors > 0:
            print(f"Check {config.log_dir}/sync_shows.log for guest error details")
        logger.info(f"Operation completed: {summary.message}")
        return 0 if summary.guest_errors == 0 else 1

    except KeyboardInterrupt:
        print("\nSync interrupted by user")
        return 130
    except ImportFailedError as e:
        print(f"✗ Sync failed: {e} ({e.__cause__})")
        return 1
    except ValueError as e:
        print(f"✗ Configuration error: {e}")
        logger.error(f"Configuration error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())

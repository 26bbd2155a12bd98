"""
Ingestion package for the show sync system.

Turns a folder of show-notes markdown files into Show, Guest, ShowGuest and
SocialLink rows:

1. Loading (loader.py): list "<number> - <slug>.md" files, read bytes, parse
   the episode number, fingerprint the content (change_detector.py)
2. Parsing (frontmatter_parser.py): front matter and body, guests normalized
3. Reconciliation (show_reconciler.py, guest_reconciler.py): upserts
4. Orchestration (sync_shows.py): full and changed-only passes

Usage:
    uv run -m src.ingestion                  # Reconcile every show file
    uv run -m src.ingestion --changed-only   # Only new or modified files
"""

from .errors import (
    ShowSyncError,
    LoadError,
    ParseError,
    ShowPersistError,
    GuestReconcileError,
    ImportFailedError,
)
from .sync_shows import (
    SyncSummary,
    FileSyncResult,
    sync_show_file,
    import_or_update_all_shows,
    import_or_update_all_changed_shows,
    sync_all,
    sync_changed,
)

__all__ = [
    "ShowSyncError",
    "LoadError",
    "ParseError",
    "ShowPersistError",
    "GuestReconcileError",
    "ImportFailedError",
    "SyncSummary",
    "FileSyncResult",
    "sync_show_file",
    "import_or_update_all_shows",
    "import_or_update_all_changed_shows",
    "sync_all",
    "sync_changed",
]

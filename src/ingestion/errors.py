"""Show sync error classes."""

from typing import Any, Optional


class ShowSyncError(Exception):
    """Base error for show sync failures."""

    pass


class LoadError(ShowSyncError):
    """Show file unreadable, or its filename has no valid episode number."""

    def __init__(self, message: str, md_file: Optional[str] = None) -> None:
        super().__init__(message)
        self.md_file = md_file


class ParseError(ShowSyncError):
    """Front matter malformed beyond recovery (bad YAML, missing title)."""

    pass


class ShowPersistError(ShowSyncError):
    """The store rejected a show upsert."""

    def __init__(self, message: str, number: Optional[int] = None) -> None:
        super().__init__(message)
        self.number = number


class GuestReconcileError(ShowSyncError):
    """A single guest, its show link or its social links failed to sync."""

    def __init__(
        self, message: str, show_number: Optional[int] = None, guest: Any = None
    ) -> None:
        super().__init__(message)
        self.show_number = show_number
        self.guest = guest


class ImportFailedError(ShowSyncError):
    """A sync pass was aborted. Raised to callers of the sync entry points."""

    def __init__(self, message: str = "Error Importing Shows") -> None:
        super().__init__(message)

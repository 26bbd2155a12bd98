"""Content fingerprints and change classification for show files."""

import hashlib
from enum import Enum
from typing import Optional


class ChangeStatus(str, Enum):
    NEW = "new"  # No stored show for this episode number
    UNCHANGED = "unchanged"  # Stored hash equals the file hash
    MODIFIED = "modified"  # Stored hash differs


def compute_content_hash(raw: bytes) -> str:
    """SHA-256 hex digest of the exact file bytes."""
    return hashlib.sha256(raw).hexdigest()


def classify_change(stored_hash: Optional[str], new_hash: str) -> ChangeStatus:
    """
    Classify a show file against the hash stored for its episode number.

    Args:
        stored_hash: Hash of the stored show, None when no show is stored
        new_hash: Hash of the file as it is now

    Returns:
        ChangeStatus.NEW, ChangeStatus.UNCHANGED or ChangeStatus.MODIFIED
    """
    if stored_hash is None:
        return ChangeStatus.NEW
    if stored_hash == new_hash:
        return ChangeStatus.UNCHANGED
    return ChangeStatus.MODIFIED

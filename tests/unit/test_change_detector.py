"""Unit tests for content hashing and change classification."""

from src.ingestion.change_detector import (
    ChangeStatus,
    classify_change,
    compute_content_hash,
)


class TestComputeContentHash:
    def test_deterministic(self) -> None:
        raw = b"---\ntitle: One\n---\nBody\n"
        assert compute_content_hash(raw) == compute_content_hash(raw)

    def test_sha256_hex(self) -> None:
        digest = compute_content_hash(b"")
        assert digest == "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"

    def test_one_byte_changes_hash(self) -> None:
        assert compute_content_hash(b"Body text.") != compute_content_hash(b"Body text!")


class TestClassifyChange:
    def test_new_when_nothing_stored(self) -> None:
        assert classify_change(None, "abc") is ChangeStatus.NEW

    def test_unchanged_when_hash_matches(self) -> None:
        assert classify_change("abc", "abc") is ChangeStatus.UNCHANGED

    def test_modified_when_hash_differs(self) -> None:
        assert classify_change("abc", "abd") is ChangeStatus.MODIFIED

"""Unit tests for show file loading."""

from pathlib import Path

import pytest

from src.ingestion.change_detector import compute_content_hash
from src.ingestion.errors import LoadError
from src.ingestion.loader import (
    episode_number_from_filename,
    list_markdown_files,
    load_show_file,
)


class TestListMarkdownFiles:
    def test_lists_only_markdown_files(self, shows_dir: Path) -> None:
        (shows_dir / "1 - intro.md").write_text("x")
        (shows_dir / "2 - second.md").write_text("x")
        (shows_dir / "notes.txt").write_text("x")
        (shows_dir / "cover.png").write_bytes(b"\x89PNG")

        assert sorted(list_markdown_files(shows_dir)) == ["1 - intro.md", "2 - second.md"]

    def test_does_not_recurse(self, shows_dir: Path) -> None:
        (shows_dir / "1 - intro.md").write_text("x")
        nested = shows_dir / "archive"
        nested.mkdir()
        (nested / "0 - old.md").write_text("x")
        (shows_dir / "folder.md").mkdir()

        assert list(list_markdown_files(shows_dir)) == ["1 - intro.md"]

    def test_is_lazy(self, shows_dir: Path) -> None:
        (shows_dir / "1 - intro.md").write_text("x")
        files = list_markdown_files(shows_dir)
        assert next(files) == "1 - intro.md"

    def test_missing_folder_raises(self, tmp_path: Path) -> None:
        with pytest.raises(LoadError):
            list(list_markdown_files(tmp_path / "missing"))


class TestEpisodeNumberFromFilename:
    @pytest.mark.parametrize(
        "md_file,number",
        [
            ("712 - CSS Nesting.md", 712),
            ("1 - Intro.md", 1),
            ("42 - Title - With - Dashes.md", 42),
        ],
    )
    def test_parses_leading_number(self, md_file: str, number: int) -> None:
        assert episode_number_from_filename(md_file) == number

    @pytest.mark.parametrize(
        "md_file",
        [
            "intro.md",
            "abc - Title.md",
            "12a - Title.md",
            " - Title.md",
            "draft-12.md",
            "1_000 - Title.md",
            "+5 - Title.md",
            "-5 - Title.md",
            "\u0663 - Arabic Digit.md",
            "\uff11\uff12 - Fullwidth.md",
        ],
    )
    def test_invalid_number_raises(self, md_file: str) -> None:
        with pytest.raises(LoadError) as exc_info:
            episode_number_from_filename(md_file)
        assert exc_info.value.md_file == md_file


class TestLoadShowFile:
    def test_reads_content_and_hash(self, shows_dir: Path) -> None:
        raw = "---\ntitle: Café\n---\nBody\n".encode("utf-8")
        (shows_dir / "7 - cafe.md").write_bytes(raw)

        show_file = load_show_file(shows_dir, "7 - cafe.md")

        assert show_file.number == 7
        assert show_file.md_file == "7 - cafe.md"
        assert show_file.raw == raw
        assert show_file.content == raw.decode("utf-8")
        assert show_file.hash == compute_content_hash(raw)

    def test_bad_filename_raises_before_reading(self, shows_dir: Path) -> None:
        with pytest.raises(LoadError):
            load_show_file(shows_dir, "intro.md")

    def test_missing_file_raises(self, shows_dir: Path) -> None:
        with pytest.raises(LoadError):
            load_show_file(shows_dir, "3 - missing.md")

    def test_invalid_utf8_raises(self, shows_dir: Path) -> None:
        (shows_dir / "4 - binary.md").write_bytes(b"\xff\xfe\x00bad")
        with pytest.raises(LoadError):
            load_show_file(shows_dir, "4 - binary.md")

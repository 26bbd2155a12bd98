"""Unit tests for slugify."""

import pytest

from src.ingestion.slug import slugify


class TestSlugify:
    """Tests for slugify."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("Hasty Treat - CSS Nesting", "hasty-treat-css-nesting"),
            ("Jon Doe", "jon-doe"),
            ("Jon  Doe", "jon-doe"),
            ("  Jón Doe  ", "jon-doe"),
            ("Ésta es la Canción", "esta-es-la-cancion"),
            ("React 19: what's new?", "react-19-what-s-new"),
            ("---", ""),
        ],
    )
    def test_slugify(self, text: str, expected: str) -> None:
        assert slugify(text) == expected

    @pytest.mark.parametrize(
        "title",
        [
            "Supper Club × Scott Tolinski",
            "Potluck — Tabs vs Spaces!!",
            "The 100th Episode  (Special)",
            "ÜBER  Große Straße",
        ],
    )
    def test_slugify_is_idempotent(self, title: str) -> None:
        slug = slugify(title)
        assert slugify(slug) == slug

    def test_custom_separator(self) -> None:
        assert slugify("Jon Doe", separator="_") == "jon_doe"

"""Slug helper shared by show titles and guest names."""

import re
import unicodedata


_NON_ALPHANUMERIC = re.compile(r"[^a-z0-9]+")


def slugify(value: str, separator: str = "-") -> str:
    """
    Convert text to a lowercase, ASCII, separator-joined slug.

    Diacritics are stripped and every run of other characters collapses to a
    single separator, so "Jon  Doe", "Jon Doe" and "Jón Doe" all give "jon-doe".
    Slugifying a slug returns it unchanged.

    Args:
        value: Text to convert (a show title or a guest name)
        separator: Character placed between words

    Returns:
        The slug; empty string if the text has no letters or digits
    """
    normalized = unicodedata.normalize("NFKD", str(value))
    ascii_text = normalized.encode("ascii", "ignore").decode("ascii").lower()
    return _NON_ALPHANUMERIC.sub(separator, ascii_text).strip(separator)

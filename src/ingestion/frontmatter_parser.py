"""
Front matter parsing for show-notes markdown.

A show file starts with a YAML block delimited by "---" lines:

    ---
    title: Hasty Treat - CSS Nesting
    date: 1698667200000
    url: https://example.com/712
    guest:
      - name: Jane Doe
        twitter: janedoe
        social:
          - https://github.com/janedoe
    ---
    Body of the show notes...

`guest` may be a single mapping or a list; `social` may be a string or a list.
Both are normalized here to tuples so nothing downstream branches on shape.
"""

import logging
from dataclasses import dataclass, field
from datetime import date as date_type, datetime, timezone
from typing import Any, Optional

import frontmatter
import yaml
from frontmatter.default_handlers import YAMLHandler

from .errors import ParseError


logger = logging.getLogger("sync_shows")

DATE_FORMATS = (
    "%Y-%m-%d %H:%M:%S",
    "%Y/%m/%d",
    "%B %d, %Y",
    "%b %d, %Y",
    "%d %B %Y",
    "%a, %d %b %Y %H:%M:%S",
)


class ShowNotesLoader(yaml.SafeLoader):
    """SafeLoader that leaves YAML timestamps as strings for parse_show_date."""


ShowNotesLoader.add_constructor(
    "tag:yaml.org,2002:timestamp", yaml.SafeLoader.construct_yaml_str
)


class ShowNotesYAMLHandler(YAMLHandler):
    def load(self, fm: str, **kwargs: Any) -> Any:
        return yaml.load(fm, Loader=ShowNotesLoader)


@dataclass(frozen=True)
class ParsedGuest:
    """A guest entry. `name` is None when the entry has none."""

    name: Optional[str]
    social: tuple[str, ...] = ()
    attributes: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ParsedShowNotes:
    """Front matter and body of a show file."""

    title: str
    date: Optional[datetime]
    raw_date: Any
    url: Optional[str]
    guests: tuple[ParsedGuest, ...]
    content: str


def parse_show_date(value: Any) -> Optional[datetime]:
    """
    Convert a front matter date to a naive UTC datetime.

    Accepts epoch milliseconds, YAML dates/datetimes and common date strings.
    Returns None when the value cannot be understood.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        try:
            parsed = datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
        return parsed.replace(tzinfo=None)

    if isinstance(value, datetime):
        return _to_naive_utc(value)

    if isinstance(value, date_type):
        return datetime(value.year, value.month, value.day)

    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.isdigit():
            return parse_show_date(int(text))
        try:
            return _to_naive_utc(datetime.fromisoformat(text.replace("Z", "+00:00")))
        except ValueError:
            pass
        for fmt in DATE_FORMATS:
            try:
                return datetime.strptime(text, fmt)
            except ValueError:
                continue

    return None


def _to_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def normalize_social(social: Any) -> tuple[str, ...]:
    """Social links as a tuple: a string becomes one link, a list keeps its strings."""
    if social is None:
        return ()
    if isinstance(social, str):
        return (social,) if social.strip() else ()
    if isinstance(social, (list, tuple)):
        return tuple(str(link) for link in social if link)
    logger.error(f"Unexpected data type for social: {type(social).__name__}")
    return ()


def normalize_guest(entry: Any) -> ParsedGuest:
    if isinstance(entry, str):
        return ParsedGuest(name=entry)
    if not isinstance(entry, dict):
        return ParsedGuest(name=None, attributes={"value": entry})

    name = entry.get("name")
    attributes = {k: v for k, v in entry.items() if k not in ("name", "social")}
    return ParsedGuest(
        name=str(name) if name is not None else None,
        social=normalize_social(entry.get("social")),
        attributes=attributes,
    )


def normalize_guests(guest: Any) -> tuple[ParsedGuest, ...]:
    """Guests as a tuple: absent -> empty, a single entry -> one guest."""
    if guest is None:
        return ()
    if isinstance(guest, (list, tuple)):
        return tuple(normalize_guest(entry) for entry in guest if entry is not None)
    return (normalize_guest(guest),)


def parse_show_notes(text: str) -> ParsedShowNotes:
    """
    Split a show file into front matter and body.

    Args:
        text: Full file content

    Returns:
        ParsedShowNotes with normalized guests. An unparsable or missing date
        yields date=None; raw_date keeps the original value.

    Raises:
        ParseError: If the YAML is malformed or `title` is missing
    """
    try:
        post = frontmatter.loads(text, handler=ShowNotesYAMLHandler())
    except yaml.YAMLError as e:
        raise ParseError(f"Malformed front matter: {e}") from e

    data = post.metadata
    if not isinstance(data, dict):
        raise ParseError("Front matter is not a mapping")

    title = data.get("title")
    if title is None or isinstance(title, (dict, list)) or not str(title).strip():
        raise ParseError("Front matter is missing a title")

    raw_date = data.get("date")
    url = data.get("url")

    return ParsedShowNotes(
        title=str(title),
        date=parse_show_date(raw_date),
        raw_date=raw_date,
        url=str(url) if url is not None else None,
        guests=normalize_guests(data.get("guest")),
        content=post.content,
    )

"""
Data passed in and out of AI show-note generation.

ShowContext is what a generator reads (a show and its transcript);
AiNoteResult is what it returns and what gets stored.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from src.db import Show


@dataclass(frozen=True)
class AiSummaryItem:
    time: str
    text: str
    description: Optional[str] = None


@dataclass(frozen=True)
class AiLinkItem:
    name: str
    url: str
    timestamp: Optional[str] = None


@dataclass
class AiNoteResult:
    """Generated notes for one show."""

    title: str
    description: Optional[str] = None
    summary: list[AiSummaryItem] = field(default_factory=list)
    tweets: list[str] = field(default_factory=list)
    topics: list[str] = field(default_factory=list)
    links: list[AiLinkItem] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AiNoteResult":
        """
        Build a result from generator JSON.

        `description` falls back to `short_description`. Summary and link
        entries missing required keys are dropped.

        Raises:
            ValueError: If `title` is missing
        """
        title = data.get("title")
        if not title:
            raise ValueError("AI notes result has no title")

        summary = [
            AiSummaryItem(
                time=str(item["time"]),
                text=str(item["text"]),
                description=item.get("description"),
            )
            for item in data.get("summary") or []
            if isinstance(item, dict) and "time" in item and "text" in item
        ]
        links = [
            AiLinkItem(
                name=str(item["name"]),
                url=str(item["url"]),
                timestamp=str(item["timestamp"]) if item.get("timestamp") else None,
            )
            for item in data.get("links") or []
            if isinstance(item, dict) and item.get("name") and item.get("url")
        ]

        return cls(
            title=str(title),
            description=data.get("description") or data.get("short_description"),
            summary=summary,
            tweets=[str(tweet) for tweet in data.get("tweets") or []],
            topics=[str(topic) for topic in data.get("topics") or []],
            links=links,
        )


@dataclass(frozen=True)
class ShowContext:
    """A show and its transcript, detached from the database session."""

    number: int
    title: str
    date: datetime
    transcript: str


def format_timestamp(seconds: float) -> str:
    """83.2 -> '01:23', 3723 -> '01:02:03'."""
    total = int(seconds)
    hours, remainder = divmod(total, 3600)
    minutes, secs = divmod(remainder, 60)
    if hours:
        return f"{hours:02d}:{minutes:02d}:{secs:02d}"
    return f"{minutes:02d}:{secs:02d}"


def build_show_context(show: Show) -> ShowContext:
    """
    Render a show's transcript as "[mm:ss] Speaker: text" lines.

    The show must have a transcript loaded.
    """
    lines = [
        f"[{format_timestamp(u.start)}] {u.speaker or 'Unknown'}: {u.text}"
        for u in show.transcript.utterances
    ]
    return ShowContext(
        number=show.number,
        title=show.title,
        date=show.date,
        transcript="\n".join(lines),
    )

"""
SQLAlchemy ORM models for the show sync system.

This module defines the database schema using SQLAlchemy's declarative base.
All models inherit from Base and use consistent naming conventions
(singular class names, plural table names, UUID7 string primary keys).

Models:
    Show: A podcast episode parsed from a show-notes markdown file
    Guest: A show guest, identified by the slug of their name
    ShowGuest: Join row between a show and a guest
    SocialLink: A social profile link belonging to a guest
    Transcript / TranscriptUtterance: Episode transcript (AI pipeline input)
    AiShowNote / AiSummaryEntry / AiTweet / AiTopic / AiLink: AI generated notes
    TimestampMixin: Provides automatic created_at/updated_at timestamps

Enums:
    ShowType: Category of a show, derived from its day of week
"""

from enum import Enum as PyEnum

import uuid_utils as uuid
from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    Enum,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base = declarative_base()


def new_id() -> str:
    """Primary key generator (UUID7, time ordered)."""
    return str(uuid.uuid7())


class TimestampMixin:
    """
    Mixin to add automatic timestamp tracking to models.

    Provides:
        created_at: Timestamp when record was created (set automatically)
        updated_at: Timestamp when record was last modified (updated automatically)
    """

    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime, nullable=False, server_default=func.now(), onupdate=func.now()
    )


class ShowType(str, PyEnum):
    """
    Show category, derived from the weekday the show was published.

        HASTY: Monday short episode
        TASTY: Wednesday long episode
        SUPPER: Friday supper club interview
        SPECIAL: Anything else
    """

    HASTY = "HASTY"
    TASTY = "TASTY"
    SUPPER = "SUPPER"
    SPECIAL = "SPECIAL"


class Show(Base, TimestampMixin):
    """
    A podcast episode imported from a show-notes markdown file.

    Attributes:
        id: Primary key (UUID7)
        number: Episode number, parsed from the filename. Natural key.
        slug: Slugified title
        title: Episode title from front matter
        date: Publication date from front matter
        url: Optional episode URL
        show_notes: Markdown body of the file
        hash: SHA-256 of the raw file bytes, used for change detection
        md_file: Source filename
        show_type: ShowType derived from the day of week of `date`
    """

    __tablename__ = "shows"

    id = Column(String, primary_key=True, default=new_id)
    number = Column(Integer, nullable=False, unique=True, index=True)
    slug = Column(String, nullable=False)
    title = Column(String, nullable=False)
    date = Column(DateTime, nullable=False)
    url = Column(String, nullable=True)
    show_notes = Column(Text, nullable=False, default="")
    hash = Column(String, nullable=False)
    md_file = Column(String, nullable=False)
    show_type = Column(
        Enum(ShowType),
        nullable=False,
        default=ShowType.SPECIAL,
        server_default=ShowType.SPECIAL.value,
    )

    guests = relationship("ShowGuest", back_populates="show")
    transcript = relationship("Transcript", back_populates="show", uselist=False)
    ai_show_note = relationship("AiShowNote", back_populates="show", uselist=False)

    def __repr__(self):
        return (
            f"<Show(number={self.number}, title='{self.title}', "
            f"date='{self.date}', show_type={self.show_type})>"
        )


class Guest(Base, TimestampMixin):
    """
    A guest appearing on one or more shows.

    `name_slug` is assigned once and never changes; two raw names that slugify
    identically are the same guest. Known front-matter attributes have their own
    columns, anything else lands in `attributes`.
    """

    __tablename__ = "guests"

    id = Column(String, primary_key=True, default=new_id)
    name = Column(String, nullable=False)
    name_slug = Column(String, nullable=False, unique=True, index=True)
    twitter = Column(String, nullable=True)
    github = Column(String, nullable=True)
    url = Column(String, nullable=True)
    of = Column(String, nullable=True)
    attributes = Column(JSON, nullable=True)

    shows = relationship("ShowGuest", back_populates="guest")
    social_links = relationship("SocialLink", back_populates="guest")

    def __repr__(self):
        return f"<Guest(name_slug='{self.name_slug}', name='{self.name}')>"


class ShowGuest(Base, TimestampMixin):
    """Join row between a show and a guest. At most one per pair."""

    __tablename__ = "show_guests"
    __table_args__ = (
        UniqueConstraint("show_id", "guest_id", name="uq_show_guest"),
    )

    id = Column(String, primary_key=True, default=new_id)
    show_id = Column(String, ForeignKey("shows.id"), nullable=False, index=True)
    guest_id = Column(String, ForeignKey("guests.id"), nullable=False, index=True)

    show = relationship("Show", back_populates="guests")
    guest = relationship("Guest", back_populates="shows")


class SocialLink(Base, TimestampMixin):
    """A social profile link, unique per (link, guest)."""

    __tablename__ = "social_links"
    __table_args__ = (
        UniqueConstraint("link", "guest_id", name="uq_social_link_guest"),
    )

    id = Column(String, primary_key=True, default=new_id)
    link = Column(String, nullable=False)
    guest_id = Column(String, ForeignKey("guests.id"), nullable=False, index=True)

    guest = relationship("Guest", back_populates="social_links")


class Transcript(Base, TimestampMixin):
    """Transcript of a show. Read-only input of the AI show-note pipeline."""

    __tablename__ = "transcripts"

    id = Column(String, primary_key=True, default=new_id)
    show_id = Column(
        String, ForeignKey("shows.id", ondelete="CASCADE"), nullable=False, unique=True
    )

    show = relationship("Show", back_populates="transcript")
    utterances = relationship(
        "TranscriptUtterance",
        back_populates="transcript",
        order_by="TranscriptUtterance.start",
        cascade="all, delete-orphan",
    )


class TranscriptUtterance(Base):
    """One speaker turn of a transcript. `start` is in seconds."""

    __tablename__ = "transcript_utterances"

    id = Column(String, primary_key=True, default=new_id)
    transcript_id = Column(
        String, ForeignKey("transcripts.id", ondelete="CASCADE"), nullable=False
    )
    speaker = Column(String, nullable=True)
    start = Column(Float, nullable=False, default=0.0)
    text = Column(Text, nullable=False)

    transcript = relationship("Transcript", back_populates="utterances")


class AiShowNote(Base, TimestampMixin):
    """
    AI generated show notes. One per show at most.

    Regeneration deletes the note (children cascade) and creates a new one;
    notes are never updated in place.
    """

    __tablename__ = "ai_show_notes"

    id = Column(String, primary_key=True, default=new_id)
    show_id = Column(
        String, ForeignKey("shows.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)

    show = relationship("Show", back_populates="ai_show_note")
    summary = relationship(
        "AiSummaryEntry", back_populates="ai_show_note", cascade="all, delete-orphan"
    )
    tweets = relationship(
        "AiTweet", back_populates="ai_show_note", cascade="all, delete-orphan"
    )
    topics = relationship(
        "AiTopic", back_populates="ai_show_note", cascade="all, delete-orphan"
    )
    links = relationship(
        "AiLink", back_populates="ai_show_note", cascade="all, delete-orphan"
    )


class AiSummaryEntry(Base):
    __tablename__ = "ai_summary_entries"

    id = Column(String, primary_key=True, default=new_id)
    ai_show_note_id = Column(
        String, ForeignKey("ai_show_notes.id", ondelete="CASCADE"), nullable=False
    )
    time = Column(String, nullable=False)
    text = Column(Text, nullable=False)
    description = Column(Text, nullable=True)

    ai_show_note = relationship("AiShowNote", back_populates="summary")


class AiTweet(Base):
    __tablename__ = "ai_tweets"

    id = Column(String, primary_key=True, default=new_id)
    ai_show_note_id = Column(
        String, ForeignKey("ai_show_notes.id", ondelete="CASCADE"), nullable=False
    )
    content = Column(Text, nullable=False)

    ai_show_note = relationship("AiShowNote", back_populates="tweets")


class AiTopic(Base):
    __tablename__ = "ai_topics"

    id = Column(String, primary_key=True, default=new_id)
    ai_show_note_id = Column(
        String, ForeignKey("ai_show_notes.id", ondelete="CASCADE"), nullable=False
    )
    name = Column(String, nullable=False)

    ai_show_note = relationship("AiShowNote", back_populates="topics")


class AiLink(Base):
    __tablename__ = "ai_links"

    id = Column(String, primary_key=True, default=new_id)
    ai_show_note_id = Column(
        String, ForeignKey("ai_show_notes.id", ondelete="CASCADE"), nullable=False
    )
    name = Column(String, nullable=False)
    url = Column(String, nullable=False)
    timestamp = Column(String, nullable=True)

    ai_show_note = relationship("AiShowNote", back_populates="links")

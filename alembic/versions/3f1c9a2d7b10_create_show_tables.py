"""create show, guest, transcript and ai note tables

Revision ID: 3f1c9a2d7b10
Revises:
Create Date: 2026-10-18 09:12:41.204113

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3f1c9a2d7b10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False
        ),
        sa.Column(
            "updated_at", sa.DateTime(), server_default=sa.func.now(), nullable=False
        ),
    ]


def _ai_child_fk() -> sa.Column:
    return sa.Column(
        "ai_show_note_id",
        sa.String(),
        sa.ForeignKey("ai_show_notes.id", ondelete="CASCADE"),
        nullable=False,
    )


def upgrade() -> None:
    """
    Create the show sync schema.

    shows / guests / show_guests / social_links are written by the sync pass;
    transcripts and ai_* tables belong to the AI show-note pipeline.
    """
    op.create_table(
        "shows",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("number", sa.Integer(), nullable=False),
        sa.Column("slug", sa.String(), nullable=False),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("date", sa.DateTime(), nullable=False),
        sa.Column("url", sa.String(), nullable=True),
        sa.Column("show_notes", sa.Text(), nullable=False),
        sa.Column("hash", sa.String(), nullable=False),
        sa.Column("md_file", sa.String(), nullable=False),
        sa.Column(
            "show_type",
            sa.Enum("HASTY", "TASTY", "SUPPER", "SPECIAL", name="showtype"),
            server_default="SPECIAL",
            nullable=False,
        ),
        *_timestamps(),
    )
    op.create_index("ix_shows_number", "shows", ["number"], unique=True)

    op.create_table(
        "guests",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("name_slug", sa.String(), nullable=False),
        sa.Column("twitter", sa.String(), nullable=True),
        sa.Column("github", sa.String(), nullable=True),
        sa.Column("url", sa.String(), nullable=True),
        sa.Column("of", sa.String(), nullable=True),
        sa.Column("attributes", sa.JSON(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_guests_name_slug", "guests", ["name_slug"], unique=True)

    op.create_table(
        "show_guests",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("show_id", sa.String(), sa.ForeignKey("shows.id"), nullable=False),
        sa.Column("guest_id", sa.String(), sa.ForeignKey("guests.id"), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("show_id", "guest_id", name="uq_show_guest"),
    )
    op.create_index("ix_show_guests_show_id", "show_guests", ["show_id"])
    op.create_index("ix_show_guests_guest_id", "show_guests", ["guest_id"])

    op.create_table(
        "social_links",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("link", sa.String(), nullable=False),
        sa.Column("guest_id", sa.String(), sa.ForeignKey("guests.id"), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("link", "guest_id", name="uq_social_link_guest"),
    )
    op.create_index("ix_social_links_guest_id", "social_links", ["guest_id"])

    op.create_table(
        "transcripts",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column(
            "show_id",
            sa.String(),
            sa.ForeignKey("shows.id", ondelete="CASCADE"),
            nullable=False,
            unique=True,
        ),
        *_timestamps(),
    )
    op.create_table(
        "transcript_utterances",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column(
            "transcript_id",
            sa.String(),
            sa.ForeignKey("transcripts.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("speaker", sa.String(), nullable=True),
        sa.Column("start", sa.Float(), nullable=False),
        sa.Column("text", sa.Text(), nullable=False),
    )

    op.create_table(
        "ai_show_notes",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column(
            "show_id",
            sa.String(),
            sa.ForeignKey("shows.id", ondelete="CASCADE"),
            nullable=False,
            unique=True,
        ),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_table(
        "ai_summary_entries",
        sa.Column("id", sa.String(), primary_key=True),
        _ai_child_fk(),
        sa.Column("time", sa.String(), nullable=False),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
    )
    op.create_table(
        "ai_tweets",
        sa.Column("id", sa.String(), primary_key=True),
        _ai_child_fk(),
        sa.Column("content", sa.Text(), nullable=False),
    )
    op.create_table(
        "ai_topics",
        sa.Column("id", sa.String(), primary_key=True),
        _ai_child_fk(),
        sa.Column("name", sa.String(), nullable=False),
    )
    op.create_table(
        "ai_links",
        sa.Column("id", sa.String(), primary_key=True),
        _ai_child_fk(),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("url", sa.String(), nullable=False),
        sa.Column("timestamp", sa.String(), nullable=True),
    )


def downgrade() -> None:
    """Drop every table, children first."""
    for table in (
        "ai_links",
        "ai_topics",
        "ai_tweets",
        "ai_summary_entries",
        "ai_show_notes",
        "transcript_utterances",
        "transcripts",
        "social_links",
        "show_guests",
        "guests",
        "shows",
    ):
        op.drop_table(table)

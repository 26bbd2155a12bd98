"""
AI show-note package.

Stores notes generated from show transcripts: a title, a description, a
timestamped summary, tweets, topics and links. Notes are replaced as a whole
on regeneration.

Modules:
    models: ShowContext (generator input) and AiNoteResult (generator output)
    store: delete/save notes, load shows with transcripts
    generator: OpenAI backed generator
    handlers: request_ai_notes and generate_next_ai_notes

Usage:
    uv run -m src.ai_notes --show-number 712   # Regenerate notes of show 712
    uv run -m src.ai_notes --next              # Newest show without notes
"""

from .errors import AiNotesError
from .models import AiNoteResult, AiSummaryItem, AiLinkItem, ShowContext
from .store import delete_ai_notes, save_ai_notes
from .handlers import request_ai_notes, generate_next_ai_notes
from .generator import NoteGenerator, OpenAINoteGenerator

__all__ = [
    "AiNotesError",
    "AiNoteResult",
    "AiSummaryItem",
    "AiLinkItem",
    "ShowContext",
    "delete_ai_notes",
    "save_ai_notes",
    "request_ai_notes",
    "generate_next_ai_notes",
    "NoteGenerator",
    "OpenAINoteGenerator",
]

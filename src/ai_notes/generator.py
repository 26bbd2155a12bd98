"""OpenAI backed AI show-note generation."""

import json
import logging
from typing import Any, Callable, Optional

from src.config import get_config
from src.llm import init_llm_openai
from .models import AiNoteResult, ShowContext


logger = logging.getLogger("ai_notes")

NoteGenerator = Callable[[ShowContext], AiNoteResult]

AI_NOTES_PROMPT = (
    "You write show notes for a web development podcast. "
    "Given the transcript of an episode, with a [mm:ss] timestamp on each line, "
    "return ONLY a valid JSON object with these keys: "
    '"title" (string), "description" (2-3 sentences), '
    '"short_description" (one sentence), '
    '"summary" (list of {"time": "mm:ss", "text": short heading, "description": one sentence}), '
    '"tweets" (list of 3 tweet texts), "topics" (list of short topic names), '
    '"links" (list of {"name", "url", "timestamp"} for every resource mentioned). '
    "Use only information present in the transcript."
)


class OpenAINoteGenerator:
    """Generate AiNoteResult objects with the OpenAI Responses API."""

    def __init__(self, client: Optional[Any] = None, model: Optional[str] = None):
        self.client = client or init_llm_openai()
        self.model = model or get_config().openai_model

    def __call__(self, show: ShowContext) -> AiNoteResult:
        """
        Generate notes for a show.

        Raises:
            ValueError: If the transcript is empty or the response is not valid JSON
        """
        if not show.transcript.strip():
            raise ValueError(f"Show #{show.number} has an empty transcript")

        logger.info(f"Calling OpenAI for AI notes of show #{show.number}")
        response = self.client.responses.create(
            model=self.model,
            instructions=AI_NOTES_PROMPT,
            input=f"Episode #{show.number}: {show.title}\n\n{show.transcript}",
            text={"format": {"type": "json_object"}},
        )

        try:
            data = json.loads(response.output_text)
        except json.JSONDecodeError as e:
            logger.error(f"OpenAI returned invalid JSON for show #{show.number}: {e}")
            raise ValueError(f"Invalid AI notes JSON for show #{show.number}") from e

        logger.info(f"OpenAI returned AI notes for show #{show.number}")
        return AiNoteResult.from_dict(data)

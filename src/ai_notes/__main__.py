#!/usr/bin/env python3
"""
Generate AI show notes.

    uv run -m src.ai_notes --show-number 712   # Regenerate notes of one show
    uv run -m src.ai_notes --next              # Newest show with a transcript and no notes
"""

import argparse
import sys
from typing import Optional

from src.db import get_session_factory
from src.logger import setup_logging
from src.ai_notes.errors import AiNotesError
from src.ai_notes.generator import OpenAINoteGenerator
from src.ai_notes.handlers import generate_next_ai_notes, request_ai_notes


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Generate AI show notes")
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--show-number", type=str, help="Show to regenerate notes for")
    group.add_argument(
        "--next",
        action="store_true",
        help="Newest show that has a transcript but no AI notes",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Detailed console output"
    )
    args = parser.parse_args(argv)

    logger = setup_logging(logger_name="ai_notes", verbose=args.verbose)

    try:
        session_factory = get_session_factory()
        generator = OpenAINoteGenerator()
        if args.next:
            result = generate_next_ai_notes(session_factory, generator)
        else:
            result = request_ai_notes(session_factory, args.show_number, generator)
        print(result["message"])
        return 0

    except AiNotesError as e:
        print(f"✗ {e}")
        return 1
    except ValueError as e:
        print(f"✗ AI notes failed: {e}")
        logger.error(f"AI notes failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())

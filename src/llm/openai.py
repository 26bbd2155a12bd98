from typing import Optional

from openai import OpenAI

from src.config import get_config


def init_llm_openai(api_key: Optional[str] = None) -> OpenAI:
    """
    Initialize OpenAI LLM client.

    Args:
        api_key: API key to use. Defaults to OPENAI_API_KEY from the environment.

    Returns:
        OpenAI LLM client instance

    Raises:
        ValueError: If no API key is configured
    """
    openai_api_key = api_key or get_config().openai_api_key
    if not openai_api_key:
        raise ValueError("OPENAI_API_KEY not found in environment variables.")
    return OpenAI(api_key=openai_api_key)

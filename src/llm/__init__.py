"""This package contain modules related to large language models (LLMs).
openai.py : Contain OpenAI LLM initialization
"""

from .openai import init_llm_openai


__all__ = ["init_llm_openai"]

"""Logging helpers for the show sync project."""

from .logging_decorator import setup_logging, log_function

__all__ = ["setup_logging", "log_function"]

"""
Centralized Logging Utilities and Decorators

Provides the logging setup and function decorator shared by the sync engine,
the database layer and the AI show-note pipeline.

Usage:
    from src.logger import setup_logging, log_function

    logger = setup_logging(
        logger_name="sync_shows",
        log_file="logs/sync_shows.log",
        verbose=True,
    )

    @log_function(logger_name="sync_shows", log_args=True)
    def import_show(number):
        ...
"""

import functools
import logging
import time
from pathlib import Path
from typing import Optional, Callable, Any


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(
    logger_name: str,
    log_file: Optional[str] = None,
    verbose: bool = False,
    level: int = logging.INFO,
) -> logging.Logger:
    """
    Set up a named logger with a file handler and an optional console handler.

    Args:
        logger_name: Name for the logger (e.g., "sync_shows")
        log_file: Path to log file. Defaults to "<LOG_DIR>/<logger_name>.log"
        verbose: If True, also log DEBUG messages to the console
        level: Base logging level for the file handler

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(logger_name)

    # Already configured by an earlier call
    if logger.handlers:
        if verbose and not any(
            getattr(h, "_console", False) for h in logger.handlers
        ):
            logger.setLevel(logging.DEBUG)
            logger.addHandler(_console_handler())
        return logger

    logger.setLevel(logging.DEBUG if verbose else level)

    if log_file is None:
        from src.config import get_config

        log_file = str(Path(get_config().log_dir) / f"{logger_name}.log")

    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    file_handler = logging.FileHandler(log_path, encoding="utf-8")
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(file_handler)

    if verbose:
        logger.addHandler(_console_handler())

    return logger


def _console_handler() -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    handler._console = True
    return handler


def log_function(
    logger_name: Optional[str] = None,
    level: int = logging.INFO,
    log_args: bool = False,
    log_result: bool = False,
    log_execution_time: bool = True,
) -> Callable:
    """
    Decorator logging function entry, exit, execution time and exceptions.

    Exceptions are logged with traceback and re-raised unchanged.

    Args:
        logger_name: Logger to write to (defaults to the function's module name)
        level: Log level for entry/exit messages
        log_args: If True, include call arguments in the entry message
        log_result: If True, include the return value in the exit message
        log_execution_time: If True, include the duration in the exit message

    Example:
        @log_function(logger_name="sync_shows", log_args=True)
        def upsert_show(...):
            ...
    """

    def decorator(func: Callable) -> Callable:
        name = logger_name or func.__module__

        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            logger = logging.getLogger(name)

            func_name = func.__name__
            log_msg = f"Calling {func_name}"
            if log_args and (args or kwargs):
                args_repr = [repr(a) for a in args]
                kwargs_repr = [f"{k}={v!r}" for k, v in kwargs.items()]
                log_msg += f" with args: {', '.join(args_repr + kwargs_repr)}"
            logger.log(level, log_msg)

            start_time = time.time()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                execution_time = time.time() - start_time
                logger.error(
                    f"Exception in {func_name} after {execution_time:.2f}s: "
                    f"{type(e).__name__}: {e}",
                    exc_info=True,
                )
                raise

            completion_msg = f"Completed {func_name}"
            if log_execution_time:
                completion_msg += f" in {time.time() - start_time:.2f}s"
            if log_result:
                completion_msg += f" with result: {result!r}"
            logger.log(level, completion_msg)

            return result

        return wrapper

    return decorator

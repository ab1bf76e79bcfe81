"""Loguru logging configuration.

Call ``setup_logging()`` once at application startup to:
- configure loguru sinks (coloured stderr or JSON)
- intercept all stdlib ``logging`` records (uvicorn, openai, pinecone)
  and route them through loguru.
"""

from __future__ import annotations

import logging
import sys

from loguru import logger

_INTERCEPTED = ("uvicorn", "uvicorn.access", "uvicorn.error", "fastapi", "openai", "httpx", "pinecone")


class InterceptHandler(logging.Handler):
    """Redirect stdlib logging records to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back  # type: ignore[assignment]
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def setup_logging(*, level: str = "INFO", json: bool = False) -> None:
    """Configure loguru as the single logging backend.

    Args:
        level: Minimum log level (DEBUG, INFO, WARNING, ...).
        json: If True, emit structured JSON to stderr.
    """
    logger.remove()

    if json:
        logger.add(sys.stderr, level=level, serialize=True)
    else:
        logger.add(
            sys.stderr,
            level=level,
            format=(
                "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
                "<level>{level: <8}</level> | "
                "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
                "<level>{message}</level>"
            ),
            colorize=True,
        )

    intercept = InterceptHandler()
    for name in _INTERCEPTED:
        stdlib_logger = logging.getLogger(name)
        stdlib_logger.handlers = [intercept]
        stdlib_logger.propagate = False

    logging.root.handlers = [intercept]
    logging.root.setLevel(logging.getLevelName(level.upper()))

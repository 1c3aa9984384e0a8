"""Structured logging for the CATMAT Preços service.

structlog renders events through the stdlib root logger, so uvicorn,
httpx and application loggers share one output. Console output by default,
JSON lines when JSON_LOGS=true. When a ``logs/`` directory exists next to
the working directory, events are also appended to ``logs/catmat.log``.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Any

import structlog

LOG_FILE = Path("logs") / "catmat.log"


def _env_flag(name: str) -> bool:
    return os.getenv(name, "false").lower() == "true"


def configure_logging(level: str | None = None, json_logs: bool | None = None) -> None:
    """Configure structlog and the stdlib root logger.

    Args:
        level: Log level name; falls back to LOG_LEVEL, then INFO
        json_logs: Render JSON lines; falls back to JSON_LOGS
    """
    if json_logs is None:
        json_logs = _env_flag("JSON_LOGS")

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer(ensure_ascii=False)
        if json_logs
        else structlog.dev.ConsoleRenderer(),
    ]

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if LOG_FILE.parent.is_dir():
        handlers.append(logging.FileHandler(LOG_FILE, encoding="utf-8"))

    logging.basicConfig(
        format="%(message)s",
        handlers=handlers,
        level=(level or os.getenv("LOG_LEVEL") or "INFO").upper(),
    )

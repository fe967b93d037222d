"""Central logging helpers"""
from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List, Optional

import structlog
import structlog.stdlib

from connsettings.config import settings

_DEFAULT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def _build_file_handler(component: str) -> RotatingFileHandler:
    log_dir: Path = settings.log_dir
    log_dir.mkdir(parents=True, exist_ok=True)
    log_path = log_dir / f"{component}.log"
    handler = RotatingFileHandler(log_path, maxBytes=5 * 1024 * 1024, backupCount=5)
    handler.setFormatter(logging.Formatter(_DEFAULT_FORMAT))
    return handler


def _resolve_level(level: Optional[int]) -> int:
    if level is not None:
        return level
    resolved = logging.getLevelName(settings.log_level.upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def setup_logging(component: str = "connsettings", level: Optional[int] = None) -> None:
    """Configure structlog + stdlib logging for a component"""
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if settings.log_to_file:
        handlers.append(_build_file_handler(component))

    logging.basicConfig(level=_resolve_level(level), handlers=handlers, format=_DEFAULT_FORMAT)

    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.getLogger(__name__).info("logging_initialized", extra={"component": component})

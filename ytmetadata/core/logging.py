"""Structured logging configuration with per-request context"""

import hashlib
import logging
import sys
from typing import Optional
from uuid import uuid4

import structlog

# Third-party loggers that are noisy at INFO
QUIET_LOGGERS = ("googleapiclient.discovery_cache", "googleapiclient.discovery")


def hash_api_key(api_key: str) -> str:
    """
    Hash API key for safe logging

    Args:
        api_key: The API key to hash

    Returns:
        Hashed API key in format "sha256:first16chars"
    """
    return f"sha256:{hashlib.sha256(api_key.encode()).hexdigest()[:16]}"


def configure_logging(log_level: str = "INFO", log_format: str = "json") -> None:
    """
    Configure structured logging with structlog

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Output format ("json" or "console")
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=numeric_level,
    )
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=shared_processors + [renderer],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a configured logger instance"""
    return structlog.get_logger(name)


def bind_request(title: str, request_id: Optional[str] = None) -> str:
    """
    Bind request_id and title to the current context for one metadata request

    Every log line emitted while the request runs carries both keys. Each
    asyncio task has its own context, so concurrent requests do not mix.

    Args:
        title: Title being looked up
        request_id: Optional request ID, generates one if not provided

    Returns:
        The request_id that was bound
    """
    if request_id is None:
        request_id = f"meta_{uuid4().hex[:12]}"
    structlog.contextvars.bind_contextvars(request_id=request_id, title=title)
    return request_id


def get_request_id() -> Optional[str]:
    """Get the request_id bound to the current context, if any"""
    return structlog.contextvars.get_contextvars().get("request_id")


def clear_request() -> None:
    """Remove request keys from the current context"""
    structlog.contextvars.unbind_contextvars("request_id", "title")

"""Structured logging configuration using structlog.

Provides JSON logs in production and colored console output in development.
"""

from __future__ import annotations

import logging
import sys
import uuid
from contextlib import AbstractContextManager
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from overskill.core.config import ObservabilityConfig


def setup_logging(config: ObservabilityConfig) -> None:
    """Route stdlib ``logging`` records through structlog's formatter."""
    level = getattr(logging, config.log_level.upper(), logging.INFO)

    shared_processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if sys.stderr.isatty():
        # Dev mode: colored console
        renderer = structlog.dev.ConsoleRenderer()
    else:
        # Production: JSON lines
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    structlog.contextvars.bind_contextvars(service=config.service_name)
    logging.getLogger("overskill").setLevel(level)


def build_log_context(strategy: str, file_count: int) -> AbstractContextManager:
    """Bind per-build fields to every record logged while one prompt is assembled.

    Each build gets a short ``build_id`` so classifier, assembler and budget
    records from concurrent builds can be told apart.
    """
    return structlog.contextvars.bound_contextvars(
        build_id=uuid.uuid4().hex[:12],
        strategy=strategy,
        file_count=file_count,
    )

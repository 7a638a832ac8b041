"""Process-level hooks: logging setup and per-build log context."""

from __future__ import annotations

from overskill.hooks.logging_config import build_log_context, setup_logging

__all__ = ["build_log_context", "setup_logging"]

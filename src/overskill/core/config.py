"""Nested pydantic-settings configuration for the prompt cache engine.

Each group reads its own ``OVERSKILL_<GROUP>_*`` env vars::

    export OVERSKILL_CACHE_MAX_SEGMENTS=4
    export OVERSKILL_TRACKER_BACKEND=redis
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings


class CacheBudgetConfig(BaseSettings):
    """Provider cache limits and assembly thresholds.

    Env vars use ``OVERSKILL_CACHE_`` prefix::

        export OVERSKILL_CACHE_MIN_CACHEABLE_CHARS=4096
    """

    model_config = {"env_prefix": "OVERSKILL_CACHE_"}

    max_segments: int = Field(default=4, ge=1)
    min_cacheable_chars: int = Field(default=4096, ge=0)
    recent_window_seconds: float = Field(default=300.0, ge=0.0)
    chars_per_token: float = Field(default=4.0, gt=0.0)


class TrackerConfig(BaseSettings):
    """File stability tracker configuration.

    Env vars use ``OVERSKILL_TRACKER_`` prefix. ``backend="none"`` selects the
    static path-rule classification.
    """

    model_config = {"env_prefix": "OVERSKILL_TRACKER_"}

    backend: Literal["none", "memory", "redis"] = "none"
    redis_url: str = ""
    key_prefix: str = "overskill"
    hash_ttl_seconds: int = 3600
    change_log_ttl_seconds: int = 86_400
    change_log_max_size: int = Field(default=1000, ge=1)
    frequency_window_seconds: float = Field(default=86_400.0, gt=0.0)


class WireFormatConfig(BaseSettings):
    """Provider TTL strings for each retention tier.

    Env vars use ``OVERSKILL_WIRE_`` prefix.
    """

    model_config = {"env_prefix": "OVERSKILL_WIRE_"}

    short_ttl: str = "5m"
    medium_ttl: str = "1h"
    long_ttl: str = "1h"


class ObservabilityConfig(BaseSettings):
    """Observability configuration.

    Env vars use ``OVERSKILL_OBSERVABILITY_`` prefix.
    """

    model_config = {"env_prefix": "OVERSKILL_OBSERVABILITY_"}

    service_name: str = "overskill"
    log_level: str = "INFO"


class AppSettings(BaseSettings):
    """Top-level settings aggregating all sub-configs."""

    cache: CacheBudgetConfig = CacheBudgetConfig()
    tracker: TrackerConfig = TrackerConfig()
    wire: WireFormatConfig = WireFormatConfig()
    observability: ObservabilityConfig = ObservabilityConfig()

"""File stability trackers: factory + backend implementations."""

from __future__ import annotations

from typing import TYPE_CHECKING

from overskill.tracking.memory import MemoryStabilityTracker

if TYPE_CHECKING:
    from overskill.core.config import TrackerConfig
    from overskill.prompt_cache.protocols import IStabilityTracker

__all__ = [
    "MemoryStabilityTracker",
    "create_stability_tracker",
]


def create_stability_tracker(
    settings: object | None = None,
    scope: str = "default",
) -> IStabilityTracker | None:
    """Create a stability tracker from settings.

    Args:
        settings: An ``AppSettings`` or ``TrackerConfig`` instance.
            If None, no tracker is created.
        scope: Namespace for tracked paths, typically the app id.

    Returns:
        A tracker, or None when the backend is ``"none"`` (static path rules).
    """
    config: TrackerConfig | None = None

    if settings is not None:
        config = getattr(settings, "tracker", None)
        if config is None and hasattr(settings, "backend"):
            config = settings  # type: ignore[assignment]

    if config is None or config.backend == "none":
        return None

    backend = config.backend
    if backend == "memory":
        return MemoryStabilityTracker(
            change_log_ttl_seconds=config.change_log_ttl_seconds,
            change_log_max_size=config.change_log_max_size,
            frequency_window_seconds=config.frequency_window_seconds,
        )
    elif backend == "redis":
        from overskill.tracking.redis import RedisStabilityTracker

        return RedisStabilityTracker(
            scope,
            url=config.redis_url,
            key_prefix=config.key_prefix,
            hash_ttl_seconds=config.hash_ttl_seconds,
            change_log_ttl_seconds=config.change_log_ttl_seconds,
            change_log_max_size=config.change_log_max_size,
            frequency_window_seconds=config.frequency_window_seconds,
        )
    else:
        raise ValueError(f"Unknown stability tracker backend: {backend!r}")

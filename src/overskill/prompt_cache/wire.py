"""Translation of segments into provider request shapes.

Retention tiers stay abstract inside the engine; this is the one place they
become provider TTL strings.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from overskill.prompt_cache.models import ContentSegment, RetentionTier

DEFAULT_TTLS: dict[RetentionTier, str] = {
    RetentionTier.SHORT: "5m",
    RetentionTier.MEDIUM: "1h",
    RetentionTier.LONG: "1h",
}


def ttl_map_from_settings(settings: object | None = None) -> dict[RetentionTier, str]:
    """Read tier TTLs from an ``AppSettings`` or ``WireFormatConfig``."""
    config = getattr(settings, "wire", settings)
    if config is None:
        return dict(DEFAULT_TTLS)
    return {
        RetentionTier.SHORT: config.short_ttl,  # type: ignore[attr-defined]
        RetentionTier.MEDIUM: config.medium_ttl,  # type: ignore[attr-defined]
        RetentionTier.LONG: config.long_ttl,  # type: ignore[attr-defined]
    }


def to_system_blocks(
    segments: Sequence[ContentSegment],
    ttl_map: Mapping[RetentionTier, str] | None = None,
) -> list[dict[str, Any]]:
    """Build Anthropic-style system content blocks with ``cache_control``."""
    ttls = DEFAULT_TTLS if ttl_map is None else ttl_map
    blocks: list[dict[str, Any]] = []
    for seg in segments:
        block: dict[str, Any] = {"type": "text", "text": seg.text}
        if seg.cacheable:
            cache_control = {"type": "ephemeral"}
            ttl = ttls.get(seg.retention)
            if ttl:
                cache_control["ttl"] = ttl
            block["cache_control"] = cache_control
        blocks.append(block)
    return blocks


def join_segments(segments: Sequence[ContentSegment]) -> str:
    """Single-string system prompt for providers without block caching."""
    return "\n\n".join(seg.text for seg in segments)

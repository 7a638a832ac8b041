"""Approximate token accounting for prompt cache telemetry.

Nothing here feeds back into classification, assembly or budget
enforcement; it only describes the result for logs.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

from overskill.prompt_cache.models import ContentSegment

DEFAULT_CHARS_PER_TOKEN = 4.0

# Cache reads are billed at roughly a tenth of the normal input price
CACHE_READ_DISCOUNT = 0.9


@dataclass
class PromptCacheSummary:
    """Token accounting for one assembled prompt."""

    segment_count: int = 0
    cached_segment_count: int = 0
    total_chars: int = 0
    total_tokens: int = 0
    cacheable_tokens: int = 0

    @property
    def cacheable_fraction(self) -> float:
        """Fraction of estimated tokens that sit in cacheable segments."""
        return self.cacheable_tokens / self.total_tokens if self.total_tokens > 0 else 0.0

    @property
    def estimated_savings_ratio(self) -> float:
        """Input-cost reduction on a full cache hit (0.9x savings per cached token)."""
        return self.cacheable_fraction * CACHE_READ_DISCOUNT

    def as_log_fields(self) -> dict[str, float | int]:
        return {
            "segments": self.segment_count,
            "cached_segments": self.cached_segment_count,
            "chars": self.total_chars,
            "tokens": self.total_tokens,
            "cacheable_tokens": self.cacheable_tokens,
            "cacheable_fraction": round(self.cacheable_fraction, 3),
        }


class CostEstimator:
    """Constant-ratio token estimator (characters / ``chars_per_token``, rounded up)."""

    def __init__(self, chars_per_token: float = DEFAULT_CHARS_PER_TOKEN) -> None:
        if chars_per_token <= 0:
            raise ValueError(f"chars_per_token must be positive, got {chars_per_token}")
        self._chars_per_token = chars_per_token

    @classmethod
    def from_settings(cls, settings: object | None = None) -> CostEstimator:
        config = getattr(settings, "cache", settings)
        if config is None:
            return cls()
        return cls(chars_per_token=config.chars_per_token)  # type: ignore[attr-defined]

    def estimate_tokens(self, text: str) -> int:
        if not text:
            return 0
        return math.ceil(len(text) / self._chars_per_token)

    def projected_cacheable_fraction(self, segments: Sequence[ContentSegment]) -> float:
        return self.summarize(segments).cacheable_fraction

    def summarize(self, segments: Sequence[ContentSegment]) -> PromptCacheSummary:
        summary = PromptCacheSummary(segment_count=len(segments))
        for seg in segments:
            tokens = self.estimate_tokens(seg.text)
            summary.total_chars += len(seg.text)
            summary.total_tokens += tokens
            if seg.cacheable:
                summary.cached_segment_count += 1
                summary.cacheable_tokens += tokens
        return summary

"""Tests for CostEstimator and PromptCacheSummary."""

from __future__ import annotations

import pytest

from overskill.core.config import CacheBudgetConfig
from overskill.prompt_cache.cost import CostEstimator, PromptCacheSummary
from overskill.prompt_cache.models import ContentSegment, RetentionTier


class TestEstimateTokens:
    @pytest.mark.parametrize(("text", "expected"), [("", 0), ("abcd", 1), ("abcde", 2), ("x" * 4000, 1000)])
    def test_default_ratio_rounds_up(self, text: str, expected: int) -> None:
        assert CostEstimator().estimate_tokens(text) == expected

    def test_custom_ratio(self) -> None:
        assert CostEstimator(chars_per_token=3.5).estimate_tokens("x" * 7) == 2

    def test_from_settings(self) -> None:
        estimator = CostEstimator.from_settings(CacheBudgetConfig(chars_per_token=2.0))
        assert estimator.estimate_tokens("abcd") == 2

    @pytest.mark.parametrize("ratio", [0, -1.0])
    def test_rejects_non_positive_ratio(self, ratio: float) -> None:
        with pytest.raises(ValueError):
            CostEstimator(chars_per_token=ratio)


class TestCacheableFraction:
    def test_fraction(self) -> None:
        segments = [
            ContentSegment.cached("x" * 300, RetentionTier.LONG),
            ContentSegment.uncached("y" * 100),
        ]
        assert CostEstimator().projected_cacheable_fraction(segments) == pytest.approx(0.75)

    def test_empty_is_zero(self) -> None:
        assert CostEstimator().projected_cacheable_fraction([]) == 0.0

    def test_summary_fields(self) -> None:
        segments = [
            ContentSegment.cached("x" * 400, RetentionTier.LONG),
            ContentSegment.cached("x" * 400, RetentionTier.SHORT),
            ContentSegment.uncached("y" * 200),
        ]
        summary = CostEstimator().summarize(segments)

        assert summary.segment_count == 3
        assert summary.cached_segment_count == 2
        assert summary.total_chars == 1000
        assert summary.total_tokens == 250
        assert summary.cacheable_tokens == 200
        assert summary.estimated_savings_ratio == pytest.approx(0.72)


class TestPromptCacheSummary:
    def test_defaults(self) -> None:
        s = PromptCacheSummary()
        assert s.cacheable_fraction == 0.0
        assert s.estimated_savings_ratio == 0.0

    def test_log_fields(self) -> None:
        fields = PromptCacheSummary(segment_count=2, total_tokens=3, cacheable_tokens=1).as_log_fields()
        assert fields["segments"] == 2
        assert fields["cacheable_fraction"] == pytest.approx(0.333)

"""Tests for prompt cache data models."""

from __future__ import annotations

import dataclasses

import pytest

from overskill.exceptions import BudgetConfigurationError
from overskill.prompt_cache.models import (
    CacheBudget,
    ClassifiedFiles,
    ContentSegment,
    RetentionTier,
    SourceFile,
    StabilityClass,
)


class TestRetentionTier:
    def test_ordering(self) -> None:
        assert RetentionTier.NONE < RetentionTier.SHORT < RetentionTier.MEDIUM < RetentionTier.LONG


class TestContentSegment:
    """ContentSegment must keep cacheable and retention consistent."""

    def test_uncached_defaults(self) -> None:
        seg = ContentSegment.uncached("dynamic")
        assert seg.cacheable is False
        assert seg.retention is RetentionTier.NONE

    def test_cached_factory(self) -> None:
        seg = ContentSegment.cached("stable", RetentionTier.LONG)
        assert seg.cacheable is True
        assert seg.retention is RetentionTier.LONG

    def test_cached_factory_with_none_is_uncached(self) -> None:
        seg = ContentSegment.cached("text", RetentionTier.NONE)
        assert seg.cacheable is False

    def test_uncacheable_with_retention_rejected(self) -> None:
        with pytest.raises(ValueError, match="Inconsistent"):
            ContentSegment(text="x", cacheable=False, retention=RetentionTier.SHORT)

    def test_cacheable_without_retention_rejected(self) -> None:
        with pytest.raises(ValueError, match="Inconsistent"):
            ContentSegment(text="x", cacheable=True, retention=RetentionTier.NONE)

    def test_immutable(self) -> None:
        seg = ContentSegment.uncached("x")
        with pytest.raises(dataclasses.FrozenInstanceError):
            seg.text = "y"  # type: ignore[misc]


class TestCacheBudget:
    def test_defaults(self) -> None:
        budget = CacheBudget()
        assert budget.max_segments == 4
        assert budget.min_cacheable_chars == 4096

    def test_zero_segments_rejected(self) -> None:
        with pytest.raises(BudgetConfigurationError):
            CacheBudget(max_segments=0)

    def test_negative_segments_rejected_as_value_error(self) -> None:
        with pytest.raises(ValueError):
            CacheBudget(max_segments=-1)

    def test_negative_threshold_rejected(self) -> None:
        with pytest.raises(BudgetConfigurationError):
            CacheBudget(min_cacheable_chars=-5)

    def test_from_settings_none(self) -> None:
        assert CacheBudget.from_settings(None) == CacheBudget()


class TestClassifiedFiles:
    def test_group_lookup_and_counts(self) -> None:
        a = SourceFile("a.json", "{}")
        b = SourceFile("b.ts", "x")
        groups = ClassifiedFiles(stable=[a], volatile=[b])
        assert groups.group(StabilityClass.STABLE) == [a]
        assert groups.group(StabilityClass.SEMI_STABLE) == []
        assert groups.counts() == {"stable": 1, "semi_stable": 0, "active": 0, "volatile": 1}

    def test_all_files_most_stable_first(self) -> None:
        a = SourceFile("a", "1")
        b = SourceFile("b", "2")
        c = SourceFile("c", "3")
        groups = ClassifiedFiles(stable=[c], active=[a], volatile=[b])
        assert groups.all_files() == [c, a, b]

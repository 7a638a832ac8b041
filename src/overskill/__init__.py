"""overskill: cache-optimized system prompt assembly for app generation.

Usage::

    from overskill import BuildContext, PromptCacheBuilder, SourceFile

    segments = PromptCacheBuilder().build(BuildContext(
        base_instructions="You build React apps.",
        files=[SourceFile(path="src/App.tsx", content=source)],
    ))
"""

from __future__ import annotations

from overskill.core.config import AppSettings
from overskill.prompt_cache import (
    MAX_SEGMENTS,
    MIN_CACHEABLE_CHARS,
    AssemblyStrategy,
    BreakpointBudgetEnforcer,
    BuildContext,
    BuildResult,
    CacheBudget,
    ClassifiedFiles,
    ContentSegment,
    ContextFragmentRenderer,
    CostEstimator,
    IStabilityTracker,
    PromptCacheBuilder,
    PromptCacheSummary,
    RetentionTier,
    SegmentAssembler,
    SourceFile,
    StabilityClass,
    StabilityClassifier,
    join_segments,
    to_system_blocks,
)
from overskill.tracking import MemoryStabilityTracker, create_stability_tracker

__all__ = [
    "MAX_SEGMENTS",
    "MIN_CACHEABLE_CHARS",
    "AppSettings",
    "AssemblyStrategy",
    "BreakpointBudgetEnforcer",
    "BuildContext",
    "BuildResult",
    "CacheBudget",
    "ClassifiedFiles",
    "ContentSegment",
    "ContextFragmentRenderer",
    "CostEstimator",
    "IStabilityTracker",
    "MemoryStabilityTracker",
    "PromptCacheBuilder",
    "PromptCacheSummary",
    "RetentionTier",
    "SegmentAssembler",
    "SourceFile",
    "StabilityClass",
    "StabilityClassifier",
    "create_stability_tracker",
    "join_segments",
    "to_system_blocks",
]

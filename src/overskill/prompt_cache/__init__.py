"""System-prompt cache assembly: classification, assembly, budget and telemetry.

Build a prompt::

    from overskill.prompt_cache import BuildContext, PromptCacheBuilder

    segments = PromptCacheBuilder().build(BuildContext(base_instructions="..."))
"""

from __future__ import annotations

from overskill.prompt_cache.assembly import SegmentAssembler
from overskill.prompt_cache.budget import BreakpointBudgetEnforcer
from overskill.prompt_cache.builder import BuildResult, PromptCacheBuilder, select_strategy
from overskill.prompt_cache.classification import StabilityClassifier
from overskill.prompt_cache.cost import CostEstimator, PromptCacheSummary
from overskill.prompt_cache.models import (
    MAX_SEGMENTS,
    MIN_CACHEABLE_CHARS,
    AssemblyStrategy,
    BuildContext,
    CacheBudget,
    ClassifiedFiles,
    ContentSegment,
    RetentionTier,
    SourceFile,
    StabilityClass,
)
from overskill.prompt_cache.protocols import IStabilityTracker
from overskill.prompt_cache.rendering import ContextFragmentRenderer
from overskill.prompt_cache.wire import join_segments, to_system_blocks

__all__ = [
    "MAX_SEGMENTS",
    "MIN_CACHEABLE_CHARS",
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
    "PromptCacheBuilder",
    "PromptCacheSummary",
    "RetentionTier",
    "SegmentAssembler",
    "SourceFile",
    "StabilityClass",
    "StabilityClassifier",
    "join_segments",
    "select_strategy",
    "to_system_blocks",
]

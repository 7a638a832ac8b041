"""PromptCacheBuilder: the single entry point for system-prompt assembly.

    classify files -> assemble segments -> enforce breakpoint budget -> log summary

Strategy selection: GRANULAR when the build context carries a stability
tracker, COARSE otherwise.
"""

from __future__ import annotations

import dataclasses
import logging

from overskill.hooks.logging_config import build_log_context
from overskill.prompt_cache.assembly import SegmentAssembler
from overskill.prompt_cache.budget import BreakpointBudgetEnforcer
from overskill.prompt_cache.classification import StabilityClassifier
from overskill.prompt_cache.cost import CostEstimator, PromptCacheSummary
from overskill.prompt_cache.models import (
    AssemblyStrategy,
    BuildContext,
    CacheBudget,
    ContentSegment,
)
from overskill.prompt_cache.rendering import ContextFragmentRenderer

log = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class BuildResult:
    """Segments plus a description of how they were produced."""

    segments: list[ContentSegment]
    strategy: AssemblyStrategy
    classification_source: str
    summary: PromptCacheSummary


class PromptCacheBuilder:
    """Builds cache-optimized system prompt segments.

    Usage::

        builder = PromptCacheBuilder(settings=AppSettings())
        segments = builder.build(BuildContext(
            base_instructions=prompt,
            files=files,
            context_map={"iteration_data": {...}},
            stability_source=tracker,
        ))
    """

    def __init__(
        self,
        budget: CacheBudget | None = None,
        *,
        classifier: StabilityClassifier | None = None,
        renderer: ContextFragmentRenderer | None = None,
        estimator: CostEstimator | None = None,
        settings: object | None = None,
    ) -> None:
        self._budget = budget or CacheBudget.from_settings(settings)
        self._classifier = classifier or StabilityClassifier.from_settings(settings)
        self._estimator = estimator or CostEstimator.from_settings(settings)
        self._assembler = SegmentAssembler(
            min_cacheable_chars=self._budget.min_cacheable_chars,
            renderer=renderer,
        )
        self._enforcer = BreakpointBudgetEnforcer(self._budget.max_segments)

    @property
    def budget(self) -> CacheBudget:
        return self._budget

    def build(self, ctx: BuildContext) -> list[ContentSegment]:
        return self.build_result(ctx).segments

    def build_result(
        self,
        ctx: BuildContext,
        strategy: AssemblyStrategy | None = None,
    ) -> BuildResult:
        """Run one full build. ``strategy`` overrides tracker-based selection."""
        if strategy is None:
            strategy = select_strategy(ctx)

        with build_log_context(strategy.value, len(ctx.files)):
            groups = self._classifier.classify(ctx.files, ctx.stability_source)
            segments = self._assembler.assemble(ctx, groups, strategy)
            segments = self._enforcer.enforce(segments)

            summary = self._estimator.summarize(segments)
            log.info(
                "Assembled system prompt: strategy=%s classification=%s groups=%s %s",
                strategy.value,
                groups.source,
                groups.counts(),
                " ".join(f"{k}={v}" for k, v in summary.as_log_fields().items()),
            )

        return BuildResult(
            segments=segments,
            strategy=strategy,
            classification_source=groups.source,
            summary=summary,
        )


def select_strategy(ctx: BuildContext) -> AssemblyStrategy:
    if ctx.stability_source is not None:
        return AssemblyStrategy.GRANULAR
    return AssemblyStrategy.COARSE

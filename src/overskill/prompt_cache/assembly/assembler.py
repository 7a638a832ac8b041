"""SegmentAssembler: turns classified files and context into ordered segments."""

from __future__ import annotations

import logging

from overskill.prompt_cache.assembly.strategies import STRATEGIES, SegmentPlan
from overskill.prompt_cache.models import (
    MIN_CACHEABLE_CHARS,
    AssemblyStrategy,
    BuildContext,
    ClassifiedFiles,
    ContentSegment,
    RetentionTier,
)
from overskill.prompt_cache.protocols import IStabilityTracker
from overskill.prompt_cache.rendering import ContextFragmentRenderer

log = logging.getLogger(__name__)


class SegmentAssembler:
    """Builds the ordered segment list for one prompt.

    Output order is longest retention first; segments with equal retention
    keep the strategy's nominal order. Uncached segments therefore always
    trail the cached prefix.

    Usage::

        assembler = SegmentAssembler(min_cacheable_chars=4096)
        segments = assembler.assemble(ctx, groups, AssemblyStrategy.GRANULAR)
    """

    def __init__(
        self,
        min_cacheable_chars: int = MIN_CACHEABLE_CHARS,
        renderer: ContextFragmentRenderer | None = None,
    ) -> None:
        self._min_cacheable_chars = min_cacheable_chars
        self._renderer = renderer or ContextFragmentRenderer()

    def plan(
        self,
        ctx: BuildContext,
        groups: ClassifiedFiles,
        strategy: AssemblyStrategy,
    ) -> list[SegmentPlan]:
        """Return the ordered, non-empty segment plans without side effects."""
        fragments = self._renderer.render_fragments(ctx.context_map)
        plans = STRATEGIES[strategy](ctx, groups, fragments, self._min_cacheable_chars)
        plans = [p for p in plans if p.text.strip()]
        return sorted(plans, key=lambda p: -p.retention)

    def assemble(
        self,
        ctx: BuildContext,
        groups: ClassifiedFiles,
        strategy: AssemblyStrategy,
    ) -> list[ContentSegment]:
        plans = self.plan(ctx, groups, strategy)

        if ctx.stability_source is not None:
            _track_cached_files(ctx.stability_source, plans)

        for idx, p in enumerate(plans, start=1):
            log.debug(
                "Segment %d: %s retention=%s chars=%d files=%d",
                idx,
                p.category,
                p.retention.name,
                len(p.text),
                len(p.files),
            )

        return [ContentSegment.cached(p.text, p.retention) for p in plans]


def _track_cached_files(tracker: IStabilityTracker, plans: list[SegmentPlan]) -> None:
    """Report every file placed in a cached segment to the tracker."""
    for p in plans:
        if p.retention is RetentionTier.NONE:
            continue
        for f in p.files:
            try:
                tracker.track_file_change(f.path, f.content)
            except Exception as e:
                log.warning("Failed to track %s: %s: %s", f.path, type(e).__name__, e)

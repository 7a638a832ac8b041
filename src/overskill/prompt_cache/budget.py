"""Breakpoint budget enforcement.

Providers cap the number of system-prompt blocks that may carry a cache
breakpoint (Anthropic allows 4). When assembly produces more segments than
the budget allows, trailing segments are folded into their predecessor, tail
first, so the earliest and most cache-worthy segments are merged last.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Sequence

from overskill.exceptions import BudgetConfigurationError
from overskill.prompt_cache.models import MAX_SEGMENTS, ContentSegment, RetentionTier

log = logging.getLogger(__name__)


class BreakpointBudgetEnforcer:
    """Contracts a segment list to at most ``max_segments`` entries."""

    def __init__(self, max_segments: int = MAX_SEGMENTS) -> None:
        if max_segments < 1:
            raise BudgetConfigurationError(f"max_segments must be at least 1, got {max_segments}")
        self._max_segments = max_segments

    @property
    def max_segments(self) -> int:
        return self._max_segments

    def enforce(self, segments: Sequence[ContentSegment]) -> list[ContentSegment]:
        """Fold tail segments until the budget holds. The input is not modified.

        A merged segment that absorbs uncacheable text loses its cache
        directive.
        """
        result = list(segments)
        folds = 0
        while len(result) > self._max_segments:
            tail = result.pop()
            result[-1] = merge_segments(result[-1], tail)
            folds += 1

        if folds:
            log.info(
                "Folded %d trailing segment(s) to fit a budget of %d",
                folds,
                self._max_segments,
            )
        return result


def merge_segments(head: ContentSegment, tail: ContentSegment) -> ContentSegment:
    """Append ``tail`` to ``head``; the result is cacheable only if both are."""
    text = f"{head.text}\n\n{tail.text}"
    if not tail.cacheable:
        return ContentSegment.uncached(text)
    return dataclasses.replace(head, text=text)

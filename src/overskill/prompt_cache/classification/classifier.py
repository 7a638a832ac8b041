"""StabilityClassifier: partitions source files into volatility groups.

With a stability tracker attached, classification uses the tracker's change
log and scores. Without one, or when the tracker fails, it falls back to the
static path rules in ``path_rules``.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable

from overskill.prompt_cache.classification.path_rules import classify_path
from overskill.prompt_cache.models import ClassifiedFiles, SourceFile, StabilityClass
from overskill.prompt_cache.protocols import IStabilityTracker

log = logging.getLogger(__name__)

DEFAULT_RECENT_WINDOW_SECONDS = 300.0


def score_to_class(score: float) -> StabilityClass:
    """Map a 0-10 stability score onto a volatility class."""
    if score >= 8:
        return StabilityClass.STABLE
    if score >= 5:
        return StabilityClass.SEMI_STABLE
    if score >= 2:
        return StabilityClass.ACTIVE
    return StabilityClass.VOLATILE


class StabilityClassifier:
    """Groups files by how likely they are to change before the next build.

    Usage::

        classifier = StabilityClassifier(recent_window_seconds=300)
        groups = classifier.classify(files, tracker)
    """

    def __init__(
        self,
        recent_window_seconds: float = DEFAULT_RECENT_WINDOW_SECONDS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._recent_window_seconds = recent_window_seconds
        self._clock = clock

    @classmethod
    def from_settings(cls, settings: object | None = None) -> StabilityClassifier:
        config = getattr(settings, "cache", settings)
        if config is None:
            return cls()
        return cls(recent_window_seconds=config.recent_window_seconds)  # type: ignore[attr-defined]

    def classify(
        self,
        files: Iterable[SourceFile],
        tracker: IStabilityTracker | None = None,
    ) -> ClassifiedFiles:
        """Partition ``files`` into four groups, each sorted largest first.

        Never raises on tracker failure: any exception from the tracker
        switches the whole call to static path rules.
        """
        files = list(files)

        if tracker is not None:
            try:
                classes = self._classify_with_tracker(files, tracker)
                return self._group(files, classes, source="tracker")
            except Exception as e:
                log.warning(
                    "Stability tracker failed (%s: %s); falling back to path rules",
                    type(e).__name__,
                    e,
                )

        classes = [classify_path(f.path) for f in files]
        return self._group(files, classes, source="path_rules")

    def _classify_with_tracker(
        self,
        files: list[SourceFile],
        tracker: IStabilityTracker,
    ) -> list[StabilityClass]:
        since = self._clock() - self._recent_window_seconds
        recent = set(tracker.changed_since(since))

        classes: list[StabilityClass] = []
        for f in files:
            # Recency dominates any historical score
            if f.path in recent:
                classes.append(StabilityClass.VOLATILE)
            else:
                classes.append(score_to_class(tracker.stability_score(f.path)))
        return classes

    @staticmethod
    def _group(
        files: list[SourceFile],
        classes: list[StabilityClass],
        *,
        source: str,
    ) -> ClassifiedFiles:
        result = ClassifiedFiles(source=source)
        for f, stability in zip(files, classes):
            result.group(stability).append(f)

        # sorted() is stable, so equal sizes keep input order
        for stability in StabilityClass:
            group = result.group(stability)
            group[:] = sorted(group, key=lambda f: -len(f.content))

        log.debug("Classified %d files via %s: %s", len(files), source, result.counts())
        return result

"""Data models for system-prompt cache assembly."""

from __future__ import annotations

import dataclasses
import enum
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from overskill.exceptions import BudgetConfigurationError

if TYPE_CHECKING:
    from overskill.prompt_cache.protocols import IStabilityTracker

MAX_SEGMENTS = 4
MIN_CACHEABLE_CHARS = 4096


@dataclasses.dataclass(frozen=True)
class SourceFile:
    """Read-only snapshot of one generated-app file."""

    path: str
    content: str


class StabilityClass(str, enum.Enum):
    """How often a file is expected to change between prompt builds."""

    STABLE = "stable"
    SEMI_STABLE = "semi_stable"
    ACTIVE = "active"
    VOLATILE = "volatile"


class RetentionTier(enum.IntEnum):
    """How long a cached segment should live. Ordered: NONE < SHORT < MEDIUM < LONG."""

    NONE = 0
    SHORT = 1
    MEDIUM = 2
    LONG = 3


class AssemblyStrategy(str, enum.Enum):
    """Segment ordering strategy."""

    COARSE = "coarse"
    GRANULAR = "granular"


@dataclasses.dataclass(frozen=True)
class ContentSegment:
    """One block of the system prompt, with its cache directive.

    ``cacheable`` and ``retention`` must agree: an uncacheable segment always
    has ``RetentionTier.NONE`` and a cacheable one never does.
    """

    text: str
    cacheable: bool = False
    retention: RetentionTier = RetentionTier.NONE

    def __post_init__(self) -> None:
        if self.cacheable != (self.retention is not RetentionTier.NONE):
            raise ValueError(
                f"Inconsistent segment cache directive: cacheable={self.cacheable} "
                f"retention={self.retention.name}"
            )

    @classmethod
    def cached(cls, text: str, retention: RetentionTier) -> ContentSegment:
        """Build a segment that carries a cache directive (unless ``retention`` is NONE)."""
        return cls(text=text, cacheable=retention is not RetentionTier.NONE, retention=retention)

    @classmethod
    def uncached(cls, text: str) -> ContentSegment:
        return cls(text=text)


@dataclasses.dataclass(frozen=True)
class CacheBudget:
    """Provider-imposed limits on cache breakpoints and minimum cacheable size."""

    max_segments: int = MAX_SEGMENTS
    min_cacheable_chars: int = MIN_CACHEABLE_CHARS

    def __post_init__(self) -> None:
        if self.max_segments < 1:
            raise BudgetConfigurationError(
                f"max_segments must be at least 1, got {self.max_segments}"
            )
        if self.min_cacheable_chars < 0:
            raise BudgetConfigurationError(
                f"min_cacheable_chars must be non-negative, got {self.min_cacheable_chars}"
            )

    @classmethod
    def from_settings(cls, settings: object | None = None) -> CacheBudget:
        """Create a budget from an ``AppSettings`` or ``CacheBudgetConfig``."""
        config = getattr(settings, "cache", settings)
        if config is None:
            return cls()
        return cls(
            max_segments=config.max_segments,  # type: ignore[attr-defined]
            min_cacheable_chars=config.min_cacheable_chars,  # type: ignore[attr-defined]
        )


@dataclasses.dataclass
class BuildContext:
    """Everything one prompt build needs. Created per call, never retained."""

    base_instructions: str = ""
    files: list[SourceFile] = dataclasses.field(default_factory=list)
    context_map: Mapping[str, Any] = dataclasses.field(default_factory=dict)
    stability_source: IStabilityTracker | None = None


@dataclasses.dataclass
class ClassifiedFiles:
    """Files partitioned by volatility, each group sorted largest first."""

    stable: list[SourceFile] = dataclasses.field(default_factory=list)
    semi_stable: list[SourceFile] = dataclasses.field(default_factory=list)
    active: list[SourceFile] = dataclasses.field(default_factory=list)
    volatile: list[SourceFile] = dataclasses.field(default_factory=list)
    source: str = "path_rules"

    def group(self, stability: StabilityClass) -> list[SourceFile]:
        return getattr(self, stability.value)

    def all_files(self) -> list[SourceFile]:
        """Every file, most stable group first."""
        return [*self.stable, *self.semi_stable, *self.active, *self.volatile]

    def counts(self) -> dict[str, int]:
        return {s.value: len(self.group(s)) for s in StabilityClass}

"""Segment ordering strategies.

Both strategies emit candidates in the nominal order instructions, files,
dynamic context. Each returns ``SegmentPlan``s whose retention already
reflects the size threshold; the assembler does the final ordering.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Sequence

from overskill.prompt_cache.assembly.formatting import format_context_block, format_file_group
from overskill.prompt_cache.classification.path_rules import is_ui_component_path
from overskill.prompt_cache.models import (
    AssemblyStrategy,
    BuildContext,
    ClassifiedFiles,
    RetentionTier,
    SourceFile,
)


@dataclasses.dataclass(frozen=True)
class SegmentPlan:
    """A segment before it becomes a ``ContentSegment``."""

    category: str
    text: str
    retention: RetentionTier = RetentionTier.NONE
    files: tuple[SourceFile, ...] = ()


StrategyFn = Callable[[BuildContext, ClassifiedFiles, Sequence[str], int], "list[SegmentPlan]"]


def _sized(
    category: str,
    text: str,
    retention: RetentionTier,
    min_cacheable_chars: int,
    files: Sequence[SourceFile] = (),
) -> SegmentPlan:
    """Drop the cache directive from text shorter than the threshold."""
    if len(text) < min_cacheable_chars:
        retention = RetentionTier.NONE
    return SegmentPlan(category=category, text=text, retention=retention, files=tuple(files))


def coarse_strategy(
    ctx: BuildContext,
    groups: ClassifiedFiles,
    fragments: Sequence[str],
    min_cacheable_chars: int,
) -> list[SegmentPlan]:
    """Instructions, all files as one template block, then dynamic context."""
    plans: list[SegmentPlan] = []

    if ctx.base_instructions.strip():
        plans.append(_sized("base_instructions", ctx.base_instructions, RetentionTier.LONG, min_cacheable_chars))

    files = groups.all_files()
    if files:
        text = format_file_group("template_files", files)
        plans.append(_sized("template_files", text, RetentionTier.LONG, min_cacheable_chars, files))

    if fragments:
        plans.append(SegmentPlan(category="dynamic_context", text=format_context_block(fragments)))

    return plans


def granular_strategy(
    ctx: BuildContext,
    groups: ClassifiedFiles,
    fragments: Sequence[str],
    min_cacheable_chars: int,
) -> list[SegmentPlan]:
    """Instructions, essential files, UI components, then everything volatile.

    File groups too small to cache are folded into the trailing dynamic
    segment ahead of the volatile files.
    """
    plans: list[SegmentPlan] = []
    trailing: list[str] = []

    if ctx.base_instructions.strip():
        plans.append(_sized("base_instructions", ctx.base_instructions, RetentionTier.LONG, min_cacheable_chars))

    essential = [*groups.stable, *groups.semi_stable]
    components = [f for f in groups.active if is_ui_component_path(f.path)]
    remaining_active = [f for f in groups.active if not is_ui_component_path(f.path)]

    for category, files, retention in (
        ("essential_files", essential, RetentionTier.LONG),
        ("ui_components", components, RetentionTier.SHORT),
    ):
        if not files:
            continue
        text = format_file_group(category, files)
        if len(text) >= min_cacheable_chars:
            plans.append(SegmentPlan(category=category, text=text, retention=retention, files=tuple(files)))
        else:
            trailing.append(text)

    if remaining_active:
        trailing.append(format_file_group("active_files", remaining_active))
    if groups.volatile:
        trailing.append(format_file_group("recently_changed", groups.volatile))
    if fragments:
        trailing.append(format_context_block(fragments))

    if trailing:
        plans.append(SegmentPlan(category="dynamic_context", text="\n\n".join(trailing)))

    return plans


STRATEGIES: dict[AssemblyStrategy, StrategyFn] = {
    AssemblyStrategy.COARSE: coarse_strategy,
    AssemblyStrategy.GRANULAR: granular_strategy,
}

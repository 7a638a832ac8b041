"""Segment assembly: file-group formatting and ordering strategies."""

from __future__ import annotations

from overskill.prompt_cache.assembly.assembler import SegmentAssembler
from overskill.prompt_cache.assembly.formatting import (
    detect_file_type,
    detect_language,
    format_context_block,
    format_file_group,
)
from overskill.prompt_cache.assembly.strategies import (
    STRATEGIES,
    SegmentPlan,
    coarse_strategy,
    granular_strategy,
)

__all__ = [
    "STRATEGIES",
    "SegmentAssembler",
    "SegmentPlan",
    "coarse_strategy",
    "detect_file_type",
    "detect_language",
    "format_context_block",
    "format_file_group",
    "granular_strategy",
]

"""Rendering of the dynamic context map into prompt text."""

from __future__ import annotations

from overskill.prompt_cache.rendering.fragments import (
    DEFAULT_RENDERERS,
    ContextFragmentRenderer,
    FragmentRenderer,
)

__all__ = [
    "DEFAULT_RENDERERS",
    "ContextFragmentRenderer",
    "FragmentRenderer",
]

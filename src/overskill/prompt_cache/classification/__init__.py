"""File volatility classification from a tracker or static path rules."""

from __future__ import annotations

from overskill.prompt_cache.classification.classifier import StabilityClassifier, score_to_class
from overskill.prompt_cache.classification.path_rules import classify_path, is_ui_component_path

__all__ = [
    "StabilityClassifier",
    "classify_path",
    "is_ui_component_path",
    "score_to_class",
]

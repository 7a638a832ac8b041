"""ContextFragmentRenderer: formats the per-iteration context map.

Each recognized key has its own renderer; unknown keys fall through to a
titled generic section. A renderer returns ``None`` to omit its section.
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Callable, Mapping
from typing import Any

from overskill.exceptions import ContextRenderError

log = logging.getLogger(__name__)

FragmentRenderer = Callable[[Any], "str | None"]

_USEFUL_CONTEXT_HEADER_RE = re.compile(r"\A# useful-context[ \t]*\r?\n(?:[ \t]*\r?\n)?")


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (Mapping, list, tuple, set)):
        return len(value) == 0
    return False


def _field(record: Any, name: str) -> Any:
    """Read ``name`` from a mapping or an attribute-style record; blank if missing."""
    if isinstance(record, Mapping):
        value = record.get(name, "")
    else:
        value = getattr(record, name, "")
    return "" if value is None else value


def render_base_template_context(value: Any) -> str | None:
    """Pre-formatted base context; its duplicate ``# useful-context`` header is stripped."""
    if _is_blank(value):
        return None
    cleaned = _USEFUL_CONTEXT_HEADER_RE.sub("", str(value), count=1)
    return cleaned if cleaned.strip() else None


def render_existing_files_context(value: Any) -> str | None:
    if _is_blank(value):
        return None
    return str(value)


def render_iteration_data(value: Any) -> str | None:
    data = value if value is not None else {}
    return "\n".join([
        f"### Iteration {_field(data, 'iteration')} of {_field(data, 'max_iterations')}",
        f"- Files generated: {_field(data, 'files_generated')}",
        f"- Last action: {_field(data, 'last_action')}",
        f"- Confidence: {_field(data, 'confidence')}%",
    ])


def render_recent_operations(value: Any) -> str | None:
    if _is_blank(value):
        return "### Recent Operations: None"
    if isinstance(value, (str, Mapping)):
        value = [value]

    lines = ["### Recent Operations:"]
    for op in value:
        if isinstance(op, str):
            lines.append(f"- {op}")
        else:
            lines.append(f"- {_field(op, 'type')}: {_field(op, 'description')}")
    return "\n".join(lines)


def render_verification_results(value: Any) -> str | None:
    if _is_blank(value):
        return None
    success = "Yes" if _field(value, "success") else "No"
    return "\n".join([
        "### Verification Results:",
        f"- Success: {success}",
        f"- Confidence: {_format_percentage(_field(value, 'confidence'))}",
    ])


def _format_percentage(raw: Any) -> str:
    try:
        confidence = float(raw)
    except (TypeError, ValueError):
        return f"{raw}%"
    if not math.isfinite(confidence):
        return f"{raw}%"
    # Fractions (0.0-1.0) are scaled; values already in percent are kept
    if 0.0 <= confidence <= 1.0:
        confidence *= 100
    return f"{round(confidence)}%"


def render_generic(key: str, value: Any) -> str | None:
    title = key.replace("_", " ").replace("-", " ").strip().title()
    return f"### {title}:\n{value}"


DEFAULT_RENDERERS: dict[str, FragmentRenderer] = {
    "base_template_context": render_base_template_context,
    "existing_files_context": render_existing_files_context,
    "iteration_data": render_iteration_data,
    "recent_operations": render_recent_operations,
    "verification_results": render_verification_results,
}


class ContextFragmentRenderer:
    """Renders an ordered context map into blank-line separated sections.

    Section order follows the map's insertion order. ``render`` never raises:
    a renderer that fails for its value has its section omitted.
    """

    def __init__(self, renderers: Mapping[str, FragmentRenderer] | None = None) -> None:
        self._renderers: dict[str, FragmentRenderer] = dict(
            DEFAULT_RENDERERS if renderers is None else renderers
        )

    def register(self, key: str, renderer: FragmentRenderer) -> None:
        """Add or replace the renderer used for ``key``."""
        self._renderers[key] = renderer

    def render_fragments(self, context_map: Mapping[str, Any]) -> list[str]:
        fragments: list[str] = []
        for key, value in context_map.items():
            try:
                fragment = self._render_one(str(key), value)
            except ContextRenderError as e:
                log.warning("Omitting context section %r: %s", key, e)
                continue
            if fragment is not None and fragment.strip():
                fragments.append(fragment.rstrip("\n"))
        return fragments

    def render(self, context_map: Mapping[str, Any]) -> str:
        return "\n\n".join(self.render_fragments(context_map))

    def _render_one(self, key: str, value: Any) -> str | None:
        renderer = self._renderers.get(key)
        try:
            if renderer is None:
                return render_generic(key, value)
            return renderer(value)
        except ContextRenderError:
            raise
        except Exception as e:
            raise ContextRenderError(f"{type(e).__name__}: {e}") from e

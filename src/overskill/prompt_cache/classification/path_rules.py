"""Static path-pattern rules used when no stability tracker is available.

Rules are checked in priority order; the first match wins.
"""

from __future__ import annotations

import re

from overskill.prompt_cache.models import StabilityClass

# Build, lockfile and tooling config at the app root.
STABLE_PATHS = frozenset({
    "package.json",
    "package-lock.json",
    "yarn.lock",
    "pnpm-lock.yaml",
    "bun.lockb",
    "tsconfig.json",
    "tsconfig.app.json",
    "tsconfig.node.json",
    "vite.config.ts",
    "vite.config.js",
    "tailwind.config.ts",
    "tailwind.config.js",
    "postcss.config.js",
    "postcss.config.cjs",
    "eslint.config.js",
    "components.json",
    "index.html",
})

# Framework entry points: edited occasionally, rarely rewritten.
ENTRY_PATHS = frozenset({
    "src/index.css",
    "src/main.tsx",
    "src/main.jsx",
    "src/App.tsx",
    "src/App.jsx",
})

_APP_CODE_RE = re.compile(r"^src/(components|pages)/")
_TEST_FILE_RE = re.compile(r"(\.(test|spec)\.[^/]+$)|(^|/)__tests__/")
_UI_COMPONENT_RE = re.compile(r"(^|/)components/.+\.(tsx|jsx)$")


def _normalize(path: str) -> str:
    path = path.replace("\\", "/")
    while path.startswith("./"):
        path = path[2:]
    return path


def is_test_path(path: str) -> bool:
    return bool(_TEST_FILE_RE.search(_normalize(path)))


def is_ui_component_path(path: str) -> bool:
    """True for React component sources under a ``components/`` directory."""
    path = _normalize(path)
    return bool(_UI_COMPONENT_RE.search(path)) and not is_test_path(path)


def classify_path(path: str) -> StabilityClass:
    """Classify one file from its path alone."""
    path = _normalize(path)
    if path in STABLE_PATHS:
        return StabilityClass.STABLE
    if path in ENTRY_PATHS:
        return StabilityClass.SEMI_STABLE
    if _APP_CODE_RE.match(path) and not is_test_path(path):
        return StabilityClass.ACTIVE
    return StabilityClass.VOLATILE

"""Text framing for file groups and the dynamic context block."""

from __future__ import annotations

import posixpath
from collections.abc import Sequence

from overskill.prompt_cache.models import SourceFile

CONTEXT_TAG = "useful-context"

FILE_TYPES = {
    ".ts": "typescript",
    ".tsx": "typescript",
    ".js": "javascript",
    ".jsx": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".rb": "ruby",
    ".py": "python",
    ".yml": "yaml",
    ".yaml": "yaml",
    ".json": "json",
    ".css": "styles",
    ".scss": "styles",
    ".sass": "styles",
    ".html": "template",
    ".erb": "template",
    ".md": "markdown",
}


# Fence languages differ from FILE_TYPES for styles and templates
FENCE_LANGUAGES = {
    ".ts": "typescript",
    ".tsx": "typescript",
    ".js": "javascript",
    ".jsx": "javascript",
    ".css": "css",
    ".html": "html",
    ".json": "json",
    ".rb": "ruby",
}


def _extension(path: str) -> str:
    _, ext = posixpath.splitext(path.replace("\\", "/"))
    return ext.lower()


def detect_file_type(path: str) -> str:
    """Return the content type label for ``path`` from its extension (default ``text``)."""
    return FILE_TYPES.get(_extension(path), "text")


def detect_language(path: str) -> str:
    """Return the code fence language for ``path`` (default ``text``)."""
    return FENCE_LANGUAGES.get(_extension(path), "text")


def format_file(file: SourceFile, tag: str = CONTEXT_TAG) -> str:
    content = file.content.rstrip("\n")
    return (
        f'<{tag} file="{file.path}" type="{detect_file_type(file.path)}">\n'
        f"```{detect_language(file.path)}\n"
        f"{content}\n"
        "```\n"
        f"</{tag}>"
    )


def format_file_group(category: str, files: Sequence[SourceFile], tag: str = CONTEXT_TAG) -> str:
    """Frame every file and prefix the group with a one-line category comment.

    Returns an empty string for an empty group.
    """
    if not files:
        return ""
    noun = "file" if len(files) == 1 else "files"
    header = f"<!-- {category}: {len(files)} {noun} -->"
    body = "\n\n".join(format_file(f, tag) for f in files)
    return f"{header}\n{body}"


def format_context_block(fragments: Sequence[str], tag: str = CONTEXT_TAG) -> str:
    """Wrap rendered context fragments in a single tagged block."""
    if not fragments:
        return ""
    return f"<{tag}>\n" + "\n\n".join(fragments) + f"\n</{tag}>"

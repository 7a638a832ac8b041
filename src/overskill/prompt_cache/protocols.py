"""Collaborator protocol for file stability tracking."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class IStabilityTracker(Protocol):
    """Records file content changes and scores how stable each file is.

    Implementations own their synchronization: overlapping prompt builds may
    call ``track_file_change`` while other builds read scores.
    """

    def stability_score(self, path: str) -> int:
        """Return 0 (changes constantly) to 10 (never changes)."""
        ...

    def changed_since(self, timestamp: float) -> set[str]:
        """Return the paths whose content changed at or after ``timestamp`` (epoch seconds)."""
        ...

    def track_file_change(self, path: str, content: str) -> bool:
        """Record the content seen for ``path``. Returns True if it differs from the last one."""
        ...

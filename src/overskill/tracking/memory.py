"""In-process file stability tracker."""

from __future__ import annotations

import hashlib
import logging
import math
import threading
import time
from collections import deque
from collections.abc import Callable

log = logging.getLogger(__name__)


def content_hash(content: str) -> str:
    return hashlib.sha256(content.encode("utf-8")).hexdigest()


def score_from_frequency(changes_per_hour: float) -> int:
    """0 changes/hour scores 10; 10 or more changes/hour scores 0."""
    return int(math.floor(max(10.0 - changes_per_hour, 0.0)))


class MemoryStabilityTracker:
    """Dict-backed change tracker, safe for concurrent builds via ``threading.Lock``.

    The first content seen for a path is a baseline; only later content that
    hashes differently counts as a change.
    """

    def __init__(
        self,
        *,
        change_log_ttl_seconds: float = 86_400,
        change_log_max_size: int = 1000,
        frequency_window_seconds: float = 86_400,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._change_log_ttl = change_log_ttl_seconds
        self._frequency_window = frequency_window_seconds
        self._clock = clock
        self._hashes: dict[str, str] = {}
        self._changes: deque[tuple[float, str]] = deque(maxlen=change_log_max_size)
        self._lock = threading.Lock()

    def track_file_change(self, path: str, content: str) -> bool:
        new_hash = content_hash(content)
        with self._lock:
            old_hash = self._hashes.get(path)
            self._hashes[path] = new_hash
            changed = old_hash is not None and old_hash != new_hash
            if changed:
                self._changes.append((self._clock(), path))
                self._prune()
        if changed:
            log.info("File changed: %s", path)
        return changed

    def changed_since(self, timestamp: float) -> set[str]:
        with self._lock:
            self._prune()
            return {path for ts, path in self._changes if ts >= timestamp}

    def change_frequency(self, path: str) -> float:
        """Changes per hour over the frequency window."""
        since = self._clock() - self._frequency_window
        with self._lock:
            count = sum(1 for ts, p in self._changes if p == path and ts >= since)
        return count / (self._frequency_window / 3600.0)

    def stability_score(self, path: str) -> int:
        return score_from_frequency(self.change_frequency(path))

    def clear(self) -> None:
        with self._lock:
            self._hashes.clear()
            self._changes.clear()

    def _prune(self) -> None:
        cutoff = self._clock() - self._change_log_ttl
        while self._changes and self._changes[0][0] < cutoff:
            self._changes.popleft()

"""Redis-backed file stability tracker.

Requires optional dependency: ``pip install overskill[redis]``

Keys (``<prefix>`` defaults to ``overskill``)::

    <prefix>:file_hash:<scope>:<path>   last content hash, expires after hash_ttl
    <prefix>:file_changes:<scope>       sorted set of change entries scored by time
"""

from __future__ import annotations

import json
import logging
import time
from collections.abc import Callable
from typing import Any

from overskill.exceptions import TrackerError
from overskill.tracking.memory import content_hash, score_from_frequency

log = logging.getLogger(__name__)


class RedisStabilityTracker:
    """Change tracker shared across processes through Redis.

    Hash updates use WATCH/MULTI so concurrent builds for the same app never
    log the same change twice. Redis errors propagate to the caller.
    """

    def __init__(
        self,
        scope: str,
        *,
        url: str = "",
        client: Any | None = None,
        key_prefix: str = "overskill",
        hash_ttl_seconds: int = 3600,
        change_log_ttl_seconds: int = 86_400,
        change_log_max_size: int = 1000,
        frequency_window_seconds: float = 86_400,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._scope = scope
        self._url = url or "redis://localhost:6379/1"
        self._client = client
        self._prefix = key_prefix
        self._hash_ttl = hash_ttl_seconds
        self._change_log_ttl = change_log_ttl_seconds
        self._change_log_max_size = change_log_max_size
        self._frequency_window = frequency_window_seconds
        self._clock = clock

    def _get_client(self) -> Any:
        """Lazy-initialize the Redis client."""
        if self._client is not None:
            return self._client
        try:
            import redis  # type: ignore[import-untyped]
        except ImportError:
            raise TrackerError(
                "Redis is required for the Redis stability tracker. "
                "Install it with: pip install overskill[redis]"
            ) from None

        self._client = redis.Redis.from_url(self._url, decode_responses=True)
        return self._client

    def _hash_key(self, path: str) -> str:
        return f"{self._prefix}:file_hash:{self._scope}:{path}"

    @property
    def change_log_key(self) -> str:
        return f"{self._prefix}:file_changes:{self._scope}"

    def track_file_change(self, path: str, content: str) -> bool:
        client = self._get_client()
        new_hash = content_hash(content)
        key = self._hash_key(path)

        def _swap(pipe: Any) -> tuple[str | None, bool]:
            old = pipe.get(key)
            if old == new_hash:
                # Unchanged files keep their baseline alive
                pipe.expire(key, self._hash_ttl)
                return old, False
            pipe.multi()
            pipe.setex(key, self._hash_ttl, new_hash)
            return old, old is not None

        old_hash, changed = client.transaction(_swap, key, value_from_callable=True)
        if changed:
            self._log_change(client, path, old_hash, new_hash)
            log.info("File changed: %s (scope %s)", path, self._scope)
        return changed

    def changed_since(self, timestamp: float) -> set[str]:
        client = self._get_client()
        entries = client.zrangebyscore(self.change_log_key, timestamp, "+inf")
        return {p for p in (_entry_path(e) for e in entries) if p}

    def change_frequency(self, path: str) -> float:
        client = self._get_client()
        now = self._clock()
        entries = client.zrangebyscore(self.change_log_key, now - self._frequency_window, now)
        count = sum(1 for e in entries if _entry_path(e) == path)
        return count / (self._frequency_window / 3600.0)

    def stability_score(self, path: str) -> int:
        return score_from_frequency(self.change_frequency(path))

    def clear(self) -> None:
        """Remove every key this tracker owns for its scope."""
        client = self._get_client()
        keys = list(client.scan_iter(match=self._hash_key("*")))
        keys.append(self.change_log_key)
        client.delete(*keys)

    def _log_change(self, client: Any, path: str, old_hash: str | None, new_hash: str) -> None:
        now = self._clock()
        entry = json.dumps(
            {"file_path": path, "old_hash": old_hash, "new_hash": new_hash, "timestamp": now},
            sort_keys=True,
        )
        pipe = client.pipeline()
        pipe.zadd(self.change_log_key, {entry: now})
        # Keep only the newest entries
        pipe.zremrangebyrank(self.change_log_key, 0, -self._change_log_max_size - 1)
        pipe.expire(self.change_log_key, self._change_log_ttl)
        pipe.execute()


def _entry_path(entry: str) -> str | None:
    try:
        return json.loads(entry).get("file_path")
    except (ValueError, AttributeError):
        return None

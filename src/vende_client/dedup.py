"""In-flight request deduplication."""

from __future__ import annotations

import asyncio
import json
import time
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

import structlog

logger = structlog.stdlib.get_logger(__name__)

DEFAULT_DEDUP_WINDOW_MS = 5000


def _drop_none(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {str(k): _drop_none(v) for k, v in value.items() if v is not None}
    if isinstance(value, (list, tuple)):
        return [_drop_none(v) for v in value]
    return value


def request_key(method: str, endpoint: str, params: Mapping[str, Any] | None = None) -> str:
    """Build the dedup key for a request.

    Parameters are serialized with sorted keys at every depth, so logically
    identical parameter sets always produce the same key.
    """
    serialized = json.dumps(
        _drop_none(params or {}),
        sort_keys=True,
        separators=(",", ":"),
        default=str,
    )
    return f"{method.upper()} {endpoint}?{serialized}"


@dataclass
class PendingRequestEntry:
    """A request that is still in flight."""

    key: str
    task: asyncio.Task[Any]
    created_at: float = field(default_factory=time.monotonic)

    def age_ms(self, now: float) -> float:
        return (now - self.created_at) * 1000


class DedupCache:
    """Shares one underlying call between identical concurrent reads.

    An entry lives only while its call is pending. Entries older than
    ``window_ms`` are not reused; the next caller issues a fresh call.
    """

    def __init__(
        self,
        window_ms: int = DEFAULT_DEDUP_WINDOW_MS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.window_ms = window_ms
        self._clock = clock
        self._entries: dict[str, PendingRequestEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def _lookup(self, key: str) -> PendingRequestEntry | None:
        entry = self._entries.get(key)
        if entry is None or entry.task.done():
            return None
        if entry.age_ms(self._clock()) >= self.window_ms:
            return None
        return entry

    def _discard(self, entry: PendingRequestEntry) -> None:
        # a stale call settling must not evict its replacement
        if self._entries.get(entry.key) is entry:
            del self._entries[entry.key]

    async def run(self, key: str, factory: Callable[[], Awaitable[Any]]) -> Any:
        """Await the shared call for ``key``, starting it if needed."""
        entry = self._lookup(key)
        if entry is not None:
            logger.debug("joining in-flight request", key=key)
            return await asyncio.shield(entry.task)

        async def settle() -> Any:
            try:
                return await factory()
            finally:
                self._discard(new_entry)

        new_entry = PendingRequestEntry(
            key=key,
            task=asyncio.ensure_future(settle()),
            created_at=self._clock(),
        )
        self._entries[key] = new_entry
        return await asyncio.shield(new_entry.task)

    def clear(self) -> None:
        """Forget every pending entry. Calls already in flight keep running."""
        self._entries.clear()

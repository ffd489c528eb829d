"""In-memory KeyValueStore with per-entry TTL."""

import time
from typing import Any, Callable, Dict, Optional, Tuple

from nibog_gateway.domain.interfaces import KeyValueStore


class InMemoryKeyValueStore(KeyValueStore):
    """
    Process-local store; expired entries are purged lazily on access.

    Not shared across workers, so it only suits ephemeral state.
    """

    def __init__(
        self,
        default_ttl_seconds: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._default_ttl = default_ttl_seconds
        self._clock = clock
        self._entries: Dict[str, Tuple[Any, Optional[float]]] = {}

    def _is_expired(self, expires_at: Optional[float]) -> bool:
        return expires_at is not None and self._clock() >= expires_at

    def get(self, key: str) -> Optional[Any]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if self._is_expired(expires_at):
            del self._entries[key]
            return None
        return value

    def set(self, key: str, value: Any, ttl_seconds: float | None = None) -> None:
        ttl = ttl_seconds if ttl_seconds is not None else self._default_ttl
        expires_at = self._clock() + ttl if ttl is not None else None
        self._entries[key] = (value, expires_at)

    def delete(self, key: str) -> bool:
        entry = self._entries.pop(key, None)
        return entry is not None and not self._is_expired(entry[1])

    def items(self) -> Dict[str, Any]:
        live = {}
        for key, (value, expires_at) in list(self._entries.items()):
            if self._is_expired(expires_at):
                del self._entries[key]
            else:
                live[key] = value
        return live

    def __len__(self) -> int:
        return len(self.items())

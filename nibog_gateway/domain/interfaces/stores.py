"""Key-value store interface."""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class KeyValueStore(ABC):
    """
    Abstract key-value store with optional per-entry TTL.

    Expired entries behave exactly like missing ones.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[Any]:
        """Return the live value for key, or None."""
        ...

    @abstractmethod
    def set(self, key: str, value: Any, ttl_seconds: float | None = None) -> None:
        """Store value under key; ttl_seconds=None never expires."""
        ...

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Remove key. Returns True if a live entry was removed."""
        ...

    @abstractmethod
    def items(self) -> Dict[str, Any]:
        """Snapshot of all live entries."""
        ...

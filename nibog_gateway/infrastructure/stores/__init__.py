"""Key-value store implementations."""

from .memory_store import InMemoryKeyValueStore

__all__ = ["InMemoryKeyValueStore"]

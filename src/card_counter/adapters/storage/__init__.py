"""Snapshot store adapters."""

from card_counter.adapters.storage.memory_store import MemorySnapshotStore
from card_counter.adapters.storage.yaml_store import YamlSnapshotStore

__all__ = ["MemorySnapshotStore", "YamlSnapshotStore"]

"""In-memory snapshot store."""

from typing import Optional

from card_counter.core.entities import Entry
from card_counter.core.interfaces import SnapshotStore


class MemorySnapshotStore(SnapshotStore):
    """Keep entries in a dict keyed by board id and timestamp. Nothing survives the process."""

    name = "memory"

    def __init__(self, entries: Optional[list[Entry]] = None) -> None:
        self._entries: dict[str, dict[int, Entry]] = {}
        for entry in entries or []:
            self.add_entry(entry)

    def add_entry(self, entry: Entry) -> None:
        self._entries.setdefault(entry.board_id, {})[entry.time_stamp] = entry

    def get_entry(self, board_id: str, time_stamp: int) -> Optional[Entry]:
        return self._entries.get(board_id, {}).get(time_stamp)

    def all_entries(self, board_id: str) -> list[Entry]:
        return sorted(self._entries.get(board_id, {}).values(), key=lambda entry: entry.time_stamp)

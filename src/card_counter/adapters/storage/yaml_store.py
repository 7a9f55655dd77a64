"""File backed snapshot store, one YAML artifact per entry."""

from pathlib import Path
from typing import Optional
from urllib.parse import quote, unquote

import yaml

from card_counter.core.entities import Entry
from card_counter.core.interfaces import SnapshotStore
from card_counter.errors import StorageError


class YamlSnapshotStore(SnapshotStore):
    """Store entries as `<storage_dir>/<board_id>/<time_stamp>.yaml`."""

    name = "local"

    def __init__(self, storage_dir: Path) -> None:
        self.storage_dir = Path(storage_dir)
        self._ensure_structure()

    def _ensure_structure(self) -> None:
        """Create the storage directory."""
        if self.storage_dir.exists() and not self.storage_dir.is_dir():
            raise StorageError(f"Unable to use {self.storage_dir}, it already exists as a file")
        self.storage_dir.mkdir(parents=True, exist_ok=True)

    def add_entry(self, entry: Entry) -> None:
        """Save entry as YAML artifact."""
        entry_path = self._get_entry_path(entry.board_id, entry.time_stamp)
        entry_path.parent.mkdir(parents=True, exist_ok=True)

        try:
            with open(entry_path, "w", encoding="utf-8") as f:
                yaml.safe_dump(entry.to_dict(), f, allow_unicode=True, default_flow_style=False, sort_keys=False)
        except OSError as e:
            raise StorageError(f"Unable to write {entry_path}: {e}") from e

    def get_entry(self, board_id: str, time_stamp: int) -> Optional[Entry]:
        entry_path = self._get_entry_path(board_id, time_stamp)
        if not entry_path.exists():
            return None
        return self._load_entry(entry_path)

    def all_entries(self, board_id: str) -> list[Entry]:
        board_dir = self._get_board_dir(board_id)
        if not board_dir.is_dir():
            return []

        entries = [self._load_entry(path) for path in board_dir.glob("*.yaml")]
        entries.sort(key=lambda entry: entry.time_stamp)
        return entries

    def _load_entry(self, entry_path: Path) -> Entry:
        """Read one artifact. Unreadable files are errors, never skipped."""
        try:
            with open(entry_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
            return Entry.from_dict(data)
        except (OSError, yaml.YAMLError) as e:
            raise StorageError(f"Unable to read snapshot {entry_path}: {e}") from e
        except (KeyError, TypeError, ValueError) as e:
            raise StorageError(f"Snapshot {entry_path} is malformed: {e}") from e

    def _get_board_dir(self, board_id: str) -> Path:
        # Percent-encoded so distinct ids never share a directory
        if not board_id:
            raise StorageError("Board id must not be empty")
        safe_id = quote(board_id, safe="")
        if safe_id in (".", ".."):
            safe_id = safe_id.replace(".", "%2E")
        return self.storage_dir / safe_id

    def _get_entry_path(self, board_id: str, time_stamp: int) -> Path:
        return self._get_board_dir(board_id) / f"{time_stamp}.yaml"

    def get_stats(self) -> dict:
        """Get statistics about stored snapshots."""
        boards = {}
        total = 0

        for board_dir in self.storage_dir.iterdir():
            if board_dir.is_dir():
                count = len(list(board_dir.glob("*.yaml")))
                boards[unquote(board_dir.name)] = count
                total += count

        return {
            "total_entries": total,
            "by_board": boards,
        }

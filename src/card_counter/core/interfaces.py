"""Core interfaces for adapters."""

from abc import ABC, abstractmethod
from typing import Optional

from card_counter.core.burndown import Burndown
from card_counter.core.entities import Board, Card, DateRange, Entry, KanbanList


class KanbanSource(ABC):
    """Interface for fetching boards, lists and cards from a board service."""

    @abstractmethod
    async def get_board(self, board_id: str) -> Board:
        """Fetch a single board by id."""
        pass

    @abstractmethod
    async def list_boards(self) -> list[Board]:
        """Fetch every board visible to the configured account."""
        pass

    @abstractmethod
    async def get_lists(self, board_id: str) -> list[KanbanList]:
        """Fetch the lists (columns) of a board."""
        pass

    @abstractmethod
    async def get_cards(self, board_id: str) -> list[Card]:
        """Fetch all cards of a board."""
        pass


class SnapshotStore(ABC):
    """Interface for persisting scoring snapshots."""

    name = "snapshot"

    @abstractmethod
    def add_entry(self, entry: Entry) -> None:
        """Store an entry, replacing one with the same board and timestamp."""
        pass

    @abstractmethod
    def get_entry(self, board_id: str, time_stamp: int) -> Optional[Entry]:
        """Fetch one entry or None."""
        pass

    @abstractmethod
    def all_entries(self, board_id: str) -> list[Entry]:
        """Fetch every entry stored for a board."""
        pass

    def query_entries(
        self, board_id: str, date_range: Optional[DateRange] = None
    ) -> list[Entry]:
        """Fetch entries for a board inside an inclusive date range."""
        entries = self.all_entries(board_id)
        if date_range is None:
            return entries
        return [entry for entry in entries if entry.time_stamp in date_range]


class NotificationService(ABC):
    """Interface for pushing burndown summaries somewhere."""

    @abstractmethod
    async def send_burndown(self, board_name: str, burndown: Burndown) -> None:
        """Send a burndown summary."""
        pass

"""Business logic use cases."""

from typing import Callable, Optional

from card_counter.adapters.render import render_ascii, render_svg
from card_counter.core import (
    Board,
    Burndown,
    DateRange,
    Deck,
    Entry,
    KanbanSource,
    NotificationService,
    SnapshotStore,
    build_decks,
    collect_cards,
    current_timestamp,
    select_entry,
)

OUTPUT_FORMATS = ("csv", "ascii", "svg")


class ScoreService:
    """Service for scoring a board and keeping snapshots of the result."""

    def __init__(
        self,
        source: KanbanSource,
        store: SnapshotStore,
        clock: Callable[[], int] = current_timestamp,
    ) -> None:
        self.source = source
        self.store = store
        self.clock = clock

    async def collect_decks(self, board_id: str) -> tuple[Board, list[Deck]]:
        """Fetch a board's lists and cards and fold them into decks."""
        board = await self.source.get_board(board_id)
        lists = await self.source.get_lists(board.id)
        cards = await self.source.get_cards(board.id)

        decks = build_decks(lists, collect_cards(cards))
        return board, decks

    def save_snapshot(self, board: Board, decks: list[Deck], time_stamp: Optional[int] = None) -> Entry:
        """Persist decks as a new entry stamped with the current time."""
        entry = Entry(
            board_id=board.id,
            time_stamp=self.clock() if time_stamp is None else time_stamp,
            decks=decks,
        )
        self.store.add_entry(entry)
        return entry

    def previous_decks(self, board_id: str, time_stamp: Optional[int] = None) -> Optional[list[Deck]]:
        """Decks of the stored entry at `time_stamp`, or of the latest entry."""
        entry = select_entry(self.store.all_entries(board_id), time_stamp)
        if entry is None:
            return None
        return entry.decks


class BurndownService:
    """Service for turning stored snapshots into burndown output."""

    def __init__(
        self,
        store: SnapshotStore,
        notification_service: Optional[NotificationService] = None,
    ) -> None:
        self.store = store
        self.notification_service = notification_service

    def build(
        self,
        board_id: str,
        date_range: Optional[DateRange] = None,
        list_filter: Optional[str] = None,
    ) -> Burndown:
        """Reduce the board's snapshots in `date_range` into a burndown series."""
        entries = self.store.query_entries(board_id, date_range)
        return Burndown.calculate(entries, list_filter)

    def render(
        self,
        burndown: Burndown,
        output: str = "csv",
        width: Optional[int] = None,
        height: Optional[int] = None,
    ) -> str:
        """Render a burndown series as csv, ascii or svg text."""
        if output == "csv":
            return "\n".join(burndown.as_csv())
        if output == "ascii":
            return render_ascii(burndown, width or 100, height or 30)
        if output == "svg":
            return render_svg(burndown, width or 800, height or 400)
        raise ValueError(f"Output option {output} not supported")

    async def send_notification(self, board_name: str, burndown: Burndown) -> None:
        """Send the burndown to the configured notification service, if any."""
        if self.notification_service:
            await self.notification_service.send_burndown(board_name, burndown)

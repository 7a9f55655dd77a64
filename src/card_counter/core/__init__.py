"""Core domain layer."""

from card_counter.core.burndown import Burndown, BurndownPoint, calculate_burndown
from card_counter.core.entities import (
    Board,
    Card,
    DateRange,
    Deck,
    Entry,
    KanbanList,
    Score,
    current_timestamp,
)
from card_counter.core.interfaces import KanbanSource, NotificationService, SnapshotStore
from card_counter.core.score import (
    build_deck,
    build_decks,
    calculate_delta,
    collect_cards,
    filter_decks,
    parse_score,
    select_entry,
    sum_decks,
)

__all__ = [
    "Board",
    "KanbanList",
    "Card",
    "Score",
    "Deck",
    "Entry",
    "DateRange",
    "current_timestamp",
    "Burndown",
    "BurndownPoint",
    "calculate_burndown",
    "KanbanSource",
    "SnapshotStore",
    "NotificationService",
    "parse_score",
    "build_deck",
    "build_decks",
    "collect_cards",
    "calculate_delta",
    "sum_decks",
    "filter_decks",
    "select_entry",
]

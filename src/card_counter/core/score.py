"""Scoring cards and folding them into decks."""

import re
from typing import Iterable, Optional

from card_counter.core.entities import Card, Deck, Entry, KanbanList, Score

TOTAL_LABEL = "TOTAL"

# Largest value a score component may hold
MAX_SCORE = 2**31 - 1

CORRECTION_PATTERN = re.compile(r"\[([0-9]+)\]")
ESTIMATE_PATTERN = re.compile(r"\(([0-9]+)\)")


def _first_number(pattern: re.Pattern, title: str) -> Optional[int]:
    """Return the number inside the first bracket match, if it fits."""
    match = pattern.search(title)
    if match is None:
        return None

    # Reject oversized digit runs before int() sees them
    digits = match.group(1).lstrip("0") or "0"
    if len(digits) > len(str(MAX_SCORE)):
        return None

    value = int(digits)
    if value > MAX_SCORE:
        return None
    return value


def parse_score(title: str) -> Optional[Score]:
    """
    Extract a score from a card title.

    `(n)` is the estimate and `[n]` the correction made once the card was
    worked on. Only the first match of each kind counts, and a bracket with
    anything other than digits inside is ignored.

    Args:
        title: Card title

    Returns:
        Score, or None when the title carries neither value
    """
    correction = _first_number(CORRECTION_PATTERN, title)
    estimated = _first_number(ESTIMATE_PATTERN, title)

    if estimated is None and correction is None:
        return None

    return Score(estimated=estimated, correction=correction)


def build_deck(kanban_list: KanbanList, cards: list[Card]) -> Deck:
    """Fold the cards of one list into a Deck."""
    deck = Deck(list_name=kanban_list.name, size=len(cards))

    for card in cards:
        score = parse_score(card.name)
        if score is None:
            deck.unscored += 1
        elif score.correction is not None:
            # A corrected card no longer counts towards the estimate
            deck.score += score.correction
        else:
            deck.score += score.estimated
            deck.estimated += score.estimated

    return deck


def build_decks(
    lists: list[KanbanList], cards_by_list: dict[str, list[Card]]
) -> list[Deck]:
    """Build one Deck per list, in list order."""
    return [build_deck(kanban_list, cards_by_list.get(kanban_list.id, [])) for kanban_list in lists]


def collect_cards(cards: Iterable[Card]) -> dict[str, list[Card]]:
    """Group cards by the id of the list they belong to."""
    collection: dict[str, list[Card]] = {}
    for card in cards:
        collection.setdefault(card.parent_list, []).append(card)
    return collection


def calculate_delta(old_deck: Deck, new_deck: Deck) -> dict[str, int]:
    """Signed difference `new - old` for every numeric field of a deck."""
    return {
        "cards": new_deck.size - old_deck.size,
        "score": new_deck.score - old_deck.score,
        "unscored": new_deck.unscored - old_deck.unscored,
        "estimated": new_deck.estimated - old_deck.estimated,
    }


def sum_decks(decks: Iterable[Deck]) -> Deck:
    """Add decks together into a TOTAL row."""
    total = Deck(list_name=TOTAL_LABEL)
    for deck in decks:
        total.size += deck.size
        total.score += deck.score
        total.estimated += deck.estimated
        total.unscored += deck.unscored
    return total


def is_filtered(list_name: str, list_filter: Optional[str]) -> bool:
    """True when a list should be left out because its name contains the filter."""
    return list_filter is not None and list_filter in list_name


def filter_decks(decks: Iterable[Deck], list_filter: Optional[str] = None) -> list[Deck]:
    """Drop decks whose list name contains `list_filter`."""
    return [deck for deck in decks if not is_filtered(deck.list_name, list_filter)]


def select_entry(entries: list[Entry], time_stamp: Optional[int] = None) -> Optional[Entry]:
    """Pick the entry stored at `time_stamp`, or the latest one when no timestamp is given."""
    if not entries:
        return None

    if time_stamp is None:
        return max(entries, key=lambda entry: entry.time_stamp)

    return next((entry for entry in entries if entry.time_stamp == time_stamp), None)

"""Plain text tables for decks."""

from typing import Optional

from card_counter.core import Deck, calculate_delta, filter_decks, sum_decks

HEADERS = ["List", "Cards", "Score", "Estimated", "Unscored"]


def render_decks(decks: list[Deck], board_name: str, list_filter: Optional[str] = None) -> str:
    """Render decks and a TOTAL row as a table."""
    current = filter_decks(decks, list_filter)

    rows = [_deck_row(deck) for deck in current]
    rows.append(_deck_row(sum_decks(current)))

    return "\n".join([board_name, _format_table(rows)])


def render_delta(
    decks: list[Deck],
    old_decks: list[Deck],
    board_name: str,
    list_filter: Optional[str] = None,
) -> str:
    """Render decks next to their change since `old_decks`.

    Lists without a counterpart in `old_decks` show plain values.
    """
    current = filter_decks(decks, list_filter)
    previous = {deck.list_name: deck for deck in filter_decks(old_decks, list_filter)}

    rows = []
    for deck in current:
        old_deck = previous.get(deck.list_name)
        if old_deck is None:
            rows.append(_deck_row(deck))
            continue

        delta = calculate_delta(old_deck, deck)
        rows.append([
            deck.list_name,
            f"{deck.size} ({delta['cards']})",
            f"{deck.score} ({delta['score']})",
            f"{deck.estimated} ({delta['estimated']})",
            f"{deck.unscored} ({delta['unscored']})",
        ])
    rows.append(_deck_row(sum_decks(current)))

    lines = [
        board_name,
        _format_table(rows),
        "* Numbers in () mark the difference from the selected snapshot.",
    ]
    return "\n".join(lines)


def _deck_row(deck: Deck) -> list[str]:
    return [deck.list_name, str(deck.size), str(deck.score), str(deck.estimated), str(deck.unscored)]


def _format_table(rows: list[list[str]]) -> str:
    """Format rows under HEADERS with a rule above the last (total) row."""
    widths = [len(header) for header in HEADERS]
    for row in rows:
        widths = [max(width, len(cell)) for width, cell in zip(widths, row)]

    def line(cells: list[str]) -> str:
        return " | ".join(cell.ljust(width) for cell, width in zip(cells, widths)).rstrip()

    rule = "-+-".join("-" * width for width in widths)

    lines = [line(HEADERS), rule]
    lines.extend(line(row) for row in rows[:-1])
    lines.append(rule)
    lines.append(line(rows[-1]))
    return "\n".join(lines)

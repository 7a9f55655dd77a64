"""Core domain entities."""

import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from functools import total_ordering
from typing import Callable, Optional

from card_counter.errors import ClockError


@dataclass(frozen=True)
class Board:
    """A kanban board as reported by a board source."""

    id: str
    name: str


@dataclass(frozen=True)
class KanbanList:
    """A column/list on a board."""

    id: str
    name: str
    board_id: str


@dataclass(frozen=True)
class Card:
    """A card, reduced to the fields needed for scoring."""

    name: str
    parent_list: str


@dataclass(frozen=True)
class Score:
    """Effort parsed from a card title.

    `estimated` comes from `(n)`, `correction` from `[n]`. At least one of
    them is always set; a title with neither has no Score at all.
    """

    estimated: Optional[int] = None
    correction: Optional[int] = None

    def __post_init__(self) -> None:
        if self.estimated is None and self.correction is None:
            raise ValueError("Score needs an estimate or a correction")


@dataclass
class Deck:
    """Summary of one list's cards at one point in time."""

    list_name: str
    size: int = 0
    score: int = 0
    unscored: int = 0
    estimated: int = 0

    def to_dict(self) -> dict:
        return {
            "list_name": self.list_name,
            "size": self.size,
            "score": self.score,
            "unscored": self.unscored,
            "estimated": self.estimated,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Deck":
        return cls(
            list_name=data["list_name"],
            size=int(data.get("size", 0)),
            score=int(data.get("score", 0)),
            unscored=int(data.get("unscored", 0)),
            estimated=int(data.get("estimated", 0)),
        )


def current_timestamp(clock: Callable[[], float] = time.time) -> int:
    """Return the current unix time in whole seconds."""
    now = clock()
    if now < 0:
        raise ClockError(f"Unable to get UNIX time, clock reports {now}")
    return int(now)


@dataclass
class DateRange:
    """Inclusive unix-second bounds used to query stored snapshots."""

    start: int
    end: int

    @classmethod
    def now(cls) -> "DateRange":
        timestamp = current_timestamp()
        return cls(start=timestamp, end=timestamp)

    @classmethod
    def from_strs(cls, start: str, end: str) -> "DateRange":
        """Build a range from two `YYYY-MM-DD` dates at UTC midnight."""
        return cls(start=_parse_day(start), end=_parse_day(end))

    def __contains__(self, time_stamp: int) -> bool:
        return self.start <= time_stamp <= self.end


def _parse_day(value: str) -> int:
    day = datetime.strptime(value.strip(), "%Y-%m-%d").replace(tzinfo=timezone.utc)
    return int(day.timestamp())


@total_ordering
@dataclass(eq=False)
class Entry:
    """One scoring run for one board at one instant.

    Entries order by `time_stamp`. Two entries are equal when both the
    timestamp and the board match; decks are not compared.
    """

    board_id: str
    time_stamp: int
    decks: list[Deck] = field(default_factory=list)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Entry):
            return NotImplemented
        return self.time_stamp == other.time_stamp and self.board_id == other.board_id

    def __hash__(self) -> int:
        return hash((self.board_id, self.time_stamp))

    def __lt__(self, other: "Entry") -> bool:
        return self.time_stamp < other.time_stamp

    @property
    def created_at(self) -> datetime:
        return datetime.fromtimestamp(self.time_stamp, tz=timezone.utc)

    def to_dict(self) -> dict:
        return {
            "board_id": self.board_id,
            "time_stamp": self.time_stamp,
            "decks": [deck.to_dict() for deck in self.decks],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Entry":
        return cls(
            board_id=str(data["board_id"]),
            time_stamp=int(data["time_stamp"]),
            decks=[Deck.from_dict(deck) for deck in data.get("decks") or []],
        )

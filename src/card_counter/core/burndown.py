"""Reducing stored snapshots into a burndown series."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from card_counter.core.entities import Entry
from card_counter.core.score import is_filtered
from card_counter.errors import EmptySeriesError

COMPLETE_MARKER = "Done"
CSV_HEADER = "Date,Incomplete,Complete"


@dataclass(frozen=True)
class BurndownPoint:
    """One row of a burndown series."""

    timestamp: datetime
    incomplete_total: int
    complete_total: int


def split_score(entry: Entry, list_filter: Optional[str] = None) -> tuple[int, int]:
    """
    Sum an entry's deck scores into (incomplete, complete).

    Lists whose name contains "Done" are complete, everything else is
    incomplete. Lists matching `list_filter` are left out of both.
    """
    incomplete, complete = 0, 0
    for deck in entry.decks:
        if is_filtered(deck.list_name, list_filter):
            continue
        if COMPLETE_MARKER in deck.list_name:
            complete += deck.score
        else:
            incomplete += deck.score
    return incomplete, complete


class Burndown:
    """Time ordered burndown series plus helpers for rendering it."""

    def __init__(self, points: list[BurndownPoint]) -> None:
        self.points = points

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self):
        return iter(self.points)

    @classmethod
    def calculate(cls, entries: list[Entry], list_filter: Optional[str] = None) -> "Burndown":
        """
        Aggregate entries into one point per distinct timestamp.

        Entries are sorted by time. When consecutive entries share the exact
        same timestamp only the last one processed is kept.
        """
        points: list[BurndownPoint] = []

        for entry in sorted(entries, key=lambda e: e.time_stamp):
            timestamp = datetime.fromtimestamp(entry.time_stamp, tz=timezone.utc)
            incomplete, complete = split_score(entry, list_filter)

            if points and points[-1].timestamp == timestamp:
                points.pop()

            points.append(BurndownPoint(timestamp, incomplete, complete))

        return cls(points)

    def _require_points(self) -> list[BurndownPoint]:
        if not self.points:
            raise EmptySeriesError("Burndown series has no points")
        return self.points

    def max_complete(self) -> int:
        return max(point.complete_total for point in self._require_points())

    def max_incomplete(self) -> int:
        return max(point.incomplete_total for point in self._require_points())

    def min_date(self) -> datetime:
        return min(point.timestamp for point in self._require_points())

    def max_date(self) -> datetime:
        return max(point.timestamp for point in self._require_points())

    def max_value(self) -> int:
        return max(self.max_complete(), self.max_incomplete())

    def as_csv(self) -> list[str]:
        """Header row followed by `dd-mm-yyyy,incomplete,complete` rows."""
        rows = [CSV_HEADER]
        rows.extend(
            f"{point.timestamp.strftime('%d-%m-%Y')},{point.incomplete_total},{point.complete_total}"
            for point in self.points
        )
        return rows

    def plot_points(
        self, width: float, height: float
    ) -> tuple[list[tuple[float, float]], list[tuple[float, float]]]:
        """
        Map the series into a `width` x `height` drawing area.

        Time runs left to right. Values use screen orientation: zero sits on
        the bottom edge (`y == height`) and the largest value of either
        series on the top edge. A series spanning a single instant is drawn
        at the horizontal midpoint.

        Returns:
            Tuple of (incomplete points, complete points) as (x, y) pairs
        """
        min_x = self.min_date().timestamp()
        max_x = self.max_date().timestamp()
        max_y = self.max_value()

        def to_x(timestamp: datetime) -> float:
            if max_x == min_x:
                return width / 2
            return (timestamp.timestamp() - min_x) / (max_x - min_x) * width

        def to_y(value: int) -> float:
            if max_y == 0:
                return float(height)
            return height - (value / max_y) * height

        incomplete = [(to_x(p.timestamp), to_y(p.incomplete_total)) for p in self.points]
        complete = [(to_x(p.timestamp), to_y(p.complete_total)) for p in self.points]
        return incomplete, complete


def calculate_burndown(entries: list[Entry], list_filter: Optional[str] = None) -> Burndown:
    """Shorthand for `Burndown.calculate`."""
    return Burndown.calculate(entries, list_filter)

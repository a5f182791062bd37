"""
Column layout for overlapping events of one day.

Each event is mapped onto a grid of rows, `subdivisions_per_hour` rows per
hour (quarter hours by default). An event occupies the rows from its
quantized start up to and including the row after its quantized end, and
two events overlap when those row ranges share a row. Events 02:00-02:45
and 03:00-03:30 therefore overlap at quarter-hour granularity, which keeps a
visible gap between stacked boxes.

Columns are filled greedily: events are taken in a fixed order and each goes
into the first column where it overlaps nothing. The result depends only on
the input, so repeated layouts of the same day look the same.
"""

from dataclasses import dataclass
from datetime import time
from typing import Iterable

from .debug import debug_print
from .errors import InvalidArgumentError
from .event import Event
from .interval_tree import IntervalTree


DEFAULT_SUBDIVISIONS_PER_HOUR = 4

EventPair = tuple[str, Event]


def _debug_print(msg: str) -> None:
    debug_print("LAYOUT", msg)


@dataclass
class Placement:
    """Where one event goes: its column and its rows on the day grid."""
    calendar_name: str
    event: Event
    column: int
    total_columns: int
    start_row: int
    end_row: int  # one past the quantized end row

    @property
    def row_span(self) -> int:
        return self.end_row - self.start_row


class _Column:
    """Events placed in one column, indexed by their rows."""

    def __init__(self):
        self.pairs: list[EventPair] = []
        self._rows: IntervalTree[int] = IntervalTree()

    def fits(self, start_row: int, end_row: int) -> bool:
        return not self._rows.any_intersecting(start_row, end_row)

    def place(self, pair: EventPair, start_row: int, end_row: int) -> None:
        self.pairs.append(pair)
        self._rows.insert(start_row, end_row)


class OverlapLayoutEngine:
    """Assigns the events of one day to non-overlapping columns."""

    def __init__(self, subdivisions_per_hour: int = DEFAULT_SUBDIVISIONS_PER_HOUR):
        if not isinstance(subdivisions_per_hour, int) or subdivisions_per_hour < 1:
            raise InvalidArgumentError(
                f"subdivisions_per_hour must be a positive integer, got {subdivisions_per_hour!r}"
            )
        self.subdivisions_per_hour = subdivisions_per_hour

    @property
    def rows_per_day(self) -> int:
        return 24 * self.subdivisions_per_hour

    def row_number(self, t: time) -> int:
        """Grid row containing time of day `t`."""
        return t.hour * self.subdivisions_per_hour + (t.minute * self.subdivisions_per_hour) // 60

    def event_rows(self, event: Event) -> tuple[int, int]:
        """(start row, end row + 1) for an event."""
        return self.row_number(event.start_time), self.row_number(event.end_time) + 1

    def events_overlap(self, a: Event, b: Event) -> bool:
        start_a, end_a = self.event_rows(a)
        start_b, end_b = self.event_rows(b)
        return start_a <= end_b and start_b <= end_a

    @staticmethod
    def order(pairs: Iterable[EventPair]) -> list[EventPair]:
        """Sort by start, then calendar name; equal keys keep their input order."""
        return sorted(pairs, key=lambda pair: (pair[1].start, pair[0]))

    def _fill(self, pairs: Iterable[EventPair]) -> tuple[list[_Column], list[tuple[EventPair, int, int, int]]]:
        columns: list[_Column] = []
        assigned = []  # (pair, column index, start row, end row) in placement order
        for pair in self.order(pairs):
            start_row, end_row = self.event_rows(pair[1])
            for index, column in enumerate(columns):
                if column.fits(start_row, end_row):
                    break
            else:
                index, column = len(columns), _Column()
                columns.append(column)
            column.place(pair, start_row, end_row)
            assigned.append((pair, index, start_row, end_row))
        _debug_print(f"{len(assigned)} events in {len(columns)} columns")
        return columns, assigned

    def columns(self, pairs: Iterable[EventPair]) -> list[list[EventPair]]:
        """
        Lay out (calendar name, event) pairs.

        Returns:
            One list per column, each holding its pairs in placement order.
            Empty input gives an empty list.
        """
        columns, _ = self._fill(pairs)
        return [column.pairs for column in columns]

    def placements(self, pairs: Iterable[EventPair]) -> list[Placement]:
        """Same layout as columns(), flattened into one Placement per event in placement order."""
        columns, assigned = self._fill(pairs)
        return [
            Placement(
                calendar_name=pair[0],
                event=pair[1],
                column=index,
                total_columns=len(columns),
                start_row=start_row,
                end_row=end_row,
            )
            for pair, index, start_row, end_row in assigned
        ]

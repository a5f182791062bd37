"""Tests for daybook/layout.py

The overlap test works on quarter-hour rows with the end row widened by
one, and columns are filled first-fit in (start, calendar name, input)
order.
"""

from datetime import date, time

import pytest

from daybook.errors import InvalidArgumentError
from daybook.layout import OverlapLayoutEngine


@pytest.fixture
def engine():
    return OverlapLayoutEngine()


# ─────────────────────────────────────────────────────────────────────────────
# Rows and overlap
# ─────────────────────────────────────────────────────────────────────────────


class TestRows:

    @pytest.mark.parametrize("t, row", [
        (time(0, 0), 0),
        (time(0, 14), 0),
        (time(0, 15), 1),
        (time(2, 30), 10),
        (time(2, 45), 11),
        (time(23, 59), 95),
    ])
    def test_quarter_hour_rows(self, engine, t, row):
        assert engine.row_number(t) == row

    def test_end_row_is_widened(self, engine, make_event):
        event = make_event(start="02:00", end="02:45")

        assert engine.event_rows(event) == (8, 12)

    def test_other_granularity(self, make_event):
        engine = OverlapLayoutEngine(subdivisions_per_hour=2)

        assert engine.row_number(time(2, 45)) == 5
        assert engine.rows_per_day == 48

    @pytest.mark.parametrize("value", [0, -4, 2.5, "4"])
    def test_rejects_bad_granularity(self, value):
        with pytest.raises(InvalidArgumentError):
            OverlapLayoutEngine(subdivisions_per_hour=value)


class TestOverlap:

    def test_partial_overlap(self, engine, make_event):
        a = make_event(start="02:00", end="02:45")
        b = make_event(start="02:30", end="03:15")

        assert engine.events_overlap(a, b)
        assert engine.events_overlap(b, a)

    def test_far_apart(self, engine, make_event):
        a = make_event(start="02:00", end="02:45")
        c = make_event(start="04:00", end="04:30")

        assert not engine.events_overlap(a, c)

    def test_quarter_hour_gap_still_overlaps(self, engine, make_event):
        """02:45 ends in row 11, widened to 12, which is where 03:00 starts."""
        a = make_event(start="02:00", end="02:45")
        b = make_event(start="03:00", end="03:30")

        assert engine.events_overlap(a, b)

    def test_half_hour_gap_does_not_overlap(self, engine, make_event):
        a = make_event(start="02:00", end="02:45")
        b = make_event(start="03:15", end="03:30")

        assert not engine.events_overlap(a, b)


# ─────────────────────────────────────────────────────────────────────────────
# Columns
# ─────────────────────────────────────────────────────────────────────────────


class TestColumns:

    def test_empty(self, engine):
        assert engine.columns([]) == []
        assert engine.placements([]) == []

    def test_worked_example(self, engine, make_event):
        """A and B overlap; C fits next to A; two columns in total."""
        a = ("Default", make_event("A", start="02:00", end="02:45"))
        b = ("Default", make_event("B", start="02:30", end="03:15"))
        c = ("Default", make_event("C", start="04:00", end="04:30"))

        columns = engine.columns([c, b, a])

        assert len(columns) == 2
        assert columns == [[a, c], [b]]

    def test_disjoint_events_share_one_column(self, engine, make_event):
        pairs = [
            ("Default", make_event("one", start="01:00", end="01:30")),
            ("Default", make_event("two", start="03:00", end="03:30")),
            ("Default", make_event("three", start="05:00", end="05:30")),
        ]

        assert engine.columns(pairs) == [pairs]

    def test_no_column_holds_overlapping_events(self, engine, make_event):
        pairs = [
            ("Default", make_event(str(i), start=f"{9 + i // 4:02d}:{(i % 4) * 15:02d}", end=f"{11 + i // 4:02d}:00"))
            for i in range(12)
        ]

        columns = engine.columns(pairs)

        for column in columns:
            for i, (_, first) in enumerate(column):
                for _, second in column[i + 1:]:
                    assert not engine.events_overlap(first, second)
        assert sum(len(column) for column in columns) == len(pairs)

    def test_same_start_orders_by_calendar_name(self, engine, make_event):
        work = ("Work", make_event("w", start="09:00", end="10:00"))
        home = ("Home", make_event("h", start="09:00", end="10:00"))

        assert engine.columns([work, home]) == [[home], [work]]

    def test_full_ties_keep_input_order(self, engine, make_event):
        first = ("Default", make_event("1", start="09:00", end="10:00"))
        second = ("Default", make_event("2", start="09:00", end="10:00"))

        assert engine.columns([first, second]) == [[first], [second]]
        assert engine.columns([second, first]) == [[second], [first]]

    def test_first_fit_reuses_earliest_free_column(self, engine, make_event):
        """
        First-fit in start order: the long event takes column 0 and both
        short events land in column 1, whatever order they came in.
        """
        long = ("Default", make_event("long", start="08:00", end="12:00"))
        early = ("Default", make_event("early", start="08:30", end="09:00"))
        late = ("Default", make_event("late", start="11:00", end="11:30"))

        assert engine.columns([late, early, long]) == [[long], [early, late]]

    def test_same_event_twice(self, engine, make_event):
        event = make_event()

        columns = engine.columns([("Default", event), ("Default", event)])

        assert len(columns) == 2

    def test_deterministic(self, engine, make_event):
        pairs = [
            ("B", make_event("x", start="10:00", end="11:00")),
            ("A", make_event("y", start="10:30", end="11:30")),
            ("A", make_event("z", start="10:00", end="10:30")),
        ]

        assert engine.columns(pairs) == engine.columns(list(reversed(pairs)))


class TestPlacements:

    def test_rows_and_columns(self, engine, make_event):
        a = make_event("A", start="02:00", end="02:45")
        b = make_event("B", start="02:30", end="03:15")
        c = make_event("C", start="04:00", end="04:30")

        placements = engine.placements([("Default", c), ("Work", b), ("Default", a)])

        summary = [(p.event.title, p.calendar_name, p.column, p.start_row, p.end_row) for p in placements]
        assert summary == [
            ("A", "Default", 0, 8, 12),
            ("B", "Work", 1, 10, 14),
            ("C", "Default", 0, 16, 19),
        ]
        assert {p.total_columns for p in placements} == {2}
        assert placements[0].row_span == 4

    def test_matches_columns(self, engine, make_event):
        pairs = [
            ("Default", make_event(str(i), start=f"{8 + i:02d}:00", end=f"{10 + i:02d}:00"))
            for i in range(5)
        ]

        columns = engine.columns(pairs)
        placements = engine.placements(pairs)

        for placement in placements:
            assert (placement.calendar_name, placement.event) in columns[placement.column]


class TestWithRegistry:

    def test_day_from_several_calendars(self, registry, engine, make_event):
        registry.create("Work")
        a = make_event("A", start="02:00", end="02:45")
        b = make_event("B", start="02:30", end="03:15")
        registry.add_event("Default", a)
        registry.add_event("Work", b)
        registry.add_event("Work", make_event("other day", day=date(2020, 4, 2)))

        columns = engine.columns(registry.events_for_day(date(2020, 4, 1)))

        assert columns == [[("Default", a)], [("Work", b)]]

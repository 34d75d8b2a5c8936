from __future__ import annotations

import datetime as dt
import unittest

from daygrid.accessors import resolve_accessor
from daygrid.slots import sort_events

START = resolve_accessor("start")
END = resolve_accessor("end")


def _ev(name: str, start_h: int, end_h: int) -> dict:
    day = dt.datetime(2024, 1, 15)
    return {"name": name, "start": day.replace(hour=start_h), "end": day.replace(hour=end_h)}


class TestSortContract(unittest.TestCase):
    def test_orders_by_start_then_longest_first(self) -> None:
        events = [_ev("c", 11, 12), _ev("a_short", 9, 10), _ev("b", 10, 11), _ev("a_long", 9, 12)]
        out = sort_events(events, START, END)
        self.assertEqual([e["name"] for e in out], ["a_long", "a_short", "b", "c"])

    def test_sorts_in_place_and_returns_same_list(self) -> None:
        events = [_ev("late", 11, 12), _ev("early", 9, 10)]
        out = sort_events(events, START, END)
        self.assertIs(out, events)
        self.assertEqual(events[0]["name"], "early")

    def test_identical_spans_keep_input_order(self) -> None:
        events = [_ev("first", 9, 10), _ev("second", 9, 10)]
        out = sort_events(events, START, END)
        self.assertEqual([e["name"] for e in out], ["first", "second"])

    def test_non_date_values_do_not_raise(self) -> None:
        events = [_ev("ok", 9, 10), {"name": "bad", "start": None, "end": "x"}]
        out = sort_events(events, START, END)
        self.assertEqual(len(out), 2)


    def test_malformed_start_between_valid_events_sorts_last(self) -> None:
        day = dt.datetime(2024, 1, 15)
        b = {"name": "b", "start": day.replace(hour=9, minute=10), "end": day.replace(hour=10)}
        bad = {"name": "bad", "start": None, "end": day.replace(hour=10)}
        a = {"name": "a", "start": day.replace(hour=9), "end": day.replace(hour=11)}
        out = sort_events([b, bad, a], START, END)
        self.assertEqual([e["name"] for e in out], ["a", "b", "bad"])

    def test_malformed_end_sorts_after_valid_ends_on_same_start(self) -> None:
        day = dt.datetime(2024, 1, 15)
        bad = {"name": "bad", "start": day.replace(hour=9), "end": "x"}
        out = sort_events([bad, _ev("short", 9, 10), _ev("long", 9, 12)], START, END)
        self.assertEqual([e["name"] for e in out], ["long", "short", "bad"])


if __name__ == "__main__":
    unittest.main(verbosity=2)

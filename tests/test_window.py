# SPDX-License-Identifier: MIT

import datetime

import pendulum
import pytest

from projectboard.timeline.window import (
    DateRange,
    navigate,
    overlaps,
    resolve_range,
    resolve_window,
)

ANCHOR = pendulum.date(2023, 8, 15)


def test_day_range_is_the_anchor():
    assert resolve_range("day", ANCHOR) == DateRange(ANCHOR, ANCHOR)


def test_week_range_runs_monday_to_sunday():
    date_range = resolve_range("week", ANCHOR)

    assert date_range.start == pendulum.date(2023, 8, 14)
    assert date_range.end == pendulum.date(2023, 8, 20)
    assert date_range.start.day_of_week == pendulum.MONDAY


def test_week_range_for_a_sunday_anchor_stays_in_its_iso_week():
    date_range = resolve_range("week", pendulum.date(2023, 8, 20))

    assert date_range.start == pendulum.date(2023, 8, 14)


def test_month_range():
    assert resolve_range("month", ANCHOR) == DateRange(
        pendulum.date(2023, 8, 1), pendulum.date(2023, 8, 31)
    )


def test_month_range_in_february_of_a_leap_year():
    assert resolve_range("month", pendulum.date(2024, 2, 10)).end == pendulum.date(
        2024, 2, 29
    )


@pytest.mark.parametrize(
    "anchor, start, end",
    [
        (pendulum.date(2023, 2, 14), pendulum.date(2023, 1, 1), pendulum.date(2023, 3, 31)),
        (ANCHOR, pendulum.date(2023, 7, 1), pendulum.date(2023, 9, 30)),
        (pendulum.date(2023, 12, 31), pendulum.date(2023, 10, 1), pendulum.date(2023, 12, 31)),
    ],
)
def test_quarter_range(anchor, start, end):
    assert resolve_range("quarter", anchor) == DateRange(start, end)


def test_resolve_range_accepts_stdlib_dates():
    assert resolve_range("month", datetime.date(2023, 8, 15)).start == pendulum.date(
        2023, 8, 1
    )


def test_unknown_view_mode_raises():
    with pytest.raises(ValueError):
        resolve_range("year", ANCHOR)  # type: ignore[arg-type]


def test_month_window_with_split_panel_padding():
    window = resolve_window("month", ANCHOR, 2)
    days = list(window)

    assert days[0] == pendulum.date(2023, 7, 30)
    assert days[-1] == pendulum.date(2023, 9, 2)
    assert len(days) == len(window) == 35


def test_window_days_are_contiguous_and_ordered():
    days = list(resolve_window("quarter", ANCHOR, 3))

    for previous, current in zip(days, days[1:]):
        assert current.toordinal() - previous.toordinal() == 1


def test_day_window_is_never_empty():
    assert len(list(resolve_window("day", ANCHOR, 3))) == 7
    assert list(resolve_window("day", ANCHOR, 0)) == [ANCHOR]


def test_window_iteration_can_be_repeated():
    window = resolve_window("week", ANCHOR, 2)

    assert list(window) == list(window)


def test_window_range_excludes_padding():
    window = resolve_window("week", ANCHOR, 2)

    assert window.range == resolve_range("week", ANCHOR)
    assert window.start == pendulum.date(2023, 8, 12)
    assert window.end == pendulum.date(2023, 8, 22)


def test_window_index_of():
    window = resolve_window("month", ANCHOR, 2)

    assert window.index_of(pendulum.date(2023, 7, 30)) == 0
    assert window.index_of(pendulum.date(2023, 8, 1)) == 2
    assert window.index_of(pendulum.date(2023, 9, 3)) == -1


def test_negative_padding_raises():
    with pytest.raises(ValueError):
        resolve_window("month", ANCHOR, -1)


@pytest.mark.parametrize(
    "start, end, expected",
    [
        (pendulum.date(2023, 7, 25), pendulum.date(2023, 8, 2), True),
        (pendulum.date(2023, 8, 30), pendulum.date(2023, 9, 5), True),
        (pendulum.date(2023, 7, 1), pendulum.date(2023, 9, 30), True),
        (pendulum.date(2023, 8, 31), pendulum.date(2023, 8, 31), True),
        (pendulum.date(2023, 7, 1), pendulum.date(2023, 7, 31), False),
        (pendulum.date(2023, 9, 1), pendulum.date(2023, 9, 2), False),
    ],
)
def test_overlaps(start, end, expected):
    assert (
        overlaps(start, end, pendulum.date(2023, 8, 1), pendulum.date(2023, 8, 31))
        is expected
    )


def test_navigate_moves_by_whole_periods():
    assert navigate("day", ANCHOR, -1) == pendulum.date(2023, 8, 14)
    assert navigate("week", ANCHOR, 1) == pendulum.date(2023, 8, 22)
    assert navigate("month", ANCHOR, 1) == pendulum.date(2023, 9, 15)
    assert navigate("quarter", ANCHOR, -1) == pendulum.date(2023, 5, 15)
    assert navigate("month", ANCHOR, 0) == ANCHOR

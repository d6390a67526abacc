# SPDX-License-Identifier: MIT

import datetime
from dataclasses import dataclass
from typing import Iterator

import pendulum

from projectboard.model.view_mode import VIEW_MODES, ViewMode
from projectboard.time import as_date, days_between, each_day


@dataclass(frozen=True)
class DateRange:
    """Inclusive range of calendar days."""

    start: pendulum.Date
    end: pendulum.Date

    def __contains__(self, value: object) -> bool:
        if not isinstance(value, datetime.date):
            return False
        date = as_date(value)
        return self.start <= date <= self.end

    def __len__(self) -> int:
        return days_between(self.start, self.end) + 1


@dataclass(frozen=True)
class DisplayWindow:
    """
    The padded sequence of days a timeline displays.

    `range` is the period selected by the view mode; `start`/`end` include
    the padding. Iterating yields each day lazily and can be repeated.
    """

    range: DateRange
    padding: int

    @property
    def start(self) -> pendulum.Date:
        return self.range.start.subtract(days=self.padding)

    @property
    def end(self) -> pendulum.Date:
        return self.range.end.add(days=self.padding)

    def __iter__(self) -> Iterator[pendulum.Date]:
        return each_day(self.start, self.end)

    def __len__(self) -> int:
        return days_between(self.start, self.end) + 1

    def __contains__(self, value: object) -> bool:
        if not isinstance(value, datetime.date):
            return False
        date = as_date(value)
        return self.start <= date <= self.end

    def as_range(self) -> DateRange:
        return DateRange(self.start, self.end)

    def index_of(self, value: datetime.date) -> int:
        """Column index of a day inside the window, -1 when outside."""
        if value not in self:
            return -1
        return days_between(self.start, value)


def overlaps(
    start: datetime.date,
    end: datetime.date,
    range_start: datetime.date,
    range_end: datetime.date,
) -> bool:
    """
    Check whether [start, end] intersects [range_start, range_end].

    Covers a span that starts inside the range, ends inside it, or spans it
    entirely.
    """
    return as_date(start) <= as_date(range_end) and as_date(end) >= as_date(
        range_start
    )


def resolve_range(view_mode: ViewMode, anchor: datetime.date) -> DateRange:
    """
    Resolve the period shown for a view mode around an anchor date.

    - day: the anchor itself
    - week: Monday through Sunday of the anchor's ISO week
    - month: first through last day of the anchor's month
    - quarter: first through last day of the anchor's calendar quarter
    """
    date = as_date(anchor)

    match view_mode:
        case "day":
            return DateRange(date, date)
        case "week":
            week_start = date.subtract(days=date.isoweekday() - 1)
            return DateRange(week_start, week_start.add(days=6))
        case "month":
            return DateRange(date.start_of("month"), date.end_of("month"))
        case "quarter":
            # Q1: Jan, Q2: Apr, Q3: Jul, Q4: Oct
            first_month = ((date.month - 1) // 3) * 3 + 1
            quarter_start = pendulum.date(date.year, first_month, 1)
            return DateRange(
                quarter_start, quarter_start.add(months=2).end_of("month")
            )
    raise ValueError(f"unknown view mode '{view_mode}', expected one of {VIEW_MODES}")


def resolve_window(
    view_mode: ViewMode, anchor: datetime.date, padding: int
) -> DisplayWindow:
    if padding < 0:
        raise ValueError(f"padding must not be negative, got {padding}")
    return DisplayWindow(resolve_range(view_mode, anchor), padding)


def navigate(view_mode: ViewMode, anchor: datetime.date, steps: int) -> pendulum.Date:
    """Move the anchor by whole view units (previous: -1, next: 1)."""
    date = as_date(anchor)

    match view_mode:
        case "day":
            return date.add(days=steps)
        case "week":
            return date.add(weeks=steps)
        case "month":
            return date.add(months=steps)
        case "quarter":
            return date.add(months=3 * steps)
    raise ValueError(f"unknown view mode '{view_mode}', expected one of {VIEW_MODES}")

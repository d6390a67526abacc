# SPDX-License-Identifier: MIT

import datetime
from typing import Iterator

import pendulum


def today() -> pendulum.Date:
    return pendulum.today("local").date()


def as_date(value: datetime.date) -> pendulum.Date:
    """Normalize any date or datetime (stdlib or pendulum) to a pendulum.Date."""
    if isinstance(value, datetime.datetime):
        return pendulum.date(value.year, value.month, value.day)
    if isinstance(value, pendulum.Date):
        return value
    return pendulum.date(value.year, value.month, value.day)


def date_to_iso_str(date: pendulum.Date) -> str:
    return date.to_date_string()


def date_from_str(date_str: str) -> pendulum.Date:
    """Parse a 'YYYY-MM-DD' string (a datetime string is truncated to its date)."""
    parsed = pendulum.parse(str(date_str), exact=True)
    if isinstance(parsed, datetime.date):
        return as_date(parsed)
    raise ValueError(f"expected a calendar date, got '{date_str}'")


def date_to_display_str(date: pendulum.Date) -> str:
    return date.format("YYYY-MM-DD ddd")


def days_between(start: datetime.date, end: datetime.date) -> int:
    """Signed number of whole days from start to end."""
    return as_date(end).toordinal() - as_date(start).toordinal()


def each_day(start: pendulum.Date, end: pendulum.Date) -> Iterator[pendulum.Date]:
    """Yield every calendar day from start to end, both inclusive."""
    current = start
    while current <= end:
        yield current
        current = current.add(days=1)


def is_weekend(date: pendulum.Date) -> bool:
    return date.day_of_week in [pendulum.SATURDAY, pendulum.SUNDAY]

# SPDX-License-Identifier: MIT

import re
from typing import Optional

import pendulum
import typer

from projectboard.model.entity_id import EntityId
from projectboard.time import date_from_str, today


def parse_date(date_param: Optional[str | int]) -> Optional[pendulum.Date]:
    if date_param is None:
        return None

    date = str(date_param)

    # Match YYYY-MM-DD format
    if re.match(r"^\d{4}-\d{2}-\d{2}$", date):
        try:
            return date_from_str(date)
        except ValueError as e:
            raise typer.BadParameter(f"Invalid date: {e}")

    # Match numeric input for relative days (e.g., "1", "-1", "365")
    if re.match(r"^-?\d+$", date):
        return today().add(days=int(date))

    if date == "today" or date == "t":
        return today()
    if date == "yesterday" or date == "y":
        return today().subtract(days=1)
    if date == "tomorrow" or date == "o":
        return today().add(days=1)
    raise typer.BadParameter("Incorrect date format")


def parse_id_list(id_param: Optional[str]) -> Optional[list[EntityId]]:
    """
    Parse a comma-separated list of ids or id prefixes.

    Whitespace around each id is dropped, as are empty items and repeats.
    """
    if id_param is None:
        return None

    ids: list[EntityId] = []
    for id_str in id_param.split(","):
        id_str = id_str.strip()
        if id_str and id_str not in ids:
            ids.append(id_str)
    return ids

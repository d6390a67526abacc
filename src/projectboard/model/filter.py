# SPDX-License-Identifier: MIT

from typing import TypedDict

import pendulum

from projectboard.model.entity_id import EntityId
from projectboard.model.project import ProjectStatus


class DateRangeOption(TypedDict):
    start: pendulum.Date
    end: pendulum.Date


class FilterOptions(TypedDict, total=False):
    client: str
    status: ProjectStatus
    date_range: DateRangeOption
    assignee: EntityId

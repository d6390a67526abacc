# SPDX-License-Identifier: MIT

from typing import Literal, Optional, TypedDict

import pendulum

from projectboard.model.entity_id import EntityId
from projectboard.model.project import ProjectStatus

TaskType = Literal["task", "milestone", "project"]

TASK_TYPES: tuple[TaskType, ...] = ("task", "milestone", "project")


class GanttTask(TypedDict):
    id: Optional[EntityId]
    name: str
    start: pendulum.Date
    end: pendulum.Date
    progress: int
    dependencies: Optional[list[EntityId]]
    type: TaskType
    project: EntityId
    status: Optional[ProjectStatus]
    assignee: Optional[str]


class GanttTaskPatch(TypedDict, total=False):
    name: str
    start: pendulum.Date
    end: pendulum.Date
    progress: int
    dependencies: Optional[list[EntityId]]
    type: TaskType
    project: EntityId
    status: Optional[ProjectStatus]
    assignee: Optional[str]


GANTT_TASK_FIELDS: tuple[str, ...] = tuple(GanttTask.__annotations__)

# Fields of a project-level entry that mirror a project field.
PROJECT_LINKED_FIELDS: dict[str, str] = {
    "name": "name",
    "start": "start_date",
    "end": "end_date",
    "status": "status",
}

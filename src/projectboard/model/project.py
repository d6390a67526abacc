# SPDX-License-Identifier: MIT

from typing import Literal, Optional, TypedDict

import pendulum

from projectboard.model.entity_id import EntityId

ProjectStatus = Literal[
    "planning", "design", "development", "testing", "completed", "onhold"
]

PROJECT_STATUSES: tuple[ProjectStatus, ...] = (
    "planning",
    "design",
    "development",
    "testing",
    "completed",
    "onhold",
)

IN_PROGRESS_STATUSES: tuple[ProjectStatus, ...] = ("design", "development", "testing")


class Project(TypedDict):
    id: Optional[EntityId]
    code: str
    name: str
    client: str
    start_date: pendulum.Date
    end_date: pendulum.Date
    status: ProjectStatus
    designer_ids: list[EntityId]
    developer_ids: list[EntityId]
    created_by: Optional[EntityId]
    description: Optional[str]


class ProjectPatch(TypedDict, total=False):
    code: str
    name: str
    client: str
    start_date: pendulum.Date
    end_date: pendulum.Date
    status: ProjectStatus
    designer_ids: list[EntityId]
    developer_ids: list[EntityId]
    created_by: Optional[EntityId]
    description: Optional[str]


PROJECT_FIELDS: tuple[str, ...] = tuple(Project.__annotations__)

REQUIRED_PROJECT_FIELDS: tuple[str, ...] = (
    "code",
    "name",
    "client",
    "start_date",
    "end_date",
)

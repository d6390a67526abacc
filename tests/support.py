# SPDX-License-Identifier: MIT

from copy import deepcopy
from typing import Any, Optional

import pendulum

from projectboard.model.entity_id import EntityId
from projectboard.model.gantt_task import GanttTask
from projectboard.model.project import Project, ProjectPatch
from projectboard.model.user import User


class InMemoryBackend:
    """Backend keeping everything in dicts, recording each call."""

    def __init__(self) -> None:
        self.projects: dict[EntityId, Project] = {}
        self.entries: dict[EntityId, GanttTask] = {}
        self.users: list[User] = []
        self.current_user: Optional[User] = None
        self.calls: list[str] = []

    def list_projects(self) -> list[Project]:
        self.calls.append("list_projects")
        return deepcopy(list(self.projects.values()))

    def create_project(self, project: Project) -> Project:
        self.calls.append("create_project")
        self.projects[project["id"]] = deepcopy(project)  # type: ignore[index]
        return deepcopy(project)

    def update_project(self, id: EntityId, project: Project) -> Project:
        self.calls.append("update_project")
        if id not in self.projects:
            raise KeyError(id)
        self.projects[id] = deepcopy(project)
        return deepcopy(project)

    def delete_project(self, id: EntityId) -> None:
        self.calls.append("delete_project")
        self.projects.pop(id, None)

    def list_timeline_entries(self) -> list[GanttTask]:
        self.calls.append("list_timeline_entries")
        return deepcopy(list(self.entries.values()))

    def save_timeline_entry(self, entry: GanttTask) -> GanttTask:
        self.calls.append("save_timeline_entry")
        self.entries[entry["id"]] = deepcopy(entry)  # type: ignore[index]
        return deepcopy(entry)

    def delete_timeline_entry(self, id: EntityId) -> None:
        self.calls.append("delete_timeline_entry")
        self.entries.pop(id, None)

    def list_users(self) -> list[User]:
        return deepcopy(self.users)

    def get_current_user(self) -> Optional[User]:
        return deepcopy(self.current_user)


class FailingBackend(InMemoryBackend):
    """Backend whose writes fail once `fail` is set."""

    def __init__(self) -> None:
        super().__init__()
        self.fail = False

    def _check(self) -> None:
        if self.fail:
            raise ConnectionError("backend unavailable")

    def list_projects(self) -> list[Project]:
        self._check()
        return super().list_projects()

    def create_project(self, project: Project) -> Project:
        self._check()
        return super().create_project(project)

    def update_project(self, id: EntityId, project: Project) -> Project:
        self._check()
        return super().update_project(id, project)

    def delete_project(self, id: EntityId) -> None:
        self._check()
        super().delete_project(id)

    def save_timeline_entry(self, entry: GanttTask) -> GanttTask:
        self._check()
        return super().save_timeline_entry(entry)

    def delete_timeline_entry(self, id: EntityId) -> None:
        self._check()
        super().delete_timeline_entry(id)


def project_fields(**overrides: Any) -> ProjectPatch:
    fields: dict[str, Any] = {
        "code": "WEB-1",
        "name": "Website",
        "client": "Acme",
        "start_date": pendulum.date(2023, 8, 1),
        "end_date": pendulum.date(2023, 8, 31),
        "status": "planning",
        "designer_ids": [],
        "developer_ids": [],
        "created_by": None,
        "description": None,
    }
    fields.update(overrides)
    return fields  # type: ignore[return-value]


def gantt_task(
    id: str,
    start: pendulum.Date,
    end: pendulum.Date,
    project: str = "p1",
    progress: int = 0,
    dependencies: Optional[list[str]] = None,
    name: Optional[str] = None,
    type: str = "task",
) -> GanttTask:
    return {  # type: ignore[typeddict-item]
        "id": id,
        "name": name or id,
        "start": start,
        "end": end,
        "progress": progress,
        "dependencies": dependencies,
        "type": type,
        "project": project,
        "status": None,
        "assignee": None,
    }

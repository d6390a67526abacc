# SPDX-License-Identifier: MIT

import datetime
import logging
from copy import deepcopy
from typing import Any, Callable, Mapping, Optional, TypeVar, cast

from projectboard.errors import NotFoundError, SyncError, ValidationError
from projectboard.model.entity_id import EntityId, generate_entity_id
from projectboard.model.gantt_task import (
    GANTT_TASK_FIELDS,
    PROJECT_LINKED_FIELDS,
    TASK_TYPES,
    GanttTask,
    GanttTaskPatch,
)
from projectboard.model.project import (
    PROJECT_FIELDS,
    PROJECT_STATUSES,
    REQUIRED_PROJECT_FIELDS,
    Project,
    ProjectPatch,
)
from projectboard.model.user import User
from projectboard.service.backend import Backend
from projectboard.template.gantt_task import (
    get_gantt_task_template,
    get_project_gantt_task,
)
from projectboard.template.project import get_project_template
from projectboard.time import as_date
from projectboard.timeline.dependency import dependency_ids

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Fields of a stored project-level entry that survive re-derivation on load.
CARRIED_ENTRY_FIELDS = ("progress", "dependencies", "assignee")


class ProjectStore:
    """
    Owns the canonical projects and their timeline entries.

    Every project has exactly one project-level entry with the same id whose
    name, dates and status always mirror the project. Both records change
    together through `__commit`, so a reader never sees one without the
    other. Mutations validate first, write to the backend second and touch
    memory last: a failure at any step leaves the store as it was.
    """

    def __init__(self, backend: Backend) -> None:
        self.backend = backend
        self._projects: list[Project] = []
        self._tasks: list[GanttTask] = []
        self.is_loaded = False

    # Loading

    def load(self) -> None:
        projects = self.__call_backend("load projects", self.backend.list_projects)
        stored_entries = self.__call_backend(
            "load timeline entries", self.backend.list_timeline_entries
        )

        project_ids = {project["id"] for project in projects}
        stored_by_id = {entry["id"]: entry for entry in stored_entries}

        tasks: list[GanttTask] = []
        for project in projects:
            entry = get_project_gantt_task(project)
            stored_entry = stored_by_id.get(project["id"])
            if stored_entry is not None:
                for field in CARRIED_ENTRY_FIELDS:
                    entry[field] = stored_entry[field]  # type: ignore[literal-required]
            tasks.append(entry)

        for entry in stored_entries:
            if entry["id"] in project_ids:
                continue
            if entry["project"] not in project_ids:
                logger.warning(
                    "dropping timeline entry %s: unknown project %s",
                    entry["id"],
                    entry["project"],
                )
                continue
            tasks.append(entry)

        self._projects = projects
        self._tasks = tasks
        self.is_loaded = True
        logger.info("loaded %d projects, %d timeline entries", len(projects), len(tasks))

    # Queries

    @property
    def projects(self) -> list[Project]:
        return deepcopy(self._projects)

    @property
    def tasks(self) -> list[GanttTask]:
        return deepcopy(self._tasks)

    def get_project_by_id(self, id: EntityId) -> Optional[Project]:
        index = self.__find_project_index(id)
        if index is None:
            return None
        return deepcopy(self._projects[index])

    def find_project(self, ref: str) -> Optional[Project]:
        """Find a project by id, code, or an unambiguous id prefix."""
        project = self.get_project_by_id(ref)
        if project is not None:
            return project

        for candidate in self._projects:
            if candidate["code"] == ref:
                return deepcopy(candidate)

        matches = [
            candidate
            for candidate in self._projects
            if candidate["id"] is not None and candidate["id"].startswith(ref)
        ]
        if len(matches) == 1:
            return deepcopy(matches[0])
        return None

    def get_timeline_entry(self, id: EntityId) -> Optional[GanttTask]:
        index = self.__find_task_index(id)
        if index is None:
            return None
        return deepcopy(self._tasks[index])

    def find_timeline_entry(self, ref: str) -> Optional[GanttTask]:
        """Find a timeline entry by id or an unambiguous id prefix."""
        entry = self.get_timeline_entry(ref)
        if entry is not None:
            return entry
        matches = [
            task
            for task in self._tasks
            if task["id"] is not None and task["id"].startswith(ref)
        ]
        if len(matches) == 1:
            return deepcopy(matches[0])
        return None

    def tasks_for_project(self, project_id: EntityId) -> list[GanttTask]:
        return [deepcopy(task) for task in self._tasks if task["project"] == project_id]

    def get_current_user(self) -> Optional[User]:
        return self.__call_backend("load current user", self.backend.get_current_user)

    def list_users(self) -> list[User]:
        return self.__call_backend("load users", self.backend.list_users)

    # Projects

    def add_project(self, fields: ProjectPatch) -> Project:
        self.__check_known_fields(fields, PROJECT_FIELDS)

        candidate = cast(dict[str, Any], get_project_template())
        for field in REQUIRED_PROJECT_FIELDS:
            candidate[field] = None
        candidate.update(deepcopy(dict(fields)))
        self.__validate_project(candidate)

        project = self.__normalize_project(candidate)
        project["id"] = generate_entity_id()
        entry = get_project_gantt_task(project)

        self.__call_backend("create project", self.backend.create_project, project)
        self.__call_backend("save timeline entry", self.backend.save_timeline_entry, entry)

        self._projects.append(project)
        self._tasks.append(entry)
        logger.info("added project %s (%s)", project["id"], project["code"])
        return deepcopy(project)

    def update_project(self, id: EntityId, patch: ProjectPatch) -> None:
        index = self.__project_index(id)
        if not patch:
            return
        self.__check_known_fields(patch, PROJECT_FIELDS)

        current = self._projects[index]
        candidate = cast(dict[str, Any], deepcopy(current))
        candidate.update(deepcopy(dict(patch)))
        self.__validate_project(candidate, exclude_id=id)
        project = self.__normalize_project(candidate)

        entry = self.get_timeline_entry(id) or get_project_gantt_task(current)
        for task_field, project_field in PROJECT_LINKED_FIELDS.items():
            entry[task_field] = project[project_field]  # type: ignore[literal-required]

        self.__commit(project=project, entry=entry)
        logger.info("updated project %s", id)

    def delete_project(self, id: EntityId) -> None:
        self.__project_index(id)
        removed_ids = [
            task["id"]
            for task in self._tasks
            if task["project"] == id and task["id"] is not None
        ]

        self.__call_backend("delete project", self.backend.delete_project, id)
        for task_id in removed_ids:
            self.__call_backend(
                "delete timeline entry", self.backend.delete_timeline_entry, task_id
            )

        self._projects = [project for project in self._projects if project["id"] != id]
        self._tasks = [task for task in self._tasks if task["project"] != id]
        logger.info("deleted project %s and %d timeline entries", id, len(removed_ids))

    # Timeline entries

    def add_timeline_entry(self, fields: GanttTaskPatch) -> GanttTask:
        self.__check_known_fields(fields, GANTT_TASK_FIELDS)

        candidate = cast(dict[str, Any], get_gantt_task_template())
        candidate["start"] = None
        candidate["end"] = None
        candidate.update(deepcopy(dict(fields)))

        project_id = candidate.get("project")
        if self.__find_project_index(project_id) is None:
            raise NotFoundError("project", project_id)
        if candidate["type"] == "project":
            raise ValidationError(
                {"type": "project-level entries are created with their project"}
            )
        self.__validate_entry(candidate)

        entry = self.__normalize_entry(candidate)
        entry["id"] = generate_entity_id()

        self.__call_backend("save timeline entry", self.backend.save_timeline_entry, entry)

        self._tasks.append(entry)
        logger.info("added timeline entry %s to project %s", entry["id"], entry["project"])
        return deepcopy(entry)

    def update_timeline_entry(self, task_id: EntityId, patch: GanttTaskPatch) -> None:
        """
        Merge fields into a timeline entry.

        For a project-level entry, changes to name, start, end or status are
        applied to the project in the same commit. The project is never
        re-propagated back to the entry, so the sync cannot loop.
        """
        index = self.__task_index(task_id)
        if not patch:
            return
        self.__check_known_fields(patch, GANTT_TASK_FIELDS)

        candidate = cast(dict[str, Any], deepcopy(self._tasks[index]))
        candidate.update(deepcopy(dict(patch)))
        self.__validate_entry(candidate)
        entry = self.__normalize_entry(candidate)

        project_index = self.__find_project_index(task_id)
        if project_index is None:
            if self.__find_project_index(entry["project"]) is None:
                raise ValidationError({"project": f"unknown project '{entry['project']}'"})
            if entry["type"] == "project":
                raise ValidationError(
                    {"type": "only a project's own entry can have type 'project'"}
                )
            self.__commit(project=None, entry=entry)
            logger.info("updated timeline entry %s", task_id)
            return

        errors: dict[str, str] = {}
        if entry["type"] != "project":
            errors["type"] = "a project's own entry must keep type 'project'"
        if entry["project"] != task_id:
            errors["project"] = "a project's own entry cannot move to another project"
        if entry["status"] is None:
            errors["status"] = "required"
        if errors:
            raise ValidationError(errors)

        project_candidate = cast(dict[str, Any], deepcopy(self._projects[project_index]))
        for task_field, project_field in PROJECT_LINKED_FIELDS.items():
            project_candidate[project_field] = entry[task_field]  # type: ignore[literal-required]
        self.__validate_project(project_candidate, exclude_id=task_id)
        project = self.__normalize_project(project_candidate)

        self.__commit(project=project, entry=entry)
        logger.info("updated project entry %s and synced its project", task_id)

    def delete_timeline_entry(self, task_id: EntityId) -> None:
        self.__task_index(task_id)
        if self.__find_project_index(task_id) is not None:
            raise ValidationError(
                {"id": "a project's own entry is removed by deleting the project"}
            )

        self.__call_backend(
            "delete timeline entry", self.backend.delete_timeline_entry, task_id
        )
        self._tasks = [task for task in self._tasks if task["id"] != task_id]
        logger.info("deleted timeline entry %s", task_id)

    # Internals

    def __commit(self, project: Optional[Project], entry: Optional[GanttTask]) -> None:
        """Write the records to the backend, then replace them in memory."""
        if project is not None:
            if project["id"] is None:
                raise ValueError("project id cannot be None")
            self.__call_backend(
                "update project", self.backend.update_project, project["id"], project
            )
        if entry is not None:
            self.__call_backend(
                "save timeline entry", self.backend.save_timeline_entry, entry
            )

        if project is not None and project["id"] is not None:
            self._projects[self.__project_index(project["id"])] = project
        if entry is not None and entry["id"] is not None:
            task_index = self.__find_task_index(entry["id"])
            if task_index is None:
                self._tasks.append(entry)
            else:
                self._tasks[task_index] = entry

    def __call_backend(self, action: str, call: Callable[..., T], *args: Any) -> T:
        try:
            return call(*args)
        except Exception as e:
            message = f"failed to {action}: {e}"
            logger.error(message)
            raise SyncError(message) from e

    def __find_project_index(self, id: Optional[EntityId]) -> Optional[int]:
        for index, project in enumerate(self._projects):
            if project["id"] == id:
                return index
        return None

    def __project_index(self, id: EntityId) -> int:
        index = self.__find_project_index(id)
        if index is None:
            raise NotFoundError("project", id)
        return index

    def __find_task_index(self, id: Optional[EntityId]) -> Optional[int]:
        for index, task in enumerate(self._tasks):
            if task["id"] == id:
                return index
        return None

    def __task_index(self, id: EntityId) -> int:
        index = self.__find_task_index(id)
        if index is None:
            raise NotFoundError("timeline entry", id)
        return index

    def __check_known_fields(self, fields: Mapping[str, Any], known: tuple[str, ...]) -> None:
        errors = {
            field: "unknown field" if field != "id" else "ids are assigned by the store"
            for field in fields
            if field not in known or field == "id"
        }
        if errors:
            raise ValidationError(errors)

    def __validate_project(
        self, project: Mapping[str, Any], exclude_id: Optional[EntityId] = None
    ) -> None:
        errors: dict[str, str] = {}

        for field in REQUIRED_PROJECT_FIELDS:
            value = project.get(field)
            if value is None or (isinstance(value, str) and value.strip() == ""):
                errors[field] = "required"

        for field in ("start_date", "end_date"):
            value = project.get(field)
            if field not in errors and not isinstance(value, datetime.date):
                errors[field] = "expected a calendar date"

        if "start_date" not in errors and "end_date" not in errors:
            if as_date(project["end_date"]) < as_date(project["start_date"]):
                errors["end_date"] = "must not be before start_date"

        if project.get("status") not in PROJECT_STATUSES:
            errors["status"] = f"expected one of {', '.join(PROJECT_STATUSES)}"

        for field in ("designer_ids", "developer_ids"):
            if not isinstance(project.get(field), list):
                errors[field] = "expected a list of user ids"

        code = project.get("code")
        if "code" not in errors:
            for other in self._projects:
                if other["code"] == code and other["id"] != exclude_id:
                    errors["code"] = f"'{code}' is already used by another project"
                    break

        if errors:
            raise ValidationError(errors)

    def __validate_entry(self, entry: Mapping[str, Any]) -> None:
        errors: dict[str, str] = {}

        name = entry.get("name")
        if not isinstance(name, str) or name.strip() == "":
            errors["name"] = "required"

        for field in ("start", "end"):
            if not isinstance(entry.get(field), datetime.date):
                errors[field] = "expected a calendar date"
        if "start" not in errors and "end" not in errors:
            if as_date(entry["end"]) < as_date(entry["start"]):
                errors["end"] = "must not be before start"

        progress = entry.get("progress")
        if (
            isinstance(progress, bool)
            or not isinstance(progress, int)
            or not 0 <= progress <= 100
        ):
            errors["progress"] = "expected a whole number between 0 and 100"

        if entry.get("type") not in TASK_TYPES:
            errors["type"] = f"expected one of {', '.join(TASK_TYPES)}"

        status = entry.get("status")
        if status is not None and status not in PROJECT_STATUSES:
            errors["status"] = f"expected one of {', '.join(PROJECT_STATUSES)}"

        dependencies = entry.get("dependencies")
        if dependencies is not None and not isinstance(dependencies, (str, list)):
            errors["dependencies"] = "expected a list of ids"

        if errors:
            raise ValidationError(errors)

    def __normalize_project(self, project: dict[str, Any]) -> Project:
        project["start_date"] = as_date(project["start_date"])
        project["end_date"] = as_date(project["end_date"])
        project["designer_ids"] = list(project["designer_ids"])
        project["developer_ids"] = list(project["developer_ids"])
        return cast(Project, project)

    def __normalize_entry(self, entry: dict[str, Any]) -> GanttTask:
        entry["start"] = as_date(entry["start"])
        entry["end"] = as_date(entry["end"])
        entry["dependencies"] = dependency_ids(entry) or None
        return cast(GanttTask, entry)

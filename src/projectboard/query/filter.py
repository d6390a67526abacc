# SPDX-License-Identifier: MIT

import datetime
from abc import ABC, abstractmethod
from typing import Any, Iterable, Optional, Sequence, cast

from projectboard.model.entity_id import EntityId
from projectboard.model.filter import FilterOptions
from projectboard.model.gantt_task import GanttTask
from projectboard.model.project import Project, ProjectStatus
from projectboard.timeline.window import DateRange, overlaps


class Predicate(ABC):
    @abstractmethod
    def include(self, item: dict[str, Any]) -> bool: ...

    def filter(self, items: Sequence[dict[str, Any]]) -> list[dict[str, Any]]:
        return [item for item in items if self.include(item)]


class And(Predicate):
    def __init__(self) -> None:
        self.predicates: list[Predicate] = []

    def add_predicate(self, predicate: Predicate) -> None:
        self.predicates.append(predicate)

    def include(self, item: dict[str, Any]) -> bool:
        return all(predicate.include(item) for predicate in self.predicates)


class Equals(Predicate):
    def __init__(self, property: str, value: Any) -> None:
        self.property = property
        self.value = value

    def include(self, item: dict[str, Any]) -> bool:
        return self.property in item and item[self.property] == self.value


class ContainsNoCase(Predicate):
    def __init__(self, property: str, value: str) -> None:
        self.property = property
        self.value = value.lower()

    def include(self, item: dict[str, Any]) -> bool:
        if self.property not in item or item[self.property] is None:
            return False
        return self.value in str(item[self.property]).lower()


class Member(Predicate):
    """Matches when the value is present in any of the given list properties."""

    def __init__(self, properties: list[str], value: Any) -> None:
        self.properties = properties
        self.value = value

    def include(self, item: dict[str, Any]) -> bool:
        for property in self.properties:
            members = item.get(property)
            if members is not None and self.value in members:
                return True
        return False


class Overlaps(Predicate):
    def __init__(
        self,
        start_property: str,
        end_property: str,
        start: datetime.date,
        end: datetime.date,
    ) -> None:
        self.start_property = start_property
        self.end_property = end_property
        self.start = start
        self.end = end

    def include(self, item: dict[str, Any]) -> bool:
        item_start = item.get(self.start_property)
        item_end = item.get(self.end_property)
        if item_start is None or item_end is None:
            return False
        return overlaps(item_start, item_end, self.start, self.end)


def project_predicate(options: FilterOptions) -> Predicate:
    """Combine every supplied criterion with AND."""
    predicate = And()
    if options.get("client"):
        predicate.add_predicate(Equals("client", options["client"]))
    if options.get("status"):
        predicate.add_predicate(Equals("status", options["status"]))
    date_range = options.get("date_range")
    if date_range is not None:
        predicate.add_predicate(
            Overlaps("start_date", "end_date", date_range["start"], date_range["end"])
        )
    if options.get("assignee"):
        predicate.add_predicate(
            Member(["designer_ids", "developer_ids"], options["assignee"])
        )
    return predicate


def filter_projects(projects: Iterable[Project], options: FilterOptions) -> list[Project]:
    items = cast(list[dict[str, Any]], list(projects))
    return cast(list[Project], project_predicate(options).filter(items))


def filter_tasks_by_text(
    tasks: Iterable[GanttTask], projects: Iterable[Project], term: Optional[str]
) -> list[GanttTask]:
    """
    Case-insensitive substring match on the task name or the name of the
    project owning it. An empty term matches every task.
    """
    task_list = list(tasks)
    if term is None or term.strip() == "":
        return task_list

    project_names: dict[Optional[EntityId], str] = {
        project["id"]: project["name"] for project in projects
    }
    task_name = ContainsNoCase("name", term.strip())
    owner_name = ContainsNoCase("project_name", term.strip())

    matched: list[GanttTask] = []
    for task in task_list:
        if task_name.include(cast(dict[str, Any], task)) or owner_name.include(
            {"project_name": project_names.get(task["project"])}
        ):
            matched.append(task)
    return matched


def filter_tasks_in_range(
    tasks: Iterable[GanttTask], date_range: DateRange
) -> list[GanttTask]:
    predicate = Overlaps("start", "end", date_range.start, date_range.end)
    items = cast(list[dict[str, Any]], list(tasks))
    return cast(list[GanttTask], predicate.filter(items))


def filter_tasks_by_status(
    tasks: Iterable[GanttTask], status: Optional[ProjectStatus]
) -> list[GanttTask]:
    task_list = list(tasks)
    if status is None:
        return task_list
    items = cast(list[dict[str, Any]], task_list)
    return cast(list[GanttTask], Equals("status", status).filter(items))

# SPDX-License-Identifier: MIT

from typing import Iterable, Mapping, Optional, TypedDict, cast

from projectboard.model.entity_id import EntityId
from projectboard.model.gantt_task import GanttTask
from projectboard.time import as_date
from projectboard.timeline.projector import BarGeometry
from projectboard.timeline.window import DisplayWindow


class DependencyLink(TypedDict):
    predecessor_id: EntityId
    dependent_id: EntityId
    start: float
    end: float


def parse_dependencies(value: Optional[str]) -> list[EntityId]:
    """Split a comma-joined dependency string into trimmed, non-empty ids."""
    if value is None:
        return []
    ids: list[EntityId] = []
    for raw_id in value.split(","):
        dependency_id = raw_id.strip()
        if dependency_id and dependency_id not in ids:
            ids.append(dependency_id)
    return ids


def format_dependencies(ids: Optional[Iterable[EntityId]]) -> Optional[str]:
    if ids is None:
        return None
    joined = ",".join(ids)
    return joined or None


def dependency_ids(task: Mapping[str, object]) -> list[EntityId]:
    dependencies = task.get("dependencies")
    if dependencies is None:
        return []
    if isinstance(dependencies, str):
        return parse_dependencies(dependencies)
    return parse_dependencies(",".join(cast(Iterable[str], dependencies)))


def resolve_dependencies(
    task: Mapping[str, object], all_tasks: Iterable[GanttTask]
) -> list[GanttTask]:
    """
    Look up the predecessors of a task, in dependency order.

    Ids that do not match any task are skipped: links are drawn on a
    best-effort basis and never enforce referential integrity. A repeated
    id resolves once and a task listing its own id gets no link to itself.
    """
    tasks_by_id = {candidate["id"]: candidate for candidate in all_tasks}
    own_id = task.get("id")

    predecessors: list[GanttTask] = []
    for dependency_id in dependency_ids(task):
        if dependency_id == own_id:
            continue
        predecessor = tasks_by_id.get(dependency_id)
        if predecessor is not None:
            predecessors.append(predecessor)
    return predecessors


def link_bars(
    tasks: Iterable[GanttTask], bars: Mapping[EntityId, BarGeometry]
) -> list[DependencyLink]:
    """
    Connecting lines for the continuous chart, from each predecessor's bar
    start to the dependent's bar start. Pairs without both bars are skipped.
    """
    task_list = list(tasks)
    links: list[DependencyLink] = []

    for task in task_list:
        task_id = task["id"]
        if task_id is None or task_id not in bars:
            continue
        for predecessor in resolve_dependencies(task, task_list):
            predecessor_id = predecessor["id"]
            if predecessor_id is None or predecessor_id not in bars:
                continue
            links.append(
                {
                    "predecessor_id": predecessor_id,
                    "dependent_id": task_id,
                    "start": bars[predecessor_id]["left"],
                    "end": bars[task_id]["left"],
                }
            )

    return links


def link_cells(
    tasks: Iterable[GanttTask], window: DisplayWindow
) -> list[DependencyLink]:
    """
    Connecting lines for the grid, from the predecessor's last visible column
    to the dependent's first visible column. Nothing is drawn when either
    task lies outside the window.
    """
    task_list = list(tasks)
    links: list[DependencyLink] = []

    for task in task_list:
        task_id = task["id"]
        dependent_column = _first_visible_column(task, window)
        if task_id is None or dependent_column is None:
            continue
        for predecessor in resolve_dependencies(task, task_list):
            predecessor_id = predecessor["id"]
            predecessor_column = _last_visible_column(predecessor, window)
            if predecessor_id is None or predecessor_column is None:
                continue
            links.append(
                {
                    "predecessor_id": predecessor_id,
                    "dependent_id": task_id,
                    "start": predecessor_column,
                    "end": dependent_column,
                }
            )

    return links


def _first_visible_column(task: GanttTask, window: DisplayWindow) -> Optional[int]:
    start = as_date(task["start"])
    end = as_date(task["end"])
    if start > window.end or end < window.start:
        return None
    return window.index_of(max(start, window.start))


def _last_visible_column(task: GanttTask, window: DisplayWindow) -> Optional[int]:
    start = as_date(task["start"])
    end = as_date(task["end"])
    if start > window.end or end < window.start:
        return None
    return window.index_of(min(end, window.end))

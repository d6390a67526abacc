# SPDX-License-Identifier: MIT

from projectboard.model.gantt_task import GanttTask
from projectboard.model.project import Project
from projectboard.time import today


def get_gantt_task_template() -> GanttTask:
    now = today()
    return {
        "id": None,
        "name": "",
        "start": now,
        "end": now,
        "progress": 0,
        "dependencies": None,
        "type": "task",
        "project": "",
        "status": None,
        "assignee": None,
    }


def get_project_gantt_task(project: Project) -> GanttTask:
    """Derive the project-level timeline entry for a project."""
    if project["id"] is None:
        raise ValueError("project id cannot be None")

    task = get_gantt_task_template()
    task["id"] = project["id"]
    task["name"] = project["name"]
    task["start"] = project["start_date"]
    task["end"] = project["end_date"]
    task["type"] = "project"
    task["project"] = project["id"]
    task["status"] = project["status"]
    return task

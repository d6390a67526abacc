# SPDX-License-Identifier: MIT

from typing import Optional

from rich import box
from rich.console import Console
from rich.table import Table

from projectboard.color import status_color, status_label
from projectboard.model.entity_id import EntityId
from projectboard.model.gantt_task import GanttTask
from projectboard.model.project import Project
from projectboard.time import date_to_display_str
from projectboard.timeline.dependency import dependency_ids
from projectboard.timeline.projector import progress_label, sort_tasks
from projectboard.view.header import header


def tasks_view(
    report_name: str,
    tasks: list[GanttTask],
    projects: list[Project],
    show_header: bool = True,
) -> None:
    if show_header:
        header(report_name)

    project_codes: dict[Optional[EntityId], str] = {
        project["id"]: project["code"] for project in projects
    }
    short_ids = {task["id"]: (task["id"] or "")[:8] for task in tasks}

    tasks_table = Table(box=box.SIMPLE)
    tasks_table.add_column("id")
    tasks_table.add_column("project")
    tasks_table.add_column("name")
    tasks_table.add_column("type")
    tasks_table.add_column("start")
    tasks_table.add_column("end")
    tasks_table.add_column("progress", justify="right")
    tasks_table.add_column("status")
    tasks_table.add_column("assignee")
    tasks_table.add_column("depends on")

    for task in sort_tasks(tasks):
        color = status_color(task["status"])
        name = task["name"]
        if task["type"] == "project":
            name = f"[bold]{name}[/bold]"
        tasks_table.add_row(
            short_ids[task["id"]],
            project_codes.get(task["project"], ""),
            name,
            task["type"],
            date_to_display_str(task["start"]),
            date_to_display_str(task["end"]),
            progress_label(task),
            f"[{color}]{status_label(task['status'])}[/{color}]",
            task["assignee"] or "",
            ", ".join(
                short_ids.get(dependency_id, dependency_id[:8])
                for dependency_id in dependency_ids(task)
            ),
        )

    console = Console()
    console.print(tasks_table)

# SPDX-License-Identifier: MIT

from typing import Optional

from rich import box
from rich.console import Console
from rich.table import Table

from projectboard.color import status_color, status_label
from projectboard.model.gantt_task import GanttTask
from projectboard.model.project import Project
from projectboard.model.user import User
from projectboard.time import date_to_display_str
from projectboard.view.header import header
from projectboard.view.task import tasks_view


def _user_names(user_ids: list[str], users: list[User]) -> str:
    names_by_id = {user["id"]: user["name"] for user in users}
    return ", ".join(names_by_id.get(user_id, user_id) for user_id in user_ids)


def projects_view(
    report_name: str,
    projects: list[Project],
    columns: list[str] = ["id", "code", "name", "client", "status", "start", "end"],
    no_wrap: bool = False,
) -> None:
    header(report_name)

    projects_table = Table(box=box.SIMPLE)
    for column in columns:
        if no_wrap and column != "id":
            projects_table.add_column(column, no_wrap=True, overflow="ellipsis")
        else:
            projects_table.add_column(column)

    for project in projects:
        color = status_color(project["status"])
        row = []
        for column in columns:
            column_value = ""
            if column == "id":
                column_value = (project["id"] or "")[:8]
            elif column == "status":
                column_value = f"[{color}]{status_label(project['status'])}[/{color}]"
            elif column == "start":
                column_value = date_to_display_str(project["start_date"])
            elif column == "end":
                column_value = date_to_display_str(project["end_date"])
            elif project.get(column) is not None:
                column_value = str(project[column])  # type: ignore[literal-required]
            row.append(column_value)
        projects_table.add_row(*row)

    console = Console()
    console.print(projects_table)


def single_project_view(
    project: Project,
    tasks: Optional[list[GanttTask]] = None,
    users: list[User] = [],
) -> None:
    header("project")

    color = status_color(project["status"])
    project_table = Table(box=box.SIMPLE)
    project_table.add_column("property")
    project_table.add_column("value")

    project_table.add_row("id", project["id"])
    project_table.add_row("code", project["code"])
    project_table.add_row("name", project["name"])
    project_table.add_row("client", project["client"])
    project_table.add_row("status", f"[{color}]{status_label(project['status'])}[/{color}]")
    project_table.add_row("start", date_to_display_str(project["start_date"]))
    project_table.add_row("end", date_to_display_str(project["end_date"]))
    project_table.add_row("designers", _user_names(project["designer_ids"], users))
    project_table.add_row("developers", _user_names(project["developer_ids"], users))
    if project["created_by"] is not None:
        project_table.add_row("created by", _user_names([project["created_by"]], users))
    project_table.add_row("description", project["description"] or "")

    console = Console()
    console.print(project_table)

    if tasks:
        tasks_view("timeline entries", tasks, [project], show_header=False)

# SPDX-License-Identifier: MIT

from typing import Annotated, Optional, cast

import pendulum
import typer
from rich.console import Console

from projectboard.model.entity_id import EntityId
from projectboard.model.gantt_task import GanttTaskPatch, TaskType
from projectboard.model.project import ProjectStatus
from projectboard.query.filter import filter_tasks_by_status, filter_tasks_by_text
from projectboard.service.store import ProjectStore
from projectboard.terminal.custom_typer import AliasedTyperGroup
from projectboard.terminal.parse import parse_date, parse_id_list
from projectboard.terminal.session import (
    get_session,
    require_project,
    require_timeline_entry,
    store_errors,
)
from projectboard.terminal.validate import (
    validate_progress,
    validate_status,
    validate_task_type,
)
from projectboard.view.task import tasks_view

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


def resolve_dependency_ids(store: ProjectStore, refs: list[str]) -> list[EntityId]:
    return [
        cast(EntityId, require_timeline_entry(store, ref)["id"]) for ref in refs
    ]


@app.command("add, a", no_args_is_help=True)
def add(
    ctx: typer.Context,
    project_ref: Annotated[str, typer.Argument(help="project id, id prefix or code")],
    name: str,
    start: Annotated[
        Optional[pendulum.Date],
        typer.Option(
            "--start",
            "-s",
            parser=parse_date,
            help="valid inputs: YYYY-MM-DD, today, yesterday, tomorrow, or day offset like 1, -1",
        ),
    ] = None,
    end: Annotated[
        Optional[pendulum.Date],
        typer.Option(
            "--end",
            "-e",
            parser=parse_date,
            help="valid inputs: YYYY-MM-DD, today, yesterday, tomorrow, or day offset like 1, -1",
        ),
    ] = None,
    progress: Annotated[
        int, typer.Option("--progress", "-pr", callback=validate_progress)
    ] = 0,
    task_type: Annotated[
        str, typer.Option("--type", "-ty", callback=validate_task_type)
    ] = "task",
    depends_on: Annotated[
        Optional[str],
        typer.Option("--depends-on", "-dep", help="comma-separated entry ids"),
    ] = None,
    status: Annotated[
        Optional[str], typer.Option("--status", "-st", callback=validate_status)
    ] = None,
    assignee: Annotated[Optional[str], typer.Option("--assignee", "-as")] = None,
) -> None:
    session = get_session(ctx)

    with store_errors():
        store = session.store
        project = require_project(store, project_ref)
        dependencies = resolve_dependency_ids(store, parse_id_list(depends_on) or [])

        entry = store.add_timeline_entry(
            {
                "name": name,
                "start": start or project["start_date"],
                "end": end or start or project["end_date"],
                "progress": progress,
                "type": cast(TaskType, task_type),
                "project": cast(EntityId, project["id"]),
                "dependencies": dependencies or None,
                "status": cast(Optional[ProjectStatus], status),
                "assignee": assignee,
            }
        )

    tasks_view("timeline entry", [entry], [project])


@app.command("modify, m", no_args_is_help=True)
def modify(
    ctx: typer.Context,
    ref: Annotated[str, typer.Argument(help="entry id or id prefix")],
    name: Annotated[Optional[str], typer.Option("--name", "-n")] = None,
    start: Annotated[
        Optional[pendulum.Date],
        typer.Option(
            "--start",
            "-s",
            parser=parse_date,
            help="valid inputs: YYYY-MM-DD, today, yesterday, tomorrow, or day offset like 1, -1",
        ),
    ] = None,
    end: Annotated[
        Optional[pendulum.Date],
        typer.Option(
            "--end",
            "-e",
            parser=parse_date,
            help="valid inputs: YYYY-MM-DD, today, yesterday, tomorrow, or day offset like 1, -1",
        ),
    ] = None,
    progress: Annotated[
        Optional[int], typer.Option("--progress", "-pr", callback=validate_progress)
    ] = None,
    task_type: Annotated[
        Optional[str], typer.Option("--type", "-ty", callback=validate_task_type)
    ] = None,
    depends_on: Annotated[
        Optional[str],
        typer.Option("--depends-on", "-dep", help="comma-separated entry ids, replaces"),
    ] = None,
    remove_dependencies: Annotated[
        bool, typer.Option("--remove-dependencies", "-rdep")
    ] = False,
    status: Annotated[
        Optional[str], typer.Option("--status", "-st", callback=validate_status)
    ] = None,
    assignee: Annotated[Optional[str], typer.Option("--assignee", "-as")] = None,
    remove_assignee: Annotated[bool, typer.Option("--remove-assignee", "-ras")] = False,
) -> None:
    """
    Modify a timeline entry. Changing the name, dates or status of a
    project's own entry changes the project as well.
    """
    session = get_session(ctx)

    with store_errors():
        store = session.store
        entry = require_timeline_entry(store, ref)
        entry_id = cast(EntityId, entry["id"])

        patch: GanttTaskPatch = {}
        if name is not None:
            patch["name"] = name
        if start is not None:
            patch["start"] = start
        if end is not None:
            patch["end"] = end
        if progress is not None:
            patch["progress"] = progress
        if task_type is not None:
            patch["type"] = cast(TaskType, task_type)
        if depends_on is not None:
            patch["dependencies"] = resolve_dependency_ids(
                store, parse_id_list(depends_on) or []
            )
        if remove_dependencies:
            patch["dependencies"] = None
        if status is not None:
            patch["status"] = cast(ProjectStatus, status)
        if assignee is not None:
            patch["assignee"] = assignee
        if remove_assignee:
            patch["assignee"] = None

        store.update_timeline_entry(entry_id, patch)
        updated_entry = require_timeline_entry(store, entry_id)

    tasks_view("timeline entry", [updated_entry], store.projects)


@app.command("delete, d", no_args_is_help=True)
def delete(
    ctx: typer.Context,
    refs: Annotated[str, typer.Argument(help="comma-separated entry ids")],
) -> None:
    session = get_session(ctx)
    console = Console()

    with store_errors():
        store = session.store
        for ref in parse_id_list(refs) or []:
            entry = require_timeline_entry(store, ref)
            store.delete_timeline_entry(cast(EntityId, entry["id"]))
            console.print(f"[green]Deleted timeline entry {entry['name']}.[/green]")


@app.command("list, ls")
def list_tasks(
    ctx: typer.Context,
    project_ref: Annotated[
        Optional[str], typer.Option("--project", "-p", help="project id or code")
    ] = None,
    search: Annotated[
        Optional[str],
        typer.Option("--search", "-q", help="matches entry or project name"),
    ] = None,
    status: Annotated[
        Optional[str], typer.Option("--status", "-st", callback=validate_status)
    ] = None,
) -> None:
    session = get_session(ctx)

    with store_errors():
        store = session.store
        projects = store.projects
        if project_ref is not None:
            project = require_project(store, project_ref)
            tasks = store.tasks_for_project(cast(EntityId, project["id"]))
        else:
            tasks = store.tasks

        tasks = filter_tasks_by_text(tasks, projects, search)
        tasks = filter_tasks_by_status(tasks, cast(Optional[ProjectStatus], status))

    tasks_view("timeline entries", tasks, projects)

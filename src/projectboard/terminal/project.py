# SPDX-License-Identifier: MIT

from typing import Annotated, Optional, cast

import pendulum
import typer
from rich.console import Console

from projectboard.errors import NotFoundError
from projectboard.model.entity_id import EntityId
from projectboard.model.filter import FilterOptions
from projectboard.model.project import ProjectPatch, ProjectStatus
from projectboard.model.user import User
from projectboard.query.filter import filter_projects
from projectboard.terminal.custom_typer import AliasedTyperGroup
from projectboard.terminal.parse import parse_date
from projectboard.terminal.session import get_session, require_project, store_errors
from projectboard.terminal.validate import validate_status
from projectboard.view.project import projects_view, single_project_view

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


def resolve_user_ids(users: list[User], refs: list[str]) -> list[EntityId]:
    """Map user ids, id prefixes or exact names to user ids."""
    user_ids: list[EntityId] = []
    for ref in refs:
        matches = [
            user
            for user in users
            if user["id"] == ref
            or user["name"] == ref
            or (user["id"] is not None and user["id"].startswith(ref))
        ]
        if len(matches) != 1 or matches[0]["id"] is None:
            raise NotFoundError("user", ref)
        user_ids.append(cast(EntityId, matches[0]["id"]))
    return user_ids


@app.command("add, a", no_args_is_help=True)
def add(
    ctx: typer.Context,
    code: str,
    name: str,
    client: Annotated[str, typer.Option("--client", "-c")],
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
    status: Annotated[
        str, typer.Option("--status", "-st", callback=validate_status)
    ] = "planning",
    designers: Annotated[
        Optional[list[str]],
        typer.Option("--designer", "-d", help="user id or name, repeatable"),
    ] = None,
    developers: Annotated[
        Optional[list[str]],
        typer.Option("--developer", "-dv", help="user id or name, repeatable"),
    ] = None,
    description: Annotated[Optional[str], typer.Option("--description", "-ds")] = None,
) -> None:
    session = get_session(ctx)

    with store_errors():
        store = session.store
        users = store.list_users()
        current_user = store.get_current_user()

        project = store.add_project(
            {
                "code": code,
                "name": name,
                "client": client,
                "start_date": start,
                "end_date": end,
                "status": cast(ProjectStatus, status),
                "designer_ids": resolve_user_ids(users, designers or []),
                "developer_ids": resolve_user_ids(users, developers or []),
                "created_by": current_user["id"] if current_user is not None else None,
                "description": description,
            }
        )

    single_project_view(project, users=users)


@app.command("modify, m", no_args_is_help=True)
def modify(
    ctx: typer.Context,
    ref: Annotated[str, typer.Argument(help="project id, id prefix or code")],
    code: Annotated[Optional[str], typer.Option("--code")] = None,
    name: Annotated[Optional[str], typer.Option("--name", "-n")] = None,
    client: Annotated[Optional[str], typer.Option("--client", "-c")] = None,
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
    status: Annotated[
        Optional[str], typer.Option("--status", "-st", callback=validate_status)
    ] = None,
    designers: Annotated[
        Optional[list[str]],
        typer.Option("--designer", "-d", help="replaces the designers, repeatable"),
    ] = None,
    developers: Annotated[
        Optional[list[str]],
        typer.Option("--developer", "-dv", help="replaces the developers, repeatable"),
    ] = None,
    description: Annotated[Optional[str], typer.Option("--description", "-ds")] = None,
) -> None:
    session = get_session(ctx)

    with store_errors():
        store = session.store
        project = require_project(store, ref)
        users = store.list_users()

        patch: ProjectPatch = {}
        if code is not None:
            patch["code"] = code
        if name is not None:
            patch["name"] = name
        if client is not None:
            patch["client"] = client
        if start is not None:
            patch["start_date"] = start
        if end is not None:
            patch["end_date"] = end
        if status is not None:
            patch["status"] = cast(ProjectStatus, status)
        if designers is not None:
            patch["designer_ids"] = resolve_user_ids(users, designers)
        if developers is not None:
            patch["developer_ids"] = resolve_user_ids(users, developers)
        if description is not None:
            patch["description"] = description

        project_id = cast(EntityId, project["id"])
        store.update_project(project_id, patch)
        updated_project = require_project(store, project_id)

    single_project_view(updated_project, store.tasks_for_project(project_id), users)


@app.command("delete, d", no_args_is_help=True)
def delete(
    ctx: typer.Context,
    ref: Annotated[str, typer.Argument(help="project id, id prefix or code")],
    yes: Annotated[bool, typer.Option("--yes", "-y", help="skip confirmation")] = False,
) -> None:
    session = get_session(ctx)
    console = Console()

    with store_errors():
        store = session.store
        project = require_project(store, ref)
        project_id = cast(EntityId, project["id"])
        entry_count = len(store.tasks_for_project(project_id))

        if not yes:
            console.print(
                f"[yellow]This deletes project {project['code']} and its "
                f"{entry_count} timeline entries.[/yellow]"
            )
            if not typer.confirm("Are you sure you want to continue?"):
                console.print("[cyan]Operation cancelled.[/cyan]")
                return

        store.delete_project(project_id)

    console.print(f"[green]Deleted project {project['code']}.[/green]")


@app.command("show, s", no_args_is_help=True)
def show(
    ctx: typer.Context,
    ref: Annotated[str, typer.Argument(help="project id, id prefix or code")],
) -> None:
    session = get_session(ctx)

    with store_errors():
        store = session.store
        project = require_project(store, ref)
        tasks = store.tasks_for_project(cast(EntityId, project["id"]))
        users = store.list_users()

    single_project_view(project, tasks, users)


@app.command("list, ls")
def list_projects(
    ctx: typer.Context,
    client: Annotated[Optional[str], typer.Option("--client", "-c")] = None,
    status: Annotated[
        Optional[str], typer.Option("--status", "-st", callback=validate_status)
    ] = None,
    start: Annotated[
        Optional[pendulum.Date],
        typer.Option("--from", "-f", parser=parse_date, help="range start"),
    ] = None,
    end: Annotated[
        Optional[pendulum.Date],
        typer.Option("--to", "-t", parser=parse_date, help="range end"),
    ] = None,
    assignee: Annotated[
        Optional[str],
        typer.Option("--assignee", "-a", help="user id or name of a designer or developer"),
    ] = None,
    no_wrap: Annotated[bool, typer.Option("--no-wrap")] = False,
) -> None:
    session = get_session(ctx)

    with store_errors():
        store = session.store

        options: FilterOptions = {}
        if client is not None:
            options["client"] = client
        if status is not None:
            options["status"] = cast(ProjectStatus, status)
        if start is not None or end is not None:
            options["date_range"] = {
                "start": start or pendulum.Date.min,
                "end": end or pendulum.Date.max,
            }
        if assignee is not None:
            options["assignee"] = resolve_user_ids(store.list_users(), [assignee])[0]

        projects = filter_projects(store.projects, options)

    projects_view("projects", projects, no_wrap=no_wrap)

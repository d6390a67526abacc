# SPDX-License-Identifier: MIT

from typing import Annotated, Literal, Optional, cast

import pendulum
import typer

from projectboard.model.entity_id import EntityId
from projectboard.model.gantt_task import GanttTask
from projectboard.model.project import ProjectStatus
from projectboard.model.view_mode import ViewMode
from projectboard.query.filter import (
    filter_tasks_by_status,
    filter_tasks_by_text,
    filter_tasks_in_range,
)
from projectboard.service.stats import get_dashboard_stats, recent_projects
from projectboard.service.store import ProjectStore
from projectboard.terminal.custom_typer import AliasedTyperGroup
from projectboard.terminal.parse import parse_date
from projectboard.terminal.session import get_session, require_project, store_errors
from projectboard.terminal.validate import (
    validate_non_negative,
    validate_status,
    validate_view_mode,
)
from projectboard.time import today
from projectboard.timeline.window import navigate, resolve_window
from projectboard.view.calendar import timeline_view
from projectboard.view.gantt import gantt_view
from projectboard.view.stats import dashboard_view

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)

TimelineLayout = Literal["split", "simple"]


def _select_tasks(
    store: ProjectStore,
    project_ref: Optional[str],
    search: Optional[str],
    status: Optional[str],
) -> list[GanttTask]:
    projects = store.projects
    if project_ref is not None:
        project = require_project(store, project_ref)
        tasks = store.tasks_for_project(cast(EntityId, project["id"]))
    else:
        tasks = store.tasks
    tasks = filter_tasks_by_text(tasks, projects, search)
    return filter_tasks_by_status(tasks, cast(Optional[ProjectStatus], status))


@app.command("timeline, tl")
def timeline(
    ctx: typer.Context,
    view_mode: Annotated[
        Optional[str],
        typer.Option("--mode", "-m", callback=validate_view_mode, help="day, week, month or quarter"),
    ] = None,
    anchor: Annotated[
        Optional[pendulum.Date],
        typer.Option(
            "--anchor",
            "-a",
            parser=parse_date,
            help="valid inputs: YYYY-MM-DD, today, yesterday, tomorrow, or day offset like 1, -1",
        ),
    ] = None,
    steps: Annotated[
        int, typer.Option("--step", "-st", help="move by whole periods, e.g. -1 or 1")
    ] = 0,
    layout: Annotated[
        str, typer.Option("--layout", "-l", help="split or simple, picks the padding")
    ] = "split",
    padding: Annotated[
        Optional[int],
        typer.Option("--padding", "-pd", callback=validate_non_negative, help="days shown around the period"),
    ] = None,
    project_ref: Annotated[
        Optional[str], typer.Option("--project", "-p", help="project id or code")
    ] = None,
    search: Annotated[Optional[str], typer.Option("--search", "-q")] = None,
    status: Annotated[
        Optional[str], typer.Option("--status", callback=validate_status)
    ] = None,
) -> None:
    """Day grid of timeline entries for a day, week, month or quarter."""
    if layout not in ("split", "simple"):
        raise typer.BadParameter("Layout must be 'split' or 'simple'")

    session = get_session(ctx)
    config = session.configuration_repository.get_config()

    mode = cast(ViewMode, view_mode or config["default_view_mode"])
    if padding is None:
        if cast(TimelineLayout, layout) == "split":
            padding = config["split_panel_padding_days"]
        else:
            padding = config["simple_timeline_padding_days"]

    current_day = today()
    window = resolve_window(mode, navigate(mode, anchor or current_day, steps), padding)

    with store_errors():
        store = session.store
        tasks = _select_tasks(store, project_ref, search, status)
        projects = store.projects

    timeline_view(
        "timeline",
        filter_tasks_in_range(tasks, window.as_range()),
        projects,
        window,
        mode,
        today=current_day,
    )


@app.command("gantt, g")
def gantt(
    ctx: typer.Context,
    project_ref: Annotated[
        Optional[str], typer.Option("--project", "-p", help="project id or code")
    ] = None,
    search: Annotated[Optional[str], typer.Option("--search", "-q")] = None,
    status: Annotated[
        Optional[str], typer.Option("--status", callback=validate_status)
    ] = None,
    buffer_days: Annotated[
        Optional[int], typer.Option("--buffer", "-b", callback=validate_non_negative)
    ] = None,
) -> None:
    """Chart of timeline entries spanning all of their dates."""
    session = get_session(ctx)
    config = session.configuration_repository.get_config()

    with store_errors():
        store = session.store
        tasks = _select_tasks(store, project_ref, search, status)
        projects = store.projects

    gantt_view(
        "gantt",
        tasks,
        projects,
        buffer_days=buffer_days if buffer_days is not None else config["chart_buffer_days"],
        min_day_width=config["min_day_width"],
    )


@app.command("dashboard, d")
def dashboard(
    ctx: typer.Context,
    limit: Annotated[
        int, typer.Option("--limit", "-n", callback=validate_non_negative)
    ] = 5,
) -> None:
    """Project counts and the most recently started projects."""
    session = get_session(ctx)

    with store_errors():
        projects = session.store.projects

    dashboard_view(get_dashboard_stats(projects), recent_projects(projects, limit))

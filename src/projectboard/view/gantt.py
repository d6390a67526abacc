# SPDX-License-Identifier: MIT

import datetime
import math
from typing import Optional

import pendulum
from rich.console import Console, Group
from rich.padding import Padding
from rich.text import Text

from projectboard.color import DEPENDENCY_STYLE, TODAY_STYLE, status_color
from projectboard.configuration import DEFAULT_CHART_BUFFER_DAYS, DEFAULT_MIN_DAY_WIDTH
from projectboard.model.entity_id import EntityId
from projectboard.model.gantt_task import GanttTask
from projectboard.model.project import Project
from projectboard.time import as_date, date_to_display_str
from projectboard.time import today as local_today
from projectboard.timeline.dependency import DependencyLink, link_bars
from projectboard.timeline.projector import (
    BarGeometry,
    ChartLayout,
    chart_days,
    layout_chart,
    sort_tasks,
)
from projectboard.view.header import header

# Terminal cells stand in for pixels of the chart container
PIXELS_PER_COLUMN = 8


def gantt_view(
    report_name: str,
    tasks: list[GanttTask],
    projects: list[Project],
    buffer_days: int = DEFAULT_CHART_BUFFER_DAYS,
    min_day_width: int = DEFAULT_MIN_DAY_WIDTH,
    today: Optional[datetime.date] = None,
    left_column_width: int = 30,
) -> None:
    """
    Display timeline entries as free-floating bars over their whole date span.

    The chart runs from the earliest start to the latest end, widened by
    `buffer_days` on both sides. Bar geometry is computed in container pixels
    and scaled down to the columns the terminal has.

    Args:
        report_name: The name of the report
        tasks: Entries to draw, one row each
        projects: Projects used to label rows with their code
        buffer_days: Days added before the first start and after the last end
        min_day_width: Narrowest a day may get, in pixels
        today: Day highlighted in the date scale (defaults to today)
        left_column_width: Width of the left column for names (defaults to 30)
    """
    header(report_name)

    console = Console()

    if not tasks:
        console.print("\n[dim]No timeline entries to display[/dim]\n")
        return

    available_width = max(10, console.width - left_column_width)
    layout = layout_chart(
        tasks,
        container_width=available_width * PIXELS_PER_COLUMN,
        buffer_days=buffer_days,
        min_day_width=min_day_width,
    )
    if layout is None:
        return

    scale = available_width / (layout["day_count"] * layout["day_width"])
    current_day = as_date(today) if today is not None else local_today()

    console.print(
        f"\n[bold]{date_to_display_str(layout['start'])} to "
        f"{date_to_display_str(layout['end'])}[/bold] "
        f"({layout['day_count']} days)\n"
    )

    project_codes: dict[Optional[EntityId], str] = {
        project["id"]: project["code"] for project in projects
    }

    chart_elements: list[Text] = [
        _build_date_scale(layout, scale, current_day, left_column_width),
        Text("─" * (left_column_width + available_width), style="dim"),
    ]

    ordered_tasks = sort_tasks(tasks)
    links = link_bars(ordered_tasks, layout["bars"])
    for task in ordered_tasks:
        if task["id"] is None:
            continue
        bar = layout["bars"][task["id"]]
        chart_elements.append(
            _build_bar_row(task, bar, project_codes, scale, left_column_width)
        )
        for link in links:
            if link["dependent_id"] == task["id"]:
                chart_elements.append(_build_link_row(link, scale, left_column_width))

    console.print(Padding(Group(*chart_elements), (0, 0, 1, 0)))


def _column(pixels: float, scale: float) -> int:
    return math.floor(pixels * scale)


def _build_date_scale(
    layout: ChartLayout,
    scale: float,
    today: pendulum.Date,
    left_column_width: int,
) -> Text:
    """Date labels at the chart start and on each Monday that has room."""
    row = Text(" " * left_column_width)
    cursor = 0

    for index, day in enumerate(chart_days(layout)):
        column = _column(index * layout["day_width"], scale)
        is_today = day == today
        if index != 0 and day.day_of_week != pendulum.MONDAY and not is_today:
            continue
        label = "▼" if is_today else day.format("MMM D")
        if column < cursor:
            continue
        row.append(" " * (column - cursor))
        row.append(label, style=TODAY_STYLE if is_today else "dim")
        cursor = column + len(label) + 1
        row.append(" ")

    return row


def _build_bar_row(
    task: GanttTask,
    bar: BarGeometry,
    project_codes: dict[Optional[EntityId], str],
    scale: float,
    left_column_width: int,
) -> Text:
    color = status_color(task["status"])
    if task["type"] == "project":
        color = f"bold {color}"

    row = Text()
    label = f"{project_codes.get(task['project'], '')} {task['name']}".strip()
    if task["type"] != "project":
        label = f"  {label}"
    if len(label) > left_column_width - 1:
        label = label[: left_column_width - 4] + "..."
    row.append(label.ljust(left_column_width), style=color)

    left = _column(bar["left"], scale)
    width = max(1, _column(bar["left"] + bar["width"], scale) - left)
    row.append(" " * left)

    if task["type"] == "milestone" and width <= 2:
        row.append("◆", style=color)
        row.append(f" {bar['label']}", style="dim")
        return row

    progress_label = bar["label"]
    if len(progress_label) + 2 <= width:
        row.append(progress_label.center(width), style=f"reverse {color}")
    else:
        row.append("█" * width, style=color)
        row.append(f" {progress_label}", style="dim")
    return row


def _build_link_row(link: DependencyLink, scale: float, left_column_width: int) -> Text:
    """Connector from the predecessor's bar start to the dependent's bar start."""
    start = _column(link["start"], scale)
    end = _column(link["end"], scale)

    row = Text(" " * left_column_width)
    if start < end:
        row.append(" " * start)
        row.append("╰" + "─" * max(0, end - start - 1) + "▶", style=DEPENDENCY_STYLE)
    elif start > end:
        row.append(" " * end)
        row.append("◀" + "─" * max(0, start - end - 1) + "╯", style=DEPENDENCY_STYLE)
    else:
        row.append(" " * start)
        row.append("↓", style=DEPENDENCY_STYLE)
    return row

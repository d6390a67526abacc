# SPDX-License-Identifier: MIT

import datetime
import math
from typing import Iterable, Optional, TypedDict

import pendulum

from projectboard.configuration import DEFAULT_CHART_BUFFER_DAYS, DEFAULT_MIN_DAY_WIDTH
from projectboard.model.entity_id import EntityId
from projectboard.model.gantt_task import GanttTask
from projectboard.time import as_date, days_between, each_day, is_weekend
from projectboard.time import today as local_today
from projectboard.timeline.window import DateRange, DisplayWindow, overlaps


class GridCell(TypedDict):
    date: pendulum.Date
    in_range: bool
    is_start: bool
    is_end: bool
    is_weekend: bool
    is_today: bool
    show_progress: bool


class GridRow(TypedDict):
    task: GanttTask
    cells: list[GridCell]
    first_index: int
    last_index: int


class BarGeometry(TypedDict):
    offset_days: int
    span_days: int
    left: float
    width: float
    label: str


class ChartLayout(TypedDict):
    start: pendulum.Date
    end: pendulum.Date
    day_count: int
    day_width: float
    bars: dict[EntityId, BarGeometry]


def progress_label(task: GanttTask) -> str:
    return f"{task['progress']}%" if task["progress"] < 100 else "✓"


def task_overlaps(task: GanttTask, date_range: DateRange | DisplayWindow) -> bool:
    return overlaps(task["start"], task["end"], date_range.start, date_range.end)


def tasks_in_window(
    tasks: Iterable[GanttTask], date_range: DateRange | DisplayWindow
) -> list[GanttTask]:
    return [task for task in tasks if task_overlaps(task, date_range)]


def sort_tasks(tasks: Iterable[GanttTask]) -> list[GanttTask]:
    """Order rows by owning project, then by start date."""
    return sorted(tasks, key=lambda task: (task["project"], as_date(task["start"])))


# Grid mode


def project_cell(
    task: GanttTask, date: datetime.date, today: Optional[datetime.date] = None
) -> GridCell:
    day = as_date(date)
    task_start = as_date(task["start"])
    task_end = as_date(task["end"])
    current_day = as_date(today) if today is not None else local_today()

    in_range = task_start <= day <= task_end
    is_start = day == task_start

    return {
        "date": day,
        "in_range": in_range,
        "is_start": is_start,
        "is_end": day == task_end,
        "is_weekend": is_weekend(day),
        "is_today": day == current_day,
        "show_progress": is_start,
    }


def project_grid(
    task: GanttTask,
    window: DisplayWindow,
    today: Optional[datetime.date] = None,
) -> list[GridCell]:
    """Project one task onto every day of the window."""
    current_day = as_date(today) if today is not None else local_today()
    return [project_cell(task, date, current_day) for date in window]


def project_grid_rows(
    tasks: Iterable[GanttTask],
    window: DisplayWindow,
    today: Optional[datetime.date] = None,
) -> list[GridRow]:
    """
    Build grid rows for all tasks visible in the window.

    Tasks outside the window are skipped. `first_index` and `last_index` are
    the window columns of the leading and trailing bar cells.
    """
    current_day = as_date(today) if today is not None else local_today()
    rows: list[GridRow] = []

    for task in sort_tasks(tasks_in_window(tasks, window)):
        cells = project_grid(task, window, current_day)
        covered = [index for index, cell in enumerate(cells) if cell["in_range"]]
        if not covered:
            continue
        rows.append(
            {
                "task": task,
                "cells": cells,
                "first_index": covered[0],
                "last_index": covered[-1],
            }
        )

    return rows


def day_headers(
    window: DisplayWindow, today: Optional[datetime.date] = None
) -> list[GridCell]:
    """Header facts per column (weekend/today) independent of any task."""
    current_day = as_date(today) if today is not None else local_today()
    return [
        {
            "date": day,
            "in_range": False,
            "is_start": False,
            "is_end": False,
            "is_weekend": is_weekend(day),
            "is_today": day == current_day,
            "show_progress": False,
        }
        for day in window
    ]


# Continuous mode


def chart_bounds(
    tasks: Iterable[GanttTask], buffer_days: int = DEFAULT_CHART_BUFFER_DAYS
) -> Optional[DateRange]:
    """Earliest start minus the buffer through latest end plus the buffer."""
    task_list = list(tasks)
    if not task_list:
        return None
    start = min(as_date(task["start"]) for task in task_list)
    end = max(as_date(task["end"]) for task in task_list)
    return DateRange(start.subtract(days=buffer_days), end.add(days=buffer_days))


def day_width(
    container_width: float,
    day_count: int,
    min_day_width: float = DEFAULT_MIN_DAY_WIDTH,
) -> float:
    if day_count <= 0:
        return min_day_width
    return max(min_day_width, container_width / day_count)


def project_bar(
    task: GanttTask, chart_start: datetime.date, width_per_day: float
) -> BarGeometry:
    """
    Position a free-floating bar for a task.

    Both ends are inclusive: a single-day task is exactly one day wide.
    """
    offset_days = math.floor(days_between(chart_start, task["start"]))
    span_days = math.ceil(days_between(task["start"], task["end"])) + 1
    return {
        "offset_days": offset_days,
        "span_days": span_days,
        "left": offset_days * width_per_day,
        "width": span_days * width_per_day,
        "label": progress_label(task),
    }


def layout_chart(
    tasks: Iterable[GanttTask],
    container_width: float,
    buffer_days: int = DEFAULT_CHART_BUFFER_DAYS,
    min_day_width: float = DEFAULT_MIN_DAY_WIDTH,
) -> Optional[ChartLayout]:
    task_list = list(tasks)
    bounds = chart_bounds(task_list, buffer_days)
    if bounds is None:
        return None

    day_count = len(bounds)
    width_per_day = day_width(container_width, day_count, min_day_width)
    bars: dict[EntityId, BarGeometry] = {}
    for task in task_list:
        if task["id"] is None:
            continue
        bars[task["id"]] = project_bar(task, bounds.start, width_per_day)

    return {
        "start": bounds.start,
        "end": bounds.end,
        "day_count": day_count,
        "day_width": width_per_day,
        "bars": bars,
    }


def chart_days(layout: ChartLayout) -> list[pendulum.Date]:
    return list(each_day(layout["start"], layout["end"]))

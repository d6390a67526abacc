# SPDX-License-Identifier: MIT

import datetime
from typing import Optional

from rich.console import Console, Group
from rich.padding import Padding
from rich.text import Text

from projectboard.color import (
    DEPENDENCY_STYLE,
    TODAY_COLUMN_STYLE,
    TODAY_STYLE,
    WEEKEND_STYLE,
    status_color,
)
from projectboard.model.entity_id import EntityId
from projectboard.model.gantt_task import GanttTask
from projectboard.model.project import Project
from projectboard.model.view_mode import ViewMode
from projectboard.time import as_date, date_to_display_str
from projectboard.time import today as local_today
from projectboard.timeline.dependency import link_cells
from projectboard.timeline.projector import (
    GridCell,
    GridRow,
    day_headers,
    progress_label,
    project_grid_rows,
)
from projectboard.timeline.window import DisplayWindow
from projectboard.view.header import header

MAX_CELL_WIDTH = 4


def timeline_view(
    report_name: str,
    tasks: list[GanttTask],
    projects: list[Project],
    window: DisplayWindow,
    view_mode: ViewMode,
    today: Optional[datetime.date] = None,
    left_column_width: int = 30,
) -> None:
    """
    Display timeline entries on a day grid covering the display window.

    One column per day. Weekends and today are shaded, bars run from the
    start cell to the end cell of each entry and the progress label sits on
    the start cell. Entries outside the window are not shown.
    """
    header(report_name)

    console = Console()
    current_day = as_date(today) if today is not None else local_today()

    headers = day_headers(window, current_day)
    rows = project_grid_rows(tasks, window, current_day)
    cell_width = _cell_width(console.width - left_column_width, len(headers))

    console.print(
        f"\n[bold]{date_to_display_str(window.range.start)} to "
        f"{date_to_display_str(window.range.end)}[/bold] (view: {view_mode})\n"
    )

    project_codes: dict[Optional[EntityId], str] = {
        project["id"]: project["code"] for project in projects
    }

    chart_elements: list[Text] = []
    chart_elements.extend(_build_date_header(headers, cell_width, left_column_width))

    separator = Text("─" * left_column_width, style="dim")
    for cell in headers:
        separator.append("─" * cell_width, style="dim" + _column_background(cell))
    chart_elements.append(separator)

    if not rows:
        chart_elements.append(Text("No timeline entries in this range", style="dim"))

    for row in rows:
        chart_elements.append(
            _build_task_row(row, project_codes, cell_width, left_column_width)
        )

    chart = Group(*chart_elements)
    console.print(Padding(chart, (0, 0, 1, 0)))

    links = link_cells([row["task"] for row in rows], window)
    if links:
        names = {row["task"]["id"]: row["task"]["name"] for row in rows}
        for link in links:
            console.print(
                f"[{DEPENDENCY_STYLE}]{names[link['predecessor_id']]} "
                f"(col {int(link['start']) + 1}) ─▶ {names[link['dependent_id']]} "
                f"(col {int(link['end']) + 1})[/{DEPENDENCY_STYLE}]"
            )
        console.print()


def _cell_width(available_width: int, day_count: int) -> int:
    if day_count <= 0:
        return MAX_CELL_WIDTH
    return max(1, min(MAX_CELL_WIDTH, available_width // day_count))


def _column_background(cell: GridCell) -> str:
    if cell["is_today"]:
        return " " + TODAY_COLUMN_STYLE
    if cell["is_weekend"]:
        return " " + WEEKEND_STYLE
    return ""


def _build_date_header(
    headers: list[GridCell], cell_width: int, left_column_width: int
) -> list[Text]:
    """Month row, day-of-month row and weekday row."""
    month_row = Text(" " * left_column_width)
    day_row = Text(" " * left_column_width)
    weekday_row = Text(" " * left_column_width)

    pending_month = ""
    for index, cell in enumerate(headers):
        date = cell["date"]
        background = _column_background(cell)
        style = TODAY_STYLE if cell["is_today"] else ""

        if index == 0 or date.day == 1:
            pending_month = date.format("MMM YYYY")
        month_text = pending_month[:cell_width]
        pending_month = pending_month[cell_width:]
        month_row.append(month_text.ljust(cell_width), style="bold")

        day_text = str(date.day)
        if len(day_text) > cell_width:
            day_text = day_text[-cell_width:]
        day_row.append(day_text.rjust(cell_width), style=(style + background).strip())

        weekday_text = date.format("dd")[: max(1, cell_width - 1)]
        weekday_row.append(
            weekday_text.rjust(cell_width), style=("dim" + background).strip()
        )

    return [month_row, day_row, weekday_row]


def _build_task_row(
    row: GridRow,
    project_codes: dict[Optional[EntityId], str],
    cell_width: int,
    left_column_width: int,
) -> Text:
    task = row["task"]
    color = status_color(task["status"])
    if task["type"] == "project":
        color = f"bold {color}"

    text = Text()

    label = f"{project_codes.get(task['project'], '')} {task['name']}".strip()
    if task["type"] != "project":
        label = f"  {label}"
    if len(label) > left_column_width - 1:
        label = label[: left_column_width - 4] + "..."
    text.append(label.ljust(left_column_width), style=color)

    bar = _bar_characters(row, cell_width)
    for index, cell in enumerate(row["cells"]):
        chunk = "".join(bar[index * cell_width : (index + 1) * cell_width])
        background = _column_background(cell)
        if cell["in_range"]:
            text.append(chunk, style=color + background)
        else:
            text.append(chunk, style=background.strip())

    return text


def _bar_characters(row: GridRow, cell_width: int) -> list[str]:
    """Characters for every column of a row, with the progress label overlaid."""
    cells = row["cells"]
    characters = [" "] * (len(cells) * cell_width)

    for index, cell in enumerate(cells):
        if not cell["in_range"]:
            continue
        offset = index * cell_width
        for position in range(offset, offset + cell_width):
            characters[position] = "━"
        if cell["is_start"]:
            characters[offset] = "◄"
        if cell["is_end"]:
            last = offset + cell_width - 1
            characters[last] = "◆" if cell["is_start"] and cell_width == 1 else "►"

    # Label goes on the start cell, so it only shows when the start is visible
    start_cells = [index for index, cell in enumerate(cells) if cell["show_progress"]]
    if start_cells:
        label = progress_label(row["task"])
        bar_start = start_cells[0] * cell_width + 1
        bar_end = (row["last_index"] + 1) * cell_width - 1
        if bar_end - bar_start >= len(label):
            for position, character in enumerate(label):
                characters[bar_start + position] = character

    return characters

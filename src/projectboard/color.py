# SPDX-License-Identifier: MIT

from typing import Optional

from projectboard.model.project import ProjectStatus

STATUS_COLORS: dict[ProjectStatus, str] = {
    "planning": "blue",
    "design": "purple",
    "development": "dark_orange",
    "testing": "cyan",
    "completed": "green",
    "onhold": "grey50",
}

STATUS_LABELS: dict[ProjectStatus, str] = {
    "planning": "Planning",
    "design": "Design",
    "development": "Development",
    "testing": "Testing",
    "completed": "Completed",
    "onhold": "On Hold",
}

# Sub-tasks without a status
TASK_COLOR = "bright_blue"

WEEKEND_STYLE = "on grey11"
TODAY_STYLE = "bold yellow"
TODAY_COLUMN_STYLE = "on grey23"
DEPENDENCY_STYLE = "dim"


def status_color(status: Optional[ProjectStatus]) -> str:
    if status is None:
        return TASK_COLOR
    return STATUS_COLORS.get(status, TASK_COLOR)


def status_label(status: Optional[ProjectStatus]) -> str:
    if status is None:
        return ""
    return STATUS_LABELS.get(status, status)
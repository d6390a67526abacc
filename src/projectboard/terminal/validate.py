# SPDX-License-Identifier: MIT

from typing import Optional

import typer

from projectboard.model.gantt_task import TASK_TYPES
from projectboard.model.project import PROJECT_STATUSES
from projectboard.model.user import UserRole
from projectboard.model.view_mode import VIEW_MODES


def validate_progress(progress: Optional[int]) -> Optional[int]:
    if progress is None:
        return None
    if not (0 <= progress <= 100):
        raise typer.BadParameter("Progress must be between 0 and 100 (inclusive)")
    return progress


def validate_status(status: Optional[str]) -> Optional[str]:
    if status is None:
        return None
    if status not in PROJECT_STATUSES:
        raise typer.BadParameter(f"Status must be one of: {', '.join(PROJECT_STATUSES)}")
    return status


def validate_task_type(task_type: Optional[str]) -> Optional[str]:
    if task_type is None:
        return None
    if task_type not in TASK_TYPES or task_type == "project":
        raise typer.BadParameter("Type must be 'task' or 'milestone'")
    return task_type


def validate_view_mode(view_mode: Optional[str]) -> Optional[str]:
    if view_mode is None:
        return None
    if view_mode not in VIEW_MODES:
        raise typer.BadParameter(f"View mode must be one of: {', '.join(VIEW_MODES)}")
    return view_mode


def validate_role(role: Optional[str]) -> Optional[str]:
    roles: tuple[UserRole, ...] = ("admin", "user")
    if role is None:
        return None
    if role not in roles:
        raise typer.BadParameter(f"Role must be one of: {', '.join(roles)}")
    return role


def validate_non_negative(value: Optional[int]) -> Optional[int]:
    if value is None:
        return None
    if value < 0:
        raise typer.BadParameter("Value must not be negative")
    return value

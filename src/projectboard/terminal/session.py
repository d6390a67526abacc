# SPDX-License-Identifier: MIT

import logging
from contextlib import contextmanager
from typing import Iterator

import typer
from rich.console import Console

from projectboard.errors import NotFoundError, ProjectBoardError, ValidationError
from projectboard.model.gantt_task import GanttTask
from projectboard.model.project import Project
from projectboard.service.store import ProjectStore
from projectboard.session import Session

logger = logging.getLogger(__name__)

error_console = Console(stderr=True)


def get_session(ctx: typer.Context) -> Session:
    session = ctx.find_root().obj
    if not isinstance(session, Session):
        raise RuntimeError("no session attached to the command context")
    return session


@contextmanager
def store_errors() -> Iterator[None]:
    """Print store errors in red and exit with status 1."""
    try:
        yield
    except ValidationError as e:
        for field, reason in e.fields.items():
            error_console.print(f"[red]{field}: {reason}[/red]")
        raise typer.Exit(code=1)
    except ProjectBoardError as e:
        logger.debug("command failed", exc_info=True)
        error_console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=1)


def require_project(store: ProjectStore, ref: str) -> Project:
    project = store.find_project(ref)
    if project is None:
        raise NotFoundError("project", ref)
    return project


def require_timeline_entry(store: ProjectStore, ref: str) -> GanttTask:
    entry = store.find_timeline_entry(ref)
    if entry is None:
        raise NotFoundError("timeline entry", ref)
    return entry

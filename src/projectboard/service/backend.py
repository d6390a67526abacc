# SPDX-License-Identifier: MIT

from typing import Optional, Protocol

from projectboard.model.entity_id import EntityId
from projectboard.model.gantt_task import GanttTask
from projectboard.model.project import Project
from projectboard.model.user import User
from projectboard.repository.project import ProjectRepository
from projectboard.repository.timeline import TimelineRepository
from projectboard.repository.user import UserRepository


class Backend(Protocol):
    """Persistence and identity operations the project store relies on."""

    def list_projects(self) -> list[Project]: ...

    def create_project(self, project: Project) -> Project: ...

    def update_project(self, id: EntityId, project: Project) -> Project: ...

    def delete_project(self, id: EntityId) -> None: ...

    def list_timeline_entries(self) -> list[GanttTask]: ...

    def save_timeline_entry(self, entry: GanttTask) -> GanttTask: ...

    def delete_timeline_entry(self, id: EntityId) -> None: ...

    def list_users(self) -> list[User]: ...

    def get_current_user(self) -> Optional[User]: ...


class LocalBackend:
    """Backend over the YAML repositories in the data directory."""

    def __init__(
        self,
        project_repository: ProjectRepository,
        timeline_repository: TimelineRepository,
        user_repository: UserRepository,
        current_user_id: Optional[EntityId] = None,
    ) -> None:
        self.project_repository = project_repository
        self.timeline_repository = timeline_repository
        self.user_repository = user_repository
        self.current_user_id = current_user_id

    def list_projects(self) -> list[Project]:
        return self.project_repository.list_projects()

    def create_project(self, project: Project) -> Project:
        return self.project_repository.create_project(project)

    def update_project(self, id: EntityId, project: Project) -> Project:
        return self.project_repository.update_project(id, project)

    def delete_project(self, id: EntityId) -> None:
        self.project_repository.delete_project(id)

    def list_timeline_entries(self) -> list[GanttTask]:
        return self.timeline_repository.list_entries()

    def save_timeline_entry(self, entry: GanttTask) -> GanttTask:
        return self.timeline_repository.save_entry(entry)

    def delete_timeline_entry(self, id: EntityId) -> None:
        self.timeline_repository.delete_entry(id)

    def list_users(self) -> list[User]:
        return self.user_repository.get_all_users()

    def get_current_user(self) -> Optional[User]:
        return self.user_repository.get_user(self.current_user_id)

    def flush(self) -> None:
        self.project_repository.flush()
        self.timeline_repository.flush()
        self.user_repository.flush()

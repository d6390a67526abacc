# SPDX-License-Identifier: MIT

import logging
from copy import deepcopy
from pathlib import Path
from typing import Any, Optional, cast

from yaml import dump, load

try:
    from yaml import CSafeDumper as Dumper
    from yaml import CSafeLoader as Loader
except ImportError:
    from yaml import SafeDumper as Dumper  # type: ignore[assignment]
    from yaml import SafeLoader as Loader  # type: ignore[assignment]

from projectboard import time
from projectboard.model.entity_id import EntityId
from projectboard.model.project import Project

logger = logging.getLogger(__name__)


class ProjectRepository:
    def __init__(self, data_dir: Path) -> None:
        self.data_dir = data_dir
        self._projects: Optional[list[Project]] = None
        self.is_dirty = False
        self._dirty_ids: set[EntityId] = set()
        self._deleted_ids: set[EntityId] = set()

    @property
    def projects(self) -> list[Project]:
        if self._projects is None:
            self.__load_data()
        if self._projects is None:
            raise ValueError()
        return self._projects

    def __load_data(self) -> None:
        self._projects = []
        if not self.data_dir.is_dir():
            return
        for file_path in sorted(self.data_dir.iterdir()):
            if file_path.suffix != ".yaml":
                continue
            raw_project = load(file_path.read_text(), Loader=Loader)
            if raw_project is not None:
                self._projects.append(
                    self.__convert_project_for_deserialization(raw_project)
                )
        logger.debug("loaded %d projects from %s", len(self._projects), self.data_dir)

    def __save_data(self) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)

        # Write dirty entities
        for project in self.projects:
            if project["id"] in self._dirty_ids:
                serializable_project = self.__convert_project_for_serialization(
                    deepcopy(project)
                )
                file_path = self.data_dir / f"{project['id']}.yaml"
                file_path.write_text(
                    dump(serializable_project, Dumper=Dumper, allow_unicode=True)
                )

        # Remove hard-deleted entity files
        for entity_id in self._deleted_ids:
            file_path = self.data_dir / f"{entity_id}.yaml"
            if file_path.exists():
                file_path.unlink()

        logger.debug(
            "flushed %d projects, removed %d",
            len(self._dirty_ids),
            len(self._deleted_ids),
        )
        self._dirty_ids.clear()
        self._deleted_ids.clear()

    def flush(self) -> bool:
        if self._projects is not None and self.is_dirty:
            self.__save_data()
            self.is_dirty = False
            return True
        return False

    def __convert_project_for_serialization(self, project: Project) -> dict[str, Any]:
        serializable_project = cast(dict[str, Any], project)
        serializable_project["start_date"] = time.date_to_iso_str(
            serializable_project["start_date"]
        )
        serializable_project["end_date"] = time.date_to_iso_str(
            serializable_project["end_date"]
        )
        return serializable_project

    def __convert_project_for_deserialization(self, project: dict[str, Any]) -> Project:
        deserializable_project = project
        deserializable_project["start_date"] = time.date_from_str(
            str(deserializable_project["start_date"])
        )
        deserializable_project["end_date"] = time.date_from_str(
            str(deserializable_project["end_date"])
        )
        deserializable_project.setdefault("designer_ids", [])
        deserializable_project.setdefault("developer_ids", [])
        deserializable_project.setdefault("created_by", None)
        deserializable_project.setdefault("description", None)
        return cast(Project, deserializable_project)

    def list_projects(self) -> list[Project]:
        return deepcopy(self.projects)

    def create_project(self, project: Project) -> Project:
        if project["id"] is None:
            raise ValueError("project id cannot be None")
        self.is_dirty = True
        self.projects.append(deepcopy(project))
        self._dirty_ids.add(project["id"])
        self._deleted_ids.discard(project["id"])
        return deepcopy(project)

    def update_project(self, id: EntityId, project: Project) -> Project:
        for index, stored_project in enumerate(self.projects):
            if stored_project["id"] == id:
                self.is_dirty = True
                self.projects[index] = deepcopy(project)
                self._dirty_ids.add(id)
                return deepcopy(project)
        raise KeyError(id)

    def delete_project(self, id: EntityId) -> None:
        self.is_dirty = True
        self._projects = [project for project in self.projects if project["id"] != id]
        self._dirty_ids.discard(id)
        self._deleted_ids.add(id)

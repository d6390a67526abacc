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
from projectboard.model.gantt_task import GanttTask
from projectboard.timeline.dependency import format_dependencies, parse_dependencies

logger = logging.getLogger(__name__)


class TimelineRepository:
    """Timeline entries stored one YAML file per entry."""

    def __init__(self, data_dir: Path) -> None:
        self.data_dir = data_dir
        self._entries: Optional[list[GanttTask]] = None
        self.is_dirty = False
        self._dirty_ids: set[EntityId] = set()
        self._deleted_ids: set[EntityId] = set()

    @property
    def entries(self) -> list[GanttTask]:
        if self._entries is None:
            self.__load_data()
        if self._entries is None:
            raise ValueError()
        return self._entries

    def __load_data(self) -> None:
        self._entries = []
        if not self.data_dir.is_dir():
            return
        for file_path in sorted(self.data_dir.iterdir()):
            if file_path.suffix != ".yaml":
                continue
            raw_entry = load(file_path.read_text(), Loader=Loader)
            if raw_entry is not None:
                self._entries.append(self.__convert_entry_for_deserialization(raw_entry))
        logger.debug(
            "loaded %d timeline entries from %s", len(self._entries), self.data_dir
        )

    def __save_data(self) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)

        for entry in self.entries:
            if entry["id"] in self._dirty_ids:
                serializable_entry = self.__convert_entry_for_serialization(
                    deepcopy(entry)
                )
                file_path = self.data_dir / f"{entry['id']}.yaml"
                file_path.write_text(
                    dump(serializable_entry, Dumper=Dumper, allow_unicode=True)
                )

        for entity_id in self._deleted_ids:
            file_path = self.data_dir / f"{entity_id}.yaml"
            if file_path.exists():
                file_path.unlink()

        self._dirty_ids.clear()
        self._deleted_ids.clear()

    def flush(self) -> bool:
        if self._entries is not None and self.is_dirty:
            self.__save_data()
            self.is_dirty = False
            return True
        return False

    def __convert_entry_for_serialization(self, entry: GanttTask) -> dict[str, Any]:
        serializable_entry = cast(dict[str, Any], entry)
        serializable_entry["start"] = time.date_to_iso_str(serializable_entry["start"])
        serializable_entry["end"] = time.date_to_iso_str(serializable_entry["end"])
        serializable_entry["dependencies"] = format_dependencies(
            serializable_entry["dependencies"]
        )
        return serializable_entry

    def __convert_entry_for_deserialization(self, entry: dict[str, Any]) -> GanttTask:
        deserializable_entry = entry
        deserializable_entry["start"] = time.date_from_str(
            str(deserializable_entry["start"])
        )
        deserializable_entry["end"] = time.date_from_str(str(deserializable_entry["end"]))
        dependencies = parse_dependencies(deserializable_entry.get("dependencies"))
        deserializable_entry["dependencies"] = dependencies or None
        deserializable_entry.setdefault("type", "task")
        deserializable_entry.setdefault("status", None)
        deserializable_entry.setdefault("assignee", None)
        deserializable_entry.setdefault("progress", 0)
        return cast(GanttTask, deserializable_entry)

    def list_entries(self) -> list[GanttTask]:
        return deepcopy(self.entries)

    def save_entry(self, entry: GanttTask) -> GanttTask:
        if entry["id"] is None:
            raise ValueError("timeline entry id cannot be None")
        self.is_dirty = True
        self._dirty_ids.add(entry["id"])
        self._deleted_ids.discard(entry["id"])
        for index, stored_entry in enumerate(self.entries):
            if stored_entry["id"] == entry["id"]:
                self.entries[index] = deepcopy(entry)
                break
        else:
            self.entries.append(deepcopy(entry))
        return deepcopy(entry)

    def delete_entry(self, id: EntityId) -> None:
        self.is_dirty = True
        self._entries = [entry for entry in self.entries if entry["id"] != id]
        self._dirty_ids.discard(id)
        self._deleted_ids.add(id)

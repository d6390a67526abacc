# SPDX-License-Identifier: MIT

import pendulum
import pytest
from yaml import safe_load

from projectboard.configuration import get_default_configuration
from projectboard.repository.configuration import ConfigurationRepository
from projectboard.repository.project import ProjectRepository
from projectboard.repository.timeline import TimelineRepository
from projectboard.repository.user import UserRepository
from projectboard.service.backend import LocalBackend
from projectboard.service.store import ProjectStore
from tests.support import gantt_task, project_fields


def test_project_repository_round_trip(tmp_path):
    repository = ProjectRepository(tmp_path / "projects")
    project = project_fields(id="p1", designer_ids=["u1"])

    repository.create_project(project)  # type: ignore[arg-type]
    assert repository.flush() is True

    stored = safe_load((tmp_path / "projects" / "p1.yaml").read_text())
    assert stored["start_date"] == "2023-08-01"

    reloaded = ProjectRepository(tmp_path / "projects").list_projects()
    assert reloaded == [project]


def test_project_repository_flush_without_changes(tmp_path):
    repository = ProjectRepository(tmp_path / "projects")

    assert repository.list_projects() == []
    assert repository.flush() is False


def test_project_repository_update_and_delete(tmp_path):
    repository = ProjectRepository(tmp_path / "projects")
    repository.create_project(project_fields(id="p1"))  # type: ignore[arg-type]
    repository.create_project(project_fields(id="p2", code="APP-1"))  # type: ignore[arg-type]
    repository.flush()

    repository.update_project("p1", project_fields(id="p1", name="Renamed"))  # type: ignore[arg-type]
    repository.delete_project("p2")
    repository.flush()

    assert not (tmp_path / "projects" / "p2.yaml").exists()
    reloaded = ProjectRepository(tmp_path / "projects").list_projects()
    assert [project["name"] for project in reloaded] == ["Renamed"]


def test_project_repository_update_unknown_id(tmp_path):
    repository = ProjectRepository(tmp_path / "projects")

    with pytest.raises(KeyError):
        repository.update_project("missing", project_fields(id="missing"))  # type: ignore[arg-type]


def test_project_repository_fills_missing_optional_fields(tmp_path):
    projects_dir = tmp_path / "projects"
    projects_dir.mkdir()
    (projects_dir / "p1.yaml").write_text(
        "id: p1\ncode: WEB-1\nname: Website\nclient: Acme\n"
        "start_date: 2023-08-01\nend_date: 2023-08-31\nstatus: planning\n"
    )

    project = ProjectRepository(projects_dir).list_projects()[0]

    assert project["start_date"] == pendulum.date(2023, 8, 1)
    assert project["designer_ids"] == []
    assert project["description"] is None


def test_timeline_repository_stores_dependencies_as_comma_string(tmp_path):
    repository = TimelineRepository(tmp_path / "timeline")
    entry = gantt_task(
        "t1",
        pendulum.date(2023, 8, 1),
        pendulum.date(2023, 8, 3),
        progress=30,
        dependencies=["a", "b"],
    )

    repository.save_entry(entry)
    repository.flush()

    stored = safe_load((tmp_path / "timeline" / "t1.yaml").read_text())
    assert stored["dependencies"] == "a,b"
    assert stored["end"] == "2023-08-03"

    assert TimelineRepository(tmp_path / "timeline").list_entries() == [entry]


def test_timeline_repository_parses_loose_dependency_strings(tmp_path):
    timeline_dir = tmp_path / "timeline"
    timeline_dir.mkdir()
    (timeline_dir / "t1.yaml").write_text(
        "id: t1\nname: Build\nstart: '2023-08-01'\nend: '2023-08-02'\n"
        "project: p1\ndependencies: ' a , ,b '\n"
    )

    entry = TimelineRepository(timeline_dir).list_entries()[0]

    assert entry["dependencies"] == ["a", "b"]
    assert entry["type"] == "task"
    assert entry["progress"] == 0


def test_timeline_repository_delete(tmp_path):
    repository = TimelineRepository(tmp_path / "timeline")
    repository.save_entry(gantt_task("t1", pendulum.date(2023, 8, 1), pendulum.date(2023, 8, 1)))
    repository.flush()

    repository.delete_entry("t1")
    repository.flush()

    assert not (tmp_path / "timeline" / "t1.yaml").exists()
    assert TimelineRepository(tmp_path / "timeline").list_entries() == []


def test_user_repository_round_trip(tmp_path):
    repository = UserRepository(tmp_path / "users.yaml")

    user_id = repository.save_new_user(
        {"id": None, "name": "Ada", "role": "admin", "email": "ada@example.com"}
    )
    repository.flush()

    reloaded = UserRepository(tmp_path / "users.yaml")
    assert reloaded.get_user(user_id)["name"] == "Ada"
    assert reloaded.get_user(None) is None
    assert len(reloaded.get_all_users()) == 1


def test_configuration_repository_back_fills_missing_keys(tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("default_view_mode: week\n")

    repository = ConfigurationRepository(config_path)
    config = repository.get_config()

    assert config["default_view_mode"] == "week"
    assert config["split_panel_padding_days"] == 2
    assert config["simple_timeline_padding_days"] == 3


def test_configuration_repository_update_and_flush(tmp_path):
    config_path = tmp_path / "config.yaml"
    repository = ConfigurationRepository(config_path)

    repository.update_config(chart_buffer_days=7, current_user_id="u1")
    repository.flush()

    stored = safe_load(config_path.read_text())
    assert stored["chart_buffer_days"] == 7
    assert stored["current_user_id"] == "u1"

    repository.update_config(remove_current_user_id=True)
    assert repository.get_config()["current_user_id"] is None
    assert get_default_configuration()["chart_buffer_days"] == 5


def test_store_over_local_backend_survives_a_reload(tmp_path):
    def local_backend():
        return LocalBackend(
            ProjectRepository(tmp_path / "projects"),
            TimelineRepository(tmp_path / "timeline"),
            UserRepository(tmp_path / "users.yaml"),
        )

    backend = local_backend()
    store = ProjectStore(backend)
    store.load()
    project = store.add_project(project_fields())
    entry = store.add_timeline_entry(
        {
            "name": "Design",
            "project": project["id"],
            "start": pendulum.date(2023, 8, 1),
            "end": pendulum.date(2023, 8, 4),
            "dependencies": [project["id"]],
        }
    )
    store.update_timeline_entry(project["id"], {"progress": 20, "status": "design"})
    backend.flush()

    reloaded = ProjectStore(local_backend())
    reloaded.load()

    assert reloaded.projects == store.projects
    assert reloaded.get_timeline_entry(entry["id"]) == entry
    assert reloaded.get_timeline_entry(project["id"])["progress"] == 20
    assert reloaded.get_project_by_id(project["id"])["status"] == "design"

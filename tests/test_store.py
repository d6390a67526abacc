# SPDX-License-Identifier: MIT

import pendulum
import pytest

from projectboard.errors import NotFoundError, SyncError, ValidationError
from projectboard.service.store import ProjectStore
from tests.support import FailingBackend, InMemoryBackend, gantt_task, project_fields


def test_add_project_round_trips_through_get(store):
    project = store.add_project(project_fields())

    assert project["id"]
    assert store.get_project_by_id(project["id"]) == project
    for field, value in project_fields().items():
        assert project[field] == value


def test_add_project_derives_project_level_entry(store):
    project = store.add_project(project_fields(status="design"))

    entry = store.get_timeline_entry(project["id"])
    assert entry == {
        "id": project["id"],
        "name": "Website",
        "start": pendulum.date(2023, 8, 1),
        "end": pendulum.date(2023, 8, 31),
        "progress": 0,
        "dependencies": None,
        "type": "project",
        "project": project["id"],
        "status": "design",
        "assignee": None,
    }


def test_add_project_writes_project_and_entry_to_backend(store, backend):
    project = store.add_project(project_fields())

    assert project["id"] in backend.projects
    assert backend.entries[project["id"]]["type"] == "project"


def test_add_project_missing_required_fields_reports_each_field(store):
    with pytest.raises(ValidationError) as error:
        store.add_project({"name": "", "client": "Acme"})

    assert set(error.value.fields) == {"code", "name", "start_date", "end_date"}
    assert store.projects == []
    assert store.tasks == []


def test_add_project_rejects_end_before_start(store):
    with pytest.raises(ValidationError) as error:
        store.add_project(
            project_fields(
                start_date=pendulum.date(2023, 8, 10), end_date=pendulum.date(2023, 8, 1)
            )
        )

    assert "end_date" in error.value.fields


def test_add_project_rejects_duplicate_code(store):
    store.add_project(project_fields())

    with pytest.raises(ValidationError) as error:
        store.add_project(project_fields(name="Other"))

    assert "code" in error.value.fields
    assert len(store.projects) == 1


def test_add_project_rejects_unknown_status(store):
    with pytest.raises(ValidationError) as error:
        store.add_project(project_fields(status="shipped"))

    assert "status" in error.value.fields


def test_add_project_rejects_caller_supplied_id(store):
    with pytest.raises(ValidationError) as error:
        store.add_project(project_fields(id="mine"))

    assert "id" in error.value.fields


def test_update_project_with_empty_patch_changes_nothing(store, backend):
    project = store.add_project(project_fields())
    projects_before = store.projects
    tasks_before = store.tasks
    calls_before = list(backend.calls)

    store.update_project(project["id"], {})

    assert store.projects == projects_before
    assert store.tasks == tasks_before
    assert backend.calls == calls_before


def test_update_project_rederives_entry(store):
    project = store.add_project(project_fields())

    store.update_project(
        project["id"],
        {"name": "New Website", "end_date": pendulum.date(2023, 9, 15), "status": "development"},
    )

    entry = store.get_timeline_entry(project["id"])
    assert entry["name"] == "New Website"
    assert entry["end"] == pendulum.date(2023, 9, 15)
    assert entry["status"] == "development"
    assert store.get_project_by_id(project["id"])["status"] == "development"


def test_update_project_keeps_entry_progress(store):
    project = store.add_project(project_fields())
    store.update_timeline_entry(project["id"], {"progress": 40})

    store.update_project(project["id"], {"status": "testing"})

    assert store.get_timeline_entry(project["id"])["progress"] == 40


def test_update_project_keeps_own_code(store):
    project = store.add_project(project_fields())

    store.update_project(project["id"], {"code": "WEB-1", "client": "Globex"})

    assert store.get_project_by_id(project["id"])["client"] == "Globex"


def test_update_project_unknown_id_raises_not_found(store):
    with pytest.raises(NotFoundError):
        store.update_project("missing", {"name": "x"})


def test_update_project_invalid_patch_leaves_state_unchanged(store):
    project = store.add_project(project_fields())
    projects_before = store.projects
    tasks_before = store.tasks

    with pytest.raises(ValidationError):
        store.update_project(project["id"], {"end_date": pendulum.date(2023, 7, 1)})

    assert store.projects == projects_before
    assert store.tasks == tasks_before


def test_project_status_change_reaches_entry(store):
    project = store.add_project(project_fields(status="planning"))

    store.update_project(project["id"], {"status": "completed"})

    assert store.get_timeline_entry(project["id"])["status"] == "completed"


def test_entry_status_change_reaches_project(store):
    project = store.add_project(project_fields(status="planning"))

    store.update_timeline_entry(project["id"], {"status": "testing"})

    assert store.get_project_by_id(project["id"])["status"] == "testing"
    assert store.get_timeline_entry(project["id"])["status"] == "testing"


def test_entry_date_change_reaches_project(store, backend):
    project = store.add_project(project_fields())

    store.update_timeline_entry(
        project["id"],
        {"start": pendulum.date(2023, 8, 5), "end": pendulum.date(2023, 9, 5), "name": "Site"},
    )

    updated = store.get_project_by_id(project["id"])
    assert updated["start_date"] == pendulum.date(2023, 8, 5)
    assert updated["end_date"] == pendulum.date(2023, 9, 5)
    assert updated["name"] == "Site"
    assert backend.projects[project["id"]]["name"] == "Site"


def test_entry_progress_change_does_not_touch_project(store):
    project = store.add_project(project_fields())
    project_before = store.get_project_by_id(project["id"])

    store.update_timeline_entry(project["id"], {"progress": 75})

    assert store.get_project_by_id(project["id"]) == project_before
    assert store.get_timeline_entry(project["id"])["progress"] == 75


def test_project_entry_cannot_change_type(store):
    project = store.add_project(project_fields())

    with pytest.raises(ValidationError) as error:
        store.update_timeline_entry(project["id"], {"type": "task"})

    assert "type" in error.value.fields
    assert store.get_timeline_entry(project["id"])["type"] == "project"


def test_update_timeline_entry_unknown_id_raises_not_found(store):
    with pytest.raises(NotFoundError):
        store.update_timeline_entry("missing", {"progress": 10})


def test_update_timeline_entry_rejects_out_of_range_progress(store):
    project = store.add_project(project_fields())

    with pytest.raises(ValidationError) as error:
        store.update_timeline_entry(project["id"], {"progress": 101})

    assert "progress" in error.value.fields
    assert store.get_timeline_entry(project["id"])["progress"] == 0


def test_update_timeline_entry_rejects_end_before_start(store):
    project = store.add_project(project_fields())
    entry = store.add_timeline_entry(
        {
            "name": "Design",
            "project": project["id"],
            "start": pendulum.date(2023, 8, 1),
            "end": pendulum.date(2023, 8, 5),
        }
    )

    with pytest.raises(ValidationError):
        store.update_timeline_entry(entry["id"], {"end": pendulum.date(2023, 7, 30)})


def test_add_timeline_entry_to_project(store, backend):
    project = store.add_project(project_fields())

    entry = store.add_timeline_entry(
        {
            "name": "Design",
            "project": project["id"],
            "start": pendulum.date(2023, 8, 1),
            "end": pendulum.date(2023, 8, 10),
            "dependencies": [project["id"]],
        }
    )

    assert entry["type"] == "task"
    assert entry["progress"] == 0
    assert entry["dependencies"] == [project["id"]]
    assert store.get_timeline_entry(entry["id"]) == entry
    assert entry["id"] in backend.entries
    assert len(store.tasks_for_project(project["id"])) == 2


def test_add_timeline_entry_accepts_dependency_string(store):
    project = store.add_project(project_fields())

    entry = store.add_timeline_entry(
        {
            "name": "Build",
            "project": project["id"],
            "start": pendulum.date(2023, 8, 1),
            "end": pendulum.date(2023, 8, 2),
            "dependencies": " a , b,,a ",  # type: ignore[typeddict-item]
        }
    )

    assert entry["dependencies"] == ["a", "b"]


def test_add_timeline_entry_unknown_project_raises_not_found(store):
    with pytest.raises(NotFoundError):
        store.add_timeline_entry(
            {
                "name": "Orphan",
                "project": "missing",
                "start": pendulum.date(2023, 8, 1),
                "end": pendulum.date(2023, 8, 2),
            }
        )


def test_add_timeline_entry_cannot_create_project_level_entry(store):
    project = store.add_project(project_fields())

    with pytest.raises(ValidationError):
        store.add_timeline_entry(
            {
                "name": "Second",
                "project": project["id"],
                "type": "project",
                "start": pendulum.date(2023, 8, 1),
                "end": pendulum.date(2023, 8, 2),
            }
        )


def test_delete_timeline_entry(store, backend):
    project = store.add_project(project_fields())
    entry = store.add_timeline_entry(
        {
            "name": "Design",
            "project": project["id"],
            "start": pendulum.date(2023, 8, 1),
            "end": pendulum.date(2023, 8, 2),
        }
    )

    store.delete_timeline_entry(entry["id"])

    assert store.get_timeline_entry(entry["id"]) is None
    assert entry["id"] not in backend.entries


def test_delete_project_level_entry_is_rejected(store):
    project = store.add_project(project_fields())

    with pytest.raises(ValidationError):
        store.delete_timeline_entry(project["id"])

    assert store.get_timeline_entry(project["id"]) is not None


def test_delete_project_cascades_to_entries(store, backend):
    project = store.add_project(project_fields())
    other = store.add_project(project_fields(code="APP-1", name="App"))
    for name in ("Design", "Build"):
        store.add_timeline_entry(
            {
                "name": name,
                "project": project["id"],
                "start": pendulum.date(2023, 8, 1),
                "end": pendulum.date(2023, 8, 2),
            }
        )

    store.delete_project(project["id"])

    assert store.get_project_by_id(project["id"]) is None
    assert all(task["project"] != project["id"] for task in store.tasks)
    assert all(entry["project"] != project["id"] for entry in backend.entries.values())
    assert [task["id"] for task in store.tasks] == [other["id"]]


def test_delete_project_unknown_id_raises_not_found(store):
    with pytest.raises(NotFoundError):
        store.delete_project("missing")


def test_find_project_by_code_and_prefix(store):
    project = store.add_project(project_fields())

    assert store.find_project("WEB-1") == project
    assert store.find_project(project["id"][:8]) == project
    assert store.find_project("nothing") is None


def test_returned_records_are_copies(store):
    project = store.add_project(project_fields())

    project["name"] = "Changed"
    store.projects[0]["name"] = "Changed again"

    assert store.get_project_by_id(project["id"])["name"] == "Website"


def test_backend_failure_raises_sync_error_and_keeps_state(failing_backend):
    store = ProjectStore(failing_backend)
    store.load()
    project = store.add_project(project_fields())
    projects_before = store.projects
    tasks_before = store.tasks

    failing_backend.fail = True
    with pytest.raises(SyncError, match="failed to update project"):
        store.update_project(project["id"], {"status": "completed"})
    with pytest.raises(SyncError):
        store.add_project(project_fields(code="APP-1"))
    with pytest.raises(SyncError):
        store.delete_project(project["id"])

    assert store.projects == projects_before
    assert store.tasks == tasks_before


def test_load_failure_raises_sync_error(failing_backend):
    failing_backend.fail = True
    store = ProjectStore(failing_backend)

    with pytest.raises(SyncError):
        store.load()

    assert store.is_loaded is False
    assert store.projects == []


def test_load_rederives_project_entries_and_keeps_progress():
    backend = InMemoryBackend()
    project = project_fields(id="p1", status="development")
    backend.projects["p1"] = project  # type: ignore[assignment]
    stale_entry = gantt_task(
        "p1",
        pendulum.date(2020, 1, 1),
        pendulum.date(2020, 1, 2),
        progress=60,
        name="Stale",
        type="project",
    )
    backend.entries["p1"] = stale_entry
    backend.entries["t1"] = gantt_task(
        "t1", pendulum.date(2023, 8, 2), pendulum.date(2023, 8, 3)
    )
    backend.entries["orphan"] = gantt_task(
        "orphan", pendulum.date(2023, 8, 2), pendulum.date(2023, 8, 3), project="gone"
    )

    store = ProjectStore(backend)
    store.load()

    entry = store.get_timeline_entry("p1")
    assert entry["name"] == "Website"
    assert entry["start"] == pendulum.date(2023, 8, 1)
    assert entry["status"] == "development"
    assert entry["progress"] == 60
    assert store.get_timeline_entry("t1") is not None
    assert store.get_timeline_entry("orphan") is None


def test_get_current_user_delegates_to_backend(backend):
    backend.current_user = {"id": "u1", "name": "Ada", "role": "admin", "email": None}
    store = ProjectStore(backend)

    assert store.get_current_user()["name"] == "Ada"

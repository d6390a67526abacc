# SPDX-License-Identifier: MIT

import pendulum

from projectboard.timeline.dependency import (
    format_dependencies,
    link_bars,
    link_cells,
    parse_dependencies,
    resolve_dependencies,
)
from projectboard.timeline.projector import layout_chart
from projectboard.timeline.window import resolve_window
from tests.support import gantt_task

ANCHOR = pendulum.date(2023, 8, 15)


def test_parse_dependencies_trims_and_skips_empty_ids():
    assert parse_dependencies(" a, b ,,c ") == ["a", "b", "c"]
    assert parse_dependencies("") == []
    assert parse_dependencies(None) == []


def test_format_dependencies():
    assert format_dependencies(["a", "b"]) == "a,b"
    assert format_dependencies([]) is None
    assert format_dependencies(None) is None


def test_resolve_dependencies_skips_missing_ids_and_keeps_order():
    a = gantt_task("a", ANCHOR, ANCHOR)
    b = gantt_task("b", ANCHOR, ANCHOR)
    task = gantt_task("t", ANCHOR, ANCHOR)
    task["dependencies"] = "a, missing, b"  # type: ignore[typeddict-item]

    assert resolve_dependencies(task, [task, b, a]) == [a, b]


def test_resolve_dependencies_from_list_form():
    a = gantt_task("a", ANCHOR, ANCHOR)
    b = gantt_task("b", ANCHOR, ANCHOR)
    task = gantt_task("t", ANCHOR, ANCHOR, dependencies=["b", "a"])

    assert resolve_dependencies(task, [a, b, task]) == [b, a]


def test_resolve_dependencies_ignores_self_reference():
    task = gantt_task("t", ANCHOR, ANCHOR, dependencies=["t"])

    assert resolve_dependencies(task, [task]) == []


def test_resolve_dependencies_resolves_a_repeated_id_once():
    design = gantt_task("design", ANCHOR, ANCHOR)
    build = gantt_task("build", ANCHOR, ANCHOR, dependencies=["design", " design", "build"])

    assert resolve_dependencies(build, [design, build]) == [design]


def test_resolve_dependencies_without_dependencies():
    task = gantt_task("t", ANCHOR, ANCHOR)

    assert resolve_dependencies(task, [task]) == []


def test_link_bars_runs_from_predecessor_start_to_dependent_start():
    design = gantt_task("design", pendulum.date(2023, 8, 1), pendulum.date(2023, 8, 4))
    build = gantt_task(
        "build",
        pendulum.date(2023, 8, 5),
        pendulum.date(2023, 8, 10),
        dependencies=["design", "missing"],
    )
    layout = layout_chart([design, build], container_width=100)

    links = link_bars([design, build], layout["bars"])

    assert links == [
        {
            "predecessor_id": "design",
            "dependent_id": "build",
            "start": 200,
            "end": 360,
        }
    ]


def test_link_bars_skips_tasks_without_bars():
    design = gantt_task("design", pendulum.date(2023, 8, 1), pendulum.date(2023, 8, 4))
    build = gantt_task(
        "build", pendulum.date(2023, 8, 5), pendulum.date(2023, 8, 10), dependencies=["design"]
    )
    layout = layout_chart([build], container_width=100)

    assert link_bars([design, build], layout["bars"]) == []


def test_link_cells_uses_visible_columns():
    window = resolve_window("month", ANCHOR, 2)
    design = gantt_task("design", pendulum.date(2023, 7, 20), pendulum.date(2023, 8, 4))
    build = gantt_task(
        "build", pendulum.date(2023, 8, 5), pendulum.date(2023, 9, 20), dependencies=["design"]
    )

    links = link_cells([design, build], window)

    assert links == [
        {
            "predecessor_id": "design",
            "dependent_id": "build",
            "start": window.index_of(pendulum.date(2023, 8, 4)),
            "end": window.index_of(pendulum.date(2023, 8, 5)),
        }
    ]


def test_link_cells_omits_links_to_tasks_outside_window():
    window = resolve_window("month", ANCHOR, 2)
    design = gantt_task("design", pendulum.date(2023, 6, 1), pendulum.date(2023, 6, 30))
    build = gantt_task(
        "build", pendulum.date(2023, 8, 5), pendulum.date(2023, 8, 9), dependencies=["design"]
    )

    assert link_cells([design, build], window) == []

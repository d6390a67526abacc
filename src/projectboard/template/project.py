# SPDX-License-Identifier: MIT

from projectboard.model.project import Project
from projectboard.time import today


def get_project_template() -> Project:
    now = today()
    return {
        "id": None,
        "code": "",
        "name": "",
        "client": "",
        "start_date": now,
        "end_date": now,
        "status": "planning",
        "designer_ids": [],
        "developer_ids": [],
        "created_by": None,
        "description": None,
    }

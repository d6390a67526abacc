# SPDX-License-Identifier: MIT

from projectboard.model.project import IN_PROGRESS_STATUSES, Project
from projectboard.model.stats import DashboardStats


def get_dashboard_stats(projects: list[Project]) -> DashboardStats:
    return {
        "total_projects": len(projects),
        "in_progress_projects": len(
            [project for project in projects if project["status"] in IN_PROGRESS_STATUSES]
        ),
        "completed_projects": len(
            [project for project in projects if project["status"] == "completed"]
        ),
        "client_count": len({project["client"] for project in projects}),
    }


def recent_projects(projects: list[Project], limit: int = 5) -> list[Project]:
    """The `limit` projects with the latest start dates, newest first."""
    if limit < 0:
        raise ValueError("limit cannot be negative")
    return sorted(projects, key=lambda project: project["start_date"], reverse=True)[
        :limit
    ]

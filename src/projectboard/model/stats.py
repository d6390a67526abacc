# SPDX-License-Identifier: MIT

from typing import TypedDict


class DashboardStats(TypedDict):
    total_projects: int
    in_progress_projects: int
    completed_projects: int
    client_count: int

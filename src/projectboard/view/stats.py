# SPDX-License-Identifier: MIT

from rich.columns import Columns
from rich.console import Console
from rich.panel import Panel

from projectboard.model.project import Project
from projectboard.model.stats import DashboardStats
from projectboard.view.header import header
from projectboard.view.project import projects_view
from projectboard.view.state import get_show_header, set_show_header


def dashboard_view(stats: DashboardStats, recent: list[Project]) -> None:
    header("dashboard")

    cards = [
        Panel(f"[bold]{stats['total_projects']}[/bold]", title="Total Projects"),
        Panel(
            f"[bold dark_orange]{stats['in_progress_projects']}[/bold dark_orange]",
            title="In Progress",
        ),
        Panel(f"[bold green]{stats['completed_projects']}[/bold green]", title="Completed"),
        Panel(f"[bold]{stats['client_count']}[/bold]", title="Clients"),
    ]

    console = Console()
    console.print(Columns(cards, equal=True, expand=True))

    if recent:
        show_header = get_show_header()
        set_show_header(False)
        try:
            console.print("[bold]Recent projects[/bold]")
            projects_view("recent projects", recent, ["code", "name", "client", "status", "start"])
        finally:
            set_show_header(show_header)

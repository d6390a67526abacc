# SPDX-License-Identifier: MIT

from typing import Optional

from rich import box
from rich.console import Console
from rich.table import Table

from projectboard.model.entity_id import EntityId
from projectboard.model.user import User
from projectboard.view.header import header


def users_view(users: list[User], current_user_id: Optional[EntityId] = None) -> None:
    header("users")

    users_table = Table(box=box.SIMPLE)
    users_table.add_column("id")
    users_table.add_column("name")
    users_table.add_column("role")
    users_table.add_column("email")

    for user in users:
        name = user["name"]
        if user["id"] == current_user_id:
            name = f"[bold plum1]{name} *[/bold plum1]"
        users_table.add_row(
            (user["id"] or "")[:8], name, user["role"], user["email"] or ""
        )

    console = Console()
    console.print(users_table)

# SPDX-License-Identifier: MIT

from typing import Annotated, Optional, cast

import typer
from rich.console import Console

from projectboard.model.user import User, UserRole
from projectboard.terminal.custom_typer import AliasedTyperGroup
from projectboard.terminal.project import resolve_user_ids
from projectboard.terminal.session import get_session, store_errors
from projectboard.terminal.validate import validate_role
from projectboard.view.user import users_view

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


@app.command("add, a", no_args_is_help=True)
def add(
    ctx: typer.Context,
    name: str,
    role: Annotated[str, typer.Option("--role", "-r", callback=validate_role)] = "user",
    email: Annotated[Optional[str], typer.Option("--email", "-e")] = None,
) -> None:
    session = get_session(ctx)

    user: User = {
        "id": None,
        "name": name,
        "role": cast(UserRole, role),
        "email": email,
    }
    session.user_repository.save_new_user(user)

    config = session.configuration_repository.get_config()
    users_view(session.user_repository.get_all_users(), config["current_user_id"])


@app.command("list, ls")
def list_users(ctx: typer.Context) -> None:
    session = get_session(ctx)
    config = session.configuration_repository.get_config()
    users_view(session.user_repository.get_all_users(), config["current_user_id"])


@app.command("current, cu")
def current(
    ctx: typer.Context,
    ref: Annotated[
        Optional[str], typer.Argument(help="user id, id prefix or name to make current")
    ] = None,
) -> None:
    """Show or set the current user."""
    session = get_session(ctx)
    console = Console()

    if ref is not None:
        with store_errors():
            user_id = resolve_user_ids(session.user_repository.get_all_users(), [ref])[0]
        session.configuration_repository.update_config(current_user_id=user_id)
        session.backend.current_user_id = user_id

    with store_errors():
        user = session.store.get_current_user()

    if user is None:
        console.print("[yellow]No current user set.[/yellow]")
        return
    console.print(f"[plum1]{user['name']}[/plum1] ({user['role']})")

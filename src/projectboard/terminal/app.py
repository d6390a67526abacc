# SPDX-License-Identifier: MIT

from typing import Annotated

import typer

from projectboard.logger import configure_logging
from projectboard.repository.configuration import ConfigurationRepository
from projectboard.session import Session
from projectboard.terminal import configuration, project, task, user, view
from projectboard.terminal.custom_typer import OrderedTyperGroup
from projectboard.view import state as view_state

app = typer.Typer(
    cls=OrderedTyperGroup,
    help="projectboard - Project timelines in the CLI",
    no_args_is_help=True,
)
app.add_typer(project.app, name="project, p", help="Manage projects")
app.add_typer(task.app, name="task, t", help="Manage timeline entries")
app.add_typer(view.app, name="view, v", help="Timeline, gantt and dashboard reports")
app.add_typer(user.app, name="user, u", help="Manage users")
app.add_typer(configuration.app, name="config, c", help="Show or change settings")


@app.callback()
def main_callback(
    ctx: typer.Context,
    no_header: Annotated[
        bool,
        typer.Option(
            "--no-header",
            "-nh",
            help="Suppress header output in reports",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-vb", help="Log debug output"),
    ] = False,
) -> None:
    """
    projectboard - Project timelines in the CLI

    Global options that apply to all commands.
    """
    configuration_repository = ConfigurationRepository()
    config = configuration_repository.get_config()

    configure_logging("DEBUG" if verbose else config["log_level"])
    view_state.set_show_header(config["show_header"] and not no_header)

    session = Session(configuration_repository)
    ctx.obj = session
    ctx.call_on_close(session.flush)


def run() -> None:
    app()

# SPDX-License-Identifier: MIT

import logging
from typing import Annotated, Optional, cast

import typer
from rich.console import Console
from rich.table import Table

from projectboard import configuration
from projectboard.configuration import Configuration
from projectboard.model.view_mode import ViewMode
from projectboard.terminal.custom_typer import AliasedTyperGroup
from projectboard.terminal.session import get_session
from projectboard.terminal.validate import validate_non_negative, validate_view_mode

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def validate_log_level(log_level: Optional[str]) -> Optional[str]:
    if log_level is None:
        return None
    if log_level.upper() not in LOG_LEVELS:
        raise typer.BadParameter(f"Log level must be one of: {', '.join(LOG_LEVELS)}")
    return log_level.upper()


def _configuration_table(config: Configuration, title: Optional[str] = None) -> Table:
    table = Table(title=title)
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")

    table.add_row("data_path", str(configuration.DATA_PATH))
    table.add_row("current_user_id", config["current_user_id"] or "None")
    table.add_row("default_view_mode", config["default_view_mode"])
    table.add_row("split_panel_padding_days", str(config["split_panel_padding_days"]))
    table.add_row(
        "simple_timeline_padding_days", str(config["simple_timeline_padding_days"])
    )
    table.add_row("chart_buffer_days", str(config["chart_buffer_days"]))
    table.add_row("min_day_width", str(config["min_day_width"]))
    table.add_row(
        "show_header", "✓ Enabled" if config["show_header"] else "✗ Disabled"
    )
    table.add_row("log_level", config["log_level"])
    return table


@app.command("show, v")
def show(ctx: typer.Context) -> None:
    """Display current configuration settings."""
    session = get_session(ctx)
    config = session.configuration_repository.get_config()

    console = Console()
    console.print(_configuration_table(config))
    console.print(f"\nConfig file: {configuration.APP_CONFIG_PATH}")


@app.command("set, s")
def set(
    ctx: typer.Context,
    data_path: Annotated[
        Optional[str],
        typer.Option("--data-path", help="Directory path for storing data files"),
    ] = None,
    remove_data_path: Annotated[
        bool,
        typer.Option("--remove-data-path", help="Reset data path to the default"),
    ] = False,
    default_view_mode: Annotated[
        Optional[str],
        typer.Option(
            "--default-view-mode",
            callback=validate_view_mode,
            help="day, week, month or quarter",
        ),
    ] = None,
    split_panel_padding_days: Annotated[
        Optional[int],
        typer.Option(
            "--split-panel-padding-days",
            callback=validate_non_negative,
            help="Days shown around the period in the split layout",
        ),
    ] = None,
    simple_timeline_padding_days: Annotated[
        Optional[int],
        typer.Option(
            "--simple-timeline-padding-days",
            callback=validate_non_negative,
            help="Days shown around the period in the simple layout",
        ),
    ] = None,
    chart_buffer_days: Annotated[
        Optional[int],
        typer.Option(
            "--chart-buffer-days",
            callback=validate_non_negative,
            help="Days added around the gantt chart",
        ),
    ] = None,
    min_day_width: Annotated[
        Optional[int],
        typer.Option(
            "--min-day-width",
            callback=validate_non_negative,
            help="Narrowest a gantt day may get, in pixels",
        ),
    ] = None,
    show_header: Annotated[
        Optional[bool],
        typer.Option("--show-header/--no-show-header", help="Show report headers"),
    ] = None,
    log_level: Annotated[
        Optional[str],
        typer.Option("--log-level", callback=validate_log_level, help=", ".join(LOG_LEVELS)),
    ] = None,
    remove_current_user: Annotated[
        bool, typer.Option("--remove-current-user", help="Unset the current user")
    ] = False,
) -> None:
    """
    Update configuration settings.
    """
    session = get_session(ctx)
    session.configuration_repository.update_config(
        data_path=data_path,
        remove_data_path=remove_data_path,
        remove_current_user_id=remove_current_user,
        default_view_mode=cast(Optional[ViewMode], default_view_mode),
        split_panel_padding_days=split_panel_padding_days,
        simple_timeline_padding_days=simple_timeline_padding_days,
        chart_buffer_days=chart_buffer_days,
        min_day_width=min_day_width,
        show_header=show_header,
        log_level=log_level,
    )
    if log_level is not None:
        logging.getLogger("projectboard").setLevel(log_level)

    config = session.configuration_repository.get_config()

    console = Console()
    console.print("[green]Configuration updated successfully![/green]\n")
    console.print(_configuration_table(config, title="Updated Configuration"))
    if data_path is not None or remove_data_path:
        console.print("[yellow]The new data path applies from the next command.[/yellow]")

# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Optional, TypedDict

from yaml import load

try:
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Loader  # type: ignore[assignment]
import platformdirs

from projectboard.model.view_mode import ViewMode

APP_NAME = "projectboard"

CONFIG_PATH = platformdirs.user_config_path(APP_NAME)
APP_CONFIG_PATH = CONFIG_PATH / "config.yaml"

# These will be set dynamically by load_data_path_configuration()
DATA_PATH: Path = platformdirs.user_data_path(APP_NAME)
DATA_PROJECTS_DIR: Path = DATA_PATH / "projects"
DATA_TIMELINE_DIR: Path = DATA_PATH / "timeline"
DATA_USERS_PATH: Path = DATA_PATH / "users.yaml"

DEFAULT_SPLIT_PANEL_PADDING_DAYS = 2
DEFAULT_SIMPLE_TIMELINE_PADDING_DAYS = 3
DEFAULT_CHART_BUFFER_DAYS = 5
DEFAULT_MIN_DAY_WIDTH = 40


class Configuration(TypedDict):
    data_path: Optional[str]
    current_user_id: Optional[str]
    default_view_mode: ViewMode
    split_panel_padding_days: int
    simple_timeline_padding_days: int
    chart_buffer_days: int
    min_day_width: int
    show_header: bool
    log_level: str


def get_default_configuration() -> Configuration:
    return {
        "data_path": None,
        "current_user_id": None,
        "default_view_mode": "month",
        "split_panel_padding_days": DEFAULT_SPLIT_PANEL_PADDING_DAYS,
        "simple_timeline_padding_days": DEFAULT_SIMPLE_TIMELINE_PADDING_DAYS,
        "chart_buffer_days": DEFAULT_CHART_BUFFER_DAYS,
        "min_day_width": DEFAULT_MIN_DAY_WIDTH,
        "show_header": True,
        "log_level": "WARNING",
    }


def set_data_path(data_path: Path) -> None:
    global DATA_PATH, DATA_PROJECTS_DIR, DATA_TIMELINE_DIR, DATA_USERS_PATH

    DATA_PATH = data_path
    DATA_PROJECTS_DIR = DATA_PATH / "projects"
    DATA_TIMELINE_DIR = DATA_PATH / "timeline"
    DATA_USERS_PATH = DATA_PATH / "users.yaml"


def load_data_path_configuration() -> None:
    """
    Load the configuration and set the DATA_PATH variables dynamically.

    This must be called after the config file exists and before any
    repositories are instantiated.
    """
    if not APP_CONFIG_PATH.is_file():
        # Config doesn't exist yet, use defaults
        return

    config: Optional[Configuration] = load(APP_CONFIG_PATH.read_text(), Loader=Loader)
    if config is None:
        return

    data_path_setting = config.get("data_path")
    if data_path_setting is not None:
        set_data_path(Path(data_path_setting))
